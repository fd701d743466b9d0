"""
Triple Store - Validating adapter over an in-memory rdflib Graph.

The store is a duplicate-free set of triples: inserting the same triple twice
leaves it unchanged. Terms are checked on insertion so a malformed triple
fails at the point where it is produced instead of at serialization time.
"""

import logging
from collections.abc import Iterator

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

from catplus_rdf.errors import StoreWriteError
from catplus_rdf.namespaces import bind_prefixes

logger = logging.getLogger(__name__)

Triple = tuple[Node, Node, Node]


class TripleStore:
    """
    Set of RDF triples for one document.

    Supports insertion and pattern-matched lookup where each position is
    either an exact term or None as a wildcard.
    """

    def __init__(self, graph: Graph | None = None):
        """
        Initialize the store.

        Args:
            graph: Optional rdflib Graph to wrap. A new one is created otherwise.
        """
        self._graph = graph if graph is not None else Graph(bind_namespaces="core")
        bind_prefixes(self._graph)

    @property
    def graph(self) -> Graph:
        """The underlying rdflib Graph, for serializers and validators."""
        return self._graph

    def insert(self, subject: Node, predicate: Node, obj: Node) -> bool:
        """
        Insert a triple.

        Args:
            subject: IRI or blank node
            predicate: IRI
            obj: IRI, blank node or literal

        Returns:
            True if the triple was new, False if it was already present

        Raises:
            StoreWriteError: If a term is not allowed in its position or a
                literal is ill-typed
        """
        if not isinstance(subject, (URIRef, BNode)):
            raise StoreWriteError(f"Invalid subject {subject!r}: expected an IRI or blank node")
        if not isinstance(predicate, URIRef):
            raise StoreWriteError(f"Invalid predicate {predicate!r}: expected an IRI")
        if not isinstance(obj, (URIRef, BNode, Literal)):
            raise StoreWriteError(
                f"Invalid object {obj!r} for {predicate}: expected an IRI, blank node or literal"
            )
        if isinstance(obj, Literal) and obj.ill_typed:
            raise StoreWriteError(
                f"Malformed literal {str(obj)!r} for datatype {obj.datatype} (predicate {predicate})"
            )

        triple = (subject, predicate, obj)
        if triple in self._graph:
            return False
        self._graph.add(triple)
        return True

    def triples_matching(
        self,
        subject: Node | None = None,
        predicate: Node | None = None,
        obj: Node | None = None,
    ) -> Iterator[Triple]:
        """Yield triples matching a pattern, None acting as a wildcard."""
        yield from self._graph.triples((subject, predicate, obj))

    def subjects_of_type(self, rdf_type: URIRef) -> list[Node]:
        """Return the subjects of all `rdf:type` triples with the given class."""
        return [s for s, _, _ in self.triples_matching(None, RDF.type, rdf_type)]

    def __len__(self) -> int:
        return len(self._graph)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._graph)

    def __contains__(self, triple: Triple) -> bool:
        return triple in self._graph
