"""
Graph Builder - Builds the RDF graph of one input document.

Owns the triple store of the document and exposes the operations applied to
it between parsing and serialization: insert the root entity, link the input
file's URL to the root entity, materialize blank nodes.
"""

import logging

from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

from catplus_rdf.errors import IdentityAmbiguityError, UnsupportedTermVariant
from catplus_rdf.namespaces import ALLORES, CAT, SCHEMA
from catplus_rdf.triples.serializer import TripleSerializer

from .entity import GraphEntity, Subject
from .store import TripleStore

logger = logging.getLogger(__name__)

# Classes of the entities a document can be rooted at
ROOT_TYPES: tuple[URIRef, ...] = (
    CAT.Campaign,
    ALLORES.AFR_0002524,  # liquid chromatography aggregate document
)


class GraphBuilder:
    """
    Builds an RDF graph of cat+ records.

    Usage:
        builder = GraphBuilder()
        builder.insert(batch)
        builder.link_content("file:///data/batch.json")
        builder.materialize_blank_nodes("http://example.org/cat/resource/")
        turtle = builder.serialize_to_turtle()
    """

    def __init__(self, store: TripleStore | None = None):
        self.store = store if store is not None else TripleStore()
        self.serializer = TripleSerializer()

    def __len__(self) -> int:
        return len(self.store)

    def insert(self, entity: GraphEntity) -> Subject:
        """
        Insert an entity into the graph as a collection of triples.

        Args:
            entity: Root entity of the document

        Returns:
            The subject term the entity was inserted under
        """
        subject = entity.get_uri()
        entity.insert_into(self.store, subject)
        logger.debug(
            "Inserted %s as %s (%d triples)", type(entity).__name__, subject, len(self.store)
        )
        return subject

    def link_content(
        self, content_url: str, root_types: tuple[URIRef, ...] = ROOT_TYPES
    ) -> Subject | None:
        """
        Attach the URL of the input file to the root entity of the graph.

        Args:
            content_url: URL of the document the graph was built from
            root_types: Classes a root entity can have

        Returns:
            The root subject the URL was attached to, or None when the graph
            has no root entity

        Raises:
            IdentityAmbiguityError: If more than one root entity is present
        """
        roots: list[Node] = []
        for root_type in root_types:
            for subject in self.store.subjects_of_type(root_type):
                if subject not in roots:
                    roots.append(subject)

        if not roots:
            logger.warning("No root entity found, content URL %s not linked", content_url)
            return None
        if len(roots) > 1:
            raise IdentityAmbiguityError(roots)

        root = roots[0]
        self.store.insert(root, SCHEMA.contentUrl, Literal(content_url))
        logger.info("Linked content URL %s to %s", content_url, root)
        return root

    def materialize_blank_nodes(self, prefix: str | None = None) -> None:
        """
        Replace every blank node of the graph with an IRI.

        The IRI of a blank node is `prefix + label`, so a node keeps the same
        IRI everywhere it appears. Predicates, literals and IRIs are left as is.

        Args:
            prefix: Prefix of the minted IRIs (empty string when None)

        Raises:
            UnsupportedTermVariant: If the graph holds a term that is not an
                IRI, blank node or literal
        """
        prefix = prefix or ""
        materialized = TripleStore()

        for subject, predicate, obj in self.store:
            materialized.insert(
                _rewrite(subject, prefix),
                predicate,
                _rewrite(obj, prefix),
            )

        logger.info(
            "Materialized blank nodes with prefix '%s' (%d triples)", prefix, len(materialized)
        )
        self.store = materialized

    def serialize_to_turtle(self) -> str:
        """Get the Turtle serialization of the graph."""
        return self.serializer.to_turtle(self.store.graph)

    def serialize_to_jsonld(self) -> str:
        """Get the JSON-LD serialization of the graph."""
        return self.serializer.to_jsonld(self.store.graph)


def _rewrite(term: Node, prefix: str) -> Node:
    """Map a blank node to its materialized IRI, leave IRIs and literals untouched."""
    if isinstance(term, BNode):
        return URIRef(f"{prefix}{term}")
    if isinstance(term, (URIRef, Literal)):
        return term
    raise UnsupportedTermVariant(f"Unexpected term {term!r} of type {type(term).__name__}")
