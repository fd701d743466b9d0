"""
Insertion Engine - Turns typed entities into triples.

Every record type derives from GraphEntity and only declares a table of
(predicate, value) pairs. The attachment rules below fold each value into the
store according to its shape:

- None: nothing is emitted (absent optional field)
- scalar (rdflib term, str, number, bool, datetime, IRI-carrying enum): one triple
- nested GraphEntity: a link triple, then the nested entity's own triples
- list/tuple: the rules applied once per element (order is not kept)
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict
from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

from catplus_rdf.errors import StoreWriteError

from .identity import generate_bnode_term, uri_for
from .store import TripleStore

logger = logging.getLogger(__name__)

Subject = URIRef | BNode


class Link(NamedTuple):
    """Where an attached value hangs: its source subject, the predicate and an optional pinned target."""

    source: Subject
    predicate: URIRef
    target: Subject | None = None


class GraphEntity(BaseModel):
    """
    Base class of every record that can describe itself as triples.

    Subclasses override:
    - attachments(): the (predicate, value) table of the type
    - natural_key(): when the entity has a stable identity
    - insert_into(): only when the mapping is not a plain table
    """

    model_config = ConfigDict(populate_by_name=True)

    def natural_key(self) -> str | None:
        """Return the natural key of the entity, None when it has no stable identity."""
        return None

    def get_uri(self) -> Subject:
        """Return the subject term for this entity: a content-addressed IRI or a fresh blank node."""
        key = self.natural_key()
        if key is None:
            return generate_bnode_term()
        return uri_for(key)

    def attachments(self) -> Iterable[tuple[URIRef, Any]]:
        """Return the (predicate, value) pairs describing the entity."""
        return ()

    def insert_into(self, store: TripleStore, subject: Subject) -> None:
        """
        Emit the triples describing `subject` into the store.

        Args:
            store: Triple store of the document being built
            subject: Term standing for this entity

        Raises:
            StoreWriteError: If a triple cannot be written
        """
        attach_all(store, subject, self.attachments())


def attach_all(store: TripleStore, subject: Subject, table: Iterable[tuple[URIRef, Any]]) -> None:
    """Apply the attachment rules to every (predicate, value) pair of a table."""
    for predicate, value in table:
        attach_into(store, Link(subject, predicate), value)


def attach_into(store: TripleStore, link: Link, value: Any) -> None:
    """
    Attach a value to `link.source` through `link.predicate`.

    Args:
        store: Triple store of the document being built
        link: Source subject, predicate and optional pinned target for nested entities
        value: Absent, scalar, nested entity or sequence of those

    Raises:
        StoreWriteError: If the value has an unsupported shape or a triple cannot be written
    """
    if value is None:
        return

    if isinstance(value, GraphEntity):
        target = link.target if link.target is not None else value.get_uri()
        store.insert(link.source, link.predicate, target)
        value.insert_into(store, target)
        return

    if isinstance(value, (list, tuple)):
        for item in value:
            attach_into(store, link, item)
        return

    store.insert(link.source, link.predicate, as_term(value))


def as_term(value: Any) -> Node:
    """
    Convert a scalar value to an RDF term.

    Args:
        value: rdflib term, enum carrying an `iri`, or Python scalar

    Returns:
        The value itself for rdflib terms, the enum's IRI, or a typed Literal
    """
    if isinstance(value, Node):
        return value
    if isinstance(value, Enum):
        # Enums of controlled vocabularies map to ontology IRIs
        return value.iri
    if isinstance(value, (str, bool, int, float, Decimal, datetime, date)):
        return Literal(value)
    raise StoreWriteError(f"Cannot attach value of type {type(value).__name__}: {value!r}")
