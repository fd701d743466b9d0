"""
Graph Module - Entity-to-graph mapping engine.

Components:
- identity.py: Content-addressed IRIs and blank node generation
- store.py: Validating triple store over rdflib
- entity.py: GraphEntity contract and attachment rules
- builder.py: GraphBuilder (insert, link content, materialize, serialize)
"""

from .builder import ROOT_TYPES, GraphBuilder
from .entity import GraphEntity, Link, as_term, attach_all, attach_into
from .identity import generate_bnode_term, hash_identifier, uri_for
from .store import TripleStore

__all__ = [
    # Builder
    "GraphBuilder",
    "ROOT_TYPES",
    # Engine
    "GraphEntity",
    "Link",
    "as_term",
    "attach_all",
    "attach_into",
    # Identity
    "generate_bnode_term",
    "hash_identifier",
    "uri_for",
    # Store
    "TripleStore",
]
