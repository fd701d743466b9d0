"""
Identity strategy for graph entities.

An entity either has a natural key, in which case its IRI is derived from the
SHA-256 digest of that key, or it gets a fresh blank node that only lives as
long as the graph being built.
"""

import base64
import hashlib
import logging
import uuid

from rdflib import BNode, URIRef

from catplus_rdf.namespaces import CAT_RES

logger = logging.getLogger(__name__)


def hash_identifier(identifier: str) -> str:
    """
    Hash an identifier into a URL-safe, unpadded base64 string.

    Args:
        identifier: Natural key of an entity (InChI, batch ID, ...)

    Returns:
        The base64url encoding of the SHA-256 digest of the UTF-8 key
    """
    digest = hashlib.sha256(identifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def uri_for(natural_key: str, namespace: str = str(CAT_RES)) -> URIRef:
    """
    Build the content-addressed IRI of an entity.

    The same key always yields the same IRI, so entities referenced from
    independently converted documents merge into one node.

    Args:
        natural_key: Natural key of the entity
        namespace: Resource namespace the hash is appended to

    Returns:
        IRI of the entity
    """
    if not natural_key:
        logger.warning("Deriving an IRI from an empty natural key")
    return URIRef(f"{namespace}{hash_identifier(natural_key)}")


def generate_bnode_term() -> BNode:
    """Return a blank node with a random UUID label."""
    return BNode(str(uuid.uuid4()))
