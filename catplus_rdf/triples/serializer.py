"""
Triple Serializer - Serializes finished RDF graphs to Turtle or JSON-LD.

Turtle output uses the fixed cat+ prefix map; JSON-LD output is compacted
against a context built from the same map.
"""

import logging
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Any

from rdflib import BNode, Graph

from catplus_rdf.errors import FileSystemError
from catplus_rdf.namespaces import PREFIXES, bind_prefixes

logger = logging.getLogger(__name__)


# =============================================================================
# SUPPORTED FORMATS
# =============================================================================


class RdfFormat(str, Enum):
    """Output formats of the converter."""

    TURTLE = "turtle"
    JSONLD = "jsonld"

    @property
    def extension(self) -> str:
        """File extension, without the dot."""
        return FORMATS[self.value]["extension"]

    @property
    def mime(self) -> str:
        return FORMATS[self.value]["mime"]

    @classmethod
    def parse(cls, name: str) -> "RdfFormat":
        """Resolve a format name, accepting the usual aliases (ttl, json-ld)."""
        aliases = {"ttl": cls.TURTLE, "json-ld": cls.JSONLD}
        name = name.lower()
        if name in aliases:
            return aliases[name]
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unsupported format: {name}. Supported: {[f.value for f in cls]}"
            ) from None


FORMATS = {
    "turtle": {"extension": "ttl", "mime": "text/turtle"},
    "jsonld": {"extension": "jsonld", "mime": "application/ld+json"},
}


# =============================================================================
# TRIPLE SERIALIZER
# =============================================================================


class TripleSerializer:
    """Serializes RDF graphs to the converter's output formats."""

    def to_turtle(self, graph: Graph) -> str:
        """
        Serialize graph to Turtle format.

        Args:
            graph: RDF graph to serialize

        Returns:
            Turtle string representation
        """
        bind_prefixes(graph)
        return graph.serialize(format="turtle")

    def to_jsonld(self, graph: Graph) -> str:
        """
        Serialize graph to JSON-LD format.

        Args:
            graph: RDF graph to serialize

        Returns:
            JSON-LD string, indented by 2 spaces
        """
        context = {prefix: str(namespace) for prefix, namespace in PREFIXES.items()}
        return graph.serialize(format="json-ld", context=context, indent=2)

    def serialize(self, graph: Graph, format: RdfFormat | str = RdfFormat.TURTLE) -> str:
        """Serialize graph to the given format."""
        rdf_format = format if isinstance(format, RdfFormat) else RdfFormat.parse(format)
        logger.debug("Serializing %d triples as %s", len(graph), rdf_format.value)
        if rdf_format is RdfFormat.JSONLD:
            return self.to_jsonld(graph)
        return self.to_turtle(graph)

    def get_statistics(self, graph: Graph) -> dict[str, Any]:
        """
        Get statistics about the graph.

        Args:
            graph: RDF graph to analyze

        Returns:
            Dictionary with graph statistics
        """
        predicates = Counter()
        subjects = set()
        blank_nodes = set()

        for s, p, o in graph:
            predicates[str(p)] += 1
            subjects.add(s)
            for term in (s, o):
                if isinstance(term, BNode):
                    blank_nodes.add(term)

        return {
            "total_triples": len(graph),
            "unique_subjects": len(subjects),
            "unique_predicates": len(predicates),
            "blank_nodes": len(blank_nodes),
            "predicates": dict(predicates.most_common(20)),
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def write_text(path: Path, content: str) -> None:
    """Write text to a file, creating its directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to write output file '{path}': {e}") from e

