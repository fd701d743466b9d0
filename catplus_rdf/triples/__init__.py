"""
Triples Module - RDF serialization and validation.

Components:
- serializer.py: Serializes graphs to Turtle/JSON-LD
- validator.py: Validates converted graphs
"""

from .serializer import FORMATS, RdfFormat, TripleSerializer
from .validator import TripleValidator, ValidationResult, validate_graph

__all__ = [
    # Serializer
    "FORMATS",
    "RdfFormat",
    "TripleSerializer",
    # Validator
    "TripleValidator",
    "ValidationResult",
    "validate_graph",
]
