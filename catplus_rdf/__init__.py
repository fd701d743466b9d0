"""
cat+ RDF - Converts cat+ laboratory records (JSON) into RDF graphs.
"""

__version__ = "0.1.0"
