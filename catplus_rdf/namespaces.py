"""
Ontology namespaces used by the cat+ record mappings.

The prefix map is bound on every triple store so Turtle output always uses
the same prefixes.
"""

from rdflib import Graph, Namespace
from rdflib.namespace import RDF, RDFS, XSD

# =============================================================================
# NAMESPACE DEFINITIONS
# =============================================================================

# cat+ ontology
CAT = Namespace("http://example.org/cat#")

# cat+ resources (content-addressed and materialized IRIs)
CAT_RES = Namespace("http://example.org/cat/resource/")

# Allotrope Foundation Ontologies
ALLORES = Namespace("http://purl.allotrope.org/ontologies/result#")
ALLOROLE = Namespace("http://purl.allotrope.org/ontologies/role#")
ALLOPROC = Namespace("http://purl.allotrope.org/ontologies/process#")
ALLOPROP = Namespace("http://purl.allotrope.org/ontologies/property#")
ALLOCOM = Namespace("http://purl.allotrope.org/ontologies/common#")
ALLOQUAL = Namespace("http://purl.allotrope.org/ontologies/quality#")
ALLOHDF = Namespace("http://purl.allotrope.org/ontologies/hdf5/1.8#")
ALLOHDFCUBE = Namespace("http://purl.allotrope.org/ontologies/datacube-hdf-map#")
ALLODC = Namespace("http://purl.allotrope.org/ontologies/datacube#")
PURL = Namespace("http://purl.allotrope.org/ontologies/")

# QUDT units and quantities
QUDT = Namespace("http://qudt.org/schema/qudt/")
UNIT = Namespace("http://qudt.org/vocab/unit/")
QUDTEXT = Namespace("http://purl.allotrope.org/ontology/qudt-ext/unit#")

# Others
OBO = Namespace("http://purl.obolibrary.org/obo/")
SCHEMA = Namespace("https://schema.org/")
QB = Namespace("http://purl.org/linked-data/cube#")


PREFIXES: dict[str, Namespace] = {
    "rdf": Namespace(str(RDF)),
    "rdfs": Namespace(str(RDFS)),
    "xsd": Namespace(str(XSD)),
    "cat": CAT,
    "schema": SCHEMA,
    "unit": UNIT,
    "allores": ALLORES,
    "allorole": ALLOROLE,
    "alloproc": ALLOPROC,
    "alloprop": ALLOPROP,
    "allocom": ALLOCOM,
    "allohdf": ALLOHDF,
    "allohdfcube": ALLOHDFCUBE,
    "qb": QB,
    "qudt": QUDT,
    "qudtext": QUDTEXT,
    "alloqual": ALLOQUAL,
    "allodc": ALLODC,
    "purl": PURL,
    "obo": OBO,
}


def bind_prefixes(graph: Graph) -> Graph:
    """Bind the cat+ prefix map on a graph, replacing clashing bindings."""
    for prefix, namespace in PREFIXES.items():
        graph.bind(prefix, namespace, override=True, replace=True)
    return graph
