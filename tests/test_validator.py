"""Tests for graph validation."""

import pytest
from rdflib import BNode, Graph, Literal
from rdflib.namespace import RDF, XSD

from catplus_rdf.graph import GraphBuilder
from catplus_rdf.loaders import load_entity
from catplus_rdf.models import CampaignWrapper
from catplus_rdf.namespaces import CAT, CAT_RES, PURL, QUDT, bind_prefixes
from catplus_rdf.triples import TripleValidator, validate_graph


def cat_graph() -> Graph:
    graph = Graph()
    bind_prefixes(graph)
    return graph


@pytest.fixture
def hci_graph(hci_path) -> Graph:
    builder = GraphBuilder()
    builder.insert(load_entity(hci_path, CampaignWrapper))
    return builder.store.graph


class TestTripleValidator:
    """Tests for TripleValidator.validate."""

    def test_converted_campaign_is_valid(self, hci_graph):
        result = validate_graph(hci_graph)
        assert result.is_valid
        assert result.errors == []
        assert result.info["triple_count"] == len(hci_graph)

    def test_empty_graph(self):
        result = validate_graph(cat_graph())
        assert not result.is_valid
        assert "Graph is empty" in result.errors

    def test_unbound_namespace_warns(self):
        graph = Graph(bind_namespaces="none")
        graph.add((CAT_RES["x"], RDF.type, CAT.Batch))
        result = validate_graph(graph)
        assert "cat namespace not bound" in result.warnings

    def test_unknown_cat_class_warns(self):
        graph = cat_graph()
        graph.add((CAT_RES["x"], RDF.type, CAT.Spaceship))
        result = validate_graph(graph)
        assert result.is_valid
        assert result.warnings == [f"Unknown cat class: {CAT.Spaceship}"]

    def test_ill_typed_literal_is_error(self):
        graph = cat_graph()
        graph.add((CAT_RES["x"], CAT.startTime, Literal("yesterday", datatype=XSD.dateTime)))
        result = validate_graph(graph)
        assert not result.is_valid
        assert "Ill-typed literal" in result.errors[0]

    def test_empty_literal_warns(self):
        graph = cat_graph()
        graph.add((CAT_RES["x"], PURL.identifier, Literal("")))
        assert validate_graph(graph).warnings == [f"Empty literal for {PURL.identifier} on {CAT_RES['x']}"]

    def test_blank_nodes_only_checked_when_required(self, hci_graph):
        assert TripleValidator().validate(hci_graph).is_valid

        result = TripleValidator(require_iris=True).validate(hci_graph)
        assert not result.is_valid
        assert "blank nodes left after materialization" in result.errors[0]

    def test_missing_shapes_file_is_ignored(self, tmp_path, hci_graph):
        validator = TripleValidator(shapes_path=tmp_path / "missing.ttl")
        assert validator.shacl_graph is None
        assert validator.validate(hci_graph).is_valid

    def test_malformed_shapes_file_is_ignored(self, tmp_path, hci_graph, caplog):
        shapes = tmp_path / "shapes.ttl"
        shapes.write_text("cat:CampaignShape a sh:NodeShape ;;; .", encoding="utf-8")

        validator = TripleValidator(shapes_path=shapes)
        assert validator.shacl_graph is None
        assert "Could not parse SHACL shapes" in caplog.text
        assert validator.validate(hci_graph).is_valid

    def test_shacl_violation(self, tmp_path, hci_graph):
        shapes = tmp_path / "shapes.ttl"
        shapes.write_text(
            """
            @prefix sh: <http://www.w3.org/ns/shacl#> .
            @prefix cat: <http://example.org/cat#> .

            cat:CampaignShape a sh:NodeShape ;
                sh:targetClass cat:Campaign ;
                sh:property [ sh:path cat:budget ; sh:minCount 1 ] .
            """,
            encoding="utf-8",
        )

        result = TripleValidator(shapes_path=shapes).validate(hci_graph)
        assert not result.is_valid
        assert result.info["shacl_conforms"] is False
        assert result.info["shacl_violations"] == 1


class TestConsistency:
    """Tests for TripleValidator.check_consistency."""

    def test_complete_records(self, hci_graph):
        assert TripleValidator().check_consistency(hci_graph) == []

    def test_incomplete_records(self):
        graph = cat_graph()
        product, observation, well = CAT_RES["p"], BNode(), BNode()
        graph.add((product, RDF.type, CAT.Product))
        graph.add((observation, RDF.type, CAT.Observation))
        graph.add((observation, QUDT.value, Literal(1.0)))
        graph.add((well, RDF.type, CAT.Well))

        issues = TripleValidator().check_consistency(graph)
        assert issues == [
            f"Product {product} has no identifier",
            f"Observation {observation} has no unit",
            f"Well {well} has no plate",
        ]

    def test_issues_reported_as_warnings(self):
        graph = cat_graph()
        graph.add((CAT_RES["p"], RDF.type, CAT.Product))
        result = validate_graph(graph)
        assert result.is_valid
        assert result.warnings == [f"Product {CAT_RES['p']} has no identifier"]
