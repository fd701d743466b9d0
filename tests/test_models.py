"""Tests for the cat+ record models and their graph mappings."""

import json

import pytest
from rdflib import BNode, Literal
from rdflib.compare import isomorphic
from rdflib.namespace import RDF, XSD

from catplus_rdf.errors import ParseError
from catplus_rdf.graph import GraphBuilder
from catplus_rdf.loaders import load_entity, parse_json
from catplus_rdf.models import (
    ActionName,
    BravoActionWrapper,
    CampaignWrapper,
    Chemical,
    Measurement,
    Observation,
    Peak,
    PeakList,
    Product,
    SynthBatch,
    Unit,
    Well,
)
from catplus_rdf.namespaces import ALLORES, CAT, OBO, PURL, QUDT, UNIT
from catplus_rdf.pipeline import ConverterConfig, build_file_uri, json_to_rdf

from .conftest import BATCH_23, METHYL_IODIDE, PRODUCT_1_A1, PRODUCT_1_B1, WATER, parse_turtle

EXPECTED_HCI_TTL = """
PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
PREFIX cat: <http://example.org/cat#>
PREFIX schema: <https://schema.org/>
PREFIX unit: <http://qudt.org/vocab/unit/>
PREFIX allores: <http://purl.allotrope.org/ontologies/result#>
PREFIX allocom: <http://purl.allotrope.org/ontologies/common#>
PREFIX allohdf: <http://purl.allotrope.org/ontologies/hdf5/1.8#>
PREFIX qudt: <http://qudt.org/schema/qudt/>
PREFIX purl: <http://purl.allotrope.org/ontologies/>
PREFIX obo: <http://purl.obolibrary.org/obo/>

<http://example.org/cat/resource/3HIZc0u04S5xrXnd5XznYutlTE19ZCkKb01k9Q4NOZQ> a obo:CHEBI_25367;
  cat:casNumber "74-88-4";
  cat:swissCatNumber "SwissCAT-6328";
  purl:identifier "25";
  allores:AFR_0001952 "CH3I";
  allores:AFR_0002292 "methyl iodide";
  allores:AFR_0002294 [ a cat:Observation;
      qudt:unit unit:GM-PER-MOL;
      qudt:value "141.939"^^xsd:double];
  allores:AFR_0002295 "CI";
  allores:AFR_0002296 "InChI=1S/CH3I/c1-2/h1H3";
  obo:PATO_0001019 [ a cat:Observation;
      qudt:unit unit:GM-PER-MilliL;
      qudt:value "2.28"^^xsd:double];
  schema:keywords "optional only in HCI file".

<http://example.org/cat/resource/U1-jDX4l3YpJ8VNneXNOyChhCNEV2lBF1387QYXY95A> a cat:Batch;
  cat:optimizationType "Yield optimization";
  cat:reactionName "Caffeine synthesis";
  cat:reactionType "N-methylation";
  allohdf:HardLink "https://www.sciencedirect.com/science/article/pii/S0187893X15720926";
  purl:identifier "23";
  schema:name "20240516".

[] a cat:Campaign;
  cat:campaignClass "Standard Research";
  cat:campaignType "optimization";
  cat:genericObjective "High caffeine yield at the end";
  cat:hasBatch <http://example.org/cat/resource/U1-jDX4l3YpJ8VNneXNOyChhCNEV2lBF1387QYXY95A>;
  cat:hasChemical <http://example.org/cat/resource/3HIZc0u04S5xrXnd5XznYutlTE19ZCkKb01k9Q4NOZQ>;
  cat:hasObjective [ a obo:IAO_0000005;
      cat:criteria "Yield ≥ 90%";
      allocom:AFC_0000090 "Reflux in acetone with methyl iodide and potassium carbonate";
      schema:description "Optimize reaction conditions to maximize caffeine yield from theobromine using methyl iodide";
      schema:name "Maximize caffeine formation"];
  allores:AFR_0002764 "Substitution reaction - SN2";
  schema:contentUrl "$CONTENT_URL";
  schema:description "1-step N-methylation of theobromine to caffeine";
  schema:name "Caffeine Synthesis".
"""


def build(path, model) -> GraphBuilder:
    builder = GraphBuilder()
    builder.insert(load_entity(path, model))
    return builder


# ============================================================================
# Core records
# ============================================================================


class TestCoreRecords:
    """Tests for JSON aliases and flattened records."""

    def test_flat_plate_fields(self):
        well = Well.model_validate({"containerID": "1", "containerBarcode": "b1", "position": "A1"})
        assert well.has_plate.container_id == "1"
        assert well.has_plate.container_barcode == "b1"

    def test_nested_plate_accepted(self):
        well = Well.model_validate({"hasPlate": {"containerID": "1"}, "position": "A1"})
        assert well.has_plate.container_id == "1"

    def test_chemical_aliases(self):
        chemical = Chemical.model_validate(
            {
                "chemicalID": "1",
                "chemicalName": "water",
                "CASNumber": "7732-18-5",
                "molecularMass": {"value": 18.015, "unit": "g/mol"},
                "smiles": "O",
                "Inchi": "1S/H2O/h1H2",
                "molecularFormula": "H2O",
            }
        )
        assert chemical.cas_number == "7732-18-5"
        assert chemical.molecular_mass.unit is Unit.GM_PER_MOL
        assert chemical.get_uri() == WATER

    def test_unit_iris(self):
        assert Unit("°C").iri == UNIT.DEG_C
        assert Unit("µL").iri == UNIT.MicroL
        assert Unit("rpm").iri == UNIT["REV-PER-MIN"]

    def test_action_name_iris(self):
        assert ActionName("setTemperatureAction").iri == CAT.SetTemperatureAction
        assert ActionName("AddAction").iri == CAT.AddAction

    def test_unknown_unit_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_json('{"value": 1, "unit": "furlong"}', Observation)

    def test_invalid_json_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_json("{not json", SynthBatch)


# ============================================================================
# Synthesis batches
# ============================================================================


class TestSynthBatch:
    """Tests for the synthesis batch mapping."""

    def test_batch_node(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph
        assert (BATCH_23, RDF.type, CAT.Batch) in graph
        assert (BATCH_23, PURL.identifier, Literal("23")) in graph

    def test_add_action_fans_out_per_well(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph

        add_actions = set(graph.subjects(RDF.type, CAT.SynthAddAction))
        assert len(add_actions) == 2
        for action in add_actions:
            assert (action, CAT.hasBatch, BATCH_23) in graph
            assert len(list(graph.objects(action, CAT.hasWell))) == 1

        products = {graph.value(a, CAT.producesProduct) for a in add_actions}
        assert products == {PRODUCT_1_A1, PRODUCT_1_B1}
        assert (PRODUCT_1_A1, RDF.type, CAT.Product) in graph
        assert (PRODUCT_1_A1, PURL.identifier, Literal("1-A1")) in graph

    def test_other_actions(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph

        (action,) = graph.subjects(RDF.type, CAT.SetTemperatureAction)
        assert (action, CAT.hasBatch, BATCH_23) in graph
        plate = graph.value(action, CAT.hasPlate)
        assert isinstance(plate, BNode)
        assert (plate, CAT.containerID, Literal("1")) in graph
        assert graph.value(action, ALLORES.AFX_0000622).datatype == XSD.dateTime

        speed = graph.value(action, CAT.speedInRPM)
        assert graph.value(speed, QUDT.unit) == UNIT["REV-PER-MIN"]
        assert graph.value(speed, QUDT.value) == Literal(152.0)

    def test_sample_items_carry_their_id(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph

        items = set(graph.subjects(CAT.hasChemical, None))
        assert len(items) == 1
        for item in items:
            assert graph.value(item, PURL.identifier) == Literal("123")
            assert graph.value(item, CAT.internalBarCode) == Literal("1")

    def test_add_action_without_wells_is_skipped(self, synth_path):
        data = json.loads(synth_path.read_text(encoding="utf-8"))
        del data["Actions"][1]["hasWell"]

        builder = GraphBuilder()
        builder.insert(SynthBatch.model_validate(data))
        graph = builder.store.graph

        (action,) = graph.subjects(CAT.hasBatch, BATCH_23)
        assert (action, RDF.type, CAT.SetTemperatureAction) in graph
        assert not set(graph.subjects(RDF.type, CAT.AddAction))
        assert not set(graph.subjects(RDF.type, CAT.Sample))

    def test_error_margin(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph
        margins = list(graph.subjects(RDF.type, CAT.errorMargin))
        assert len(margins) == 1
        assert graph.value(margins[0], QUDT.value) == Literal(0.01)

    def test_chemical_is_shared(self, synth_path):
        graph = build(synth_path, SynthBatch).store.graph
        assert (WATER, RDF.type, OBO.CHEBI_25367) in graph
        assert len(set(graph.subjects(RDF.type, OBO.CHEBI_25367))) == 1

    def test_no_content_root(self, synth_path):
        builder = build(synth_path, SynthBatch)
        assert builder.link_content("file:///synth_batch.json") is None


# ============================================================================
# Sample preparation actions
# ============================================================================


class TestBravoActions:
    """Tests for the Bravo action mapping."""

    def test_actions(self, bravo_path):
        graph = build(bravo_path, BravoActionWrapper).store.graph

        (add,) = graph.subjects(RDF.type, CAT.BravoAddAction)
        (filtrate,) = graph.subjects(RDF.type, CAT.FiltrateAction)
        for action in (add, filtrate):
            assert (action, CAT.preparesProduct, PRODUCT_1_A1) in graph
            assert (action, ALLORES.AFR_0001164, Literal("peak-1")) in graph

    def test_spme_flag(self, bravo_path):
        graph = build(bravo_path, BravoActionWrapper).store.graph
        (filtrate,) = graph.subjects(RDF.type, CAT.FiltrateAction)
        flag = graph.value(filtrate, CAT.isSpmeProcess)
        assert flag == Literal(True)
        assert flag.datatype == XSD.boolean

    def test_flat_sample_well(self, bravo_path):
        graph = build(bravo_path, BravoActionWrapper).store.graph
        (add,) = graph.subjects(RDF.type, CAT.BravoAddAction)
        sample = graph.value(add, CAT.hasSample)
        well = graph.value(sample, CAT.hasWell)
        assert graph.value(well, ALLORES.AFR_0002240) == Literal("A1")
        plate = graph.value(well, CAT.hasPlate)
        assert graph.value(plate, CAT.containerID) == Literal("1")

    def test_solvent_chemical(self, bravo_path):
        graph = build(bravo_path, BravoActionWrapper).store.graph
        (add,) = graph.subjects(RDF.type, CAT.BravoAddAction)
        solvent = graph.value(add, CAT.hasSolvent)
        assert graph.value(solvent, CAT.hasChemical) == WATER

    def test_wrapper_has_no_node(self, bravo_path):
        graph = build(bravo_path, BravoActionWrapper).store.graph
        # Only the two actions carry a start time
        assert len(set(graph.subjects(ALLORES.AFX_0000622, None))) == 2


# ============================================================================
# Campaigns
# ============================================================================


class TestCampaign:
    """Tests for the HCI campaign mapping."""

    def test_end_to_end(self, hci_path):
        config = ConverterConfig(input_path=hci_path.resolve())
        result = parse_turtle(json_to_rdf(config, CampaignWrapper))

        content_url = build_file_uri(None, hci_path.resolve())
        expected = parse_turtle(EXPECTED_HCI_TTL.replace("$CONTENT_URL", content_url))
        assert isomorphic(result, expected)

    def test_campaign_is_root(self, hci_path):
        builder = build(hci_path, CampaignWrapper)
        root = builder.link_content("https://data.example.org/hci_campaign.json")
        assert (root, RDF.type, CAT.Campaign) in builder.store
        assert (root, CAT.hasChemical, METHYL_IODIDE) in builder.store


# ============================================================================
# Chromatography peaks
# ============================================================================


def measurement(value: float, unit: str = "min") -> dict:
    return {"value": value, "unit": unit}


PEAK = {
    "@index": 1,
    "identifier": "peak-1",
    "peak area": measurement(12.5, "%"),
    "retention time": measurement(3.2),
    "peak start": measurement(3.0),
    "peak end": measurement(3.4),
    "peak height": measurement(0.8, "%"),
    "relative peak area": measurement(40.0, "%"),
    "relative peak height": measurement(55.0, "%"),
    "peak value at start": measurement(0.1, "%"),
    "peak value at end": measurement(0.2, "%"),
}


class TestPeakList:
    """Tests for the peak list mapping."""

    def test_peak_keys(self):
        peak = Peak.model_validate(PEAK)
        assert peak.index == 1
        assert peak.peak_identifier == "peak-1"
        assert peak.retention_time == Measurement(value=3.2, unit=Unit.MIN)

    def test_peak_triples(self, builder):
        subject = builder.insert(PeakList.model_validate({"peak": [PEAK]}))
        graph = builder.store.graph

        assert (subject, RDF.type, CAT.PeakList) in graph
        (peak,) = graph.objects(subject, CAT.peak)
        assert (peak, RDF.type, ALLORES.AFR_0000413) in graph
        assert (peak, ALLORES.AFR_0001164, Literal("peak-1")) in graph

        retention = graph.value(peak, ALLORES.AFR_0001089)
        assert (retention, RDF.type, CAT.Measurement) in graph
        assert graph.value(retention, QUDT.unit) == UNIT.MIN
        assert graph.value(retention, QUDT.value) == Literal(3.2)
        # The index only orders the peaks in the input
        assert not list(graph.objects(peak, QUDT.value))

    def test_linked_to_product(self, builder):
        assert builder.insert(Product(product_id="1-A1")) == PRODUCT_1_A1
        subject = builder.insert(PeakList.model_validate({"peak": [PEAK]}))
        assert (subject, CAT.hasProduct, PRODUCT_1_A1) in builder.store

    def test_no_product_no_link(self, builder):
        subject = builder.insert(PeakList.model_validate({"peak": [PEAK]}))
        assert not list(builder.store.triples_matching(subject, CAT.hasProduct))
