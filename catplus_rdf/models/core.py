"""
Core cat+ records shared by every input kind.

The structure follows the JSON files produced by the cat+ platform devices.
Each record only declares its (predicate, value) table; turning it into
triples is left to the graph engine.
"""

from typing import Any

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from rdflib import Literal
from rdflib.namespace import RDF, XSD

from catplus_rdf.graph.entity import GraphEntity, Subject
from catplus_rdf.graph.store import TripleStore
from catplus_rdf.namespaces import ALLOHDF, ALLORES, CAT, OBO, PURL, QUDT, SCHEMA

from .enums import Unit

PLATE_KEYS = ("containerID", "containerBarcode")


def date_time(value: str) -> Literal:
    """Typed xsd:dateTime literal for a timestamp of the input files."""
    return Literal(value, datatype=XSD.dateTime)


def lift_fields(data: Any, key: str, fields: tuple[str, ...] | None = None) -> Any:
    """
    Gather fields that the input files write flat into a nested record.

    Args:
        data: Raw input of a model validator
        key: Alias of the nested record field
        fields: Keys to move under `key`, or None to nest the whole record

    Returns:
        The input with the nested record added, or unchanged when it is
        already nested or none of the fields are present
    """
    if not isinstance(data, dict) or key in data:
        return data
    nested = dict(data) if fields is None else {k: data[k] for k in fields if k in data}
    if not nested:
        return data
    return {**data, key: nested}


class Record(GraphEntity):
    """Base of the input records: camelCase JSON keys, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlatPlateRecord(Record):
    """A record whose plate fields are written flat next to its own fields."""

    @model_validator(mode="before")
    @classmethod
    def _gather_plate(cls, data: Any) -> Any:
        if isinstance(data, dict) and "has_plate" in data:
            return data
        return lift_fields(data, "hasPlate", PLATE_KEYS)


# =============================================================================
# CONTAINERS
# =============================================================================


class Plate(Record):
    container_id: str = Field(alias="containerID")
    container_barcode: str | None = Field(default=None, alias="containerBarcode")

    def attachments(self):
        return [
            (RDF.type, CAT.Plate),
            (CAT.containerID, self.container_id),
            (CAT.containerBarcode, self.container_barcode),
        ]


class Well(FlatPlateRecord):
    has_plate: Plate
    position: str

    def attachments(self):
        return [
            (RDF.type, CAT.Well),
            (CAT.hasPlate, self.has_plate),
            (ALLORES.AFR_0002240, self.position),
        ]


class Product(Record):
    """A product prepared in a well, identified across files by its product ID."""

    product_id: str

    def natural_key(self) -> str:
        return self.product_id

    def attachments(self):
        return [
            (RDF.type, CAT.Product),
            (PURL.identifier, self.product_id),
        ]


# =============================================================================
# QUANTITIES
# =============================================================================


class ErrorMargin(Record):
    value: float
    unit: Unit

    def attachments(self):
        return [
            (RDF.type, CAT.errorMargin),
            (QUDT.unit, self.unit),
            (QUDT.value, self.value),
        ]


class Observation(Record):
    """A measured or expected value with its unit and optional error margin."""

    value: float
    unit: Unit
    error_margin: ErrorMargin | None = None

    def attachments(self):
        return [
            (RDF.type, CAT.Observation),
            (QUDT.unit, self.unit),
            (QUDT.value, self.value),
            (CAT.errorMargin, self.error_margin),
        ]


# =============================================================================
# CHEMICALS AND BATCHES
# =============================================================================


class Chemical(Record):
    """
    A chemical substance.

    Identified by its InChI, so the same substance used in several batches
    or files is a single node.
    """

    chemical_id: str = Field(alias="chemicalID")
    chemical_name: str
    cas_number: str | None = Field(default=None, alias="CASNumber")
    molecular_mass: Observation
    smiles: str
    swiss_cat_number: str | None = None
    inchi: str = Field(alias="Inchi")
    keywords: str | None = None
    molecular_formula: str
    density: Observation | None = None

    def natural_key(self) -> str:
        return self.inchi

    def attachments(self):
        return [
            (RDF.type, OBO.CHEBI_25367),
            (PURL.identifier, self.chemical_id),
            (ALLORES.AFR_0002292, self.chemical_name),
            (ALLORES.AFR_0001952, self.molecular_formula),
            (ALLORES.AFR_0002295, self.smiles),
            (ALLORES.AFR_0002294, self.molecular_mass),
            (ALLORES.AFR_0002296, self.inchi),
            (CAT.casNumber, self.cas_number),
            (CAT.swissCatNumber, self.swiss_cat_number),
            (SCHEMA.keywords, self.keywords),
            (OBO.PATO_0001019, self.density),
        ]


class Batch(Record):
    """A batch of reactions, identified by its batch ID."""

    batch_id: str = Field(alias="batchID")
    batch_name: str | None = None
    reaction_type: str | None = None
    reaction_name: str | None = None
    optimization_type: str | None = None
    link: str | None = None

    def natural_key(self) -> str:
        return self.batch_id

    def attachments(self):
        return [
            (RDF.type, CAT.Batch),
            (PURL.identifier, self.batch_id),
            (SCHEMA.name, self.batch_name),
            (CAT.reactionType, self.reaction_type),
            (CAT.reactionName, self.reaction_name),
            (CAT.optimizationType, self.optimization_type),
            (ALLOHDF.HardLink, self.link),
        ]


# =============================================================================
# CHROMATOGRAPHY PEAKS
# =============================================================================


class Measurement(Record):
    value: float
    unit: Unit

    def attachments(self):
        return [
            (RDF.type, CAT.Measurement),
            (QUDT.unit, self.unit),
            (QUDT.value, self.value),
        ]


class Peak(Record):
    """One peak of a chromatogram. The JSON keys are space-separated words."""

    index: int = Field(alias="@index")
    peak_identifier: str = Field(alias="identifier")
    peak_area: Measurement = Field(alias="peak area")
    retention_time: Measurement = Field(alias="retention time")
    peak_start: Measurement = Field(alias="peak start")
    peak_end: Measurement = Field(alias="peak end")
    peak_height: Measurement = Field(alias="peak height")
    relative_peak_area: Measurement = Field(alias="relative peak area")
    relative_peak_height: Measurement = Field(alias="relative peak height")
    peak_value_at_start: Measurement = Field(alias="peak value at start")
    peak_value_at_end: Measurement = Field(alias="peak value at end")

    def attachments(self):
        return [
            (RDF.type, ALLORES.AFR_0000413),
            (ALLORES.AFR_0001164, self.peak_identifier),
            (ALLORES.AFR_0001073, self.peak_area),
            (ALLORES.AFR_0001089, self.retention_time),
            (ALLORES.AFR_0001178, self.peak_start),
            (ALLORES.AFR_0001180, self.peak_end),
            (ALLORES.AFR_0000948, self.peak_height),
            (ALLORES.AFR_0001165, self.relative_peak_area),
            (ALLORES.AFR_0000949, self.relative_peak_height),
            (ALLORES.AFR_0001179, self.peak_value_at_start),
            (ALLORES.AFR_0001181, self.peak_value_at_end),
        ]


class PeakList(Record):
    """
    The peaks of one chromatogram.

    A peak list belongs to the product it was measured on. When the graph
    already holds a cat:Product, the list is linked to it with cat:hasProduct;
    with several products the one with the smallest IRI is taken.
    """

    peak: list[Peak]

    def attachments(self):
        return [
            (RDF.type, CAT.PeakList),
            (CAT.peak, self.peak),
        ]

    def insert_into(self, store: TripleStore, subject: Subject) -> None:
        super().insert_into(store, subject)

        products = sorted(store.subjects_of_type(CAT.Product), key=str)
        if products:
            store.insert(subject, CAT.hasProduct, products[0])
