"""
Sample preparation records - Action logs of the Agilent Bravo liquid handler.

A Bravo file is a flat list of actions with no batch of its own; every action
names the product it prepares, which ties it to the matching synthesis and
analysis files.
"""

from typing import Any

from pydantic import Field, model_validator
from rdflib.namespace import RDF

from catplus_rdf.graph.entity import Subject
from catplus_rdf.graph.store import TripleStore
from catplus_rdf.namespaces import ALLOPROP, ALLOQUAL, ALLORES, CAT

from .core import Chemical, Observation, Product, Record, Well, date_time, lift_fields
from .enums import ActionName


class Cartridge(Record):
    cartridge_name: str
    cartridge_composition: str

    def attachments(self):
        return [
            (RDF.type, CAT.Cartridge),
            (CAT.cartridgeName, self.cartridge_name),
            (CAT.cartridgeComposition, self.cartridge_composition),
        ]


class Solvent(Record):
    has_chemical: Chemical
    volume: Observation

    def attachments(self):
        return [
            (RDF.type, CAT.Solvent),
            (CAT.hasChemical, self.has_chemical),
            (CAT.volume, self.volume),
        ]


class BravoProduct(Product):
    """Product prepared by an action, keyed by the sample ID of the file."""

    product_id: str = Field(alias="sampleID")
    peak_identifier: str


class BravoSample(Record):
    """A sample taken from a well. The well fields are written flat in the file."""

    has_well: Well

    @model_validator(mode="before")
    @classmethod
    def _gather_well(cls, data: Any) -> Any:
        if isinstance(data, dict) and "has_well" in data:
            return data
        return lift_fields(data, "hasWell")

    def attachments(self):
        return [
            (RDF.type, CAT.Sample),
            (CAT.hasWell, self.has_well),
        ]


class BravoAction(Record):
    action_name: ActionName
    start_time: str
    ending_time: str
    method_name: str | None = None
    equipment_name: str
    sub_equipment_name: str | None = None
    speed_shaker: Observation | None = None
    at_well: Well | None = None
    dispense_state: str | None = None
    dispense_type: str | None = None
    has_sample: BravoSample | None = None
    temperature: Observation | None = None
    volume_evaporation_final: Observation | None = None
    has_solvent: Solvent | None = None
    spme_process: bool | None = Field(default=None, alias="SPMEprocess")
    has_cartridge: Cartridge | None = None
    start_duration: Observation | None = None
    ending_duration: Observation | None = None
    order: str | None = None
    product_identification: BravoProduct

    @property
    def action_class(self):
        if self.action_name is ActionName.ADD_ACTION:
            return CAT.BravoAddAction
        return self.action_name.iri

    def attachments(self):
        return [
            (RDF.type, self.action_class),
            (ALLORES.AFX_0000622, date_time(self.start_time)),
            (ALLORES.AFR_0002423, date_time(self.ending_time)),
            (ALLORES.AFR_0001606, self.method_name),
            (ALLORES.AFR_0001723, self.equipment_name),
            (CAT.subEquipmentName, self.sub_equipment_name),
            (CAT.startDuration, self.start_duration),
            (CAT.endingDuration, self.ending_duration),
            (CAT.speedInRPM, self.speed_shaker),
            (CAT.volumeEvaporationFinal, self.volume_evaporation_final),
            (ALLOPROP.AFX_0000060, self.temperature),
            (CAT.hasSample, self.has_sample),
            (CAT.hasSolvent, self.has_solvent),
            (CAT.hasWell, self.at_well),
            (CAT.preparesProduct, self.product_identification),
            (ALLORES.AFR_0001164, self.product_identification.peak_identifier),
            (CAT.hasCartridge, self.has_cartridge),
            (CAT.order, self.order),
            (ALLOQUAL.AFQ_0000111, self.dispense_state),
            (CAT.dispenseType, self.dispense_type),
            (CAT.isSpmeProcess, self.spme_process),
        ]


class BravoActionWrapper(Record):
    """Top level of a Bravo file. The wrapper itself has no node in the graph."""

    actions: list[BravoAction] | None = Field(default=None, alias="Actions")

    def insert_into(self, store: TripleStore, subject: Subject) -> None:
        for action in self.actions or []:
            action.insert_into(store, action.get_uri())
