"""
Synthesis records - Batches run on the Chemspeed synthesis platform.

An add action dispenses into several wells at once. In the graph it is split
into one action per well, each producing the product of that well.
"""

import logging

from pydantic import Field
from rdflib.namespace import RDF

from catplus_rdf.graph.entity import Subject, attach_all
from catplus_rdf.graph.store import TripleStore
from catplus_rdf.namespaces import ALLOPROC, ALLOPROP, ALLOQUAL, ALLORES, CAT, PURL, QUDT

from .core import Batch, Chemical, FlatPlateRecord, Observation, Plate, Product, Record, date_time
from .enums import ActionName

logger = logging.getLogger(__name__)


class SampleItem(Record):
    sample_id: str = Field(alias="sampleID")
    role: str
    internal_bar_code: str
    expected_datum: Observation | None = None
    measured_quantity: Observation | None = None
    concentration: Observation | None = None
    physical_state: str
    has_chemical: Chemical

    def attachments(self):
        return [
            (RDF.type, CAT.Sample),
            (CAT.role, self.role),
            (CAT.internalBarCode, self.internal_bar_code),
            (PURL.identifier, self.sample_id),
            (CAT.expectedDatum, self.expected_datum),
            (CAT.measuredQuantity, self.measured_quantity),
            (ALLORES.AFR_0002036, self.concentration),
            (ALLOQUAL.AFQ_0000111, self.physical_state),
            (CAT.hasChemical, self.has_chemical),
        ]


class SynthSample(FlatPlateRecord):
    """The vial a dispense draws from, with the sample items it contains."""

    has_plate: Plate
    vial_id: str = Field(alias="vialID")
    vial_type: str
    role: str
    expected_datum: Observation
    has_sample: list[SampleItem]

    def attachments(self):
        return [
            (RDF.type, CAT.Sample),
            (CAT.hasPlate, self.has_plate),
            (CAT.role, self.role),
            (CAT.vialType, self.vial_type),
            (ALLORES.AFR_0002464, self.vial_id),
            (CAT.expectedDatum, self.expected_datum),
            (CAT.hasSample, self.has_sample),
        ]


class SynthWell(FlatPlateRecord):
    has_plate: Plate
    position: str
    quantity: Observation

    def product(self) -> Product:
        """The product of this well, keyed by container ID and position."""
        return Product(product_id=f"{self.has_plate.container_id}-{self.position}")

    def attachments(self):
        return [
            (RDF.type, CAT.Well),
            (CAT.hasPlate, self.has_plate),
            (ALLORES.AFR_0002240, self.position),
        ]


class SynthAction(FlatPlateRecord):
    action_name: ActionName
    start_time: str
    ending_time: str
    method_name: str
    equipment_name: str
    sub_equipment_name: str
    has_plate: Plate | None = None
    speed_shaker: Observation | None = None
    speed_tumble_stirrer: Observation | None = None
    temperature_tumble_stirrer: Observation | None = None
    temperature_shaker: Observation | None = None
    pressure_measurement: Observation | None = None
    vacuum: Observation | None = None
    has_well: list[SynthWell] | None = None
    dispense_state: str | None = None
    dispense_type: str | None = None
    has_sample: SynthSample | None = None

    def _common(self):
        return [
            (ALLORES.AFX_0000622, date_time(self.start_time)),
            (ALLORES.AFR_0002423, date_time(self.ending_time)),
            (ALLORES.AFR_0001606, self.method_name),
            (ALLORES.AFR_0001723, self.equipment_name),
            (CAT.subEquipmentName, self.sub_equipment_name),
        ]

    def attachments(self):
        return [
            (RDF.type, self.action_name),
            *self._common(),
            (CAT.speedInRPM, self.speed_shaker),
            (ALLOPROP.AFX_0000211, self.speed_tumble_stirrer),
            (CAT.temperatureTumbleStirrer, self.temperature_tumble_stirrer),
            (CAT.temperatureShaker, self.temperature_shaker),
            (ALLOPROC.AFP_0002677, self.pressure_measurement),
            (CAT.vacuum, self.vacuum),
            (CAT.hasPlate, self.has_plate),
        ]

    def well_attachments(self, well: SynthWell):
        """
        Table of the add action restricted to one well.

        Args:
            well: Well receiving the dispensed quantity

        Returns:
            The (predicate, value) pairs of the per-well action
        """
        return [
            (RDF.type, CAT.SynthAddAction),
            *self._common(),
            (ALLOQUAL.AFQ_0000111, self.dispense_state),
            (CAT.dispenseType, self.dispense_type),
            (CAT.hasSample, self.has_sample),
            (QUDT.quantity, well.quantity),
            (CAT.hasWell, well),
            (CAT.producesProduct, well.product()),
        ]


class SynthBatch(Batch):
    """
    A synthesis batch and the actions performed on it.

    Add actions fan out into one node per well; an Add action listing no
    wells adds nothing to the graph.
    """

    actions: list[SynthAction] = Field(alias="Actions")

    def insert_into(self, store: TripleStore, subject: Subject) -> None:
        super().insert_into(store, subject)

        for action in self.actions:
            if action.action_name is ActionName.ADD_ACTION:
                if not action.has_well:
                    logger.debug("Skipping AddAction without wells in batch %s", self.batch_id)
                    continue
                for well in action.has_well:
                    action_uri = action.get_uri()
                    store.insert(action_uri, CAT.hasBatch, subject)
                    attach_all(store, action_uri, action.well_attachments(well))
            else:
                action_uri = action.get_uri()
                store.insert(action_uri, CAT.hasBatch, subject)
                action.insert_into(store, action_uri)

        logger.debug("Batch %s: %d actions", self.batch_id, len(self.actions))
