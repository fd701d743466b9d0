"""
Campaign records - Human-computer interface files describing a campaign.
"""

from pydantic import Field
from rdflib.namespace import RDF

from catplus_rdf.graph.entity import Subject
from catplus_rdf.graph.store import TripleStore
from catplus_rdf.namespaces import ALLOCOM, ALLORES, CAT, OBO, SCHEMA

from .core import Batch, Chemical, Record


class Objective(Record):
    criteria: str
    condition: str
    description: str
    objective_name: str

    def attachments(self):
        return [
            (RDF.type, OBO.IAO_0000005),
            (CAT.criteria, self.criteria),
            (ALLOCOM.AFC_0000090, self.condition),
            (SCHEMA.description, self.description),
            (SCHEMA.name, self.objective_name),
        ]


class Campaign(Record):
    """
    A campaign: its objective, the batch it runs and the chemicals it uses.

    The campaign is the root entity of an HCI file and has no natural key.
    """

    campaign_name: str
    description: str
    generic_objective: str
    campaign_class: str
    campaign_type: str = Field(alias="type")
    reference: str | None = None
    has_batch: Batch
    has_objective: Objective | None = None
    has_chemical: list[Chemical] = Field(default_factory=list)

    def attachments(self):
        return [
            (RDF.type, CAT.Campaign),
            (SCHEMA.name, self.campaign_name),
            (SCHEMA.description, self.description),
            (CAT.genericObjective, self.generic_objective),
            (CAT.campaignClass, self.campaign_class),
            (CAT.campaignType, self.campaign_type),
            (ALLORES.AFR_0002764, self.reference),
            (CAT.hasBatch, self.has_batch),
            (CAT.hasObjective, self.has_objective),
            (CAT.hasChemical, self.has_chemical),
        ]


class CampaignWrapper(Record):
    """Top level of an HCI file. Stands for the campaign it wraps."""

    has_campaign: Campaign

    def get_uri(self) -> Subject:
        return self.has_campaign.get_uri()

    def insert_into(self, store: TripleStore, subject: Subject) -> None:
        self.has_campaign.insert_into(store, subject)
