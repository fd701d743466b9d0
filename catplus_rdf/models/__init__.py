"""
Models Module - Records of the cat+ input files.

Components:
- enums.py: Units and action names with their ontology IRIs
- core.py: Plates, wells, observations, chemicals, products, batches, peak lists
- synth.py: Synthesis batches and their actions
- bravo.py: Sample preparation action logs
- hci.py: Campaigns
"""

from .bravo import BravoAction, BravoActionWrapper, BravoProduct, BravoSample, Cartridge, Solvent
from .core import (
    Batch,
    Chemical,
    ErrorMargin,
    Measurement,
    Observation,
    Peak,
    PeakList,
    Plate,
    Product,
    Record,
    Well,
)
from .enums import ActionName, Unit
from .hci import Campaign, CampaignWrapper, Objective
from .synth import SampleItem, SynthAction, SynthBatch, SynthSample, SynthWell

__all__ = [
    # Enums
    "ActionName",
    "Unit",
    # Core
    "Batch",
    "Chemical",
    "ErrorMargin",
    "Measurement",
    "Observation",
    "Peak",
    "PeakList",
    "Plate",
    "Product",
    "Record",
    "Well",
    # Synthesis
    "SampleItem",
    "SynthAction",
    "SynthBatch",
    "SynthSample",
    "SynthWell",
    # Sample preparation
    "BravoAction",
    "BravoActionWrapper",
    "BravoProduct",
    "BravoSample",
    "Cartridge",
    "Solvent",
    # Campaigns
    "Campaign",
    "CampaignWrapper",
    "Objective",
]
