"""
Controlled vocabularies of the cat+ input files and their ontology IRIs.
"""

from enum import Enum

from rdflib import URIRef

from catplus_rdf.namespaces import CAT, UNIT


class Unit(str, Enum):
    """Units as written in the input files, mapped to QUDT units."""

    DEG_C = "°C"
    BAR = "bar"
    GM = "g"
    MILLIGM = "mg"
    GM_PER_MOL = "g/mol"
    GM_PER_MILLIL = "g/mL"
    MILLIGM_PER_MILLIL = "mg/mL"
    MOL_PER_L = "mol/L"
    MILLIL = "mL"
    MICROL = "µL"
    REV_PER_MIN = "rpm"
    MIN = "min"
    SEC = "s"
    HR = "h"
    PERCENT = "%"

    @property
    def iri(self) -> URIRef:
        return UNIT[_UNIT_LOCAL_NAMES[self]]


_UNIT_LOCAL_NAMES = {
    Unit.DEG_C: "DEG_C",
    Unit.BAR: "BAR",
    Unit.GM: "GM",
    Unit.MILLIGM: "MilliGM",
    Unit.GM_PER_MOL: "GM-PER-MOL",
    Unit.GM_PER_MILLIL: "GM-PER-MilliL",
    Unit.MILLIGM_PER_MILLIL: "MilliGM-PER-MilliL",
    Unit.MOL_PER_L: "MOL-PER-L",
    Unit.MILLIL: "MilliL",
    Unit.MICROL: "MicroL",
    Unit.REV_PER_MIN: "REV-PER-MIN",
    Unit.MIN: "MIN",
    Unit.SEC: "SEC",
    Unit.HR: "HR",
    Unit.PERCENT: "PERCENT",
}


class ActionName(str, Enum):
    """Kinds of actions recorded by the synthesis and sample-preparation devices."""

    ADD_ACTION = "AddAction"
    SET_TEMPERATURE_ACTION = "setTemperatureAction"
    SET_PRESSURE_ACTION = "setPressureAction"
    SET_VACUUM_ACTION = "setVacuumAction"
    FILTRATE_ACTION = "filtrateAction"
    SHAKE_ACTION = "shakeAction"
    EVAPORATION_ACTION = "evaporationAction"
    SOLVENT_CHANGE_ACTION = "solventChangeAction"

    @property
    def iri(self) -> URIRef:
        # Class names are the action names with a capital first letter
        return CAT[self.value[0].upper() + self.value[1:]]
