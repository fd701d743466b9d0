"""Shared fixtures for the converter tests."""

from pathlib import Path

import pytest
from rdflib import Graph

from catplus_rdf.config import Settings
from catplus_rdf.graph import GraphBuilder
from catplus_rdf.namespaces import CAT_RES

DATA_DIR = Path(__file__).parent / "data"

# Golden content-addressed IRIs (SHA-256, base64url without padding)
BATCH_23 = CAT_RES["U1-jDX4l3YpJ8VNneXNOyChhCNEV2lBF1387QYXY95A"]
WATER = CAT_RES["REbPn8oEMuCNjy8IqbupevT1Q_MUxGpALI21Ckz1fv8"]
METHYL_IODIDE = CAT_RES["3HIZc0u04S5xrXnd5XznYutlTE19ZCkKb01k9Q4NOZQ"]
PRODUCT_1_A1 = CAT_RES["tFZK0UBWAzCoe3VPYQ1NgSFz1q-ziFOVQmJE_XWRckw"]
PRODUCT_1_B1 = CAT_RES["rIm5C_G7z1IMzoHcbRYk4DGARaf09abUq6oKKwym2oU"]


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def synth_path() -> Path:
    return DATA_DIR / "synth_batch.json"


@pytest.fixture
def hci_path() -> Path:
    return DATA_DIR / "hci_campaign.json"


@pytest.fixture
def bravo_path() -> Path:
    return DATA_DIR / "bravo_actions.json"


@pytest.fixture
def builder() -> GraphBuilder:
    return GraphBuilder()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Default settings writing into a temporary folder."""
    settings = Settings()
    settings.output.output_dir = tmp_path / "out"
    return settings


def parse_turtle(text: str) -> Graph:
    return Graph().parse(data=text, format="turtle")
