"""
JSON Input Loader - Finds, classifies and parses cat+ device files.

This module provides:
- Input type detection from the file name
- The convert/skip decision for each file of an input folder
- Reading and parsing of a file into its root record
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from catplus_rdf.errors import FileSystemError, ParseError
from catplus_rdf.graph.entity import GraphEntity
from catplus_rdf.models import BravoActionWrapper, CampaignWrapper, SynthBatch

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=GraphEntity)

RDF_EXTENSIONS = (".ttl", ".jsonld")


# =============================================================================
# INPUT TYPES
# =============================================================================


class InputType(str, Enum):
    """Kinds of device files, named after the marker found in their file name."""

    SYNTH = "synth"
    HCI = "hci"
    BRAVO = "bravo"

    @property
    def model(self) -> type[GraphEntity]:
        """Root record of the files of this kind."""
        return _ROOT_MODELS[self]


_ROOT_MODELS: dict[InputType, type[GraphEntity]] = {
    InputType.SYNTH: SynthBatch,
    InputType.HCI: CampaignWrapper,
    InputType.BRAVO: BravoActionWrapper,
}


def detect_input_type(filename: str) -> InputType | None:
    """
    Detect the kind of a device file from its name.

    Args:
        filename: File name, matched case-insensitively

    Returns:
        The first kind whose marker occurs in the name, or None
    """
    lowercase = filename.lower()
    for input_type in InputType:
        if input_type.value in lowercase:
            return input_type
    return None


@dataclass(frozen=True)
class InputAction:
    """What to do with one input file."""

    path: Path
    input_type: InputType | None = None
    skip_reason: str | None = None

    @property
    def convert(self) -> bool:
        return self.input_type is not None


def determine_input_action(path: Path | str) -> InputAction:
    """
    Decide whether a file is converted, and as which kind.

    Args:
        path: Input file

    Returns:
        InputAction carrying the input type, or the reason the file is skipped
    """
    path = Path(path)
    if path.name.endswith(RDF_EXTENSIONS):
        logger.info("Skipping file '%s': already an RDF file", path.name)
        return InputAction(path, skip_reason="already an RDF file")

    input_type = detect_input_type(path.name)
    if input_type is None:
        logger.info("Skipping file '%s': no matching type", path.name)
        return InputAction(path, skip_reason="no matching type")

    return InputAction(path, input_type=input_type)


def find_input_files(input_path: Path | str) -> list[Path]:
    """
    List the files to consider for conversion.

    Args:
        input_path: A file, or a folder whose direct children are considered

    Returns:
        Sorted list of files

    Raises:
        FileSystemError: If the path does not exist
    """
    input_path = Path(input_path)
    if input_path.is_file():
        return [input_path]
    if input_path.is_dir():
        files = sorted(p for p in input_path.iterdir() if p.is_file())
        logger.info("Found %d files in %s", len(files), input_path)
        return files
    raise FileSystemError(f"Input path not found: {input_path}")


# =============================================================================
# READING AND PARSING
# =============================================================================


def read_to_string(path: Path | str) -> str:
    """
    Read a UTF-8 input file.

    Raises:
        FileSystemError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(f"Failed to read input file '{path}': {e}") from e


def parse_json(text: str, model: type[EntityT]) -> EntityT:
    """
    Parse a JSON document into its root record.

    Args:
        text: JSON document
        model: Root record class of the document

    Returns:
        The validated root record

    Raises:
        ParseError: If the text is not JSON or does not match the model
    """
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise ParseError(f"Invalid {model.__name__} document: {e}") from e


def load_entity(path: Path | str, model: type[EntityT]) -> EntityT:
    """Read and parse an input file."""
    entity = parse_json(read_to_string(path), model)
    logger.debug("Parsed %s as %s", path, model.__name__)
    return entity
