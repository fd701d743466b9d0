"""Loaders package for cat+ device files."""

from .json_loader import (
    InputAction,
    InputType,
    detect_input_type,
    determine_input_action,
    find_input_files,
    load_entity,
    parse_json,
    read_to_string,
)

__all__ = [
    "InputAction",
    "InputType",
    "detect_input_type",
    "determine_input_action",
    "find_input_files",
    "load_entity",
    "parse_json",
    "read_to_string",
]
