"""
Utilities Module - Logging setup for the converter.
"""

from .logging import (
    ColoredFormatter,
    PlainFormatter,
    add_file_handler,
    component_theme,
    get_file_handler,
    remove_file_handler,
    setup_colored_logging,
    strip_ansi_codes,
)

__all__ = [
    "ColoredFormatter",
    "PlainFormatter",
    "add_file_handler",
    "component_theme",
    "get_file_handler",
    "remove_file_handler",
    "setup_colored_logging",
    "strip_ansi_codes",
]
