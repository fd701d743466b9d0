"""
Logging setup - Colored console output and plain-text log files.

Console lines look like:

    12:00:01 | INFO     | 🧱 builder      | Linked content URL file:///data/hci.json to ...

The icon and color of a line come from the converter component that logged
it; log files get the same layout without ANSI codes.
"""

import logging
import re
import sys
from pathlib import Path
from typing import NamedTuple

ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")

RESET = "\033[0m"
BOLD = "\033[1m"

LEVEL_COLORS = {
    "DEBUG": "\033[37m",  # White
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[1;31m",  # Bold Red
}

# Libraries that log parsing details at INFO
NOISY_LOGGERS = ("rdflib", "pyshacl")


class LogTheme(NamedTuple):
    icon: str
    color: str


DEFAULT_THEME = LogTheme("•", BOLD)

# Most specific logger prefix first
COMPONENT_THEMES: dict[str, LogTheme] = {
    "catplus_rdf.graph.builder": LogTheme("🧱", "\033[1;38;5;202m"),  # Bold Orange
    "catplus_rdf.graph": LogTheme("🔗", "\033[1;32m"),  # Bold Green
    "catplus_rdf.models": LogTheme("🧪", "\033[1;35m"),  # Bold Magenta
    "catplus_rdf.loaders": LogTheme("📂", "\033[1;36m"),  # Bold Cyan
    "catplus_rdf.pipeline": LogTheme("⚙️ ", "\033[1;34m"),  # Bold Blue
    "catplus_rdf.triples.serializer": LogTheme("📝", "\033[1;36m"),  # Bold Cyan
    "catplus_rdf.triples.validator": LogTheme("✅", "\033[1;33m"),  # Bold Yellow
    "catplus_rdf.utils": LogTheme("🛠️ ", "\033[1;90m"),  # Dark Gray
    "catplus_rdf.main": LogTheme("🚀", "\033[1;32m"),  # Bold Green
    "__main__": LogTheme("🚀", "\033[1;32m"),  # Bold Green
}


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes like [31m or [1;33m from text."""
    return ANSI_ESCAPE.sub("", text)


def component_theme(logger_name: str) -> LogTheme:
    """Return the theme of the first component whose prefix matches the logger name."""
    for prefix, theme in COMPONENT_THEMES.items():
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return theme
    return DEFAULT_THEME


def _short_name(record: logging.LogRecord) -> str:
    return record.name.rsplit(".", 1)[-1]


class ColoredFormatter(logging.Formatter):
    """Console formatter: level colors, component icons, warnings highlighted."""

    def format(self, record):
        theme = component_theme(record.name)
        level_color = LEVEL_COLORS.get(record.levelname, RESET)

        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            message = f"{level_color}{message}{RESET}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return " | ".join(
            (
                self.formatTime(record, self.datefmt),
                f"{level_color}{record.levelname:8}{RESET}",
                f"{theme.color}{theme.icon} {_short_name(record):12}{RESET}",
                message,
            )
        )


class PlainFormatter(logging.Formatter):
    """Plain text formatter for file logging (no ANSI codes)."""

    def format(self, record):
        message = strip_ansi_codes(record.getMessage())
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return " | ".join(
            (
                self.formatTime(record, self.datefmt),
                f"{record.levelname:8}",
                f"{_short_name(record):12}",
                message,
            )
        )


# Installed by add_file_handler, replaced on each call
_file_handler: logging.FileHandler | None = None


def setup_colored_logging(
    level=logging.INFO,
    log_file: str | Path | None = None,
    colors: bool | None = None,
) -> None:
    """
    Route converter logs to stderr and, optionally, to a file.

    Args:
        level: Console logging level (default: INFO)
        log_file: Optional path of a log file receiving DEBUG and above
        colors: Force colors on or off; by default only when stderr is a terminal
    """
    if colors is None:
        colors = sys.stderr.isatty()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if colors:
        console_handler.setFormatter(ColoredFormatter(datefmt="%H:%M:%S"))
    else:
        console_handler.setFormatter(PlainFormatter(datefmt="%H:%M:%S"))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    if log_file:
        add_file_handler(log_file)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def add_file_handler(log_file: str | Path, level=logging.DEBUG) -> logging.FileHandler:
    """
    Add a plain-text file handler to the root logger.

    The root level is lowered to `level` if needed; the console handler keeps
    its own level.

    Args:
        log_file: Path to the log file, created with its folder
        level: Logging level for the file (default: DEBUG)

    Returns:
        The created FileHandler
    """
    global _file_handler

    remove_file_handler()

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(PlainFormatter(datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.addHandler(_file_handler)
    if root_logger.level > level:
        root_logger.setLevel(level)

    logging.getLogger(__name__).info("File logging enabled: %s", log_path)
    return _file_handler


def remove_file_handler() -> None:
    """Detach and close the file handler, if one is installed."""
    global _file_handler

    if _file_handler is None:
        return
    logging.getLogger().removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None


def get_file_handler() -> logging.FileHandler | None:
    """Get the current file handler (if any)."""
    return _file_handler
