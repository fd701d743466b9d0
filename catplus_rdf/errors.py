"""
Conversion errors raised by the graph engine and the file driver.

Every error derives from ConversionError so the batch driver can record a
failed document and move on to the next one.
"""


class ConversionError(Exception):
    """Base class for errors that abort the conversion of one document."""


class ParseError(ConversionError):
    """Raised when an input document is not valid JSON or does not match its record model."""


class StoreWriteError(ConversionError):
    """
    Raised when a triple cannot be written to the triple store.

    Happens for malformed literals (e.g. an unparsable dateTime) or for terms
    placed in a position they are not allowed in.
    """


class IdentityAmbiguityError(ConversionError):
    """Raised when content linking finds more than one root entity in a graph."""

    def __init__(self, root_subjects: list, message: str | None = None):
        self.root_subjects = root_subjects
        self.message = message or (
            f"Expected a single root entity, found {len(root_subjects)}: "
            + ", ".join(str(s) for s in root_subjects)
        )
        super().__init__(self.message)


class UnsupportedTermVariant(ConversionError):
    """Raised when a graph holds a term that is not an IRI, blank node or literal."""


class FileSystemError(ConversionError):
    """Raised by the driver for unreadable inputs, unwritable outputs and unusable paths."""
