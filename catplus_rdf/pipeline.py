"""
Conversion Pipeline - Turns cat+ device files into RDF documents.

Orchestrates the flow for each input file: classification → parsing →
graph building (insert, content link, materialization) → validation →
serialization.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from rdflib import URIRef

from catplus_rdf.config import Settings, get_settings
from catplus_rdf.errors import ConversionError, FileSystemError
from catplus_rdf.graph import ROOT_TYPES, GraphBuilder, GraphEntity
from catplus_rdf.loaders import determine_input_action, find_input_files, load_entity
from catplus_rdf.namespaces import CAT_RES
from catplus_rdf.triples import RdfFormat, TripleValidator, ValidationResult
from catplus_rdf.triples.serializer import write_text

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLE DOCUMENT CONVERSION
# =============================================================================


@dataclass
class ConverterConfig:
    """How one input file is converted."""

    input_path: Path
    format: RdfFormat = RdfFormat.TURTLE
    # Prepended to relative input paths to build the content URL
    prefix: str | None = None
    materialize: bool = False
    resource_prefix: str = str(CAT_RES)
    link_content: bool = True
    root_types: tuple[URIRef, ...] = ROOT_TYPES

    @classmethod
    def from_settings(cls, input_path: Path | str, settings: Settings) -> "ConverterConfig":
        return cls(
            input_path=Path(input_path),
            format=RdfFormat.parse(settings.output.format),
            prefix=settings.content.prefix,
            materialize=settings.output.materialize,
            resource_prefix=settings.namespaces.resource,
            link_content=settings.content.link,
            root_types=tuple(URIRef(t) for t in settings.content.root_types),
        )


def build_file_uri(prefix: str | None, path: Path | str) -> str:
    """
    Build the content URL of an input file.

    Args:
        prefix: Prepended to relative paths, ignored for absolute ones
        path: Input file path

    Returns:
        `prefix + path` for a relative path, `file://` + path for an absolute one

    Raises:
        FileSystemError: If the prefix is empty, or the path is relative and
            there is no prefix
    """
    path = Path(path)
    if prefix is not None and prefix == "":
        raise FileSystemError("Cannot use empty prefix")

    if path.is_absolute():
        if prefix is not None:
            logger.info("Prefix is ignored with absolute paths")
        return f"file://{path.as_posix()}"

    if prefix is None:
        raise FileSystemError(f"Cannot build URI for relative path '{path}' without a prefix")
    return f"{prefix}{path.as_posix()}"


def build_graph(config: ConverterConfig, model: type[GraphEntity]) -> GraphBuilder:
    """
    Parse an input file and build its graph.

    Args:
        config: Conversion settings of the file
        model: Root record class of the file

    Returns:
        GraphBuilder holding the finished graph

    Raises:
        ConversionError: If any step fails
    """
    entity = load_entity(config.input_path, model)

    builder = GraphBuilder()
    builder.insert(entity)

    if config.link_content:
        uri = build_file_uri(config.prefix, config.input_path)
        builder.link_content(uri, root_types=config.root_types)

    if config.materialize:
        builder.materialize_blank_nodes(config.resource_prefix)

    return builder


def json_to_rdf(config: ConverterConfig, model: type[GraphEntity]) -> str:
    """
    Convert one input file to serialized RDF.

    Args:
        config: Conversion settings of the file
        model: Root record class of the file

    Returns:
        The graph serialized in `config.format`
    """
    builder = build_graph(config, model)
    if config.format is RdfFormat.JSONLD:
        return builder.serialize_to_jsonld()
    return builder.serialize_to_turtle()


# =============================================================================
# OUTPUT FILES
# =============================================================================


def define_output_folder(input_path: Path | str, requested: Path | str | None = None) -> Path:
    """
    Resolve the folder output files are written to.

    Args:
        input_path: Input file or folder
        requested: Folder asked for by the user, if any

    Returns:
        The requested folder, else the folder of the input file, else the input folder
    """
    if requested is not None:
        return Path(requested)
    input_path = Path(input_path)
    return input_path.parent if input_path.is_file() else input_path


def save_output(
    input_path: Path | str,
    output_folder: Path | str,
    serialized_graph: str,
    format: RdfFormat,
) -> Path:
    """
    Write a serialized graph next to the others as `<stem>.<ext>`.

    Returns:
        Path of the written file

    Raises:
        FileSystemError: If the file cannot be written
    """
    output_path = Path(output_folder) / f"{Path(input_path).stem}.{format.extension}"
    write_text(output_path, serialized_graph)
    logger.info("Processed '%s' -> '%s'", input_path, output_path)
    return output_path


# =============================================================================
# RUN RESULT
# =============================================================================


@dataclass
class ConversionResult:
    """Result from a converter run."""

    # Timing
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    # Files
    files_found: int = 0
    files_converted: list[str] = field(default_factory=list)
    files_skipped: dict[str, list[str]] = field(default_factory=dict)  # reason -> [file names]
    files_failed: dict[str, str] = field(default_factory=dict)  # path -> error

    # Triples
    triples_generated: int = 0

    # Validation
    validation_errors: list[str] = field(default_factory=list)
    validation_warnings: list[str] = field(default_factory=list)

    # Output
    output_files: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.files_failed

    def finalize(self) -> None:
        """Mark the run as complete and calculate duration."""
        self.completed_at = datetime.now()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timing": {
                "started_at": self.started_at.isoformat(),
                "completed_at": self.completed_at.isoformat() if self.completed_at else None,
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "files": {
                "found": self.files_found,
                "converted": self.files_converted,
                "skipped": self.files_skipped,
                "failed": self.files_failed,
            },
            "triples": {
                "total": self.triples_generated,
            },
            "validation": {
                "errors": len(self.validation_errors),
                "warnings": len(self.validation_warnings),
                "error_details": self.validation_errors[:10],
                "warning_details": self.validation_warnings[:10],
            },
            "output": {
                "files": self.output_files,
            },
        }

    def print_summary(self) -> None:
        """Print a summary of the run."""
        print("\n" + "=" * 60)
        print("📊 CONVERSION SUMMARY")
        print("=" * 60)

        print(f"\n⏱️  Duration: {self.duration_seconds:.2f}s")
        print(f"📁 Files: {len(self.files_converted)}/{self.files_found} converted")

        if self.files_skipped:
            total_skipped = sum(len(v) for v in self.files_skipped.values())
            print(f"   ⏭️  Skipped: {total_skipped}")
            for reason, names in self.files_skipped.items():
                print(f"      • {reason}: {len(names)}")

        if self.files_failed:
            print(f"   ⚠️  Failed: {len(self.files_failed)}")
            for path, error in self.files_failed.items():
                print(f"      • {path}: {error}")

        print(f"\n🔗 Triples: {self.triples_generated} generated")

        if self.validation_errors:
            print(f"\n❌ Validation Errors: {len(self.validation_errors)}")
        if self.validation_warnings:
            print(f"⚠️  Validation Warnings: {len(self.validation_warnings)}")

        print(f"\n📤 Output Files: {len(self.output_files)}")
        for f in self.output_files:
            print(f"   • {f}")

        print("=" * 60)


# =============================================================================
# CONVERTER
# =============================================================================


class Converter:
    """
    cat+ RDF Converter

    Orchestrates, for every qualifying input file:
    1. Classifying the file and parsing it into its root record
    2. Building the graph (insert, content link, materialization)
    3. Validating the graph (when enabled)
    4. Writing `<stem>.<ttl|jsonld>` to the output folder

    Usage:
        converter = Converter()
        result = converter.run("data/", output_folder="out/")
        result.print_summary()
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the converter.

        Args:
            settings: Configuration settings (uses default if None)
        """
        self.settings = settings or get_settings()
        self._validator: TripleValidator | None = None

    @property
    def validator(self) -> TripleValidator:
        """Get or create validator."""
        if self._validator is None:
            self._validator = TripleValidator(
                shapes_path=self.settings.validation.shapes_path,
                require_iris=self.settings.output.materialize,
            )
        return self._validator

    def convert_file(
        self,
        input_path: Path,
        model: type[GraphEntity],
        output_folder: Path,
        result: ConversionResult,
    ) -> Path:
        """
        Convert one file and record the outcome in `result`.

        Returns:
            Path of the written output file

        Raises:
            ConversionError: If the file cannot be converted
        """
        config = ConverterConfig.from_settings(input_path, self.settings)
        builder = build_graph(config, model)
        result.triples_generated += len(builder)

        stats = builder.serializer.get_statistics(builder.store.graph)
        logger.info(
            "%s: %d triples, %d subjects, %d blank nodes",
            input_path.name,
            stats["total_triples"],
            stats["unique_subjects"],
            stats["blank_nodes"],
        )

        if self.settings.validation.enabled:
            report = self.validator.validate(builder.store.graph)
            self._record_validation(input_path, report, result)

        serialized = builder.serializer.serialize(builder.store.graph, config.format)
        output_path = save_output(input_path, output_folder, serialized, config.format)

        result.files_converted.append(str(input_path))
        result.output_files.append(str(output_path))
        return output_path

    def _record_validation(
        self, input_path: Path, report: ValidationResult, result: ConversionResult
    ) -> None:
        for error in report.errors:
            result.validation_errors.append(f"{input_path.name}: {error}")
        for warning in report.warnings:
            result.validation_warnings.append(f"{input_path.name}: {warning}")
        if not report.is_valid:
            logger.warning("%s: %s", input_path.name, report.summary())

    def run(
        self, input_path: Path | str, output_folder: Path | str | None = None
    ) -> ConversionResult:
        """
        Convert a file, or every qualifying file of a folder.

        In folder mode a failing file is recorded and the run goes on with the
        next one. In single-file mode the failure is raised.

        Args:
            input_path: Input file or folder
            output_folder: Output folder (defaults to settings, then to the input's folder)

        Returns:
            ConversionResult with the run summary

        Raises:
            ConversionError: If a single input file cannot be converted
        """
        input_path = Path(input_path)
        result = ConversionResult()
        single_file = input_path.is_file()

        try:
            files = find_input_files(input_path)
            result.files_found = len(files)
            folder = define_output_folder(
                input_path, output_folder or self.settings.output.output_dir
            )
            logger.info("Output folder: %s", folder)

            for path in files:
                action = determine_input_action(path)
                if not action.convert:
                    result.files_skipped.setdefault(action.skip_reason, []).append(path.name)
                    continue

                logger.info("Converting %s as %s", path.name, action.input_type.value)
                try:
                    self.convert_file(path, action.input_type.model, folder, result)
                except ConversionError as e:
                    if single_file:
                        raise
                    logger.error("Failed to convert %s: %s", path, e)
                    result.files_failed[str(path)] = str(e)
        finally:
            result.finalize()

        logger.info(
            "Converted %d/%d files (%d failed)",
            len(result.files_converted),
            result.files_found,
            len(result.files_failed),
        )
        return result
