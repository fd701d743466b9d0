"""
Triple Validator - Checks converted graphs before they are written.

Structural checks against the cat vocabulary, completeness rules for the
records the converter emits, and optional SHACL validation with pyshacl.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

import pyshacl
from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF, SH
from rdflib.term import Node

from catplus_rdf.namespaces import CAT, PURL, QUDT

logger = logging.getLogger(__name__)


# =============================================================================
# VALIDATION RESULT
# =============================================================================


@dataclass
class ValidationResult:
    """Result of graph validation."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    info: dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def summary(self) -> str:
        """One-line verdict with error and warning counts."""
        verdict = "VALID" if self.is_valid else "INVALID"
        return f"Validation {verdict}: {len(self.errors)} errors, {len(self.warnings)} warnings"


# =============================================================================
# VOCABULARY AND COMPLETENESS RULES
# =============================================================================

# cat: classes the converter emits
CAT_CLASSES = frozenset(
    {
        CAT.Batch,
        CAT.Campaign,
        CAT.Cartridge,
        CAT.Measurement,
        CAT.Observation,
        CAT.PeakList,
        CAT.Plate,
        CAT.Product,
        CAT.Sample,
        CAT.Solvent,
        CAT.Well,
        CAT.errorMargin,
        CAT.AddAction,
        CAT.SynthAddAction,
        CAT.BravoAddAction,
        CAT.SetTemperatureAction,
        CAT.SetPressureAction,
        CAT.SetVacuumAction,
        CAT.FiltrateAction,
        CAT.ShakeAction,
        CAT.EvaporationAction,
        CAT.SolventChangeAction,
    }
)


class RequiredProperty(NamedTuple):
    rdf_type: URIRef
    predicate: URIRef
    label: str


REQUIRED_PROPERTIES = (
    RequiredProperty(CAT.Product, PURL.identifier, "identifier"),
    RequiredProperty(CAT.Observation, QUDT.value, "value"),
    RequiredProperty(CAT.Observation, QUDT.unit, "unit"),
    RequiredProperty(CAT.Well, CAT.hasPlate, "plate"),
)


def _local_name(iri: URIRef) -> str:
    return str(iri).rsplit("#", 1)[-1].rsplit("/", 1)[-1]


# =============================================================================
# SHACL
# =============================================================================


@dataclass
class ShaclIssue:
    """One sh:ValidationResult of a SHACL report."""

    severity: Node | None
    message: Node | None
    focus: Node | None = None
    path: Node | None = None

    def describe(self) -> str:
        text = f"SHACL: {self.message}"
        if self.focus is not None:
            text += f" (node: {self.focus})"
        if self.path is not None:
            text += f" (path: {self.path})"
        return text


def run_shacl(data: Graph, shapes: Graph) -> tuple[bool, list[ShaclIssue]]:
    """
    Validate a graph against SHACL shapes.

    Args:
        data: Graph to validate
        shapes: Shapes graph

    Returns:
        Whether the graph conforms, and the issues of the report

    Raises:
        Exception: Whatever pyshacl raises for unusable shapes
    """
    conforms, report, _ = pyshacl.validate(
        data_graph=data,
        shacl_graph=shapes,
        inference="none",
        abort_on_first=False,
        allow_infos=True,
        allow_warnings=True,
    )
    issues = [
        ShaclIssue(
            severity=report.value(node, SH.resultSeverity),
            message=report.value(node, SH.resultMessage),
            focus=report.value(node, SH.focusNode),
            path=report.value(node, SH.resultPath),
        )
        for node in report.subjects(RDF.type, SH.ValidationResult)
    ]
    return conforms, issues


# =============================================================================
# TRIPLE VALIDATOR
# =============================================================================


class TripleValidator:
    """
    Validates converted graphs.

    Errors (the graph is invalid):
    - empty graph
    - ill-typed literals
    - blank nodes left when IRIs are required
    - SHACL violations

    Warnings:
    - cat prefix not bound, unknown cat: classes, empty literals
    - incomplete records (see REQUIRED_PROPERTIES)
    - SHACL warnings, or a SHACL run that could not complete
    """

    def __init__(self, shapes_path: Path | str | None = None, require_iris: bool = False):
        """
        Initialize the validator.

        Args:
            shapes_path: Optional path to SHACL shapes file (.ttl)
            require_iris: Report remaining blank nodes as errors
        """
        self.require_iris = require_iris
        self.shacl_graph: Graph | None = None
        if shapes_path:
            self.shacl_graph = self._read_shapes(Path(shapes_path))

    @staticmethod
    def _read_shapes(path: Path) -> Graph | None:
        if not path.exists():
            logger.warning("SHACL shapes file not found: %s", path)
            return None
        try:
            shapes = Graph().parse(path, format="turtle")
        except Exception as e:
            logger.warning("Could not parse SHACL shapes %s: %s", path, e)
            return None
        logger.info("Loaded %d SHACL shape triples from %s", len(shapes), path)
        return shapes

    def validate(self, graph: Graph) -> ValidationResult:
        """
        Validate an RDF graph.

        Args:
            graph: RDF graph to validate

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        if len(graph) == 0:
            result.add_error("Graph is empty")

        if str(CAT) not in {str(ns) for _, ns in graph.namespaces()}:
            result.add_warning("cat namespace not bound")

        for rdf_type in set(graph.objects(None, RDF.type)):
            if (
                isinstance(rdf_type, URIRef)
                and rdf_type.startswith(str(CAT))
                and rdf_type not in CAT_CLASSES
            ):
                result.add_warning(f"Unknown cat class: {rdf_type}")

        self._check_literals(graph, result)

        if self.require_iris:
            bnodes = {t for s, _, o in graph for t in (s, o) if isinstance(t, BNode)}
            if bnodes:
                result.add_error(f"{len(bnodes)} blank nodes left after materialization")

        for issue in self.check_consistency(graph):
            result.add_warning(issue)

        if self.shacl_graph is not None:
            self._check_shacl(graph, result)

        result.info["triple_count"] = len(graph)
        result.info["subject_count"] = len(set(graph.subjects()))

        logger.info("Validation complete: %s", result.summary())
        return result

    def _check_literals(self, graph: Graph, result: ValidationResult) -> None:
        for s, p, o in graph:
            if not isinstance(o, Literal):
                continue
            if o.ill_typed:
                result.add_error(f"Ill-typed literal {str(o)!r} ({o.datatype}) for {p} on {s}")
            elif not str(o):
                result.add_warning(f"Empty literal for {p} on {s}")

    def _check_shacl(self, graph: Graph, result: ValidationResult) -> None:
        logger.debug("Running SHACL validation")
        try:
            conforms, issues = run_shacl(graph, self.shacl_graph)
        except Exception as e:
            logger.error("SHACL validation failed with exception: %s", e)
            result.add_warning(f"SHACL validation could not be completed: {e}")
            return

        violations = [i for i in issues if i.severity == SH.Violation]
        warnings = [i for i in issues if i.severity == SH.Warning]
        for issue in violations:
            result.add_error(issue.describe())
        for issue in warnings:
            result.add_warning(issue.describe())

        result.info["shacl_conforms"] = conforms
        result.info["shacl_violations"] = len(violations)
        result.info["shacl_warnings"] = len(warnings)

        if not conforms:
            logger.warning(
                "SHACL validation: %d violations, %d warnings", len(violations), len(warnings)
            )

    def check_consistency(self, graph: Graph) -> list[str]:
        """
        Check that the records of the graph carry their required properties.

        Returns:
            One message per missing property, in REQUIRED_PROPERTIES order
        """
        issues = []
        for rule in REQUIRED_PROPERTIES:
            for subject in graph.subjects(RDF.type, rule.rdf_type):
                if graph.value(subject, rule.predicate) is None:
                    issues.append(f"{_local_name(rule.rdf_type)} {subject} has no {rule.label}")
        return issues


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_graph(graph: Graph) -> ValidationResult:
    """Quick function to validate a graph."""
    return TripleValidator().validate(graph)
