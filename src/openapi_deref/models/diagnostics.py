"""Diagnostic models emitted during schema resolution.

Resolution never fails; every anomaly is absorbed into a best-effort
fallback value and recorded here so callers that need strict
correctness can inspect what happened.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DiagnosticKind(str, Enum):
    """Kinds of non-fatal conditions reported by the resolver."""

    UNRESOLVED_REFERENCE = "unresolved_reference"
    CYCLE_AVOIDED = "cycle_avoided"
    NO_TYPE_MATCH = "no_type_match"


class Diagnostic(BaseModel):
    """A single condition observed while resolving a schema.

    :param kind: Condition category
    :type kind: DiagnosticKind
    :param message: Human-readable description
    :type message: str
    :param name: Registry name involved, for reference conditions
    :type name: Optional[str]
    :param ref: Raw ``$ref`` string, for reference conditions
    :type ref: Optional[str]
    """

    kind: DiagnosticKind
    message: str
    name: Optional[str] = Field(None, description="Registry name involved")
    ref: Optional[str] = Field(None, description="Raw $ref string")


class ResolutionReport(BaseModel):
    """Outcome of a full document resolution pass.

    :param paths: Number of top-level path items visited
    :type paths: int
    :param schemas_resolved: Number of schema leaves replaced in the
        operation tree
    :type schemas_resolved: int
    :param diagnostics: Conditions reported during the pass, in order
    :type diagnostics: List[Diagnostic]
    """

    paths: int = 0
    schemas_resolved: int = 0
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        """Whether every reference in the tree was resolved."""
        return not any(
            d.kind == DiagnosticKind.UNRESOLVED_REFERENCE for d in self.diagnostics
        )

    def count_by_kind(self) -> Dict[str, int]:
        """Count diagnostics per kind.

        :return: Mapping of kind value to occurrence count
        :rtype: Dict[str, int]
        """
        counts: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            key = diagnostic.kind.value
            counts[key] = counts.get(key, 0) + 1
        return counts

    def unresolved_names(self) -> List[str]:
        """Return the distinct registry names that could not be resolved."""
        names: List[str] = []
        for diagnostic in self.diagnostics:
            if (
                diagnostic.kind == DiagnosticKind.UNRESOLVED_REFERENCE
                and diagnostic.name
                and diagnostic.name not in names
            ):
                names.append(diagnostic.name)
        return names
