"""Records and results produced while checking one model file.

All of them are derived from one file's text and live only as long as the
run that produced them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from aecqa.grammar import UNSET


class ElementRecord(BaseModel):
    """One entity record as recognised by a scanner.

    Attributes the scanning pattern does not capture read as ``"$"``, the
    same as an attribute the file leaves unset.
    """

    entity_id: int | None = None
    """File-local record number (``#12``), when the pattern anchors on it."""

    global_id: str
    ifc_type: str = ""
    """Declared type name without the ``IFC`` prefix, upper-cased."""

    name: str = UNSET
    description: str = UNSET
    object_type: str = UNSET
    predefined_type: str = UNSET


class PartialResult(BaseModel):
    """The judgment of one entity occurrence by one rule."""

    global_id: str
    name: str = ""
    """Human-readable label, possibly decorated with type or predefined type."""

    passed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "globalId": self.global_id,
            "name": self.name,
            "passed": self.passed,
        }


class RuleResult(BaseModel):
    """Outcome of one rule over one file."""

    rule_name: str
    passed: bool = False
    results: list[PartialResult] = Field(default_factory=list)
    """Per-entity judgments in scan order."""

    error: str = ""
    """Set when the rule's processing raised; the rule then counts as failed."""

    @property
    def failures(self) -> list[PartialResult]:
        return [r for r in self.results if not r.passed]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "ruleName": self.rule_name,
            "passed": self.passed,
            "results": [r.to_dict() for r in self.results],
        }
        if self.error:
            data["error"] = self.error
        return data
