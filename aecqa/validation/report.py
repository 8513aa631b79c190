"""ValidationReport model and Markdown report generation."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from aecqa.models.results import RuleResult


class ValidationReport(BaseModel):
    """All rule results for one model file."""

    file_id: str
    results: list[RuleResult] = Field(default_factory=list)
    """Rule results in rule-table order."""

    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def failed_rules(self) -> list[RuleResult]:
        return [r for r in self.results if not r.passed]

    def get(self, rule_name: str) -> RuleResult | None:
        for result in self.results:
            if result.rule_name == rule_name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileId": self.file_id,
            "passed": self.passed,
            "checkedAt": self.checked_at.isoformat(),
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_markdown(self) -> str:
        """Render the report as a Markdown document."""
        lines: list[str] = []

        lines.append(f"# Model Check — {self.file_id}")
        lines.append("")
        lines.append(f"**Status:** {'PASSED' if self.passed else 'FAILED'}")
        lines.append(f"**Checked:** {self.checked_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")

        passes = sum(1 for r in self.results if r.passed)
        lines.append(f"**Rules:** {passes} passed, {len(self.results) - passes} failed")
        lines.append("")

        if self.results:
            lines.append("## Rule Results")
            lines.append("")
            lines.append("| Status | Rule | Entities | Failing |")
            lines.append("|--------|------|----------|---------|")
            for r in self.results:
                icon = "PASS" if r.passed else "FAIL"
                lines.append(
                    f"| {icon} | {r.rule_name} | {len(r.results)} | {len(r.failures)} |"
                )
            lines.append("")

        failing = [r for r in self.results if r.failures or r.error]
        if failing:
            lines.append("## Failing Entities")
            lines.append("")
            for r in failing:
                lines.append(f"### {r.rule_name}")
                lines.append("")
                if r.error:
                    lines.append(f"- Rule error: {r.error}")
                for entity in r.failures:
                    name = entity.name.replace("|", "\\|")
                    lines.append(f"- `{entity.global_id}` {name}")
                lines.append("")

        return "\n".join(lines)
