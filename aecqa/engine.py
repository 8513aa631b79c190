"""QualityEngine — main entry point for model data-quality checks.

Usage::

    from aecqa import QualityEngine

    engine = QualityEngine()
    report = engine.check_file("building.ifc")
    report.passed
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from aecqa.config import DEFAULT_MAX_WORKERS
from aecqa.ingest import load_model_text
from aecqa.models.results import RuleResult
from aecqa.store import ResultStore
from aecqa.validation.report import ValidationReport
from aecqa.validation.rules import RuleTable
from aecqa.validation.runner import RuleRunner

logger = logging.getLogger(__name__)


class QualityEngine:
    """Check model files against a rule table and hand reports to a store.

    Parameters
    ----------
    rules:
        Rule table; defaults to the built-in rules.
    store:
        Optional :class:`ResultStore` every report is saved to.
    max_workers:
        Thread pool size for evaluating the rules of one file.
    """

    def __init__(
        self,
        rules: RuleTable | None = None,
        *,
        store: ResultStore | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.runner = RuleRunner(rules, max_workers=max_workers)
        self.store = store

    def check_text(self, text: str, file_id: str) -> ValidationReport:
        """Run every rule over *text* and return the report for *file_id*."""
        report = ValidationReport(file_id=file_id, results=self.runner.run_all(text))
        logger.info(
            "Checked %s: %d/%d rules passed",
            file_id,
            len(report.results) - len(report.failed_rules()),
            len(report.results),
        )
        if self.store is not None:
            self.store.save(report)
        return report

    def check_file(self, path: str | Path) -> ValidationReport:
        """Load a model file and check it; the file name is the file id.

        Raises
        ------
        IngestionError
            If the file is missing, not an ``.ifc`` file, or too large.
        """
        path = Path(path)
        return self.check_text(load_model_text(path), path.name)

    def check_files(self, paths: Iterable[str | Path]) -> list[ValidationReport]:
        return [self.check_file(p) for p in paths]

    def run_rule(self, text: str, rule_name: str) -> RuleResult:
        return self.runner.run_rule(text, rule_name)
