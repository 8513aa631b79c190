"""ResultStore — SQLite-backed storage of validation reports, keyed by file id.

Uses stdlib sqlite3 only.  Saving a report for a file id replaces the
previous one; no history is kept.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from aecqa.config import DEFAULT_RESULTS_DB
from aecqa.models.results import PartialResult, RuleResult
from aecqa.validation.report import ValidationReport

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS reports (
    file_id TEXT PRIMARY KEY,
    checked_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS rule_results (
    file_id TEXT NOT NULL REFERENCES reports(file_id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    rule_name TEXT NOT NULL,
    passed INTEGER NOT NULL,
    error TEXT NOT NULL DEFAULT '',
    results TEXT NOT NULL DEFAULT '[]',
    PRIMARY KEY (file_id, position)
);
"""


class ResultStore:
    """Report storage for the downstream reporting stage.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Use ``':memory:'`` for an
        ephemeral store.
    """

    def __init__(self, db_path: str | Path = DEFAULT_RESULTS_DB) -> None:
        self._db_path = str(db_path)
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Lazy-initialise and return the database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.executescript(_SCHEMA_SQL)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save(self, report: ValidationReport) -> None:
        """Store *report*, replacing any earlier report for the same file."""
        with self.conn:
            self.conn.execute("DELETE FROM reports WHERE file_id = ?", (report.file_id,))
            self.conn.execute(
                "INSERT INTO reports (file_id, checked_at) VALUES (?, ?)",
                (report.file_id, report.checked_at.isoformat()),
            )
            self.conn.executemany(
                "INSERT INTO rule_results "
                "(file_id, position, rule_name, passed, error, results) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                [
                    (
                        report.file_id,
                        position,
                        result.rule_name,
                        int(result.passed),
                        result.error,
                        json.dumps([r.model_dump() for r in result.results]),
                    )
                    for position, result in enumerate(report.results)
                ],
            )
        logger.debug("Stored %d rule result(s) for %s", len(report.results), report.file_id)

    def get(self, file_id: str) -> ValidationReport | None:
        row = self.conn.execute(
            "SELECT checked_at FROM reports WHERE file_id = ?", (file_id,)
        ).fetchone()
        if row is None:
            return None

        rows = self.conn.execute(
            "SELECT rule_name, passed, error, results FROM rule_results "
            "WHERE file_id = ? ORDER BY position",
            (file_id,),
        ).fetchall()
        results = [
            RuleResult(
                rule_name=r["rule_name"],
                passed=bool(r["passed"]),
                error=r["error"],
                results=[PartialResult(**p) for p in json.loads(r["results"])],
            )
            for r in rows
        ]
        return ValidationReport(
            file_id=file_id,
            results=results,
            checked_at=datetime.fromisoformat(row["checked_at"]),
        )

    def list_files(self) -> list[str]:
        rows = self.conn.execute("SELECT file_id FROM reports ORDER BY file_id").fetchall()
        return [r["file_id"] for r in rows]

    def delete(self, file_id: str) -> bool:
        """Remove the report for *file_id*.  Returns *True* if one existed."""
        with self.conn:
            cursor = self.conn.execute("DELETE FROM reports WHERE file_id = ?", (file_id,))
        return cursor.rowcount > 0

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM reports").fetchone()[0]
