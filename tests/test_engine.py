"""Tests for ingestion, the results store, reports and the QualityEngine."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from aecqa import QualityEngine, ResultStore
from aecqa.ingest import IngestionError, load_model_text, screen_file
from aecqa.models.results import PartialResult, RuleResult
from aecqa.validation.report import ValidationReport
from aecqa.validation.rules import DEFAULT_RULES, UnknownRuleError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

MODEL = """\
ISO-10303-21;
DATA;
#1=IFCPROJECT('proj',#2,'Demo Project',$,$,$,$,(#3),#4);
#14=IFCBUILDINGSTOREY('lvl1',#2,'Level 1',$,$,#15,$,$,.ELEMENT.,0.);
#40=IFCWALL('wall',#2,'Wall 1','Exterior','Basic',#41,#42,$,.SOLIDWALL.);
#90=IFCBUILDINGELEMENTPROXY('proxy',#2,'Thing',$,$,#91,#92,$,$);
#70=IFCRELCONTAINEDINSPATIALSTRUCTURE('rc',#2,$,$,(#40),#14);
ENDSEC;
END-ISO-10303-21;
"""


def _write_model(tmp_path: Path, name: str = "model.ifc", text: str = MODEL) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _report(file_id: str = "model.ifc") -> ValidationReport:
    return ValidationReport(
        file_id=file_id,
        results=[
            RuleResult(
                rule_name="object-name",
                passed=True,
                results=[PartialResult(global_id="wall", name="Wall 1", passed=True)],
            ),
            RuleResult(
                rule_name="object-count",
                passed=False,
                results=[
                    PartialResult(global_id="wall", name="Wall 1 (WALL)", passed=True),
                    PartialResult(global_id="proxy", name="Thing (BUILDINGELEMENTPROXY)", passed=False),
                ],
            ),
            RuleResult(rule_name="broken", passed=False, error="boom"),
        ],
    )


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class TestIngestion:
    def test_load_model_text(self, tmp_path: Path) -> None:
        assert load_model_text(_write_model(tmp_path)) == MODEL

    def test_uppercase_extension_accepted(self, tmp_path: Path) -> None:
        assert screen_file(_write_model(tmp_path, "MODEL.IFC")).name == "MODEL.IFC"

    def test_wrong_extension(self, tmp_path: Path) -> None:
        path = _write_model(tmp_path, "model.txt")
        with pytest.raises(IngestionError) as excinfo:
            load_model_text(path)
        assert excinfo.value.code == "file-invalid-type"
        assert excinfo.value.file == "model.txt"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(IngestionError) as excinfo:
            screen_file(tmp_path / "absent.ifc")
        assert excinfo.value.code == "file-not-found"

    def test_too_large(self, tmp_path: Path) -> None:
        with pytest.raises(IngestionError) as excinfo:
            load_model_text(_write_model(tmp_path), max_size=10)
        assert excinfo.value.code == "file-too-large"

    def test_ingestion_error_is_value_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            screen_file(tmp_path / "absent.ifc")

    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.ifc"
        path.write_bytes(b"#1=IFCPROJECT('p',#2,'Caf\xe9',$);")
        text = load_model_text(path)
        assert text.startswith("#1=IFCPROJECT('p',#2,'Caf")
        assert "\ufffd" in text


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class TestValidationReport:
    def test_passed_and_failures(self) -> None:
        report = _report()
        assert report.passed is False
        assert [r.rule_name for r in report.failed_rules()] == ["object-count", "broken"]
        assert report.get("object-name").passed is True
        assert report.get("missing") is None

    def test_empty_report_passes(self) -> None:
        assert ValidationReport(file_id="x").passed is True

    def test_to_dict(self) -> None:
        data = _report().to_dict()
        assert data["fileId"] == "model.ifc"
        assert data["passed"] is False
        assert data["results"][1]["results"][1] == {
            "globalId": "proxy",
            "name": "Thing (BUILDINGELEMENTPROXY)",
            "passed": False,
        }

    def test_to_json(self) -> None:
        data = json.loads(_report().to_json())
        assert [r["ruleName"] for r in data["results"]] == ["object-name", "object-count", "broken"]

    def test_to_markdown(self) -> None:
        md = _report().to_markdown()
        assert "# Model Check — model.ifc" in md
        assert "**Status:** FAILED" in md
        assert "| FAIL | object-count | 2 | 1 |" in md
        assert "`proxy` Thing (BUILDINGELEMENTPROXY)" in md
        assert "Rule error: boom" in md


# ---------------------------------------------------------------------------
# Result store
# ---------------------------------------------------------------------------

class TestResultStore:
    def test_save_and_get(self) -> None:
        store = ResultStore()
        report = _report()
        store.save(report)
        loaded = store.get("model.ifc")
        assert loaded is not None
        assert loaded.results == report.results
        assert loaded.checked_at == report.checked_at

    def test_get_missing(self) -> None:
        assert ResultStore().get("nothing.ifc") is None

    def test_save_replaces(self) -> None:
        store = ResultStore()
        store.save(_report())
        store.save(ValidationReport(file_id="model.ifc"))
        assert store.count() == 1
        assert store.get("model.ifc").results == []

    def test_list_and_delete(self) -> None:
        store = ResultStore()
        store.save(_report("b.ifc"))
        store.save(_report("a.ifc"))
        assert store.list_files() == ["a.ifc", "b.ifc"]
        assert store.delete("a.ifc") is True
        assert store.delete("a.ifc") is False
        assert store.list_files() == ["b.ifc"]

    def test_file_backed_store(self, tmp_path: Path) -> None:
        db_path = tmp_path / "results.db"
        store = ResultStore(db_path)
        store.save(_report())
        store.close()

        reopened = ResultStore(db_path)
        assert reopened.list_files() == ["model.ifc"]
        assert reopened.get("model.ifc").results[2].error == "boom"
        reopened.close()


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TestQualityEngine:
    def test_check_text(self) -> None:
        report = QualityEngine().check_text(MODEL, "model.ifc")
        assert report.file_id == "model.ifc"
        assert [r.rule_name for r in report.results] == DEFAULT_RULES.names()
        assert report.get("project-name").passed is True
        assert report.get("story-relation").passed is True
        assert report.get("object-count").passed is False
        assert report.passed is False

    def test_check_file_saves_to_store(self, tmp_path: Path) -> None:
        store = ResultStore()
        engine = QualityEngine(store=store)
        report = engine.check_file(_write_model(tmp_path, "tower.ifc"))
        assert report.file_id == "tower.ifc"
        assert store.get("tower.ifc").results == report.results

    def test_check_files(self, tmp_path: Path) -> None:
        paths = [_write_model(tmp_path, "a.ifc"), _write_model(tmp_path, "b.ifc", "")]
        reports = QualityEngine().check_files(paths)
        assert [r.file_id for r in reports] == ["a.ifc", "b.ifc"]
        assert reports[1].get("project-name").passed is False
        assert reports[1].get("object-name").passed is True

    def test_rejected_file(self, tmp_path: Path) -> None:
        store = ResultStore()
        with pytest.raises(IngestionError):
            QualityEngine(store=store).check_file(_write_model(tmp_path, "model.dwg"))
        assert store.count() == 0

    def test_reduced_rule_table(self) -> None:
        engine = QualityEngine(DEFAULT_RULES.subset(["project-name"]), max_workers=2)
        report = engine.check_text(MODEL, "model.ifc")
        assert [r.rule_name for r in report.results] == ["project-name"]
        assert report.passed is True

    def test_run_rule(self) -> None:
        engine = QualityEngine()
        result = engine.run_rule(MODEL, "predefined-type")
        assert [(r.global_id, r.name, r.passed) for r in result.results] == [
            ("wall", "Wall 1 (SOLIDWALL)", True)
        ]
        with pytest.raises(UnknownRuleError):
            engine.run_rule(MODEL, "nope")
