"""Data-quality checks for IFC building-model files."""

__version__ = "0.1.0"

from aecqa.engine import QualityEngine
from aecqa.ingest import IngestionError, load_model_text
from aecqa.models.results import PartialResult, RuleResult
from aecqa.store import ResultStore
from aecqa.validation.report import ValidationReport
from aecqa.validation.rules import DEFAULT_RULES, Rule, RuleTable, UnknownRuleError
from aecqa.validation.runner import RuleRunner, run_all, run_rule

__all__ = [
    "__version__",
    "DEFAULT_RULES",
    "IngestionError",
    "PartialResult",
    "QualityEngine",
    "ResultStore",
    "Rule",
    "RuleResult",
    "RuleRunner",
    "RuleTable",
    "UnknownRuleError",
    "ValidationReport",
    "load_model_text",
    "run_all",
    "run_rule",
]
