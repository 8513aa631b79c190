"""Rule engine: composite checks, rule table, runner and reports."""

from aecqa.validation.report import ValidationReport
from aecqa.validation.rules import (
    DEFAULT_RULES,
    AggregationPolicy,
    Rule,
    RuleTable,
    UnknownRuleError,
)
from aecqa.validation.runner import RuleRunner, run_all, run_rule

__all__ = [
    "DEFAULT_RULES",
    "AggregationPolicy",
    "Rule",
    "RuleRunner",
    "RuleTable",
    "UnknownRuleError",
    "ValidationReport",
    "run_all",
    "run_rule",
]
