"""Result and record models shared by the extractors and the rule engine."""

from aecqa.models.results import ElementRecord, PartialResult, RuleResult

__all__ = ["ElementRecord", "PartialResult", "RuleResult"]
