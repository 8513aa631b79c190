"""RuleRunner — executes rules from a rule table over one file's text.

Usage::

    from aecqa.validation import RuleRunner

    runner = RuleRunner()
    result = runner.run_rule(text, "object-name")
    results = runner.run_all(text)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from aecqa.config import DEFAULT_MAX_WORKERS
from aecqa.models.results import RuleResult
from aecqa.validation.rules import DEFAULT_RULES, Rule, RuleTable

logger = logging.getLogger(__name__)


class RuleRunner:
    """Run rules independently over immutable model text.

    Parameters
    ----------
    rules:
        Rule table to draw from.  Defaults to :data:`DEFAULT_RULES`.
    max_workers:
        Values above 1 evaluate the rules of :meth:`run_all` on a thread
        pool.  Results keep table order either way.
    """

    def __init__(
        self,
        rules: RuleTable | None = None,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.rules = rules if rules is not None else DEFAULT_RULES
        self.max_workers = max(1, max_workers)

    def run(self, rule: Rule, text: str) -> RuleResult:
        """Evaluate one rule; a failure inside the rule fails only that rule."""
        try:
            partials = rule.evaluate(text)
            partials, passed = rule.check(partials)
        except Exception as exc:
            logger.warning("Rule %s failed", rule.name, exc_info=True)
            return RuleResult(rule_name=rule.name, passed=False, error=str(exc) or type(exc).__name__)

        logger.debug(
            "Rule %s: %d result(s), passed=%s", rule.name, len(partials), passed
        )
        return RuleResult(rule_name=rule.name, passed=passed, results=partials)

    def run_rule(self, text: str, rule_name: str) -> RuleResult:
        """Evaluate the rule called *rule_name*.

        Raises
        ------
        UnknownRuleError
            If the table has no such rule.
        """
        return self.run(self.rules.get(rule_name), text)

    def run_all(self, text: str) -> list[RuleResult]:
        """Evaluate every rule of the table, in table order."""
        if self.max_workers == 1 or len(self.rules) < 2:
            return [self.run(rule, text) for rule in self.rules]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(lambda rule: self.run(rule, text), self.rules))


def run_rule(text: str, rule_name: str, rules: RuleTable | None = None) -> RuleResult:
    """Evaluate a single rule over *text*."""
    return RuleRunner(rules).run_rule(text, rule_name)


def run_all(text: str, rules: RuleTable | None = None) -> list[RuleResult]:
    """Evaluate every rule of *rules* (default table) over *text*."""
    return RuleRunner(rules).run_all(text)
