"""Rule model, aggregation policies and the default rule table.

A rule pairs a scanner pattern with a processing function (an extractor or
a composite check) and an aggregation policy that reduces the per-entity
results to one pass/fail.

Rules are intended for valid IFC physical files.  Files that are not well
formed or do not follow the schema make some rules find nothing, which the
policies then interpret: existence rules fail, universal rules pass.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from aecqa import grammar
from aecqa.extraction.entities import (
    extract_attributes,
    extract_building_storeys,
    extract_element_names,
    extract_predefined_types,
    extract_proxies,
    extract_space_names,
    extract_type_names,
)
from aecqa.models.results import PartialResult
from aecqa.validation.checks import (
    check_building_relation,
    check_element_descriptions,
    check_material_assignments,
    check_storey_relation,
)

Process = Callable[[str, re.Pattern], list[PartialResult]]


class UnknownRuleError(KeyError):
    """Raised when a rule name is not in the rule table."""


class AggregationPolicy(str, Enum):
    """How per-entity results reduce to the rule's pass/fail."""

    EXISTENCE = "existence"
    """Pass iff at least one result was produced."""

    UNIVERSAL = "universal"
    """Pass iff every result passed; an empty result list passes."""

    def aggregate(self, results: list[PartialResult]) -> bool:
        if self is AggregationPolicy.EXISTENCE:
            return len(results) > 0
        return all(r.passed for r in results)


class Rule(BaseModel):
    """A named data-quality rule."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    pattern: re.Pattern
    process: Process
    policy: AggregationPolicy = AggregationPolicy.UNIVERSAL
    description: str = ""

    def evaluate(self, text: str) -> list[PartialResult]:
        """Run the processing function over *text* with this rule's pattern."""
        return self.process(text, self.pattern)

    def check(self, results: list[PartialResult]) -> tuple[list[PartialResult], bool]:
        """Apply the aggregation policy; returns the results and the verdict."""
        return results, self.policy.aggregate(results)


class RuleTable:
    """Ordered, read-only collection of rules addressed by name."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._by_name: dict[str, Rule] = {}
        for rule in self._rules:
            if rule.name in self._by_name:
                raise ValueError(f"Duplicate rule name: {rule.name}")
            self._by_name[rule.name] = rule

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> list[str]:
        return [r.name for r in self._rules]

    def get(self, name: str) -> Rule:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownRuleError(name) from None

    def subset(self, names: Iterable[str]) -> RuleTable:
        """A new table with only *names*, kept in this table's order."""
        wanted = set(names)
        for name in wanted:
            self.get(name)
        return RuleTable(r for r in self._rules if r.name in wanted)


def _relation_rule(name: str, level: str) -> Rule:
    return Rule(
        name=name,
        pattern=grammar.ELEMENT_RECORD,
        process=check_building_relation,
        policy=AggregationPolicy.UNIVERSAL,
        description=f"Every building element is placed in a storey of the {level}.",
    )


DEFAULT_RULES = RuleTable([
    Rule(
        name="project-name",
        pattern=grammar.PROJECT,
        process=extract_attributes,
        policy=AggregationPolicy.EXISTENCE,
        description="The file declares a named IfcProject.",
    ),
    _relation_rule("project-relation", "project"),
    Rule(
        name="site-name",
        pattern=grammar.SITE,
        process=extract_attributes,
        policy=AggregationPolicy.EXISTENCE,
        description="The file declares a named IfcSite.",
    ),
    _relation_rule("site-relation", "site"),
    Rule(
        name="building-name",
        pattern=grammar.BUILDING,
        process=extract_attributes,
        policy=AggregationPolicy.EXISTENCE,
        description="The file declares a named IfcBuilding.",
    ),
    _relation_rule("building-relation", "building"),
    Rule(
        name="story-name",
        pattern=grammar.STOREY,
        process=extract_building_storeys,
        policy=AggregationPolicy.EXISTENCE,
        description="The file declares at least one IfcBuildingStorey.",
    ),
    Rule(
        name="story-relation",
        pattern=grammar.ELEMENT_RECORD,
        process=check_storey_relation,
        description="Every building element is contained in a storey.",
    ),
    Rule(
        name="space-name",
        pattern=grammar.SPACE,
        process=extract_space_names,
        description="Every IfcSpace has a name.",
    ),
    Rule(
        name="object-name",
        pattern=grammar.ELEMENT_NAME,
        process=extract_element_names,
        description="Every building element has a name.",
    ),
    Rule(
        name="object-description",
        pattern=grammar.ELEMENT_DESCRIPTION,
        process=check_element_descriptions,
        description="Every building element has a description.",
    ),
    Rule(
        name="type-name",
        pattern=grammar.ELEMENT_TYPE_NAME,
        process=extract_type_names,
        description="Every building element has an object type.",
    ),
    Rule(
        name="material-name",
        pattern=grammar.ELEMENT_RECORD,
        process=check_material_assignments,
        description="Every building element has a material.",
    ),
    Rule(
        name="predefined-type",
        pattern=grammar.PREDEFINED_TYPE,
        process=extract_predefined_types,
        description="No building element leaves its predefined type NOTDEFINED.",
    ),
    Rule(
        name="object-count",
        pattern=grammar.OBJECT_COUNT,
        process=extract_proxies,
        description="No building element is modelled as a proxy.",
    ),
])
