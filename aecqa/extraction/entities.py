"""Primitive extractors: one entity class per scanner, judged per occurrence.

Every extractor takes the raw model text and a compiled pattern and returns
:class:`PartialResult` objects in scan order.  Malformed records simply do
not match; nothing here raises on bad input.

The element extractors run a primary scan with the rule's own pattern and a
supplementary scan with a looser pattern from :mod:`aecqa.grammar`, merged by
GlobalId so that records the primary pattern cannot read (unset names,
escaped quotes, unset owner history) are still judged.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from aecqa import grammar
from aecqa.extraction.scan import (
    is_blank,
    is_meaningful,
    merge_by_global_id,
    records,
)
from aecqa.models.results import ElementRecord, PartialResult

logger = logging.getLogger(__name__)

Judge = Callable[[ElementRecord], PartialResult]


def _two_pass(
    text: str,
    pattern: re.Pattern[str],
    supplementary: re.Pattern[str],
    judge: Judge,
) -> list[PartialResult]:
    primary = [judge(r) for r in records(pattern, text)]
    merged = merge_by_global_id(primary, (judge(r) for r in records(supplementary, text)))
    if len(merged) > len(primary):
        logger.debug(
            "Supplementary scan recovered %d record(s) missed by %s",
            len(merged) - len(primary),
            pattern.pattern[:40],
        )
    return merged


def extract_attributes(text: str, pattern: re.Pattern[str]) -> list[PartialResult]:
    """Generic (GlobalId, Name) extractor for project, site and building."""
    return [
        PartialResult(global_id=r.global_id, name=r.name, passed=is_meaningful(r.name))
        for r in records(pattern, text)
    ]


def extract_building_storeys(
    text: str, pattern: re.Pattern[str] = grammar.STOREY
) -> list[PartialResult]:
    """Every storey record passes; the rule only asks whether storeys exist."""
    return [
        PartialResult(global_id=r.global_id, name=r.name, passed=True)
        for r in records(pattern, text)
    ]


def _judge_space(record: ElementRecord) -> PartialResult:
    return PartialResult(
        global_id=record.global_id,
        name=record.name,
        passed=not is_blank(record.name),
    )


def extract_space_names(
    text: str, pattern: re.Pattern[str] = grammar.SPACE
) -> list[PartialResult]:
    """Spaces pass when they carry a non-blank name."""
    return _two_pass(text, pattern, grammar.SPACE_LOOSE, _judge_space)


def _judge_name(record: ElementRecord) -> PartialResult:
    passed = is_meaningful(record.name)
    return PartialResult(
        global_id=record.global_id,
        name=record.name if passed else "Unnamed",
        passed=passed,
    )


def extract_element_names(
    text: str, pattern: re.Pattern[str] = grammar.ELEMENT_NAME
) -> list[PartialResult]:
    """Building elements pass when their Name is set and not blank."""
    return _two_pass(text, pattern, grammar.ELEMENT_NAME_LOOSE, _judge_name)


def _judge_type_name(record: ElementRecord) -> PartialResult:
    return PartialResult(
        global_id=record.global_id,
        name=f"{record.name} ({record.object_type})",
        passed=is_meaningful(record.object_type),
    )


def extract_type_names(
    text: str, pattern: re.Pattern[str] = grammar.ELEMENT_TYPE_NAME
) -> list[PartialResult]:
    """Building elements pass when their ObjectType designator is set."""
    return _two_pass(text, pattern, grammar.ELEMENT_TYPE_NAME_LOOSE, _judge_type_name)


def _judge_predefined_type(record: ElementRecord) -> PartialResult:
    return PartialResult(
        global_id=record.global_id,
        name=f"{record.name} ({record.predefined_type})",
        passed=record.predefined_type.upper() != grammar.NOT_DEFINED,
    )


def extract_predefined_types(
    text: str, pattern: re.Pattern[str] = grammar.PREDEFINED_TYPE
) -> list[PartialResult]:
    """Only an explicit ``.NOTDEFINED.`` fails; any other enumeration is accepted."""
    return _two_pass(
        text, pattern, grammar.PREDEFINED_TYPE_LOOSE, _judge_predefined_type
    )


def _judge_proxy(record: ElementRecord) -> PartialResult:
    name = record.name if not is_blank(record.name) else f"Unnamed {record.ifc_type}"
    return PartialResult(
        global_id=record.global_id,
        name=f"{name} ({record.ifc_type})",
        passed=record.ifc_type != grammar.PROXY_TYPE,
    )


def extract_proxies(
    text: str, pattern: re.Pattern[str] = grammar.OBJECT_COUNT
) -> list[PartialResult]:
    """Count building elements; every proxy element fails."""
    return _two_pass(text, pattern, grammar.OBJECT_COUNT_LOOSE, _judge_proxy)
