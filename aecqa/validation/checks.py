"""Composite checks joining element scans with relationship maps."""

from __future__ import annotations

import re
from typing import Iterable

from aecqa import grammar
from aecqa.extraction.entities import extract_element_names
from aecqa.extraction.materials import element_registry, material_map
from aecqa.extraction.relationships import containment_map, valid_containers
from aecqa.extraction.scan import is_meaningful, records
from aecqa.models.results import ElementRecord, PartialResult


def _judge_containment(
    elements: Iterable[ElementRecord],
    contained: dict[int, int],
    valid: set[int],
) -> list[PartialResult]:
    results: list[PartialResult] = []
    for record in elements:
        container = contained.get(record.entity_id) if record.entity_id is not None else None
        results.append(PartialResult(
            global_id=record.global_id,
            name=record.name,
            passed=container is not None and container in valid,
        ))
    return results


def check_building_relation(
    text: str, pattern: re.Pattern[str] | None = None
) -> list[PartialResult]:
    """Every building element must be contained in a storey (or a group under one).

    Used by the project, site and building relation rules.  The element scan
    always uses :data:`aecqa.grammar.ELEMENT_RECORD`; *pattern* is accepted
    for signature compatibility with the rule table and ignored.
    """
    return _judge_containment(
        records(grammar.ELEMENT_RECORD, text),
        containment_map(text),
        valid_containers(text),
    )


def check_storey_relation(
    text: str, pattern: re.Pattern[str] = grammar.ELEMENT_RECORD
) -> list[PartialResult]:
    """Same containment judgment as :func:`check_building_relation`, over *pattern*.

    *pattern* must capture ``entity_id``, ``global_id`` and ``name``; an
    occurrence without an entity id cannot be placed and fails.
    """
    return _judge_containment(
        records(pattern, text),
        containment_map(text),
        valid_containers(text),
    )


def _describe(record: ElementRecord) -> PartialResult:
    return PartialResult(
        global_id=record.global_id,
        name=f"{record.name} ({record.description})",
        passed=is_meaningful(record.description),
    )


def check_descriptions(
    text: str,
    pattern: re.Pattern[str],
    all_elements: list[PartialResult],
    supplementary: re.Pattern[str] | None = None,
) -> list[PartialResult]:
    """Judge the Description of every element listed in *all_elements*.

    Elements without a description record matched by *pattern* (or by
    *supplementary*) fail.
    """
    described: dict[str, PartialResult] = {}
    # Last record wins within *pattern*; *supplementary* only fills gaps
    for record in records(pattern, text):
        described[record.global_id] = _describe(record)
    if supplementary is not None:
        for record in records(supplementary, text):
            if record.global_id not in described:
                described[record.global_id] = _describe(record)

    results: list[PartialResult] = []
    for element in all_elements:
        found = described.get(element.global_id)
        if found is not None:
            results.append(found)
        else:
            results.append(PartialResult(
                global_id=element.global_id, name=element.name, passed=False
            ))
    return results


def check_element_descriptions(
    text: str, pattern: re.Pattern[str] = grammar.ELEMENT_DESCRIPTION
) -> list[PartialResult]:
    """Descriptions of every element found by the name extractor."""
    return check_descriptions(
        text,
        pattern,
        extract_element_names(text),
        supplementary=grammar.ELEMENT_DESCRIPTION_LOOSE,
    )


def check_material_assignments(
    text: str, pattern: re.Pattern[str] | None = None
) -> list[PartialResult]:
    """Every building element must have an associated material.

    The element list comes from the element registry, not from *pattern*.
    """
    materials = material_map(text)
    return [
        PartialResult(
            global_id=record.global_id,
            name=record.name,
            passed=entity_id in materials,
        )
        for entity_id, record in element_registry(text).items()
    ]
