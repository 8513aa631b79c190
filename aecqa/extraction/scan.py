"""Scan sessions over model text, STEP token helpers and the two-pass merge."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from aecqa.grammar import NOT_DEFINED, REFERENCES, UNSET
from aecqa.models.results import ElementRecord, PartialResult

# Attribute values that carry no information for naming rules
_PLACEHOLDERS = frozenset({UNSET, "-", NOT_DEFINED})


def scan(pattern: re.Pattern[str], text: str) -> Iterator[re.Match[str]]:
    """Yield the non-overlapping matches of *pattern* in *text*.

    Each call opens its own scan from offset 0, so a pattern object can be
    shared between rules, files and threads.
    """
    yield from pattern.finditer(text)


def unquote(token: str | None) -> str:
    """Turn a raw STEP attribute token into its value.

    ``'Wall ''A'''`` becomes ``Wall 'A'``; a missing token or ``$`` becomes ``$``.
    """
    if token is None:
        return UNSET
    token = token.strip()
    if len(token) >= 2 and token[0] == "'" and token[-1] == "'":
        return token[1:-1].replace("''", "'")
    return token or UNSET


def is_blank(value: str | None) -> bool:
    """True for a missing, unset (``$``) or whitespace-only value."""
    return value is None or value == UNSET or not value.strip()


def is_meaningful(value: str | None) -> bool:
    """True when a name, description or type value actually says something."""
    if is_blank(value):
        return False
    return value.strip().upper() not in _PLACEHOLDERS


def references(id_list: str) -> list[int]:
    """Entity ids of a ``#1,#2,#3`` list, in order."""
    return [int(ref) for ref in REFERENCES.findall(id_list)]


def to_record(match: re.Match[str]) -> ElementRecord:
    """Normalise a scanner match into an :class:`ElementRecord`."""
    groups = match.groupdict()
    entity_id = groups.get("entity_id")
    return ElementRecord(
        entity_id=int(entity_id) if entity_id else None,
        global_id=groups["global_id"],
        ifc_type=(groups.get("ifc_type") or "").upper(),
        name=unquote(groups.get("name")),
        description=unquote(groups.get("description")),
        object_type=unquote(groups.get("object_type")),
        predefined_type=groups.get("predefined_type") or UNSET,
    )


def records(pattern: re.Pattern[str], text: str) -> Iterator[ElementRecord]:
    """Scan *text* and yield one record per match, in document order."""
    for match in scan(pattern, text):
        yield to_record(match)


def merge_by_global_id(
    primary: Iterable[PartialResult],
    supplementary: Iterable[PartialResult],
) -> list[PartialResult]:
    """Keep every primary result, then append supplementary results for unseen GlobalIds.

    The first judgment seen for a GlobalId wins.
    """
    merged = list(primary)
    seen = {r.global_id for r in merged}
    for result in supplementary:
        if result.global_id in seen:
            continue
        seen.add(result.global_id)
        merged.append(result)
    return merged
