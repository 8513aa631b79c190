"""Material association lookups."""

from __future__ import annotations

import logging

from aecqa import grammar
from aecqa.extraction.scan import records, references, scan
from aecqa.models.results import ElementRecord

logger = logging.getLogger(__name__)


def material_map(text: str) -> dict[int, int]:
    """Map each element id to its associated material id (last association wins)."""
    materials: dict[int, int] = {}
    for match in scan(grammar.REL_MATERIAL, text):
        material = int(match.group("relating"))
        for element_id in references(match.group("related")):
            materials[element_id] = material
    logger.debug("Material map: %d element(s)", len(materials))
    return materials


def element_registry(text: str) -> dict[int, ElementRecord]:
    """Every building element record keyed by entity id, in document order."""
    registry: dict[int, ElementRecord] = {}
    for record in records(grammar.ELEMENT_RECORD, text):
        registry[record.entity_id] = record
    return registry
