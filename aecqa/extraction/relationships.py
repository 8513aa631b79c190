"""Spatial relationship maps built from relationship records.

All builders are pure functions of the model text: missing relationship
records just give empty maps.
"""

from __future__ import annotations

import logging

from aecqa import grammar
from aecqa.extraction.scan import references, scan

logger = logging.getLogger(__name__)


def containment_map(text: str) -> dict[int, int]:
    """Map each contained element id to the id of its spatial container.

    A later IfcRelContainedInSpatialStructure for the same element replaces
    the earlier assignment.
    """
    contained: dict[int, int] = {}
    for match in scan(grammar.REL_CONTAINED, text):
        container = int(match.group("relating"))
        for element_id in references(match.group("related")):
            contained[element_id] = container
    logger.debug("Containment map: %d element(s)", len(contained))
    return contained


def aggregation_map(text: str) -> dict[int, list[int]]:
    """Map each aggregating (parent) id to its child ids, in record order."""
    children: dict[int, list[int]] = {}
    for match in scan(grammar.REL_AGGREGATES, text):
        bucket = children.setdefault(int(match.group("relating")), [])
        for child in references(match.group("related")):
            if child not in bucket:
                bucket.append(child)
    return children


def storey_ids(text: str) -> list[int]:
    """Entity ids of every IfcBuildingStorey record, in document order."""
    return [int(m.group("entity_id")) for m in scan(grammar.STOREY_REF, text)]


def valid_containers(text: str) -> set[int]:
    """Storey ids plus anything aggregated directly under a storey.

    The closure stops after one level of aggregation.
    """
    storeys = storey_ids(text)
    aggregates = aggregation_map(text)
    valid = set(storeys)
    for storey in storeys:
        valid.update(aggregates.get(storey, ()))
    return valid
