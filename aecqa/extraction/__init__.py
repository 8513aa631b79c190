"""Scanners over STEP model text: entity extractors and relationship maps."""

from aecqa.extraction.entities import (
    extract_attributes,
    extract_building_storeys,
    extract_element_names,
    extract_predefined_types,
    extract_proxies,
    extract_space_names,
    extract_type_names,
)
from aecqa.extraction.materials import element_registry, material_map
from aecqa.extraction.relationships import (
    aggregation_map,
    containment_map,
    storey_ids,
    valid_containers,
)
from aecqa.extraction.scan import merge_by_global_id, scan

__all__ = [
    "aggregation_map",
    "containment_map",
    "element_registry",
    "extract_attributes",
    "extract_building_storeys",
    "extract_element_names",
    "extract_predefined_types",
    "extract_proxies",
    "extract_space_names",
    "extract_type_names",
    "material_map",
    "merge_by_global_id",
    "scan",
    "storey_ids",
    "valid_containers",
]
