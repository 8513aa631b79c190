"""Entity type registry and the shared grammar fragments of the STEP scanners.

Every pattern that has to recognise "any building element" is composed from
:data:`ELEMENT_TYPES` here; no other module spells the type list out.

Two flavours of fragment exist.  *Strict* fragments describe the common,
well-formed shape of a record (``'GlobalId',#12,'Name'``).  *Loose* fragments
also accept the unset token ``$``, an unset owner history and strings with
doubled quotes, and are used by the supplementary scans that recover records
the strict patterns miss.
"""

from __future__ import annotations

import re
from typing import Iterable

# Building element types checked by the element rules (IFC entity name without prefix)
ELEMENT_TYPES: tuple[str, ...] = (
    "AIRTERMINAL",
    "ALARM",
    "BEAM",
    "CABLECARRIERFITTING",
    "CABLECARRIERSEGMENT",
    "COLUMN",
    "COVERING",
    "CURTAINWALL",
    "DAMPER",
    "DOOR",
    "DUCTFITTING",
    "DUCTSEGMENT",
    "DUCTSILENCER",
    "ELECTRICAPPLIANCE",
    "ELECTRICDISTRIBUTIONBOARD",
    "FAN",
    "FIRESUPPRESSIONTERMINAL",
    "FLOWMETER",
    "FLOWSEGMENT",
    "FOOTING",
    "JUNCTIONBOX",
    "LIGHTFIXTURE",
    "MEMBER",
    "OUTLET",
    "PILE",
    "PIPEFITTING",
    "PIPESEGMENT",
    "PUMP",
    "RAILING",
    "RAMPFLIGHT",
    "SLAB",
    "STAIRFLIGHT",
    "SWITCHINGDEVICE",
    "SYSTEMFURNITUREELEMENT",
    "TANK",
    "VALVE",
    "WALL",
    "WASTETERMINAL",
    "WINDOW",
    "WALLSTANDARDCASE",
)

# Generic element used when no specific type fits
PROXY_TYPE = "BUILDINGELEMENTPROXY"

# Unset attribute value in the physical file format
UNSET = "$"

NOT_DEFINED = "NOTDEFINED"


def alternation(types: Iterable[str]) -> str:
    """Join type names into a regex alternation, longest names first."""
    return "|".join(sorted(set(types), key=lambda t: (-len(t), t)))


ELEMENT_ALTERNATION = alternation(ELEMENT_TYPES)
COUNTED_ALTERNATION = alternation((*ELEMENT_TYPES, PROXY_TYPE))

# --- Fragments ---------------------------------------------------------------

ENTITY_REF = r"#(?P<entity_id>\d+)="
LOOSE_ENTITY_REF = r"#(?P<entity_id>\d+)\s*=\s*"
GLOBAL_ID = r"'(?P<global_id>[^']+)'"

OWNER_HISTORY = r"#[^,]+"
LOOSE_OWNER_HISTORY = r"(?:#[^,]+|\$)"

SIMPLE_STRING = r"'[^']*'"
# STEP escapes an apostrophe inside a string by doubling it
STRING = r"'(?:[^']|'')*'"
OPTIONAL_STRING = rf"(?:{STRING}|\$)"

REFERENCE = r"#(\d+)"

# Enumerations and unset values closing a record
TRAILING_ENUMS = r"(?:,(?:\.[A-Z_]+\.|\$))*"


def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile a scanner pattern; all record keywords match case-insensitively."""
    return re.compile(source, re.IGNORECASE)


def element_head(
    types: str = ELEMENT_ALTERNATION,
    *,
    anchored: bool = False,
    loose: bool = False,
) -> str:
    """Pattern source for ``[#id=]IFC<TYPE>('<GlobalId>',<OwnerHistory>,<Name>``.

    Captures ``ifc_type``, ``global_id`` and ``name`` (the raw, still quoted
    token), plus ``entity_id`` when *anchored*.
    """
    prefix = ""
    if anchored:
        prefix = LOOSE_ENTITY_REF if loose else ENTITY_REF
    owner = LOOSE_OWNER_HISTORY if loose else OWNER_HISTORY
    name = OPTIONAL_STRING if loose else SIMPLE_STRING
    return rf"{prefix}IFC(?P<ifc_type>{types})\({GLOBAL_ID},{owner},(?P<name>{name})"


def singleton_head(entity: str, *, allow_blank_name: bool = False) -> str:
    """Pattern source for a spatial entity such as ``IFCPROJECT('<GlobalId>',#1,'<Name>'``."""
    quantifier = "*" if allow_blank_name else "+"
    return rf"IFC{entity}\({GLOBAL_ID},{OWNER_HISTORY},(?P<name>'[^']{quantifier}')"


# --- Compiled patterns -------------------------------------------------------

PROJECT = compile_pattern(singleton_head("PROJECT"))
SITE = compile_pattern(singleton_head("SITE"))
BUILDING = compile_pattern(singleton_head("BUILDING"))
STOREY = compile_pattern(singleton_head("BUILDINGSTOREY", allow_blank_name=True))
STOREY_REF = compile_pattern(rf"{LOOSE_ENTITY_REF}IFCBUILDINGSTOREY\(")
SPACE = compile_pattern(singleton_head("SPACE", allow_blank_name=True))
SPACE_LOOSE = compile_pattern(
    rf"IFCSPACE\({GLOBAL_ID},{LOOSE_OWNER_HISTORY},(?P<name>{OPTIONAL_STRING})"
)

ELEMENT_NAME = compile_pattern(element_head())
ELEMENT_NAME_LOOSE = compile_pattern(element_head(loose=True))
# Every element record, whatever its name; used where only placement matters
ELEMENT_RECORD = compile_pattern(element_head(anchored=True, loose=True))

ELEMENT_DESCRIPTION = compile_pattern(
    element_head() + rf",(?P<description>{SIMPLE_STRING})"
)
ELEMENT_DESCRIPTION_LOOSE = compile_pattern(
    element_head(loose=True) + rf",(?P<description>{OPTIONAL_STRING})"
)

# Name, Description, ObjectType
ELEMENT_TYPE_NAME = compile_pattern(
    element_head() + rf",[^,]*,(?P<object_type>{SIMPLE_STRING})"
)
ELEMENT_TYPE_NAME_LOOSE = compile_pattern(
    element_head(loose=True) + rf",{OPTIONAL_STRING},(?P<object_type>{OPTIONAL_STRING})"
)

# PredefinedType opens the trailing run of enumerations and unset values,
# e.g. IFC4 doors: PredefinedType, OperationType, UserDefinedOperationType
PREDEFINED_TYPE = compile_pattern(
    element_head(COUNTED_ALTERNATION, anchored=True)
    + rf",[^)]*?\.(?P<predefined_type>[A-Z_]+)\.{TRAILING_ENUMS}\);"
)
PREDEFINED_TYPE_LOOSE = compile_pattern(
    element_head(COUNTED_ALTERNATION, anchored=True, loose=True)
    + rf"[^)]*?\.(?P<predefined_type>[A-Z_]+)\.{TRAILING_ENUMS}\);"
)

OBJECT_COUNT = compile_pattern(element_head(COUNTED_ALTERNATION))
OBJECT_COUNT_LOOSE = compile_pattern(element_head(COUNTED_ALTERNATION, loose=True))

# Relationship records: (GlobalId, OwnerHistory, Name, Description, ...)
REL_CONTAINED = compile_pattern(
    rf"{LOOSE_ENTITY_REF}IFCRELCONTAINEDINSPATIALSTRUCTURE\([^,]*,[^,]*,.*?,"
    r"\((?P<related>[^)]*)\),#(?P<relating>\d+)\);"
)
REL_AGGREGATES = compile_pattern(
    rf"{LOOSE_ENTITY_REF}IFCRELAGGREGATES\([^,]*,[^,]*,.*?,"
    r"#(?P<relating>\d+),\((?P<related>[^)]*)\)\);"
)
REL_MATERIAL = compile_pattern(
    rf"{LOOSE_ENTITY_REF}IFCRELASSOCIATESMATERIAL\([^,]*,[^,]*,.*?,"
    r"\((?P<related>[^)]*)\),#(?P<relating>\d+)\);"
)
REFERENCES = re.compile(REFERENCE)
