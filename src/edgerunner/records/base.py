"""Shared base model and input coercion for Edgerunner records.

Gear and character data is user-authored and frequently incomplete, so
numeric fields never fail validation: anything that is not a usable number
becomes zero.
"""

import math
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class StatKey(StrEnum):
    """The nine character attributes."""

    INTELLIGENCE = "intelligence"
    REFLEX = "reflex"
    TECHNIQUE = "technique"
    COOL = "cool"
    ATTRACTIVENESS = "attractiveness"
    LUCK = "luck"
    MOVEMENT = "movement"
    BODY = "body"
    EMPATHY = "empathy"


STAT_KEYS = [stat.value for stat in StatKey]

# Short keys used by exported sheet data
STAT_ALIASES = {
    "int": StatKey.INTELLIGENCE,
    "ref": StatKey.REFLEX,
    "tech": StatKey.TECHNIQUE,
    "attr": StatKey.ATTRACTIVENESS,
    "ma": StatKey.MOVEMENT,
    "bt": StatKey.BODY,
    "emp": StatKey.EMPATHY,
}

ZONE_ALIASES = {
    "head": "head",
    "torso": "torso",
    "larm": "left_arm",
    "rarm": "right_arm",
    "lleg": "left_leg",
    "rleg": "right_leg",
    "left_arm": "left_arm",
    "right_arm": "right_arm",
    "left_leg": "left_leg",
    "right_leg": "right_leg",
}


def coerce_int(value: Any) -> int:
    """Convert loosely-typed input to an int, falling back to 0.

    Examples:
        >>> coerce_int("7")
        7
        >>> coerce_int(None)
        0
        >>> coerce_int("d6")
        0
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def coerce_float(value: Any) -> float:
    """Like coerce_int, but keeps fractional weights."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


_TRUE_STRINGS = {"1", "true", "yes", "on", "y", "t"}


def coerce_bool(value: Any) -> bool:
    """Read a sheet flag; only recognizable true values count as true.

    Examples:
        >>> coerce_bool("false")
        False
        >>> coerce_bool("Yes")
        True
        >>> coerce_bool("maybe")
        False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not math.isnan(value) and value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def coerce_mapping(value: Any) -> dict[str, Any]:
    """Treat anything that is not a mapping as an empty table."""
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items() if v is not None}
    return {}


def normalize_stat_key(key: str) -> StatKey | None:
    """Resolve a full or short stat name, or None if it is not a stat."""
    lowered = str(key).strip().lower()
    if lowered in STAT_ALIASES:
        return STAT_ALIASES[lowered]
    try:
        return StatKey(lowered)
    except ValueError:
        return None


def normalize_zone_key(key: str) -> str:
    """Map sheet zone names (``lArm``, ``Head``) onto snake_case zone keys."""
    lowered = str(key).strip().lower()
    return ZONE_ALIASES.get(lowered, lowered)


def coerce_stat_table(value: Any) -> dict[str, int]:
    """Modifier table keyed by stat; unknown stats are dropped."""
    table: dict[str, int] = {}
    for key, raw in coerce_mapping(value).items():
        stat = normalize_stat_key(key)
        if stat is not None:
            table[stat.value] = table.get(stat.value, 0) + coerce_int(raw)
    return table


def coerce_zone_table(value: Any) -> dict[str, int]:
    """Stopping-power table keyed by zone.

    Accepts plain numbers or ``{"stoppingPower": n}`` objects as values.
    """
    table: dict[str, int] = {}
    for key, raw in coerce_mapping(value).items():
        if isinstance(raw, dict):
            raw = raw.get("stoppingPower", raw.get("stopping_power"))
        table[normalize_zone_key(key)] = coerce_int(raw)
    return table


def coerce_name_table(value: Any) -> dict[str, int]:
    """Table keyed by free-form names (skills), values coerced to int."""
    return {key: coerce_int(raw) for key, raw in coerce_mapping(value).items()}


CoercedInt = Annotated[int, BeforeValidator(coerce_int)]
CoercedFloat = Annotated[float, BeforeValidator(coerce_float)]
CoercedBool = Annotated[bool, BeforeValidator(coerce_bool)]
StatTable = Annotated[dict[str, int], BeforeValidator(coerce_stat_table)]
ZoneTable = Annotated[dict[str, int], BeforeValidator(coerce_zone_table)]
NameTable = Annotated[dict[str, int], BeforeValidator(coerce_name_table)]


class RecordModel(BaseModel):
    """Base for all records.

    Fields accept both snake_case names and the camelCase names found in
    exported sheet data (``tempMod``, ``chipLevel``, ``moduleInfo``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
