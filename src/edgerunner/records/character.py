"""Character record: raw attributes, hit locations and owned items.

Every ``StatBlock`` component except ``base`` and ``temp_mod`` is derived, as
are ``stopping_power``, ``carry_weight``, ``humanity`` and ``derived``. They
are overwritten by each run of the derivation pipeline.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .base import (
    CoercedFloat,
    CoercedInt,
    RecordModel,
    StatKey,
    coerce_int,
    coerce_mapping,
    normalize_stat_key,
    normalize_zone_key,
)
from .item import Item


class StatBlock(RecordModel):
    """One attribute and the layers that make up its total."""

    base: CoercedInt = 0
    temp_mod: CoercedInt = 0
    cyber_mod: CoercedInt = 0
    armor_mod: CoercedInt = 0
    armor_implant_mod: CoercedInt = 0
    wound_mod: CoercedInt = 0
    total: CoercedInt = 0


class HitLocation(RecordModel):
    """A body zone and the d10 faces that hit it."""

    location_range: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("location_range", "locationRange", "location"),
        description="[start] or [start, end]",
    )
    stopping_power: CoercedInt = 0

    @field_validator("location_range", mode="before")
    @classmethod
    def coerce_range(cls, v: Any) -> list[int]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [coerce_int(face) for face in v if face is not None and face != ""][:2]


class Humanity(RecordModel):
    """Humanity pool derived from empathy and cyberware losses."""

    base: int = 0
    loss: int = 0
    total: int = 0


class DerivedValues(RecordModel):
    """Secondary values computed alongside the stat totals."""

    run: int = 0
    leap: int = 0
    carry_capacity: int = 0
    lift: int = 0
    body_type_modifier: int = 0
    encumbrance: int = 0
    wound_state: int = 0
    stun_threshold: int = 0
    death_threshold: int = 0
    initiative_mod: int = 0
    save_stun_mod: int = 0
    hit_location_lookup: dict[int, str] = Field(default_factory=dict)


# d10 hit location table
DEFAULT_HIT_LOCATIONS: dict[str, list[int]] = {
    "head": [1],
    "torso": [2, 4],
    "right_arm": [5],
    "left_arm": [6],
    "right_leg": [7, 8],
    "left_leg": [9, 10],
}


def _default_stats() -> dict[StatKey, StatBlock]:
    return {stat: StatBlock() for stat in StatKey}


def _default_hit_locations() -> dict[str, HitLocation]:
    return {
        zone: HitLocation(location_range=list(faces))
        for zone, faces in DEFAULT_HIT_LOCATIONS.items()
    }


class Character(RecordModel):
    """A character snapshot as handed to the engine by its collaborator.

    Attributes:
        id: Unique character identifier
        name: Display name
        stats: Attribute blocks for all nine stats
        damage: Accumulated damage points (never written by the engine)
        hit_locations: Body zones keyed by zone name
        carry_weight: Total weight of equipped items (derived)
        humanity: Humanity pool (derived)
        derived: Secondary values (derived)
        items: Owned skill, gear and cyberware records
    """

    id: str = Field(..., description="Unique character identifier")
    name: str = Field(default="", description="Display name")
    stats: dict[StatKey, StatBlock] = Field(default_factory=_default_stats)
    damage: CoercedInt = 0
    hit_locations: dict[str, HitLocation] = Field(default_factory=_default_hit_locations)
    carry_weight: CoercedFloat = 0.0
    humanity: Humanity = Field(default_factory=Humanity)
    derived: DerivedValues = Field(default_factory=DerivedValues)
    items: list[Item] = Field(default_factory=list)

    @field_validator("stats", mode="before")
    @classmethod
    def fill_stats(cls, v: Any) -> dict[StatKey, Any]:
        """Resolve short stat keys and add zero blocks for missing stats."""
        stats: dict[StatKey, Any] = {}
        for key, block in coerce_mapping(v).items():
            stat = normalize_stat_key(key)
            if stat is None:
                continue
            if not isinstance(block, (dict, StatBlock)):
                block = {"base": block}
            stats[stat] = block
        for stat in StatKey:
            stats.setdefault(stat, StatBlock())
        return stats

    @field_validator("damage", mode="before")
    @classmethod
    def clamp_damage(cls, v: Any) -> int:
        return max(0, coerce_int(v))

    @field_validator("hit_locations", mode="before")
    @classmethod
    def normalize_zones(cls, v: Any) -> dict[str, Any]:
        if v is None:
            return _default_hit_locations()
        zones: dict[str, Any] = {}
        for key, zone in coerce_mapping(v).items():
            if isinstance(zone, (list, tuple, int)):
                zone = {"location_range": zone}
            zones[normalize_zone_key(key)] = zone
        return zones

    def stat(self, key: StatKey | str) -> StatBlock:
        """Get an attribute block by full or short name."""
        stat = normalize_stat_key(key)
        if stat is None:
            raise KeyError(key)
        return self.stats[stat]

    def get_item(self, item_id: str) -> Any:
        """Find an owned item by ID, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None
