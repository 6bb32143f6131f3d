"""Item records: skills, worn armor, cyberware and opaque gear.

Items form a discriminated union over ``type``. Cyberware carries its
capabilities as an explicit set of kinds, so an implant can be armor, a
slot host and a chip at the same time.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator

from .base import (
    CoercedBool,
    CoercedFloat,
    CoercedInt,
    NameTable,
    RecordModel,
    StatTable,
    ZoneTable,
    coerce_int,
    coerce_mapping,
)


class CyberKind(StrEnum):
    """Capability tags a cyberware record may hold."""

    DESCRIPTIVE = "Descriptive"
    CHARACTERISTIC = "Characteristic"
    ARMOR = "Armor"
    WEAPON = "Weapon"
    IMPLANT = "Implant"
    CHIP = "Chip"


class CheckKey(StrEnum):
    """Checks that Characteristic cyberware can modify."""

    INITIATIVE = "initiative"
    SAVE_STUN = "save_stun"


_CHECK_ALIASES = {
    "initiative": CheckKey.INITIATIVE,
    "savestun": CheckKey.SAVE_STUN,
    "save_stun": CheckKey.SAVE_STUN,
}


class BaseItem(RecordModel):
    """Fields shared by every item record."""

    id: str = Field(..., description="Unique item identifier")
    name: str = Field(default="", description="Display name")
    equipped: CoercedBool = Field(default=False, description="Whether the item is worn/mounted")
    weight: CoercedFloat = Field(default=0.0, description="Weight in kilograms")


class SkillItem(BaseItem):
    """A skill record.

    ``level`` is the trained value and only ever set by the user.
    ``chip_level`` and ``is_chipped`` belong to the chip synchronizer.
    """

    type: Literal["skill"] = "skill"
    level: CoercedInt = 0
    chip_level: CoercedInt = 0
    is_chipped: CoercedBool = False
    stat: str = ""
    ask_mods: CoercedBool = False


class ArmorItem(BaseItem):
    """Worn armor: stopping power per covered zone plus encumbrance."""

    type: Literal["armor"] = "armor"
    coverage: ZoneTable = Field(default_factory=dict)
    encumbrance: CoercedInt = 0


class WeaponItem(BaseItem):
    """Weapon record; handled by the combat layer, opaque here."""

    type: Literal["weapon"] = "weapon"


class ProgramItem(BaseItem):
    """Netrunning program; opaque here."""

    type: Literal["program"] = "program"


class MiscItem(BaseItem):
    """Any other carried gear."""

    type: Literal["misc"] = "misc"


class WorkType(RecordModel):
    """What a piece of cyberware does, and the numbers behind each function."""

    kinds: set[CyberKind] = Field(default_factory=lambda: {CyberKind.DESCRIPTIVE})
    stat_bonus: StatTable = Field(default_factory=dict)
    check_bonus: dict[CheckKey, int] = Field(default_factory=dict)
    skill_bonus: NameTable = Field(default_factory=dict)
    armor_locations: ZoneTable = Field(default_factory=dict)
    armor_penalties: StatTable = Field(default_factory=dict)
    encumbrance: CoercedInt | None = None
    chip_skills: NameTable = Field(default_factory=dict)
    chip_active: CoercedBool = False

    @field_validator("kinds", mode="before")
    @classmethod
    def coerce_kinds(cls, v: Any) -> set[CyberKind]:
        """Accept a single kind or any iterable of kinds; drop unknown tags."""
        if v is None:
            return set()
        if isinstance(v, str) or not isinstance(v, Iterable):
            v = [v]
        known = {kind.value.lower(): kind for kind in CyberKind}
        kinds = set()
        for raw in v:
            kind = known.get(str(raw).strip().lower())
            if kind is not None:
                kinds.add(kind)
        return kinds

    @field_validator("check_bonus", mode="before")
    @classmethod
    def coerce_checks(cls, v: Any) -> dict[CheckKey, int]:
        checks: dict[CheckKey, int] = {}
        for key, raw in coerce_mapping(v).items():
            check = _CHECK_ALIASES.get(key.strip().lower())
            if check is not None:
                checks[check] = checks.get(check, 0) + coerce_int(raw)
        return checks

    def has(self, kind: CyberKind) -> bool:
        """Check whether this cyberware provides the given function."""
        return kind in self.kinds


class ModuleInfo(RecordModel):
    """Slot bookkeeping for cyberware.

    Attributes:
        is_module: True when this record plugs into another implant
        parent_id: ID of the hosting implant (modules only)
        slots_taken: Slots this module consumes on its parent (modules only)
        options_available: Slots this record offers when it hosts modules
    """

    is_module: CoercedBool = False
    parent_id: str | None = None
    slots_taken: CoercedInt = 0
    options_available: CoercedInt = 0

    @field_validator("parent_id", mode="before")
    @classmethod
    def blank_parent(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)


class CyberwareItem(BaseItem):
    """An implant, module, chip or any combination of them."""

    type: Literal["cyberware"] = "cyberware"
    humanity_loss: CoercedInt = 0
    cyberware_type: str = ""
    encumbrance: CoercedInt = 0
    work_type: WorkType = Field(default_factory=WorkType)
    module_info: ModuleInfo = Field(default_factory=ModuleInfo)

    @field_validator("work_type", "module_info", mode="before")
    @classmethod
    def blank_section(cls, v: Any) -> Any:
        return {} if v is None else v

    def has(self, kind: CyberKind) -> bool:
        return self.work_type.has(kind)

    @property
    def is_chip(self) -> bool:
        return self.has(CyberKind.CHIP)

    @property
    def is_active_chip(self) -> bool:
        """Chips are gated by their own toggle, not by ``equipped``."""
        return self.is_chip and self.work_type.chip_active

    @property
    def is_module(self) -> bool:
        return self.module_info.is_module

    @property
    def armor_encumbrance(self) -> int:
        """Cyber-armor encumbrance, falling back to the item-level value."""
        if self.work_type.encumbrance is not None:
            return self.work_type.encumbrance
        return self.encumbrance


Item = Annotated[
    SkillItem | ArmorItem | CyberwareItem | WeaponItem | ProgramItem | MiscItem,
    Field(discriminator="type"),
]


def skills_of(items: list[Any]) -> list[SkillItem]:
    """All skill records in a collection."""
    return [item for item in items if isinstance(item, SkillItem)]


def cyberware_of(items: list[Any]) -> list[CyberwareItem]:
    """All cyberware records in a collection."""
    return [item for item in items if isinstance(item, CyberwareItem)]
