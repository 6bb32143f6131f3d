"""Character and item records."""

from .base import STAT_KEYS, RecordModel, StatKey, coerce_bool, coerce_int
from .character import (
    DEFAULT_HIT_LOCATIONS,
    Character,
    DerivedValues,
    HitLocation,
    Humanity,
    StatBlock,
)
from .item import (
    ArmorItem,
    BaseItem,
    CheckKey,
    CyberKind,
    CyberwareItem,
    Item,
    MiscItem,
    ModuleInfo,
    ProgramItem,
    SkillItem,
    WeaponItem,
    WorkType,
    cyberware_of,
    skills_of,
)
from .store import (
    ChipActivation,
    ChipFlagUpdate,
    ChipGrantUpdate,
    ChipLevelUpdate,
    EquipUpdate,
    InvalidUpdateError,
    ItemStore,
    ItemStoreError,
    SkillLevelUpdate,
    UnknownItemError,
    Update,
)

__all__ = [
    "STAT_KEYS",
    "RecordModel",
    "StatKey",
    "coerce_bool",
    "coerce_int",
    "DEFAULT_HIT_LOCATIONS",
    "Character",
    "DerivedValues",
    "HitLocation",
    "Humanity",
    "StatBlock",
    "ArmorItem",
    "BaseItem",
    "CheckKey",
    "CyberKind",
    "CyberwareItem",
    "Item",
    "MiscItem",
    "ModuleInfo",
    "ProgramItem",
    "SkillItem",
    "WeaponItem",
    "WorkType",
    "cyberware_of",
    "skills_of",
    "ChipActivation",
    "ChipFlagUpdate",
    "ChipGrantUpdate",
    "ChipLevelUpdate",
    "EquipUpdate",
    "InvalidUpdateError",
    "ItemStore",
    "ItemStoreError",
    "SkillLevelUpdate",
    "UnknownItemError",
    "Update",
]
