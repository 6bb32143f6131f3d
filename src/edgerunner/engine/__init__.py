"""Derivation and consistency engine for character records."""

from .armor import combine_sp, layer_armor
from .chips import (
    plan_chip_toggle,
    plan_install_chip,
    plan_skill_level_edit,
    plan_unequip,
    sync_chip_active_flags,
    sync_chip_levels,
    synchronize_chips,
)
from .derivation import derive_character
from .humanity import compute_humanity
from .skills import SkillSortOrder, real_skill_value, skill_roll_modifier, sort_skills
from .slots import SlotUsage, compute_slot_usage, find_orphaned_modules, slot_report
from .wounds import death_threshold, stun_threshold, wound_state

__all__ = [
    "combine_sp",
    "layer_armor",
    "plan_chip_toggle",
    "plan_install_chip",
    "plan_skill_level_edit",
    "plan_unequip",
    "sync_chip_active_flags",
    "sync_chip_levels",
    "synchronize_chips",
    "derive_character",
    "compute_humanity",
    "SkillSortOrder",
    "real_skill_value",
    "skill_roll_modifier",
    "sort_skills",
    "SlotUsage",
    "compute_slot_usage",
    "find_orphaned_modules",
    "slot_report",
    "death_threshold",
    "stun_threshold",
    "wound_state",
]
