"""Edgerunner - character derivation engine for Cyberpunk 2020 style sheets."""

from edgerunner.engine import (
    SlotUsage,
    combine_sp,
    compute_slot_usage,
    derive_character,
    sync_chip_active_flags,
    sync_chip_levels,
    synchronize_chips,
)
from edgerunner.records import Character, ItemStore

__version__ = "0.1.0"

__all__ = [
    "Character",
    "ItemStore",
    "SlotUsage",
    "combine_sp",
    "compute_slot_usage",
    "derive_character",
    "sync_chip_active_flags",
    "sync_chip_levels",
    "synchronize_chips",
]
