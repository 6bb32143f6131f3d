"""Chip-skill synchronization.

Chips grant temporary skill levels while their chip function is active.
Skill records mirror that state in ``chip_level`` and ``is_chipped``; this
module computes the writes that bring them back in line after any chip or
skill edit. Nothing here mutates records: every function returns pending
updates for the collaborator's store to commit as one batch.

Only active chips count. An inactive chip contributes nothing to either
pass, and chips ignore the ``equipped`` flag.
"""

from collections.abc import Sequence
from typing import Any

import structlog

from edgerunner.records.base import coerce_int
from edgerunner.records.item import CyberwareItem, SkillItem, cyberware_of, skills_of
from edgerunner.records.store import (
    ChipActivation,
    ChipFlagUpdate,
    ChipGrantUpdate,
    ChipLevelUpdate,
    EquipUpdate,
    SkillLevelUpdate,
    Update,
)

logger = structlog.get_logger(__name__)


def active_chips(items: Sequence[Any]) -> list[CyberwareItem]:
    """Cyberware whose chip function is switched on."""
    return [item for item in cyberware_of(items) if item.is_active_chip]


def chips_naming(skill_name: str, items: Sequence[Any]) -> list[CyberwareItem]:
    """Every chip, active or not, that grants the named skill."""
    return [
        item
        for item in cyberware_of(items)
        if item.is_chip and skill_name in item.work_type.chip_skills
    ]


def granted_levels(items: Sequence[Any]) -> dict[str, int]:
    """
    Highest level granted per skill name across active chips.

    Returns:
        Dictionary mapping skill name to its aggregate chip level (never
        below zero)
    """
    levels: dict[str, int] = {}
    for chip in active_chips(items):
        for skill_name, level in chip.work_type.chip_skills.items():
            levels[skill_name] = max(levels.get(skill_name, 0), coerce_int(level), 0)
    return levels


def sync_chip_levels(items: Sequence[Any]) -> list[ChipLevelUpdate]:
    """
    Chip-level writes for every skill granted by an active chip.

    Skills not named by any active chip keep their current ``chip_level``.

    Args:
        items: Every item the character owns

    Returns:
        Updates for skills whose ``chip_level`` differs from the aggregate
    """
    levels = granted_levels(items)
    updates = [
        ChipLevelUpdate(skill_id=skill.id, new_chip_level=levels[skill.name])
        for skill in skills_of(items)
        if skill.name in levels and skill.chip_level != levels[skill.name]
    ]
    if updates:
        logger.debug("chip_levels_synced", updates=len(updates))
    return updates


def sync_chip_active_flags(items: Sequence[Any]) -> list[ChipFlagUpdate]:
    """
    Chipped-flag writes so that exactly the skills granted by active chips
    read as chipped.

    Args:
        items: Every item the character owns

    Returns:
        Updates for skills whose ``is_chipped`` is wrong
    """
    chipped = set(granted_levels(items))
    updates = [
        ChipFlagUpdate(skill_id=skill.id, new_is_chipped=skill.name in chipped)
        for skill in skills_of(items)
        if skill.is_chipped != (skill.name in chipped)
    ]
    if updates:
        logger.debug("chip_flags_synced", updates=len(updates))
    return updates


def synchronize_chips(items: Sequence[Any]) -> list[Update]:
    """
    Both synchronization passes as one batch, level writes first.

    A deactivated chip's level is dropped before the skill's flag is
    cleared, so a skill never shows a chip level it no longer has.
    """
    return [*sync_chip_levels(items), *sync_chip_active_flags(items)]


def _find_skill(skill_id: str, items: Sequence[Any]) -> SkillItem | None:
    for skill in skills_of(items):
        if skill.id == skill_id:
            return skill
    return None


def plan_chip_toggle(skill_id: str, chipped: bool, items: Sequence[Any]) -> list[Update]:
    """
    Switch every chip that grants a skill on or off.

    This is what toggling "chipped" on a skill does; the skill's own fields
    follow once the collaborator reruns ``synchronize_chips``.

    Args:
        skill_id: ID of the skill being toggled
        chipped: Desired state
        items: Every item the character owns

    Returns:
        Chip activations for chips not already in the desired state
    """
    skill = _find_skill(skill_id, items)
    if skill is None:
        return []
    return [
        ChipActivation(chip_id=chip.id, active=chipped)
        for chip in chips_naming(skill.name, items)
        if chip.work_type.chip_active != chipped
    ]


def plan_skill_level_edit(skill_id: str, value: Any, items: Sequence[Any]) -> list[Update]:
    """
    Route a level typed into a skill to the right record.

    An unchipped skill gets its trained level. A chipped skill's value comes
    from its chips, so the new value is written into every chip that grants
    the skill instead.

    Args:
        skill_id: ID of the edited skill
        value: The value entered; non-numeric input counts as 0
        items: Every item the character owns

    Returns:
        Pending writes; empty if the skill is unknown
    """
    skill = _find_skill(skill_id, items)
    if skill is None:
        return []
    value = coerce_int(value)
    if not skill.is_chipped:
        return [SkillLevelUpdate(skill_id=skill.id, level=value)]
    return [
        ChipGrantUpdate(chip_id=chip.id, skill_name=skill.name, level=value)
        for chip in chips_naming(skill.name, items)
    ]


def plan_unequip(item_id: str, items: Sequence[Any]) -> list[Update]:
    """
    Unequip an item; cyberware also loses its chip function.

    Args:
        item_id: ID of the item to unequip
        items: Every item the character owns

    Returns:
        Pending writes; empty if the item is unknown
    """
    for item in items:
        if item.id != item_id:
            continue
        updates: list[Update] = [EquipUpdate(item_id=item.id, equipped=False)]
        if isinstance(item, CyberwareItem):
            updates.append(ChipActivation(chip_id=item.id, active=False))
        return updates
    return []


def plan_install_chip(item_id: str, items: Sequence[Any]) -> list[Update]:
    """
    Slot a chip in: equip it and switch its chip function on.

    Args:
        item_id: ID of the chip
        items: Every item the character owns

    Returns:
        Pending writes; empty if the item is unknown or not a chip
    """
    for item in cyberware_of(items):
        if item.id == item_id and item.is_chip:
            return [
                EquipUpdate(item_id=item.id, equipped=True),
                ChipActivation(chip_id=item.id, active=True),
            ]
    return []
