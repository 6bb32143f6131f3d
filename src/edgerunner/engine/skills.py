"""Skill values and ordering."""

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from edgerunner.records.item import CyberKind, CyberwareItem, SkillItem

MARTIAL_PREFIX = "Martial"


class SkillSortOrder(StrEnum):
    """Orders a skill list can be shown in."""

    NAME = "name"
    STAT = "stat"


def real_skill_value(skill: SkillItem | None) -> int:
    """
    Effective skill level: the chip level while chipped, else the trained level.

    Args:
        skill: The skill record, or None

    Returns:
        The level used for checks; 0 for a missing skill
    """
    if skill is None:
        return 0
    if skill.is_chipped:
        return skill.chip_level
    return skill.level


def skill_roll_modifier(skill_name: str, items: Iterable[Any]) -> int:
    """Roll modifier for a skill from equipped Characteristic cyberware."""
    return sum(
        item.work_type.skill_bonus.get(skill_name, 0)
        for item in items
        if isinstance(item, CyberwareItem) and item.equipped and item.has(CyberKind.CHARACTERISTIC)
    )


def sort_skills(
    skills: Iterable[SkillItem], order: SkillSortOrder | str = SkillSortOrder.NAME
) -> list[SkillItem]:
    """
    Sort skills for display.

    Args:
        skills: Skill records
        order: ``name`` (case-insensitive) or ``stat`` (by governing stat,
            then name). Unknown orders fall back to ``name``.

    Returns:
        A new sorted list
    """
    try:
        order = SkillSortOrder(str(order).lower())
    except ValueError:
        order = SkillSortOrder.NAME

    if order == SkillSortOrder.STAT:
        return sorted(skills, key=lambda s: (s.stat.lower(), s.name.lower()))
    return sorted(skills, key=lambda s: s.name.lower())


def trained_martials(skills: Iterable[SkillItem], prefix: str = MARTIAL_PREFIX) -> list[str]:
    """Names of martial-art skills with at least one trained level."""
    return [skill.name for skill in skills if skill.name.startswith(prefix) and skill.level > 0]
