"""Wound states, stun/death thresholds and wound penalties."""

from collections.abc import Mapping

from edgerunner.records.base import StatKey, coerce_int
from edgerunner.records.character import StatBlock

# Damage points per wound box row
WOUND_TRACK_WIDTH = 4

# Stats penalised by serious wounds
WOUND_AFFECTED_STATS = (StatKey.REFLEX, StatKey.INTELLIGENCE, StatKey.COOL)


def _ceil_div(value: int, divisor: int) -> int:
    return -(-value // divisor)


def wound_state(damage: int) -> int:
    """
    Wound tier for accumulated damage.

    0 is uninjured, 1 Light, 2 Serious, 3 Critical, 4 and above Mortal.

    Examples:
        >>> wound_state(0)
        0
        >>> wound_state(4)
        1
        >>> wound_state(5)
        2
    """
    damage = coerce_int(damage)
    if damage <= 0:
        return 0
    return _ceil_div(damage, WOUND_TRACK_WIDTH)


def stun_threshold(body_total: int, state: int) -> int:
    """Stun save target: body minus wound state, plus one since Light has no penalty."""
    return body_total - state + 1


def death_threshold(body_total: int, state: int) -> int:
    """Death save target, three above the stun threshold."""
    return stun_threshold(body_total, state) + 3


def wounded_total(stat: StatKey, total: int, state: int) -> int:
    """
    Stat total after wound penalties.

    Args:
        stat: Which stat the total belongs to
        total: Total before wounds
        state: Current wound state

    Returns:
        The penalised total
    """
    if stat not in WOUND_AFFECTED_STATS:
        return total
    if state >= 4:
        return _ceil_div(total, 3)
    if state == 3:
        return _ceil_div(total, 2)
    if state == 2 and stat == StatKey.REFLEX:
        return total - 2
    return total


def apply_wound_penalties(stats: Mapping[StatKey, StatBlock], state: int) -> None:
    """Apply wound penalties in place, recording each change in ``wound_mod``."""
    for stat, block in stats.items():
        new_total = wounded_total(stat, block.total, state)
        block.wound_mod = new_total - block.total
        block.total = new_total
