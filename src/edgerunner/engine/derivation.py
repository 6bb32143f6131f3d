"""Stat derivation pipeline.

Recomputes every derived field of a character from its base values and
equipped items. Stat totals are built in a fixed order:

1. base + temporary modifier
2. cyberware stat bonuses (empathy's bonus is recorded but kept out)
3. armor encumbrance, applied to reflex only
4. cyber-armor stat penalties
5. wound penalties
6. humanity, which replaces the empathy total

The pipeline is idempotent: running it twice on unchanged records gives the
same result.
"""

from collections.abc import Iterable
from typing import Any

import structlog

from edgerunner.records.base import StatKey
from edgerunner.records.character import Character, HitLocation
from edgerunner.records.item import CheckKey, CyberKind, CyberwareItem

from .armor import layer_armor
from .humanity import compute_humanity
from .wounds import apply_wound_penalties, death_threshold, stun_threshold, wound_state

logger = structlog.get_logger(__name__)


def body_type_modifier(body: int) -> int:
    """
    Damage modifier for a body total.

    Examples:
        >>> body_type_modifier(2)
        0
        >>> body_type_modifier(6)
        -2
        >>> body_type_modifier(10)
        -4
    """
    if body <= 2:
        return 0
    if body <= 4:
        return -1
    if body <= 7:
        return -2
    if body <= 9:
        return -3
    if body == 10:
        return -4
    return -5


def _characteristic_cyberware(items: Iterable[Any]) -> list[CyberwareItem]:
    return [
        item
        for item in items
        if isinstance(item, CyberwareItem) and item.equipped and item.has(CyberKind.CHARACTERISTIC)
    ]


def compute_cyber_bonuses(items: Iterable[Any]) -> dict[str, int]:
    """Sum stat bonuses from equipped Characteristic cyberware, keyed by stat."""
    bonuses: dict[str, int] = {}
    for implant in _characteristic_cyberware(items):
        for stat, value in implant.work_type.stat_bonus.items():
            bonuses[stat] = bonuses.get(stat, 0) + value
    return bonuses


def compute_armor_penalties(items: Iterable[Any]) -> dict[str, int]:
    """Sum stat penalties from equipped cyber-armor, keyed by stat (positive magnitudes)."""
    penalties: dict[str, int] = {}
    for item in items:
        if not (isinstance(item, CyberwareItem) and item.equipped and item.has(CyberKind.ARMOR)):
            continue
        for stat, value in item.work_type.armor_penalties.items():
            penalties[stat] = penalties.get(stat, 0) + value
    return penalties


def compute_check_bonuses(items: Iterable[Any]) -> dict[CheckKey, int]:
    """Sum check modifiers (initiative, stun saves) from equipped Characteristic cyberware."""
    checks = {check: 0 for check in CheckKey}
    for implant in _characteristic_cyberware(items):
        for check, value in implant.work_type.check_bonus.items():
            checks[check] += value
    return checks


def compute_carry_weight(items: Iterable[Any]) -> float:
    """Total weight of equipped items."""
    return sum(item.weight for item in items if item.equipped)


def build_hit_location_lookup(hit_locations: dict[str, HitLocation]) -> dict[int, str]:
    """
    Map each d10 face to the zone it hits.

    Args:
        hit_locations: Zones keyed by name, each with a ``[start]`` or
            ``[start, end]`` range

    Returns:
        Dictionary mapping die face to zone name
    """
    lookup: dict[int, str] = {}
    for zone, location in hit_locations.items():
        if not location.location_range:
            continue
        start = location.location_range[0]
        end = location.location_range[-1]
        for face in range(start, end + 1):
            lookup[face] = zone
    return lookup


def derive_character(character: Character) -> Character:
    """
    Recompute every derived field of a character in place.

    Args:
        character: The snapshot to derive; its stat components, hit location
            SP, carry weight, humanity and derived values are overwritten

    Returns:
        The same character, for chaining
    """
    stats = character.stats
    items = character.items

    # 1. base + temp
    for block in stats.values():
        block.total = block.base + block.temp_mod
        block.cyber_mod = 0
        block.armor_mod = 0
        block.armor_implant_mod = 0
        block.wound_mod = 0

    # 2. cyberware stat bonuses
    for stat, bonus in compute_cyber_bonuses(items).items():
        block = stats[StatKey(stat)]
        block.cyber_mod += bonus
        if stat != StatKey.EMPATHY:
            block.total += bonus

    # 3. armor layering; encumbrance hits reflex
    encumbrance = layer_armor(character)
    reflex = stats[StatKey.REFLEX]
    reflex.armor_mod = -encumbrance
    reflex.total += reflex.armor_mod

    # 4. cyber-armor penalties
    for stat, penalty in compute_armor_penalties(items).items():
        stats[StatKey(stat)].armor_implant_mod -= penalty
    for block in stats.values():
        block.total += block.armor_implant_mod

    movement = stats[StatKey.MOVEMENT].total
    body = stats[StatKey.BODY].total
    derived = character.derived
    derived.encumbrance = encumbrance
    derived.run = movement * 3
    derived.leap = derived.run // 4
    derived.carry_capacity = body * 10
    derived.lift = body * 40
    derived.body_type_modifier = body_type_modifier(body)
    character.carry_weight = compute_carry_weight(items)

    # 5. wounds
    state = wound_state(character.damage)
    apply_wound_penalties(stats, state)

    # 6. humanity and empathy
    character.humanity = compute_humanity(stats, items)

    checks = compute_check_bonuses(items)
    derived.initiative_mod = checks[CheckKey.INITIATIVE]
    derived.save_stun_mod = checks[CheckKey.SAVE_STUN]

    body_total = stats[StatKey.BODY].total
    derived.wound_state = state
    derived.stun_threshold = stun_threshold(body_total, state)
    derived.death_threshold = death_threshold(body_total, state)
    derived.hit_location_lookup = build_hit_location_lookup(character.hit_locations)

    logger.debug(
        "character_derived",
        character_id=character.id,
        wound_state=state,
        humanity=character.humanity.total,
    )

    return character
