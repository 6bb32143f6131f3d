"""Armor layering: stopping power per body zone and encumbrance."""

from typing import TYPE_CHECKING, Any

import structlog

from edgerunner.records.base import coerce_int
from edgerunner.records.item import ArmorItem, CyberKind, CyberwareItem

if TYPE_CHECKING:
    from edgerunner.records.character import Character

logger = structlog.get_logger(__name__)


def layer_bonus(diff: int) -> int:
    """
    Bonus granted when layering two armors whose SP differ by ``diff``.

    Similar layers reinforce each other; a strong plate over a weak vest
    gains almost nothing.

    Args:
        diff: Absolute difference between the two SP values

    Returns:
        The SP bonus added to the stronger layer
    """
    if diff >= 27:
        return 0
    if diff >= 21:
        return 2
    if diff >= 15:
        return 3
    if diff >= 9:
        return 3
    if diff >= 5:
        return 4
    return 5


def combine_sp(a: Any, b: Any) -> int:
    """
    Combine two stopping-power values at the same location.

    Args:
        a: SP already present at the location
        b: SP of the layer being added

    Returns:
        The combined SP. With only one real layer (either value zero) the
        values are simply added.

    Examples:
        >>> combine_sp(20, 20)
        25
        >>> combine_sp(10, 40)
        40
        >>> combine_sp(0, 12)
        12
    """
    a = coerce_int(a)
    b = coerce_int(b)
    if not a or not b:
        return a + b
    return max(a, b) + layer_bonus(abs(a - b))


def layer_armor(character: "Character") -> int:
    """
    Recompute stopping power on every hit location.

    Worn armor is folded first, zone by zone, then the cyber-armor implants
    are folded on top of the combined worn value. Zones the character does
    not have are ignored.

    Args:
        character: Character whose ``hit_locations`` are overwritten

    Returns:
        Total encumbrance from worn armor and cyber-armor
    """
    for location in character.hit_locations.values():
        location.stopping_power = 0

    worn = [i for i in character.items if isinstance(i, ArmorItem) and i.equipped]
    cyber_armor = [
        i
        for i in character.items
        if isinstance(i, CyberwareItem) and i.equipped and i.has(CyberKind.ARMOR)
    ]

    encumbrance = 0
    for armor in worn:
        encumbrance += armor.encumbrance
        for zone, sp in armor.coverage.items():
            location = character.hit_locations.get(zone)
            if location is None:
                continue
            location.stopping_power = combine_sp(location.stopping_power, sp)

    for implant in cyber_armor:
        for zone, sp in implant.work_type.armor_locations.items():
            location = character.hit_locations.get(zone)
            if location is None or sp <= 0:
                continue
            location.stopping_power = combine_sp(location.stopping_power, sp)
        encumbrance += implant.armor_encumbrance

    logger.debug(
        "armor_layered",
        character_id=character.id,
        worn=len(worn),
        cyber_armor=len(cyber_armor),
        encumbrance=encumbrance,
    )

    return encumbrance
