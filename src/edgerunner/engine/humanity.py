"""Humanity and the empathy total it drives."""

from collections.abc import Iterable, Mapping
from typing import Any

from edgerunner.records.base import StatKey
from edgerunner.records.character import Humanity, StatBlock
from edgerunner.records.item import CyberwareItem

HUMANITY_PER_EMPATHY = 10


def humanity_loss(items: Iterable[Any]) -> int:
    """Total humanity loss of all equipped cyberware."""
    return sum(
        item.humanity_loss for item in items if isinstance(item, CyberwareItem) and item.equipped
    )


def compute_humanity(stats: Mapping[StatKey, StatBlock], items: Iterable[Any]) -> Humanity:
    """
    Derive humanity and overwrite the empathy total.

    Empathy's own cyberware bonus counts toward humanity even though the
    stat pipeline keeps it out of the running total.

    Args:
        stats: Stat blocks; empathy's ``total`` is overwritten
        items: The character's items

    Returns:
        The humanity pool. ``total`` never drops below zero, but the empathy
        total may go negative.
    """
    empathy = stats[StatKey.EMPATHY]
    pre_loss = empathy.base + empathy.temp_mod + empathy.cyber_mod

    base = pre_loss * HUMANITY_PER_EMPATHY
    loss = humanity_loss(items)

    empathy.total = pre_loss - loss // HUMANITY_PER_EMPATHY

    return Humanity(base=base, loss=loss, total=max(0, base - loss))
