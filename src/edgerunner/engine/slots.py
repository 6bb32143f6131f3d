"""Cyberware module slot accounting.

Slot usage is never stored. Every query rescans the item collection, so
re-parenting or unequipping a module is reflected immediately. Capacity is
reported, not enforced: over-allocated implants are flagged and left alone.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from edgerunner.records.item import CyberKind, CyberwareItem, cyberware_of

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SlotUsage:
    """
    Slot usage of one implant.

    Attributes:
        used: Slots taken by equipped modules
        total: Slots the implant provides
        left: Free slots, never below zero
    """

    used: int
    total: int
    left: int

    @property
    def over_capacity(self) -> bool:
        """Whether the attached modules take more slots than the implant offers."""
        return self.used > self.total


def _index(items: Iterable[Any]) -> dict[str, CyberwareItem]:
    return {item.id: item for item in cyberware_of(list(items))}


def resolve_parent(module: CyberwareItem, index: dict[str, CyberwareItem]) -> CyberwareItem | None:
    """
    Find the implant a module plugs into.

    Args:
        module: The module record
        index: Cyberware records keyed by ID

    Returns:
        The parent implant, or None when the module is orphaned: no parent
        set, the parent is missing, the module points at itself, or the
        parent is itself a module.
    """
    parent_id = module.module_info.parent_id
    if not module.is_module or parent_id is None or parent_id == module.id:
        return None
    parent = index.get(parent_id)
    if parent is None or parent.is_module:
        return None
    return parent


def _usage(implant: CyberwareItem, index: dict[str, CyberwareItem]) -> SlotUsage:
    total = implant.module_info.options_available
    used = 0
    if not implant.is_module:
        for module in index.values():
            if not module.equipped:
                continue
            parent = resolve_parent(module, index)
            if parent is not None and parent.id == implant.id:
                used += max(0, module.module_info.slots_taken)
    return SlotUsage(used=used, total=total, left=max(0, total - used))


def compute_slot_usage(implant_id: str, items: Sequence[Any]) -> SlotUsage:
    """
    Slot usage of an implant.

    Args:
        implant_id: ID of the implant
        items: Every item the character owns

    Returns:
        SlotUsage for the implant; all zeros if the ID is unknown
    """
    index = _index(items)
    implant = index.get(implant_id)
    if implant is None:
        return SlotUsage(used=0, total=0, left=0)
    return _usage(implant, index)


def find_orphaned_modules(items: Sequence[Any]) -> list[CyberwareItem]:
    """Modules whose parent does not resolve to a hosting implant."""
    index = _index(items)
    orphans = [
        item for item in index.values() if item.is_module and resolve_parent(item, index) is None
    ]
    for orphan in orphans:
        logger.debug(
            "module_orphaned",
            module_id=orphan.id,
            parent_id=orphan.module_info.parent_id,
        )
    return orphans


def slot_report(items: Sequence[Any]) -> dict[str, SlotUsage]:
    """
    Slot usage for every implant that hosts modules.

    Over-capacity implants are logged as warnings; nothing is rejected.

    Args:
        items: Every item the character owns

    Returns:
        Dictionary mapping implant ID to its SlotUsage
    """
    index = _index(items)
    report: dict[str, SlotUsage] = {}
    for implant in index.values():
        if implant.is_module or not implant.has(CyberKind.IMPLANT):
            continue
        usage = _usage(implant, index)
        if usage.over_capacity:
            logger.warning(
                "implant_over_capacity",
                implant_id=implant.id,
                used=usage.used,
                total=usage.total,
            )
        report[implant.id] = usage
    return report
