"""Pending writes and the in-memory store that commits them.

Engine passes never touch the records they read; they return lists of
update objects. A collaborator hands such a batch to ``ItemStore.apply``,
which commits it all-or-nothing.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from .item import CyberwareItem, SkillItem

logger = structlog.get_logger(__name__)


class ItemStoreError(Exception):
    """Base class for store errors."""

    pass


class UnknownItemError(ItemStoreError):
    """Raised when an update targets an item the store does not hold."""

    pass


class InvalidUpdateError(ItemStoreError):
    """Raised when an update targets an item of the wrong type."""

    pass


@dataclass(frozen=True)
class ChipLevelUpdate:
    """Set a skill's chip level."""

    skill_id: str
    new_chip_level: int

    @property
    def item_id(self) -> str:
        return self.skill_id

    def accepts(self, item: Any) -> bool:
        return isinstance(item, SkillItem)

    def apply(self, item: SkillItem) -> None:
        item.chip_level = self.new_chip_level


@dataclass(frozen=True)
class ChipFlagUpdate:
    """Mark a skill as chipped or not."""

    skill_id: str
    new_is_chipped: bool

    @property
    def item_id(self) -> str:
        return self.skill_id

    def accepts(self, item: Any) -> bool:
        return isinstance(item, SkillItem)

    def apply(self, item: SkillItem) -> None:
        item.is_chipped = self.new_is_chipped


@dataclass(frozen=True)
class SkillLevelUpdate:
    """Set a skill's trained level."""

    skill_id: str
    level: int

    @property
    def item_id(self) -> str:
        return self.skill_id

    def accepts(self, item: Any) -> bool:
        return isinstance(item, SkillItem)

    def apply(self, item: SkillItem) -> None:
        item.level = self.level


@dataclass(frozen=True)
class ChipActivation:
    """Switch a chip's function on or off."""

    chip_id: str
    active: bool

    @property
    def item_id(self) -> str:
        return self.chip_id

    def accepts(self, item: Any) -> bool:
        return isinstance(item, CyberwareItem)

    def apply(self, item: CyberwareItem) -> None:
        item.work_type.chip_active = self.active


@dataclass(frozen=True)
class ChipGrantUpdate:
    """Change the level a chip grants for one skill."""

    chip_id: str
    skill_name: str
    level: int

    @property
    def item_id(self) -> str:
        return self.chip_id

    def accepts(self, item: Any) -> bool:
        return isinstance(item, CyberwareItem)

    def apply(self, item: CyberwareItem) -> None:
        item.work_type.chip_skills[self.skill_name] = self.level


@dataclass(frozen=True)
class EquipUpdate:
    """Equip or unequip any item."""

    item_id: str
    equipped: bool

    def accepts(self, item: Any) -> bool:
        return item is not None

    def apply(self, item: Any) -> None:
        item.equipped = self.equipped


Update = (
    ChipLevelUpdate
    | ChipFlagUpdate
    | SkillLevelUpdate
    | ChipActivation
    | ChipGrantUpdate
    | EquipUpdate
)


class ItemStore:
    """
    In-memory item collection that applies update batches atomically.

    The store wraps a list it does not copy, so a character's ``items`` list
    can be handed in and edited in place.
    """

    def __init__(self, items: list[Any]) -> None:
        """
        Initialize the store.

        Args:
            items: The item records to manage
        """
        self.items = items

    def get(self, item_id: str) -> Any:
        """
        Look up an item by ID.

        Args:
            item_id: ID of the item

        Returns:
            The item, or None if it is not held by this store
        """
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def apply(self, updates: Iterable[Update]) -> int:
        """
        Apply a batch of updates.

        Every target is resolved and type-checked before anything is written,
        so a failing batch leaves all records untouched.

        Args:
            updates: Pending writes produced by the engine

        Returns:
            Number of updates applied

        Raises:
            UnknownItemError: If an update targets a missing item
            InvalidUpdateError: If an update targets an item of the wrong type
        """
        batch: Sequence[Update] = list(updates)
        by_id = {item.id: item for item in self.items}

        resolved = []
        for update in batch:
            item = by_id.get(update.item_id)
            if item is None:
                raise UnknownItemError(f"No item with id '{update.item_id}'")
            if not update.accepts(item):
                raise InvalidUpdateError(
                    f"{type(update).__name__} cannot target {item.type} item '{item.id}'"
                )
            resolved.append((update, item))

        for update, item in resolved:
            update.apply(item)

        if resolved:
            logger.debug("updates_applied", count=len(resolved))

        return len(resolved)
