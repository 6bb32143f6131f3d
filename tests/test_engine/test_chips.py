"""Tests for chip-skill synchronization."""

from edgerunner.engine.chips import (
    granted_levels,
    plan_chip_toggle,
    plan_install_chip,
    plan_skill_level_edit,
    plan_unequip,
    sync_chip_active_flags,
    sync_chip_levels,
    synchronize_chips,
)
from edgerunner.records import (
    ArmorItem,
    ChipActivation,
    ChipFlagUpdate,
    ChipGrantUpdate,
    ChipLevelUpdate,
    CyberwareItem,
    EquipUpdate,
    ItemStore,
    SkillItem,
    SkillLevelUpdate,
)


def sync(items):
    """Apply both sync passes the way a collaborator would."""
    return ItemStore(items).apply(synchronize_chips(items))


class TestLevelSync:
    """Tests for propagating granted levels onto skills."""

    def test_max_across_active_chips(self, stealth_skill, chip_factory):
        """Two active chips granting a skill yield the higher level."""
        items = [
            stealth_skill,
            chip_factory("chip_a", {"Stealth": 3}),
            chip_factory("chip_b", {"Stealth": 5}),
        ]

        updates = sync_chip_levels(items)

        assert updates == [ChipLevelUpdate(skill_id="skill_stealth", new_chip_level=5)]

    def test_inactive_chips_ignored(self, stealth_skill, chip_factory):
        """An inactive chip does not count toward the maximum."""
        items = [
            stealth_skill,
            chip_factory("chip_a", {"Stealth": 3}),
            chip_factory("chip_b", {"Stealth": 5}, active=False),
        ]

        assert sync_chip_levels(items) == [
            ChipLevelUpdate(skill_id="skill_stealth", new_chip_level=3)
        ]

    def test_no_write_when_in_sync(self, stealth_skill, chip_factory):
        """Matching chip levels produce no updates."""
        stealth_skill.chip_level = 3
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3})]

        assert sync_chip_levels(items) == []

    def test_unnamed_skill_untouched(self, chip_factory):
        """Skills no active chip names keep their chip level."""
        skill = SkillItem(id="skill_drive", name="Driving", chip_level=4)
        items = [skill, chip_factory("chip_a", {"Stealth": 3})]

        assert sync_chip_levels(items) == []

    def test_negative_grant_floors_at_zero(self, stealth_skill, chip_factory):
        """Aggregate chip level never drops below zero."""
        stealth_skill.chip_level = 2
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": -4})]

        assert granted_levels(items) == {"Stealth": 0}
        assert sync_chip_levels(items) == [
            ChipLevelUpdate(skill_id="skill_stealth", new_chip_level=0)
        ]

    def test_equipped_flag_irrelevant_for_chips(self, stealth_skill, chip_factory):
        """Chips are gated by their active toggle, not by equipped."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 4}, equipped=False)]

        assert granted_levels(items) == {"Stealth": 4}

    def test_malformed_grant_counts_as_zero(self, stealth_skill, chip_factory):
        """Non-numeric grants do not raise."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": "lots"})]

        assert granted_levels(items) == {"Stealth": 0}

    def test_grant_edited_after_validation(self, stealth_skill, chip_factory):
        """Grant values written straight onto a chip are coerced when read."""
        chip = chip_factory("chip_a", {"Stealth": 3})
        chip.work_type.chip_skills["Stealth"] = "6"

        assert granted_levels([stealth_skill, chip]) == {"Stealth": 6}


class TestFlagSync:
    """Tests for the chipped flag on skills."""

    def test_granted_skill_becomes_chipped(self, stealth_skill, chip_factory):
        """A skill named by an active chip is marked chipped."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3})]

        assert sync_chip_active_flags(items) == [
            ChipFlagUpdate(skill_id="skill_stealth", new_is_chipped=True)
        ]

    def test_ungranted_skill_cleared(self, stealth_skill, chip_factory):
        """A chipped skill with no active chip is cleared."""
        stealth_skill.is_chipped = True
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3}, active=False)]

        assert sync_chip_active_flags(items) == [
            ChipFlagUpdate(skill_id="skill_stealth", new_is_chipped=False)
        ]

    def test_no_redundant_writes(self, stealth_skill):
        """Unchipped skills with no chips produce nothing."""
        assert sync_chip_active_flags([stealth_skill]) == []


class TestSynchronize:
    """Tests for the combined synchronization batch."""

    def test_levels_before_flags(self, stealth_skill, chip_factory):
        """Level writes come ahead of flag writes."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3})]

        updates = synchronize_chips(items)

        assert [type(update) for update in updates] == [ChipLevelUpdate, ChipFlagUpdate]

    def test_deactivation_sequence(self, stealth_skill, chip_factory):
        """Deactivating chips one by one steps the skill down, then clears it."""
        chip_a = chip_factory("chip_a", {"Stealth": 3})
        chip_b = chip_factory("chip_b", {"Stealth": 5})
        items = [stealth_skill, chip_a, chip_b]

        sync(items)
        assert stealth_skill.chip_level == 5
        assert stealth_skill.is_chipped

        chip_b.work_type.chip_active = False
        sync(items)
        assert stealth_skill.chip_level == 3
        assert stealth_skill.is_chipped

        chip_a.work_type.chip_active = False
        sync(items)
        assert not stealth_skill.is_chipped
        assert stealth_skill.level == 2

    def test_idempotent(self, stealth_skill, chip_factory):
        """A second pass finds nothing to write."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3, "Handgun": 2})]

        sync(items)

        assert synchronize_chips(items) == []

    def test_trained_level_never_written(self, stealth_skill, chip_factory):
        """Synchronization leaves the trained level alone."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 6})]

        sync(items)

        assert stealth_skill.level == 2
        assert stealth_skill.chip_level == 6


class TestPlanners:
    """Tests for turning sheet edits into pending writes."""

    def test_toggle_switches_naming_chips(self, stealth_skill, chip_factory):
        """Toggling a skill switches every chip that grants it."""
        items = [
            stealth_skill,
            chip_factory("chip_a", {"Stealth": 3}, active=False),
            chip_factory("chip_b", {"Stealth": 5}, active=True),
            chip_factory("chip_c", {"Handgun": 2}, active=False),
        ]

        updates = plan_chip_toggle("skill_stealth", True, items)

        assert updates == [ChipActivation(chip_id="chip_a", active=True)]

    def test_toggle_unknown_skill(self, chip_factory):
        """Unknown skills plan nothing."""
        assert plan_chip_toggle("missing", True, [chip_factory("chip_a", {})]) == []

    def test_toggle_then_sync(self, stealth_skill, chip_factory):
        """A toggle followed by a sync marks the skill chipped."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 4}, active=False)]
        store = ItemStore(items)

        store.apply(plan_chip_toggle("skill_stealth", True, items))
        store.apply(synchronize_chips(items))

        assert stealth_skill.is_chipped
        assert stealth_skill.chip_level == 4

    def test_edit_unchipped_sets_level(self, stealth_skill, chip_factory):
        """Editing an unchipped skill writes its trained level."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 4}, active=False)]

        assert plan_skill_level_edit("skill_stealth", 6, items) == [
            SkillLevelUpdate(skill_id="skill_stealth", level=6)
        ]

    def test_edit_chipped_writes_chips(self, stealth_skill, chip_factory):
        """Editing a chipped skill rewrites the level on its chips."""
        stealth_skill.is_chipped = True
        items = [
            stealth_skill,
            chip_factory("chip_a", {"Stealth": 3}),
            chip_factory("chip_b", {"Stealth": 5}),
        ]

        updates = plan_skill_level_edit("skill_stealth", 7, items)

        assert updates == [
            ChipGrantUpdate(chip_id="chip_a", skill_name="Stealth", level=7),
            ChipGrantUpdate(chip_id="chip_b", skill_name="Stealth", level=7),
        ]

        store = ItemStore(items)
        store.apply(updates)
        store.apply(synchronize_chips(items))
        assert stealth_skill.chip_level == 7
        assert stealth_skill.level == 2

    def test_unequip_cyberware_deactivates_chip(self, stealth_skill, chip_factory):
        """Unequipping cyberware also switches its chip function off."""
        chip = chip_factory("chip_a", {"Stealth": 3}, equipped=True)
        items = [stealth_skill, chip]

        updates = plan_unequip("chip_a", items)

        assert updates == [
            EquipUpdate(item_id="chip_a", equipped=False),
            ChipActivation(chip_id="chip_a", active=False),
        ]

    def test_unequip_plain_item(self):
        """Other items are only unequipped."""
        items = [ArmorItem(id="vest", equipped=True)]
        assert plan_unequip("vest", items) == [EquipUpdate(item_id="vest", equipped=False)]

    def test_unequip_unknown(self):
        """Unknown items plan nothing."""
        assert plan_unequip("missing", []) == []

    def test_edit_value_from_text_field(self, stealth_skill, chip_factory):
        """Typed values are parsed before they are written."""
        stealth_skill.is_chipped = True
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3})]
        store = ItemStore(items)

        store.apply(plan_skill_level_edit("skill_stealth", "7", items))
        store.apply(synchronize_chips(items))

        assert items[1].work_type.chip_skills == {"Stealth": 7}
        assert stealth_skill.chip_level == 7

    def test_edit_garbage_value(self, stealth_skill):
        """Unreadable values are written as 0."""
        assert plan_skill_level_edit("skill_stealth", "abc", [stealth_skill]) == [
            SkillLevelUpdate(skill_id="skill_stealth", level=0)
        ]

    def test_install_chip(self, stealth_skill, chip_factory):
        """Installing a chip equips it and switches it on."""
        items = [stealth_skill, chip_factory("chip_a", {"Stealth": 3}, active=False)]
        store = ItemStore(items)

        updates = plan_install_chip("chip_a", items)
        store.apply(updates)
        store.apply(synchronize_chips(items))

        assert updates == [
            EquipUpdate(item_id="chip_a", equipped=True),
            ChipActivation(chip_id="chip_a", active=True),
        ]
        assert items[1].equipped
        assert stealth_skill.is_chipped
        assert stealth_skill.chip_level == 3

    def test_install_non_chip(self):
        """Items without the Chip kind plan nothing."""
        items = [ArmorItem(id="vest"), CyberwareItem(id="arm", work_type={"kinds": ["Implant"]})]
        assert plan_install_chip("vest", items) == []
        assert plan_install_chip("arm", items) == []
        assert plan_install_chip("missing", items) == []
