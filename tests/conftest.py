"""Shared fixtures for all tests."""

import pytest

from edgerunner.records import Character, CyberwareItem, SkillItem


@pytest.fixture
def base_stats():
    """Base values for all nine stats."""
    return {
        "int": {"base": 6},
        "ref": {"base": 8, "tempMod": 1},
        "tech": {"base": 5},
        "cool": {"base": 7},
        "attr": {"base": 6},
        "luck": {"base": 5},
        "ma": {"base": 6},
        "bt": {"base": 8},
        "emp": {"base": 6},
    }


@pytest.fixture
def test_character(base_stats):
    """An unarmored, uninjured character with no items."""
    return Character.model_validate({"id": "char_1", "name": "TestChar", "stats": base_stats})


@pytest.fixture
def geared_character(base_stats):
    """A character wearing armor and carrying several kinds of cyberware."""
    return Character.model_validate(
        {
            "id": "char_2",
            "name": "Geared",
            "stats": base_stats,
            "items": [
                {
                    "id": "cw_muscle",
                    "type": "cyberware",
                    "name": "Muscle and Bone Lace",
                    "equipped": True,
                    "humanityLoss": 12,
                    "workType": {
                        "kinds": ["Characteristic"],
                        "statBonus": {"bt": 2, "emp": 1, "ref": 1},
                        "checkBonus": {"Initiative": 2, "SaveStun": 1},
                    },
                },
                {
                    "id": "armor_jacket",
                    "type": "armor",
                    "name": "Light Armor Jacket",
                    "equipped": True,
                    "weight": 2,
                    "encumbrance": 1,
                    "coverage": {"torso": 14},
                },
                {
                    "id": "cw_subdermal",
                    "type": "cyberware",
                    "name": "Subdermal Armor",
                    "equipped": True,
                    "humanityLoss": 8,
                    "workType": {
                        "kinds": ["Armor"],
                        "armorLocations": {"Torso": 12},
                        "armorPenalties": {"ref": 1, "ma": 2},
                        "encumbrance": 1,
                    },
                },
                {
                    "id": "cw_boosterware",
                    "type": "cyberware",
                    "name": "Stored Booster",
                    "equipped": False,
                    "humanityLoss": 5,
                    "workType": {"kinds": ["Characteristic"], "statBonus": {"int": 5}},
                },
            ],
        }
    )


@pytest.fixture
def stealth_skill():
    """An untrained, unchipped Stealth skill."""
    return SkillItem(id="skill_stealth", name="Stealth", stat="ref", level=2)


def make_chip(chip_id, skills, active=True, equipped=False):
    """Build a chip granting the given skill levels."""
    return CyberwareItem(
        id=chip_id,
        name=chip_id,
        equipped=equipped,
        work_type={"kinds": ["Chip"], "chip_active": active, "chip_skills": skills},
    )


@pytest.fixture
def chip_factory():
    """Factory for chip records."""
    return make_chip
