#!/usr/bin/env python3
"""
Print a derived character sheet for every character in a data directory.

Usage: show_character.py [directory]
"""

import sys
from pathlib import Path

from edgerunner.engine import compute_slot_usage, derive_character, synchronize_chips
from edgerunner.engine.skills import real_skill_value, sort_skills
from edgerunner.loader import load_all_characters
from edgerunner.records import CyberKind, ItemStore, cyberware_of, skills_of


def main():
    """Main function."""
    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    characters = load_all_characters(data_dir)

    for character in characters.values():
        ItemStore(character.items).apply(synchronize_chips(character.items))
        derive_character(character)

        print("=" * 70)
        print(f"{character.name} ({character.id})")
        print("=" * 70)

        print("\nStats:")
        for stat, block in character.stats.items():
            print(
                f"   {stat.value:<15} {block.total:>3}"
                f"   (base {block.base}, cyber {block.cyber_mod:+}, armor {block.armor_mod:+},"
                f" implant {block.armor_implant_mod:+}, wounds {block.wound_mod:+})"
            )

        print("\nArmor:")
        for zone, location in character.hit_locations.items():
            print(f"   {zone:<10} SP {location.stopping_power}")

        derived = character.derived
        print(f"\nWound state: {derived.wound_state}")
        print(f"Stun/Death thresholds: {derived.stun_threshold}/{derived.death_threshold}")
        humanity = character.humanity
        print(f"Humanity: {humanity.total} ({humanity.base} - {humanity.loss})")
        print(f"Carry weight: {character.carry_weight:.1f} / {derived.carry_capacity}")

        print("\nSkills:")
        for skill in sort_skills(skills_of(character.items)):
            chipped = " [chipped]" if skill.is_chipped else ""
            print(f"   {skill.name:<15} {real_skill_value(skill):>3}{chipped}")

        implants = [cw for cw in cyberware_of(character.items) if cw.has(CyberKind.IMPLANT)]
        if implants:
            print("\nImplant slots:")
            for implant in implants:
                usage = compute_slot_usage(implant.id, character.items)
                print(f"   {implant.name:<15} {usage.used}/{usage.total} ({usage.left} free)")

        print()


if __name__ == "__main__":
    main()
