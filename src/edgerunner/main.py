"""Command line entry point: load characters, derive them and log the results."""

import sys
from pathlib import Path

import structlog

from edgerunner.config import configure_logging
from edgerunner.engine import derive_character, slot_report, synchronize_chips
from edgerunner.loader import CharacterLoadError, CharacterValidationError, load_all_characters
from edgerunner.records import ItemStore

logger = structlog.get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """
    Derive every character found in a directory.

    Chip state is synchronized before derivation, the way a sheet would after
    loading.

    Args:
        argv: Optional directory argument; defaults to the configured
            character directory

    Returns:
        Process exit code
    """
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    data_dir = Path(args[0]) if args else None

    try:
        characters = load_all_characters(data_dir)
    except (CharacterLoadError, CharacterValidationError) as e:
        logger.error("character_load_failed", error=str(e))
        return 1

    for character in characters.values():
        store = ItemStore(character.items)
        store.apply(synchronize_chips(character.items))
        derive_character(character)

        logger.info(
            "character_summary",
            character_id=character.id,
            name=character.name,
            totals={stat.value: block.total for stat, block in character.stats.items()},
            stopping_power={
                zone: location.stopping_power for zone, location in character.hit_locations.items()
            },
            humanity=character.humanity.total,
            wound_state=character.derived.wound_state,
            stun_threshold=character.derived.stun_threshold,
            death_threshold=character.derived.death_threshold,
            slots={
                implant_id: f"{usage.used}/{usage.total}"
                for implant_id, usage in slot_report(character.items).items()
            },
        )

    return 0


def run() -> None:
    """Synchronous entry point used by the console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
