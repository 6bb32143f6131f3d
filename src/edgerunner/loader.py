"""
Character loader module for Edgerunner.

Handles loading and validating character records from YAML files.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from edgerunner.config import get_settings
from edgerunner.records.character import Character

logger = structlog.get_logger(__name__)


class CharacterLoadError(Exception):
    """Raised when there's an error loading character data."""

    pass


class CharacterValidationError(Exception):
    """Raised when character validation fails."""

    pass


def load_yaml_file(file_path: Path) -> list[dict[str, Any]]:
    """
    Load a YAML file containing character definitions.

    Args:
        file_path: Path to the YAML file

    Returns:
        List of character dictionaries

    Raises:
        CharacterLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CharacterLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise CharacterLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise CharacterLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise CharacterLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or "characters" not in data:
        raise CharacterLoadError(f"Missing 'characters' key in {file_path}")

    characters = data["characters"]
    if not isinstance(characters, list):
        raise CharacterLoadError(f"'characters' must be a list in {file_path}")

    return characters


def validate_character_data(character_data: Any, file_path: Path) -> None:
    """
    Validate that a character dictionary has all required fields.

    Args:
        character_data: Dictionary containing character data
        file_path: Path to the source file (for error messages)

    Raises:
        CharacterValidationError: If required fields are missing or invalid
    """
    if not isinstance(character_data, dict):
        raise CharacterValidationError(f"Character entry in {file_path} must be a mapping")

    required_fields = ["id", "name"]

    for field in required_fields:
        if field not in character_data:
            character_id = character_data.get("id", "unknown")
            raise CharacterValidationError(
                f"Character '{character_id}' in {file_path} missing required field: {field}"
            )

    if "items" in character_data and not isinstance(character_data["items"], list):
        raise CharacterValidationError(
            f"Character '{character_data['id']}' in {file_path} has invalid items (must be a list)"
        )

    item_ids = [
        item.get("id") for item in character_data.get("items", []) if isinstance(item, dict)
    ]
    duplicates = {item_id for item_id in item_ids if item_ids.count(item_id) > 1}
    if duplicates:
        raise CharacterValidationError(
            f"Character '{character_data['id']}' in {file_path} has duplicate item IDs: "
            f"{', '.join(sorted(map(str, duplicates)))}"
        )


def create_character_from_data(character_data: dict[str, Any]) -> Character:
    """
    Create a Character instance from dictionary data.

    Args:
        character_data: Dictionary containing character data

    Returns:
        Character instance

    Raises:
        CharacterValidationError: If Pydantic validation fails
    """
    try:
        return Character.model_validate(character_data)
    except ValidationError as e:
        raise CharacterValidationError(
            f"Failed to create character '{character_data.get('id', 'unknown')}': {e}"
        ) from e


def load_characters_from_directory(directory: Path) -> dict[str, Character]:
    """
    Load all character YAML files from a directory.

    Args:
        directory: Path to the directory containing YAML files

    Returns:
        Dictionary mapping character_id to Character instances

    Raises:
        CharacterLoadError: If directory doesn't exist or files can't be loaded
        CharacterValidationError: If character validation fails
    """
    if not directory.exists():
        raise CharacterLoadError(f"Directory does not exist: {directory}")

    if not directory.is_dir():
        raise CharacterLoadError(f"Not a directory: {directory}")

    characters: dict[str, Character] = {}
    yaml_files = sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml"))

    if not yaml_files:
        raise CharacterLoadError(f"No YAML files found in {directory}")

    for yaml_file in yaml_files:
        for character_data in load_yaml_file(yaml_file):
            validate_character_data(character_data, yaml_file)
            character = create_character_from_data(character_data)

            if character.id in characters:
                raise CharacterValidationError(
                    f"Duplicate character ID '{character.id}' found in {yaml_file}"
                )

            characters[character.id] = character

    return characters


def load_all_characters(data_dir: Path | None = None) -> dict[str, Character]:
    """
    Load all character records from the data directory.

    This is the main entry point for loading characters.

    Args:
        data_dir: Path to the character directory. If None, uses the
            configured ``characters_dir``.

    Returns:
        Dictionary mapping character_id to Character instances

    Raises:
        CharacterLoadError: If loading fails
        CharacterValidationError: If validation fails
    """
    if data_dir is None:
        data_dir = get_settings().characters_dir

    characters = load_characters_from_directory(data_dir)

    logger.info("characters_loaded", total=len(characters), path=str(data_dir))

    return characters


def get_character_by_id(characters: dict[str, Character], character_id: str) -> Character | None:
    """
    Get a character by its ID.

    Args:
        characters: Dictionary of all loaded characters
        character_id: The ID of the character to retrieve

    Returns:
        The Character instance, or None if not found
    """
    return characters.get(character_id)
