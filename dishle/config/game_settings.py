"""
Game Configuration Constants Module

This module defines all game rule constants for the daily dish puzzle.
All game parameters are centralized here to enable easy modification.
"""

from typing import Dict, Final

# Core Game Configuration Constants
STARTING_QUALITY: Final[int] = 10
"""
Quality points a fresh session starts with. Each missed letter costs one point.
Type: Final[int] - Immutable to prevent accidental modification
"""

MIN_INGREDIENT_LENGTH: Final[int] = 2
MAX_INGREDIENT_LENGTH: Final[int] = 20

# Daily puzzles roll over at midnight in this timezone
PUZZLE_TIMEZONE: Final[str] = "Europe/Helsinki"

# Accepted range for puzzle dates
MIN_YEAR: Final[int] = 2000
MAX_YEAR: Final[int] = 2100

# Storage namespaces
SESSION_KEY_PREFIX: Final[str] = "dishle:session"
PREVIEW_KEY_PREFIX: Final[str] = "dishle:preview"
SNAPSHOT_VERSION: Final[int] = 2

# Players whose session stays cached in memory; older ones reload from storage
MAX_ACTIVE_PLAYERS: Final[int] = 1000

# Share text
SHARE_TITLE: Final[str] = "DISHLE"
SHARE_GLYPHS: Final[Dict[str, str]] = {
    "MATCHED": "\U0001F7E9",  # green square
    "NEUTRAL": "\U0001F7E8",  # yellow square
    "MISS": "\U0001F7E5",     # red square
}
SHARE_PADDING_GLYPH: Final[str] = "⬛"  # black square


def validate_game_settings() -> bool:
    """
    Validates the consistency of the game rule constants.

    Returns:
        bool: True if all checks pass

    Raises:
        ValueError: If any check fails with a detailed error message
    """
    if STARTING_QUALITY <= 0:
        raise ValueError("Starting quality must be positive")

    if not 0 < MIN_INGREDIENT_LENGTH <= MAX_INGREDIENT_LENGTH:
        raise ValueError(
            f"Invalid ingredient length bounds: {MIN_INGREDIENT_LENGTH}-{MAX_INGREDIENT_LENGTH}"
        )

    if MIN_YEAR > MAX_YEAR:
        raise ValueError(f"Invalid year range: {MIN_YEAR}-{MAX_YEAR}")

    if MAX_ACTIVE_PLAYERS < 1:
        raise ValueError("At least one active player must be cached")

    if len(set(SHARE_GLYPHS.values())) != len(SHARE_GLYPHS):
        raise ValueError("Share glyphs must be distinct")

    if SHARE_PADDING_GLYPH in SHARE_GLYPHS.values():
        raise ValueError("Padding glyph must differ from status glyphs")

    return True


if __name__ == "__main__":

    try:
        validate_game_settings()
        print(" Game settings validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
