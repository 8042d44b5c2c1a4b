"""
Matching Engine

Resolves an ingredient letter by letter against the hidden dish name.
Everything here is pure: no session, storage or logging dependencies.
"""

import re
from typing import List, Tuple

from ..config.game_settings import MIN_INGREDIENT_LENGTH, MAX_INGREDIENT_LENGTH
from ..models.errors import InvalidIngredient
from ..models.game import LetterOutcome, LetterStatus, MatchResult
from ..models.letter_pool import LetterPool

INGREDIENT_PATTERN = re.compile(
    rf'^[A-Z]{{{MIN_INGREDIENT_LENGTH},{MAX_INGREDIENT_LENGTH}}}$'
)
INGREDIENT_RULE = (
    f"Please enter an ingredient with {MIN_INGREDIENT_LENGTH}-{MAX_INGREDIENT_LENGTH} letters (A-Z only)"
)


def normalize_ingredient(raw) -> str:
    """
    Uppercases and trims an ingredient.

    Raises:
        InvalidIngredient: If the result is not 2-20 letters A-Z
    """
    if not isinstance(raw, str):
        raise InvalidIngredient(INGREDIENT_RULE)

    ingredient = raw.upper().strip()
    if not INGREDIENT_PATTERN.match(ingredient):
        raise InvalidIngredient(INGREDIENT_RULE)
    return ingredient


def is_valid_ingredient(raw) -> Tuple[bool, str]:
    """
    Validates an ingredient without raising.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        normalize_ingredient(raw)
    except InvalidIngredient as e:
        return False, str(e)
    return True, ""


def match_ingredient(ingredient: str, remaining_adjective: str, remaining_noun: str) -> MatchResult:
    """
    Consumes ingredient letters from the remaining dish name.

    Each letter, left to right, takes the first remaining occurrence in the
    adjective (NEUTRAL), otherwise the first in the noun (MATCHED), otherwise
    it is a MISS. Adjective copies are always used up before noun copies.

    Args:
        ingredient: Raw ingredient; normalized before matching
        remaining_adjective: Adjective letters not yet consumed
        remaining_noun: Noun letters not yet consumed

    Returns:
        MatchResult with outcomes in ingredient letter order

    Raises:
        InvalidIngredient: If the ingredient fails normalization
    """
    letters = normalize_ingredient(ingredient)

    adjective_pool = LetterPool(remaining_adjective)
    noun_pool = LetterPool(remaining_noun)
    outcomes: List[LetterOutcome] = []
    miss_count = 0

    for letter in letters:
        if adjective_pool.remove_first(letter):
            outcomes.append(LetterOutcome(letter, LetterStatus.NEUTRAL))
        elif noun_pool.remove_first(letter):
            outcomes.append(LetterOutcome(letter, LetterStatus.MATCHED))
        else:
            outcomes.append(LetterOutcome(letter, LetterStatus.MISS))
            miss_count += 1

    return MatchResult(
        outcomes=tuple(outcomes),
        remaining_adjective=str(adjective_pool),
        remaining_noun=str(noun_pool),
        miss_count=miss_count
    )
