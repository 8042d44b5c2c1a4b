"""
Letter Pool

Order-preserving multiset of the letters still hidden in one part of a dish name.
"""

from collections import Counter
from typing import List, Optional


class LetterPool:
    """
    Remaining characters of a phrase, consumed one occurrence at a time.

    Characters keep their original order so the pool can be rendered back as a
    string. Removed slots are tombstoned and skipped when rendering.
    """

    def __init__(self, text: str):
        self._slots: List[Optional[str]] = list(text)
        self._counts = Counter(text)

    def __str__(self) -> str:
        return ''.join(char for char in self._slots if char is not None)

    def __repr__(self) -> str:
        return f"LetterPool({str(self)!r})"

    def remove_first(self, letter: str) -> bool:
        """
        Removes the leftmost remaining occurrence of a letter.

        Returns:
            bool: True if an occurrence was removed, False if none remain
        """
        if not letter.isalpha() or self._counts[letter] == 0:
            return False

        index = self._slots.index(letter)
        self._slots[index] = None
        self._counts[letter] -= 1
        return True

    def is_exhausted(self) -> bool:
        """True once only whitespace (or nothing) is left."""
        return not ''.join(str(self).split())
