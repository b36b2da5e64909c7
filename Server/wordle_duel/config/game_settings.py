"""
Game Configuration Constants Module

Defines the fixed rules of a duel: word length, attempts per round and the
shape of room codes. Word validation here is purely structural; no
dictionary lookup is performed on either the secret or the guesses.
"""

import re
import string
from typing import Final, Optional

WORD_LENGTH: Final[int] = 5
"""Number of letters in the secret word and in every guess."""

MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guesses allowed per round.
Type: Final[int] - Immutable to prevent accidental modification
"""

ROOM_CODE_LENGTH: Final[int] = 6
ROOM_CODE_ALPHABET: Final[str] = string.ascii_uppercase + string.digits

_WORD_PATTERN = re.compile(r'[A-Z]{%d}' % WORD_LENGTH)


def normalize_word(word) -> Optional[str]:
    """
    Uppercase a submitted word.

    Returns:
        The uppercased string, or None if the value is not a string at all
    """
    if not isinstance(word, str):
        return None
    return word.upper()


def is_well_formed_word(word: Optional[str]) -> bool:
    """True if ``word`` is exactly WORD_LENGTH uppercase letters A-Z."""
    return bool(word) and _WORD_PATTERN.fullmatch(word) is not None


def normalize_room_code(code) -> Optional[str]:
    """Room codes are case-insensitive; the canonical form is uppercase."""
    if not isinstance(code, str):
        return None
    code = code.strip().upper()
    return code or None
