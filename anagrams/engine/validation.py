"""
Phrase validation.

This module answers the question: "Can this phrase be anagrammed at all?"
A phrase is valid iff:
  - it is a string
  - it contains at least one letter a-z (case-insensitive)
  - it contains no alphabetic characters outside a-z (e.g. accented letters),
    which would otherwise vanish silently from the letter count

Whitespace, digits and punctuation are ignored.
"""

from __future__ import annotations

from .errors import InvalidPhrase
from .letters import LetterMultiset, has_foreign_letters


def validate_phrase(phrase: str) -> LetterMultiset:
    """
    Return the phrase's letter multiset, or raise InvalidPhrase.

    Examples:
      validate_phrase("Dormitory!")  -> LetterMultiset('dimoorrty')
      validate_phrase("  ...  ")     -> InvalidPhrase
    """
    if not isinstance(phrase, str):
        raise InvalidPhrase(f"phrase must be a string, got {type(phrase).__name__}")

    if has_foreign_letters(phrase):
        raise InvalidPhrase(f"phrase {phrase!r} has letters outside a-z")

    target = LetterMultiset.from_text(phrase)
    if target.is_empty():
        raise InvalidPhrase(f"phrase {phrase!r} contains no letters")
    return target
