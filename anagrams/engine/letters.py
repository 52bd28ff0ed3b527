"""
Letter multisets: a count per letter of the alphabet.

A LetterMultiset is a fixed 26-slot vector (a-z) of non-negative counts.
It is the arithmetic primitive used by the dictionary index, the constraint
filter and the search engines:

  - A "fits within" B  iff every count of A <= the matching count of B
  - addition/subtraction are component-wise
  - subtraction is only defined when the result stays non-negative

Counts live in a read-only numpy int32 array so whole dictionaries can be
stacked into a matrix and tested against a budget in one vectorized call.
"""

from __future__ import annotations

import string
from typing import Iterable

import numpy as np

ALPHABET = string.ascii_lowercase
ALPHABET_SIZE = len(ALPHABET)

# dtype shared by multisets and the dictionary count matrix
COUNT_DTYPE = np.int32

_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def normalize_word(text: str) -> str:
    """
    Case-fold and keep only the letters a-z, in order.

    Examples:
      normalize_word("Don't")    -> "dont"
      normalize_word(" New York") -> "newyork"
    """
    return "".join(ch for ch in text.strip().lower() if ch in _INDEX)


def has_foreign_letters(text: str) -> bool:
    """True if `text` holds alphabetic characters that are not a-z after case-folding."""
    return any(ch.isalpha() and ch not in _INDEX for ch in text.lower())


def counts_of(text: str) -> np.ndarray:
    """Raw 26-slot count vector for `text` (non-letters ignored)."""
    counts = np.zeros(ALPHABET_SIZE, dtype=COUNT_DTYPE)
    for ch in text.lower():
        i = _INDEX.get(ch)
        if i is not None:
            counts[i] += 1
    return counts


class LetterMultiset:
    """Immutable per-letter count vector."""

    __slots__ = ("_counts", "_hash")

    def __init__(self, counts: np.ndarray):
        arr = np.array(counts, dtype=COUNT_DTYPE)
        if arr.shape != (ALPHABET_SIZE,):
            raise ValueError(f"expected {ALPHABET_SIZE} counts, got shape {arr.shape}")
        if (arr < 0).any():
            raise ValueError("letter counts must be non-negative")
        arr.setflags(write=False)
        self._counts = arr
        self._hash = None

    # ---- constructors ----

    @classmethod
    def from_text(cls, text: str) -> "LetterMultiset":
        """Count letters in `text`; whitespace, punctuation and digits are ignored."""
        return cls(counts_of(text))

    @classmethod
    def from_counts(cls, counts: Iterable[int]) -> "LetterMultiset":
        return cls(np.fromiter(counts, dtype=np.int64))

    @classmethod
    def empty(cls) -> "LetterMultiset":
        return cls(np.zeros(ALPHABET_SIZE, dtype=COUNT_DTYPE))

    # ---- queries ----

    @property
    def counts(self) -> np.ndarray:
        """Read-only view of the 26 counts."""
        return self._counts

    @property
    def signature(self) -> bytes:
        """Hashable key shared by every multiset with the same counts."""
        return self._counts.tobytes()

    def contains(self, sub: "LetterMultiset") -> bool:
        """True iff every count of `sub` is <= the matching count of self."""
        return bool((sub._counts <= self._counts).all())

    def is_empty(self) -> bool:
        return not self._counts.any()

    def total(self) -> int:
        return int(self._counts.sum())

    def count(self, letter: str) -> int:
        return int(self._counts[_INDEX[letter.lower()]])

    def letters(self) -> str:
        """Letters in alphabetical order, each repeated by its count."""
        return "".join(ch * int(n) for ch, n in zip(ALPHABET, self._counts))

    # ---- arithmetic ----

    def subtract(self, sub: "LetterMultiset") -> "LetterMultiset":
        """
        Component-wise difference.

        Only defined when self.contains(sub); otherwise raises ValueError.
        """
        if not self.contains(sub):
            raise ValueError(f"cannot take {sub.letters()!r} out of {self.letters()!r}")
        return LetterMultiset(self._counts - sub._counts)

    def add(self, other: "LetterMultiset") -> "LetterMultiset":
        return LetterMultiset(self._counts + other._counts)

    __sub__ = subtract
    __add__ = add

    # ---- dunder plumbing ----

    def __contains__(self, sub: "LetterMultiset") -> bool:
        return self.contains(sub)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterMultiset):
            return NotImplemented
        return bool(np.array_equal(self._counts, other._counts))

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self.signature)
        return self._hash

    def __len__(self) -> int:
        return self.total()

    def __repr__(self) -> str:
        return f"LetterMultiset({self.letters()!r})"
