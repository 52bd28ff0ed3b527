"""
Solve-time constraints and candidate filtering.

Given:
  - a snapshot of the dictionary index (count matrix, lengths, first letters)
  - the target letter multiset of the phrase
  - the solve-time Constraints

Return:
  - a CandidatePlan with two lists of dictionary positions (load order):
      first_position : admissible as the FIRST word of a solution
      other_position : admissible at every later position

Starting-letter rules are layered like this:
  - can_only_ever_start_with (if set) restricts every word in every position
  - else must_not_start_with (if set) excludes words in every position
    (validation rejects overlapping sets, so applying both is equivalent)
  - must_start_with (if set) narrows the first position only

Both lists are also pre-filtered against the full target multiset; the search
re-checks feasibility against the shrinking budget at every depth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Dict, FrozenSet, Iterable, Optional, Union

import numpy as np

from .errors import InvalidConstraint
from .letters import ALPHABET

LetterSpec = Union[None, str, Iterable[str]]

DEFAULT_MAX_WORDS = 4
DEFAULT_MIN_WORD_LENGTH = 2
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_SOLUTIONS = 20000

# separators tolerated inside letter-set strings, e.g. "t,r" or "t r"
_SEPARATORS = set(" ,;\t")


def parse_letters(spec: LetterSpec, *, name: str = "letters") -> FrozenSet[str]:
    """
    Turn a user-supplied letter set into a frozenset of lowercase letters.

    Accepts None / "" (unset), a string ("TR", "t,r") or an iterable of
    single letters. Anything that is not a-z raises InvalidConstraint.
    """
    if spec is None:
        return frozenset()

    chars = spec if isinstance(spec, str) else "".join(spec)
    out = set()
    for ch in chars.lower():
        if ch in _SEPARATORS:
            continue
        if ch not in ALPHABET:
            raise InvalidConstraint(f"{name}: {ch!r} is not a letter a-z")
        out.add(ch)
    return frozenset(out)


def _require_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConstraint(f"{name} must be a positive integer; got {value!r}")


@dataclass(frozen=True)
class Constraints:
    """All solve-time parameters, each always present with its default."""
    must_start_with: FrozenSet[str] = field(default_factory=frozenset)
    can_only_ever_start_with: FrozenSet[str] = field(default_factory=frozenset)
    must_not_start_with: FrozenSet[str] = field(default_factory=frozenset)
    max_words: int = DEFAULT_MAX_WORDS
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS  # None = no limit
    max_solutions: Optional[int] = DEFAULT_MAX_SOLUTIONS        # None = no cap

    @classmethod
    def build(
            cls,
            *,
            must_start_with: LetterSpec = None,
            can_only_ever_start_with: LetterSpec = None,
            must_not_start_with: LetterSpec = None,
            max_words: int = DEFAULT_MAX_WORDS,
            min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
            timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
            max_solutions: Optional[int] = DEFAULT_MAX_SOLUTIONS,
    ) -> "Constraints":
        """Parse loosely-typed inputs and return a validated instance."""
        c = cls(
            must_start_with=parse_letters(must_start_with, name="must_start_with"),
            can_only_ever_start_with=parse_letters(
                can_only_ever_start_with, name="can_only_ever_start_with"),
            must_not_start_with=parse_letters(must_not_start_with, name="must_not_start_with"),
            max_words=max_words,
            min_word_length=min_word_length,
            timeout_seconds=timeout_seconds,
            max_solutions=max_solutions,
        )
        c.validate()
        return c

    def validate(self) -> None:
        """Raise InvalidConstraint on out-of-range or contradictory settings."""
        _require_positive_int("max_words", self.max_words)
        _require_positive_int("min_word_length", self.min_word_length)
        if self.max_solutions is not None:
            _require_positive_int("max_solutions", self.max_solutions)
        if self.timeout_seconds is not None:
            t = self.timeout_seconds
            if isinstance(t, bool) or not isinstance(t, Real) or math.isnan(t) or t < 0:
                raise InvalidConstraint(f"timeout_seconds must be a number >= 0; got {t!r}")

        for name in ("must_start_with", "can_only_ever_start_with", "must_not_start_with"):
            bad = [ch for ch in getattr(self, name) if ch not in ALPHABET]
            if bad:
                raise InvalidConstraint(f"{name}: not letters a-z: {sorted(bad)}")

        clash = self.must_start_with & self.must_not_start_with
        if clash:
            raise InvalidConstraint(
                f"letters {sorted(clash)} are in both must_start_with and must_not_start_with")

        if self.can_only_ever_start_with:
            outside = self.must_start_with - self.can_only_ever_start_with
            if outside:
                raise InvalidConstraint(
                    f"must_start_with letters {sorted(outside)} are outside "
                    f"can_only_ever_start_with {sorted(self.can_only_ever_start_with)}")
            clash = self.can_only_ever_start_with & self.must_not_start_with
            if clash:
                raise InvalidConstraint(
                    f"letters {sorted(clash)} are in both can_only_ever_start_with "
                    f"and must_not_start_with")

    def describe(self) -> str:
        """Short, filename-safe tag, e.g. 'w4_l2_start-rt'."""
        parts = [f"w{self.max_words}", f"l{self.min_word_length}"]
        if self.must_start_with:
            parts.append("start-" + "".join(sorted(self.must_start_with)))
        if self.can_only_ever_start_with:
            parts.append("only-" + "".join(sorted(self.can_only_ever_start_with)))
        if self.must_not_start_with:
            parts.append("not-" + "".join(sorted(self.must_not_start_with)))
        return "_".join(parts)

    def to_dict(self) -> Dict:
        """Plain, JSON-friendly dict (letter sets as sorted strings)."""
        return {
            "must_start_with": "".join(sorted(self.must_start_with)),
            "can_only_ever_start_with": "".join(sorted(self.can_only_ever_start_with)),
            "must_not_start_with": "".join(sorted(self.must_not_start_with)),
            "max_words": self.max_words,
            "min_word_length": self.min_word_length,
            "timeout_seconds": self.timeout_seconds,
            "max_solutions": self.max_solutions,
        }


@dataclass(frozen=True, eq=False)
class CandidatePlan:
    """Depth-independent candidate base for one solve."""
    first_position: np.ndarray
    other_position: np.ndarray


def _letter_ids(letters: FrozenSet[str]) -> np.ndarray:
    return np.array(sorted(ALPHABET.index(ch) for ch in letters), dtype=np.int8)


def start_letter_mask(first_letters: np.ndarray, constraints: Constraints, *,
                      first: bool) -> np.ndarray:
    """Boolean mask over entries: may this entry start a word at this position?"""
    if constraints.can_only_ever_start_with:
        mask = np.isin(first_letters, _letter_ids(constraints.can_only_ever_start_with))
    elif constraints.must_not_start_with:
        mask = ~np.isin(first_letters, _letter_ids(constraints.must_not_start_with))
    else:
        mask = np.ones(len(first_letters), dtype=bool)

    if first and constraints.must_start_with:
        mask &= np.isin(first_letters, _letter_ids(constraints.must_start_with))
    return mask


def fits_mask(rows: np.ndarray, budget: np.ndarray) -> np.ndarray:
    """Boolean mask over count rows: does each row fit within `budget`?"""
    return (rows <= budget).all(axis=1)


def admissible_mask(snapshot, constraints: Constraints, *, first: bool) -> np.ndarray:
    """Length and starting-letter rules combined, over every entry of `snapshot`."""
    mask = snapshot.lengths >= constraints.min_word_length
    mask &= start_letter_mask(snapshot.first_letters, constraints, first=first)
    return mask


def filter_candidates(snapshot, target: np.ndarray, constraints: Constraints) -> CandidatePlan:
    """
    Build the CandidatePlan for one solve.

    Args:
      snapshot    : IndexSnapshot (matrix, lengths, first_letters)
      target      : 26-slot counts of the phrase
      constraints : validated Constraints

    Returns:
      CandidatePlan whose arrays hold entry positions in load order.
    """
    feasible = fits_mask(snapshot.matrix, target)

    other = np.flatnonzero(feasible & admissible_mask(snapshot, constraints, first=False))
    if constraints.must_start_with:
        first = np.flatnonzero(feasible & admissible_mask(snapshot, constraints, first=True))
    else:
        first = other
    return CandidatePlan(first_position=first, other_position=other)
