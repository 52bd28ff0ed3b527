"""
Append-only dictionary index.

The index holds every loaded word as a DictionaryEntry (original spelling,
normalized letters, letter multiset, length, first letter) and keeps three
parallel numpy arrays for vectorized candidate queries:

  matrix        : (n, 26) letter counts, one row per entry
  lengths       : (n,)    number of letters per entry
  first_letters : (n,)    0..25 index of the first letter

plus two groupings (first letter, letter signature) holding entry positions
in load order.

Lifecycle:
  - entries are only ever appended (load / add_word / load_file)
  - duplicates are kept: loading "stone" twice yields two entries, and both
    show up in solutions, since a later load may be a deliberate
    supplementary vocabulary
  - a solve works on snapshot(), a view bounded by the size at snapshot time;
    words loaded afterwards are only visible to later snapshots. Loads must
    not run concurrently with snapshot() itself.
"""

from __future__ import annotations

from bisect import bisect_left
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from anagrams.engine.constraints import Constraints, admissible_mask, fits_mask
from anagrams.engine.errors import DictionaryLoadFailure
from anagrams.engine.letters import (
    ALPHABET, ALPHABET_SIZE, COUNT_DTYPE, LetterMultiset, has_foreign_letters, normalize_word,
)
from .io import read_lines


@dataclass(frozen=True)
class DictionaryEntry:
    word: str                 # as supplied (stripped), used for output
    key: str                  # normalized a-z letters, used for matching
    letters: LetterMultiset
    length: int
    first_letter: str
    position: int             # load order


@dataclass(frozen=True, eq=False)
class IndexSnapshot:
    """Read-only view of the first `size` entries of an index."""
    size: int
    matrix: np.ndarray
    lengths: np.ndarray
    first_letters: np.ndarray
    _entries: List[DictionaryEntry]
    _by_signature: Dict[bytes, List[int]]

    def entry(self, position: int) -> DictionaryEntry:
        if not 0 <= position < self.size:
            raise IndexError(position)
        return self._entries[position]

    def word(self, position: int) -> str:
        return self._entries[position].word

    def with_signature(self, signature: bytes) -> List[int]:
        """Positions (load order) of entries whose multiset has this signature."""
        group = self._by_signature.get(signature)
        if not group:
            return []
        return group[:bisect_left(group, self.size)]

    def __len__(self) -> int:
        return self.size


class DictionaryIndex:
    """Monotonic, append-only collection of dictionary entries."""

    INITIAL_CAPACITY = 1024

    def __init__(self, words: Optional[Iterable[str]] = None):
        self._entries: List[DictionaryEntry] = []
        self._matrix = np.zeros((self.INITIAL_CAPACITY, ALPHABET_SIZE), dtype=COUNT_DTYPE)
        self._lengths = np.zeros(self.INITIAL_CAPACITY, dtype=np.int32)
        self._first = np.zeros(self.INITIAL_CAPACITY, dtype=np.int8)
        self.by_first_letter: Dict[str, List[int]] = defaultdict(list)
        self.by_signature: Dict[bytes, List[int]] = defaultdict(list)
        if words is not None:
            self.load(words)

    # ---- loading ----

    def add_word(self, word: str) -> bool:
        """
        Append one word. Returns False (and stores nothing) when the word has
        no letters a-z or holds letters outside a-z.
        """
        raw = word.strip()
        if not raw or has_foreign_letters(raw):
            return False
        key = normalize_word(raw)
        if not key:
            return False

        pos = len(self._entries)
        letters = LetterMultiset.from_text(key)
        entry = DictionaryEntry(
            word=raw, key=key, letters=letters, length=len(key),
            first_letter=key[0], position=pos,
        )

        self._ensure_capacity(pos + 1)
        self._matrix[pos] = letters.counts
        self._lengths[pos] = entry.length
        self._first[pos] = ALPHABET.index(entry.first_letter)
        self.by_first_letter[entry.first_letter].append(pos)
        self.by_signature[letters.signature].append(pos)
        self._entries.append(entry)
        return True

    def load(self, words: Iterable[str] | str) -> int:
        """
        Append every usable word from `words` (an iterable, or a block of text
        with one word per line). Returns how many entries were added.
        """
        if isinstance(words, str):
            words = words.splitlines()
        added = 0
        for w in words:
            if self.add_word(w):
                added += 1
        return added

    def load_file(self, path: Path | str, encoding: str = "utf-8") -> int:
        """
        Append the words of a one-word-per-line text file.

        Raises DictionaryLoadFailure if the file is unreadable or holds no
        usable word.
        """
        try:
            lines = read_lines(path, encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryLoadFailure(f"cannot read dictionary {path}: {e}") from e

        added = self.load(lines)
        if added == 0:
            raise DictionaryLoadFailure(f"dictionary {path} contains no usable words")
        return added

    def _ensure_capacity(self, need: int) -> None:
        cap = len(self._lengths)
        if need <= cap:
            return
        new_cap = max(need, cap * 2)
        # fresh arrays: snapshots keep viewing the old buffers
        matrix = np.zeros((new_cap, ALPHABET_SIZE), dtype=COUNT_DTYPE)
        matrix[:cap] = self._matrix
        lengths = np.zeros(new_cap, dtype=np.int32)
        lengths[:cap] = self._lengths
        first = np.zeros(new_cap, dtype=np.int8)
        first[:cap] = self._first
        self._matrix, self._lengths, self._first = matrix, lengths, first

    # ---- queries ----

    def snapshot(self) -> IndexSnapshot:
        n = len(self._entries)
        matrix = self._matrix[:n]
        lengths = self._lengths[:n]
        first = self._first[:n]
        for arr in (matrix, lengths, first):
            arr.setflags(write=False)
        return IndexSnapshot(
            size=n, matrix=matrix, lengths=lengths, first_letters=first,
            _entries=self._entries, _by_signature=self.by_signature,
        )

    def candidates_for(self, budget: LetterMultiset, constraints: Constraints, *,
                       first: bool = False) -> List[DictionaryEntry]:
        """
        Entries that fit within `budget` and pass the length and
        starting-letter rules (first-position rules when `first`).
        """
        snap = self.snapshot()
        mask = fits_mask(snap.matrix, budget.counts)
        mask &= admissible_mask(snap, constraints, first=first)
        return [self._entries[i] for i in np.flatnonzero(mask)]

    def anagrams_of(self, text: str) -> List[DictionaryEntry]:
        """Single entries using exactly the letters of `text`, in load order."""
        sig = LetterMultiset.from_text(text).signature
        return [self._entries[i] for i in self.by_signature.get(sig, [])]

    def stats(self) -> Dict:
        n = len(self._entries)
        lengths = self._lengths[:n]
        return {
            "entries": n,
            "unique_words": len({e.key for e in self._entries}),
            "min_length": int(lengths.min()) if n else 0,
            "max_length": int(lengths.max()) if n else 0,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(list(self._entries))

    def __getitem__(self, position: int) -> DictionaryEntry:
        return self._entries[position]
