"""
AnagramSolver: the object the CLI and any binding layer talk to.

It owns one append-only DictionaryIndex for its whole lifetime and runs
solves against snapshots of it:

  phrase      -> LetterMultiset (validate_phrase)
  constraints -> Constraints (validated)
  index       -> snapshot -> CandidatePlan (filter_candidates)
  plan        -> engine -> SolutionSink -> SolveResult

Every validation error is raised before the search starts. Timeouts and the
solution cap are reported on SolveResult.status, never raised.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from anagrams.datasets.index import DictionaryIndex
from anagrams.datasets.io import default_wordlist_path
from anagrams.engine.constraints import (
    Constraints, LetterSpec, filter_candidates,
    DEFAULT_MAX_WORDS, DEFAULT_MIN_WORD_LENGTH, DEFAULT_TIMEOUT_SECONDS, DEFAULT_MAX_SOLUTIONS,
)
from anagrams.engine.errors import DictionaryLoadFailure
from anagrams.engine.validation import validate_phrase
from anagrams.harness.io import write_solutions
from .base import DEFAULT_ENGINE, SearchContext, create_engine
from .sink import Solution, SolutionSink, SolveResult


class AnagramSolver:
    def __init__(self, dictionary_path: Path | str | None = None, *,
                 words: Optional[Iterable[str]] = None):
        """
        Build the index from `words` if given, else from `dictionary_path`,
        else from the bundled default word list.
        """
        self.index = DictionaryIndex()
        if words is not None:
            self.index.load(words)
        else:
            self.index.load_file(dictionary_path or default_wordlist_path())

    # ---- dictionary growth (append-only) ----

    def load_dictionary_file(self, path: Path | str) -> int:
        """Append the words of another file; duplicates are kept."""
        return self.index.load_file(path)

    def load_words(self, words: Iterable[str]) -> int:
        return self.index.load(words)

    def add_word(self, word: str) -> bool:
        return self.index.add_word(word)

    # ---- solving ----

    def solve(
            self,
            phrase: str,
            must_start_with: LetterSpec = None,
            can_only_ever_start_with: LetterSpec = None,
            must_not_start_with: LetterSpec = None,
            max_words: int = DEFAULT_MAX_WORDS,
            min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
            timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
            max_solutions: Optional[int] = DEFAULT_MAX_SOLUTIONS,
            output_file: Path | str | None = None,
            *,
            engine: str = DEFAULT_ENGINE,
            clock: Optional[Callable[[], float]] = None,
            on_solution: Optional[Callable[[Solution], None]] = None,
    ) -> SolveResult:
        """
        Find ordered word sequences whose letters are exactly those of `phrase`.

        Letter-set arguments accept None, a string ("tr", "t,r") or an
        iterable of letters. When `output_file` is given the solutions are
        also written there, one per line. It defaults to None, so a library
        call writes nothing; the CLI supplies "anagram_solutions.txt" as its
        default output name.
        """
        validate_phrase(phrase)
        constraints = Constraints.build(
            must_start_with=must_start_with,
            can_only_ever_start_with=can_only_ever_start_with,
            must_not_start_with=must_not_start_with,
            max_words=max_words,
            min_word_length=min_word_length,
            timeout_seconds=timeout_seconds,
            max_solutions=max_solutions,
        )
        return self.solve_with(phrase, constraints, output_file=output_file,
                               engine=engine, clock=clock, on_solution=on_solution)

    def solve_with(
            self,
            phrase: str,
            constraints: Constraints,
            *,
            output_file: Path | str | None = None,
            engine: str = DEFAULT_ENGINE,
            clock: Optional[Callable[[], float]] = None,
            on_solution: Optional[Callable[[Solution], None]] = None,
    ) -> SolveResult:
        """Run one search with a prebuilt Constraints."""
        target = validate_phrase(phrase)
        constraints.validate()
        search_engine = create_engine(engine)

        # later loads are invisible to this solve
        snapshot = self.index.snapshot()
        if snapshot.size == 0:
            raise DictionaryLoadFailure("dictionary has no usable words")

        plan = filter_candidates(snapshot, target.counts, constraints)
        sink = SolutionSink(constraints.max_solutions, on_solution)
        clock = clock or time.perf_counter
        ctx = SearchContext(snapshot, plan, constraints, sink, clock)
        status = search_engine.search(ctx, target.counts)

        result = SolveResult(
            phrase=phrase,
            constraints=constraints,
            solutions=tuple(sink.solutions),
            status=status,
            elapsed_s=clock() - ctx.start,
            nodes=ctx.nodes,
            engine=engine,
        )
        if output_file is not None:
            write_solutions(result, output_file)
        return result
