"""
Search engine registry and the shared per-solve search context.

Every engine walks the same state machine over recursion depth:

  Entry           depth 0, budget = target letters, no words chosen
  Expand          for each candidate (load order) that fits the budget:
                  poll limits, take the word, go one level deeper
  Success         budget empty after taking a word -> emit the sequence
                  (at most max_words words, not necessarily exactly)
  Dead end        nothing fits and the budget is not empty -> backtrack
  Depth exhausted max_words words taken, budget not empty -> backtrack

Engines differ only in HOW they walk it (call stack vs explicit stack); the
candidate computation, pruning, limit polling and emission live in
SearchContext so both produce byte-identical ordered output.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, List, Sequence, Tuple, Type

import numpy as np

from anagrams.engine.constraints import CandidatePlan, Constraints, fits_mask
from .sink import SolutionSink, TerminationStatus

# ---- Global engine registry ----
REGISTRY: Dict[str, Type["BaseEngine"]] = {}

_EMPTY = np.zeros(0, dtype=np.intp)

DEFAULT_ENGINE = "stack"


def register(cls: Type["BaseEngine"]) -> Type["BaseEngine"]:
    """
    Decorator: @register on an engine class adds it to REGISTRY by its `id`.
    """
    eid = getattr(cls, "id", None)
    if not eid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if eid in REGISTRY:
        raise ValueError(f"Duplicate engine id: {eid}")
    REGISTRY[eid] = cls
    return cls


class SearchContext:
    """Mutable state of one solve, shared by every level of the search."""

    def __init__(self, snapshot, plan: CandidatePlan, constraints: Constraints,
                 sink: SolutionSink, clock: Callable[[], float] = time.perf_counter):
        self.snapshot = snapshot
        self.matrix = snapshot.matrix
        self.lengths = snapshot.lengths
        self.plan = plan
        self.max_words = constraints.max_words
        self.timeout = constraints.timeout_seconds
        self.sink = sink
        self.clock = clock
        self.start = clock()
        self.nodes = 0
        self.stop: TerminationStatus | None = None

    @property
    def stopped(self) -> bool:
        return self.stop is not None

    def poll(self) -> bool:
        """
        Called once per Expand step. Returns True when the search must stop
        (timeout or solution cap); the reason is kept in `self.stop`.
        """
        if self.stop is not None:
            return True
        self.nodes += 1
        if self.timeout is not None and self.clock() - self.start >= self.timeout:
            self.stop = TerminationStatus.TIMEOUT
        elif self.sink.full:
            self.stop = TerminationStatus.MAX_SOLUTIONS_REACHED
        return self.stop is not None

    def emit(self, path: Sequence[int]) -> None:
        words = [self.snapshot.word(p) for p in path]
        if self.sink.emit(words):
            self.stop = TerminationStatus.MAX_SOLUTIONS_REACHED

    def expand(self, depth: int, budget: np.ndarray,
               pool: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Candidates for the word at `depth`, and the pool handed to depth+1.

        Args:
          depth  : number of words already chosen
          budget : remaining letter counts
          pool   : other-position candidates that fit the parent's budget

        Returns:
          (choices, next_pool), both in load order.
        """
        next_pool = pool[fits_mask(self.matrix[pool], budget)] if len(pool) else pool
        # the first-position list was already filtered against the full target
        choices = self.plan.first_position if depth == 0 else next_pool
        slots = self.max_words - depth

        if slots == 1:
            # last word: only an exact letter match can finish the sequence
            exact = np.asarray(self.snapshot.with_signature(budget.tobytes()), dtype=np.intp)
            if not len(exact):
                return _EMPTY, _EMPTY
            return exact[np.isin(exact, choices)], _EMPTY

        if not len(choices):
            return _EMPTY, _EMPTY

        # even the longest words cannot use up the budget in the slots left
        longest_here = int(self.lengths[choices].max())
        longest_later = int(self.lengths[next_pool].max()) if len(next_pool) else 0
        if int(budget.sum()) > longest_here + (slots - 1) * longest_later:
            return _EMPTY, _EMPTY
        return choices, next_pool

    def finish(self) -> TerminationStatus:
        status = self.stop or TerminationStatus.COMPLETED
        self.sink.close(status)
        return status


# ---- Base class that engines inherit ----
class BaseEngine:
    id = "base"
    name = "Base"

    def search(self, ctx: SearchContext, target: np.ndarray) -> TerminationStatus:
        """Enumerate solutions for `target` into ctx.sink; return the termination status."""
        raise NotImplementedError("Override in subclass")



def create_engine(engine_id: str) -> BaseEngine:
    """
    Factory: instantiate a registered engine by id.
    """
    try:
        cls = REGISTRY[engine_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown engine id: {engine_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls()


def get_engine_ids() -> List[str]:
    """
    Return all registered engine ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())
