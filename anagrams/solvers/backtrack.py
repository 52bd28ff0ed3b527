"""
Recursive backtracking engine.

Plain depth-first recursion: one Python frame per chosen word. Depth is
bounded by max_words, so the call stack stays shallow for any sensible
setting; use the "stack" engine when max_words is very large.
"""

from __future__ import annotations

from typing import List

import numpy as np

from .base import BaseEngine, SearchContext, register
from .sink import TerminationStatus


@register
class BacktrackEngine(BaseEngine):
    id = "backtrack"
    name = "Recursive backtracking"

    def search(self, ctx: SearchContext, target: np.ndarray) -> TerminationStatus:
        self._descend(ctx, 0, target, ctx.plan.other_position, [])
        return ctx.finish()

    def _descend(self, ctx: SearchContext, depth: int, budget: np.ndarray,
                 pool: np.ndarray, path: List[int]) -> None:
        choices, next_pool = ctx.expand(depth, budget, pool)
        matrix = ctx.matrix

        for pos in choices:
            if ctx.poll():
                return
            rest = budget - matrix[pos]
            path.append(int(pos))
            if not rest.any():
                ctx.emit(path)
            elif depth + 1 < ctx.max_words:
                self._descend(ctx, depth + 1, rest, next_pool, path)
            path.pop()
            if ctx.stopped:
                return
