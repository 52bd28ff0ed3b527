"""
Explicit work-stack engine (the default).

Same walk as the recursive engine, but each level is a Frame on a Python
list instead of a call-stack frame, so max_words is not limited by the
interpreter's recursion limit. Output order is identical: frames consume
their choices in load order and a child frame is fully drained before its
parent moves on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .base import BaseEngine, SearchContext, register
from .sink import TerminationStatus


@dataclass
class Frame:
    depth: int
    budget: np.ndarray
    choices: np.ndarray
    next_pool: np.ndarray
    cursor: int = 0


@register
class StackEngine(BaseEngine):
    id = "stack"
    name = "Explicit-stack backtracking"

    def _frame(self, ctx: SearchContext, depth: int, budget: np.ndarray,
               pool: np.ndarray) -> Frame:
        choices, next_pool = ctx.expand(depth, budget, pool)
        return Frame(depth, budget, choices, next_pool)

    def search(self, ctx: SearchContext, target: np.ndarray) -> TerminationStatus:
        matrix = ctx.matrix
        stack: List[Frame] = [self._frame(ctx, 0, target, ctx.plan.other_position)]
        path: List[int] = []  # words leading to the top frame

        while stack:
            top = stack[-1]
            if top.cursor >= len(top.choices):
                # level exhausted: undo the word that led here
                stack.pop()
                if path:
                    path.pop()
                continue

            if ctx.poll():
                break
            pos = int(top.choices[top.cursor])
            top.cursor += 1
            rest = top.budget - matrix[pos]

            if not rest.any():
                ctx.emit(path + [pos])
                if ctx.stopped:
                    break
            elif top.depth + 1 < ctx.max_words:
                path.append(pos)
                stack.append(self._frame(ctx, top.depth + 1, rest, top.next_pool))

        return ctx.finish()
