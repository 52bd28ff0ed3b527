"""
Solution sink and solve result.

The sink receives solutions in discovery order, keeps them in an ordered
list and tracks the count against max_solutions. Once the search stops it is
closed with a TerminationStatus; writing anywhere (files, stdout) is left to
the harness.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from anagrams.engine.constraints import Constraints

Solution = Tuple[str, ...]


class TerminationStatus(str, Enum):
    COMPLETED = "completed"
    TIMEOUT = "timeout"
    MAX_SOLUTIONS_REACHED = "max_solutions_reached"


class SolutionSink:
    def __init__(self, max_solutions: Optional[int] = None,
                 on_solution: Optional[Callable[[Solution], None]] = None):
        self.max_solutions = max_solutions
        self.on_solution = on_solution
        self.solutions: List[Solution] = []
        self.status: Optional[TerminationStatus] = None

    @property
    def full(self) -> bool:
        return self.max_solutions is not None and len(self.solutions) >= self.max_solutions

    def emit(self, words: Iterable[str]) -> bool:
        """Record one solution; returns True once the cap has been reached."""
        if self.status is not None:
            raise RuntimeError("sink is closed")
        sol = tuple(words)
        self.solutions.append(sol)
        if self.on_solution is not None:
            self.on_solution(sol)
        return self.full

    def close(self, status: TerminationStatus) -> None:
        self.status = status

    def __len__(self) -> int:
        return len(self.solutions)


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one solve: ordered solutions plus why the search stopped."""
    phrase: str
    constraints: Constraints
    solutions: Tuple[Solution, ...]
    status: TerminationStatus
    elapsed_s: float
    nodes: int            # Expand steps taken
    engine: str

    @property
    def completed(self) -> bool:
        return self.status is TerminationStatus.COMPLETED

    def lines(self) -> List[str]:
        """One line per solution, words separated by single spaces."""
        return [" ".join(sol) for sol in self.solutions]

    def to_dict(self) -> Dict:
        return {
            "phrase": self.phrase,
            "constraints": self.constraints.to_dict(),
            "status": self.status.value,
            "num_solutions": len(self.solutions),
            "elapsed_s": round(self.elapsed_s, 6),
            "nodes": self.nodes,
            "engine": self.engine,
        }

    def __len__(self) -> int:
        return len(self.solutions)
