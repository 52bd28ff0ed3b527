"""
Run harness primitives.

- run_case:  solve one phrase with a given solver and return a flat summary.
- run_batch: solve many phrases in sequence with the same constraints.

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or future services without changes. Validation
errors (InvalidPhrase etc.) propagate to the caller unless `skip_invalid`
is set for a batch, in which case they are recorded on the row.
"""

from __future__ import annotations
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from anagrams.engine.constraints import Constraints
from anagrams.engine.errors import AnagramError
from anagrams.solvers.base import DEFAULT_ENGINE
from .io import describe_output_path, write_solutions


def run_case(
        solver,
        phrase: str,
        constraints: Constraints,
        *,
        engine: str = DEFAULT_ENGINE,
        output_base: Path | str | None = None,
) -> Dict:
    """
    Solve one phrase.

    Args:
        solver:      an AnagramSolver (anything with solve_with(phrase, constraints, ...))
        phrase:      text to anagram
        constraints: validated Constraints shared by the run
        engine:      registered engine id
        output_base: if given, write solutions to a descriptive file name
                     derived from it (see describe_output_path)

    Returns:
        dict with keys:
            phrase, engine, status, num_solutions, solutions, time_ms, nodes, output
    """
    t0 = time.perf_counter()
    result = solver.solve_with(phrase, constraints, engine=engine)
    dt_ms = (time.perf_counter() - t0) * 1000.0

    output = ""
    if output_base is not None:
        output = write_solutions(result, describe_output_path(output_base, phrase, constraints))

    return {
        "phrase": phrase,
        "engine": result.engine,
        "status": result.status.value,
        "num_solutions": len(result.solutions),
        "solutions": [list(s) for s in result.solutions],
        "time_ms": dt_ms,
        "nodes": result.nodes,
        "output": output,
    }


def run_batch(
        solver,
        phrases: Iterable[str],
        constraints: Constraints,
        *,
        engine: str = DEFAULT_ENGINE,
        output_base: Path | str | None = None,
        skip_invalid: bool = False,
        progress: Optional[Callable[[Iterable[str]], Iterable[str]]] = None,
) -> List[Dict]:
    """
    Run many phrases back-to-back with the same constraints.

    `progress` may wrap the phrase iterable (e.g. a tqdm constructor).
    Blank phrases are skipped.
    """
    pool = [p for p in phrases if p.strip()]
    iterator = progress(pool) if progress is not None else pool

    out: List[Dict] = []
    for phrase in iterator:
        try:
            r = run_case(solver, phrase, constraints, engine=engine, output_base=output_base)
        except AnagramError as e:
            if not skip_invalid:
                raise
            r = {"phrase": phrase, "engine": engine, "status": f"error: {e}", "num_solutions": 0,
                 "solutions": [], "time_ms": 0.0, "nodes": 0, "output": ""}
        out.append(r)
    return out
