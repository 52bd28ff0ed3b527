# apps/cli/run.py
"""
CLI entry point for solving one phrase.

This script:
  1) Validates the dictionary file(s) (prints counts + SHA, skipped lines).
  2) Builds the solver (bundled word list unless --dict is given) and appends
     any --extra-dict lists.
  3) Solves the phrase under the requested constraints and writes:
       - TXT:  one solution per line, words space-separated, discovery order
       - JSON: optional manifest with config, dictionary hashes, git commit, etc.

Example:
    python -m apps.cli.run "dirty room" --max-words 2 --start dr
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from anagrams.datasets import validate_wordlist, pretty_summary, default_wordlist_path
from anagrams.engine import AnagramError, Constraints
from anagrams.engine.constraints import (
    DEFAULT_MAX_WORDS, DEFAULT_MIN_WORD_LENGTH, DEFAULT_TIMEOUT_SECONDS, DEFAULT_MAX_SOLUTIONS,
)
from anagrams.harness.io import (
    DEFAULT_OUTPUT_FILE, describe_output_path, write_manifest, write_solutions,
    timestamp_id, git_commit_or_unknown,
)
from anagrams.solvers import AnagramSolver, DEFAULT_ENGINE, get_engine_ids


def add_constraint_args(ap: argparse.ArgumentParser) -> None:
    """Flags shared by the single-phrase and batch CLIs, one per Constraints field."""
    ap.add_argument("--start", dest="must_start_with",
                    help="letters the FIRST word must start with (e.g. 'tr')")
    ap.add_argument("--only-start", dest="can_only_ever_start_with",
                    help="letters EVERY word must start with")
    ap.add_argument("--not-start", dest="must_not_start_with",
                    help="letters NO word may start with")
    ap.add_argument("--max-words", type=int, default=DEFAULT_MAX_WORDS,
                    help="maximum words per solution")
    ap.add_argument("--min-length", dest="min_word_length", type=int,
                    default=DEFAULT_MIN_WORD_LENGTH, help="minimum letters per word")
    ap.add_argument("--timeout", dest="timeout_seconds", type=float,
                    default=DEFAULT_TIMEOUT_SECONDS, help="wall-clock limit in seconds")
    ap.add_argument("--max-solutions", type=int, default=DEFAULT_MAX_SOLUTIONS,
                    help="stop after this many solutions")
    ap.add_argument("--engine", default=DEFAULT_ENGINE,
                    help=f"search engine id (one of: {', '.join(get_engine_ids())})")
    ap.add_argument("--dict", dest="dictionary",
                    help="word list to use instead of the bundled one")
    ap.add_argument("--extra-dict", action="append", default=[],
                    help="additional word list(s) appended to the dictionary (repeatable)")


def constraints_from_args(args: argparse.Namespace) -> Constraints:
    return Constraints.build(
        must_start_with=args.must_start_with,
        can_only_ever_start_with=args.can_only_ever_start_with,
        must_not_start_with=args.must_not_start_with,
        max_words=args.max_words,
        min_word_length=args.min_word_length,
        timeout_seconds=args.timeout_seconds,
        max_solutions=args.max_solutions,
    )


def build_solver(args: argparse.Namespace) -> tuple[AnagramSolver, List[dict]]:
    """
    Validate every dictionary file, print a one-liner per file, and build
    the solver. Returns (solver, validation reports).
    """
    paths = [args.dictionary or str(default_wordlist_path())] + list(args.extra_dict)
    reports = []
    for p in paths:
        rep = validate_wordlist(p)
        print(pretty_summary(rep))
        reports.append(rep)

    solver = AnagramSolver(paths[0])
    for p in paths[1:]:
        solver.load_dictionary_file(p)
    return solver, reports


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI args, build the solver, solve, and write outputs.
    """
    ap = argparse.ArgumentParser(description="anagrams: multi-word anagram solver")
    ap.add_argument("phrase", help="phrase to anagram (non-letters are ignored)")
    add_constraint_args(ap)
    ap.add_argument("--out", default=DEFAULT_OUTPUT_FILE,
                    help="output file; decorated with phrase + constraints unless --exact-out")
    ap.add_argument("--exact-out", action="store_true",
                    help="write to --out exactly as given")
    ap.add_argument("--show", type=int, default=10,
                    help="print the first K solutions to stdout (0 = none)")
    ap.add_argument("--manifest", action="store_true",
                    help="also write a JSON manifest next to the output file")
    args = ap.parse_args(argv)

    try:
        constraints = constraints_from_args(args)
        solver, reports = build_solver(args)
        result = solver.solve_with(args.phrase, constraints, engine=args.engine)
    except AnagramError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    out = Path(args.out) if args.exact_out else describe_output_path(
        args.out, args.phrase, constraints)
    write_solutions(result, out)

    for line in result.lines()[: max(0, args.show)]:
        print(line)
    print(f"{len(result)} solution(s) | status={result.status.value} "
          f"| {result.elapsed_s:.3f}s | nodes={result.nodes}")
    print(f"Wrote: {out}")

    if args.manifest:
        run_id = timestamp_id()
        manifest_path = out.with_name(f"{out.stem}_{run_id}_manifest.json")
        write_manifest({
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "dictionaries": reports,
            "index": solver.index.stats(),
            "result": result.to_dict(),
        }, str(manifest_path))
        print(f"Wrote: {manifest_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
