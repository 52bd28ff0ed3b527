# apps/cli/run_batch.py
"""
Solve many phrases in one shot with shared constraints and progress.

Reads phrases from a text file (one per line) and writes to <outdir>/:
  - one solutions TXT per phrase (descriptive names)
  - run_<timestamp>.csv            summary row per phrase
  - run_<timestamp>_manifest.json  config, dictionary hashes, git commit
"""

from __future__ import annotations
import argparse, sys, time
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from anagrams.datasets.io import read_lines
from anagrams.engine import AnagramError
from anagrams.harness import run_batch
from anagrams.harness.io import DEFAULT_OUTPUT_FILE, write_csv, write_manifest, timestamp_id, \
    git_commit_or_unknown

from apps.cli.run import add_constraint_args, build_solver, constraints_from_args


def _progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


class _PlainProgress:
    """Throttled one-line progress on stderr (at most once per second)."""

    def __init__(self, items: List[str]):
        self.items = items

    def __iter__(self):
        total = len(self.items)
        start = time.time()
        last_print = 0.0
        for idx, item in enumerate(self.items, 1):
            yield item
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(
                    f"\r[{idx}/{total}] {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
                )
                sys.stderr.flush()
                last_print = now
        sys.stderr.write("\n")
        sys.stderr.flush()


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="anagrams: solve a file of phrases")
    ap.add_argument("phrases", help="text file with one phrase per line")
    add_constraint_args(ap)
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--skip-invalid", action="store_true",
                    help="record invalid phrases in the CSV instead of aborting")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    args = ap.parse_args(argv)

    try:
        phrases = read_lines(args.phrases)
    except FileNotFoundError:
        print(f"error: phrases file not found: {args.phrases}", file=sys.stderr)
        return 2

    mode = _progress_mode(args.progress)
    progress = None
    if mode == "bar":
        progress = lambda items: tqdm(items, ncols=80, desc="Solving", unit="phrase")  # noqa: E731
    elif mode == "plain":
        progress = _PlainProgress

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    try:
        constraints = constraints_from_args(args)
        solver, reports = build_solver(args)
        results = run_batch(
            solver, phrases, constraints,
            engine=args.engine,
            output_base=outdir / DEFAULT_OUTPUT_FILE,
            skip_invalid=args.skip_invalid,
            progress=progress,
        )
    except AnagramError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    run_id = timestamp_id()
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path))
    write_manifest({
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "constraints": constraints.to_dict(),
        "dictionaries": reports,
        "index": solver.index.stats(),
        "num_phrases": len(results),
        "results": [{k: v for k, v in r.items() if k != "solutions"} for r in results],
    }, str(manifest_path))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
