"""
I/O utilities for solve runs.

Responsibilities:
- write_solutions:      plain text, one solution per line, words space-separated,
                        in discovery order.
- describe_output_path: decorate a base file name with the phrase and constraints
                        so runs with different settings don't overwrite each other.
- write_csv:            one summary row per phrase for batch runs.
- write_manifest:       dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:         stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt

from anagrams.datasets.io import write_lines
from anagrams.engine.letters import normalize_word

DEFAULT_OUTPUT_FILE = "anagram_solutions.txt"

# keep generated file names reasonably short
_MAX_SLUG = 40


def write_solutions(result, path: Path | str) -> str:
    """
    Write a SolveResult's solutions to `path`, one per line.
    Returns the path written (string).
    """
    return write_lines(result.lines(), path)


def describe_output_path(base: Path | str, phrase: str, constraints) -> Path:
    """
    Insert the phrase letters and a constraint tag before the suffix.

    Example:
      describe_output_path("out/anagram_solutions.txt", "Dirty Room", c)
        -> out/anagram_solutions_dirtyroom_w4_l2.txt
    """
    base = Path(base)
    slug = normalize_word(phrase)[:_MAX_SLUG] or "phrase"
    suffix = base.suffix or ".txt"
    return base.with_name(f"{base.stem}_{slug}_{constraints.describe()}{suffix}")


def write_csv(results: List[Dict], path: str) -> str:
    """
    Serialize a batch of solve summaries to CSV.

    Schema (columns):
      phrase, status, num_solutions, time_ms, nodes, first_solution, output

    Args:
      results : list of dicts returned by the harness per phrase.
      path    : output CSV path.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["phrase", "status", "num_solutions", "time_ms", "nodes",
              "first_solution", "output"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            sols = r.get("solutions", [])
            w.writerow({
                "phrase": r["phrase"],
                "status": r["status"],
                "num_solutions": r["num_solutions"],
                "time_ms": round(float(r["time_ms"]), 3),
                "nodes": r.get("nodes", 0),
                "first_solution": " ".join(sols[0]) if sols else "",
                "output": r.get("output", ""),
            })

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dictionary validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (phrase, constraints, dictionary paths, engine)
      - dictionaries: output of datasets.validate_wordlist(...) per file
      - results: per-phrase summaries
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
