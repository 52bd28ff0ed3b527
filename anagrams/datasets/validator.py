"""
Word-list validator for the anagram solver.

What this module does:
- Inspect a dictionary file (one word per line) before it is loaded.
- Classify every line: usable, blank, or skipped (no letters a-z, or letters
  outside a-z such as accented characters).
- Count duplicates (by normalized letters) and compute SHA-256 of the raw file.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from anagrams.datasets import validate_wordlist, pretty_summary
    rep = validate_wordlist("anagrams/datasets/data/default_words.txt")
    print(pretty_summary(rep))

Duplicates are reported but do not fail validation: the index keeps them on
purpose, so a word listed twice is offered twice.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from anagrams.engine.letters import has_foreign_letters, normalize_word
from .io import read_lines


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class WordlistReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of USABLE words
    unique_count: int    # unique usable words (by normalized letters)
    blank_lines: int     # empty/whitespace-only lines (ignored by the loader)
    skipped_lines: int   # non-blank lines the loader would drop
    min_length: int      # shortest usable word (letters only)
    max_length: int      # longest usable word
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _scan(path: Path, encoding: str) -> Tuple[List[str], int, int]:
    """
    Walk the file with the same line splitting (read_lines) and rules as
    DictionaryIndex.load_file.

    Returns:
      (usable_keys, blank_count, skipped_count)
    """
    usable: List[str] = []
    blank = skipped = 0

    for raw in read_lines(path, encoding=encoding):
        w = raw.strip()
        if not w:
            blank += 1
            continue
        key = normalize_word(w)
        if has_foreign_letters(w) or not key:
            skipped += 1
            continue
        usable.append(key)

    return usable, blank, skipped


# -----------------------------
# Public API
# -----------------------------

def validate_wordlist(path: str, encoding: str = "utf-8") -> Dict:
    """
    Validate a one-word-per-line dictionary file.

    Parameters
    ----------
    path : str
        Path to the word list.
    encoding : str
        Text encoding used to read it.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see WordlistReport schema) with
        counts, SHA-256, length range, `passed` (file exists, decodes and
        holds at least one usable word) and `issues`.
    """
    p = Path(path)
    if not p.exists():
        rep = WordlistReport(str(path), False, 0, 0, 0, 0, 0, 0, "", False,
                             [f"dictionary file not found: {path}"])
        return asdict(rep)

    issues: List[str] = []
    try:
        usable, blank, skipped = _scan(p, encoding)
    except UnicodeDecodeError as e:
        rep = WordlistReport(str(p), True, 0, 0, 0, 0, 0, 0, _sha256_file(p), False,
                             [f"cannot decode as {encoding}: {e}"])
        return asdict(rep)

    lengths = [len(k) for k in usable]
    unique = len(set(usable))

    if not usable:
        issues.append("dictionary contains 0 usable words")
    if skipped:
        issues.append(f"{skipped} line(s) skipped (no letters a-z or letters outside a-z)")
    if unique != len(usable):
        issues.append(f"{len(usable) - unique} duplicate word(s) kept as separate entries")

    rep = WordlistReport(
        path=str(p),
        exists=True,
        count=len(usable),
        unique_count=unique,
        blank_lines=blank,
        skipped_lines=skipped,
        min_length=min(lengths) if lengths else 0,
        max_length=max(lengths) if lengths else 0,
        sha256=_sha256_file(p),
        passed=bool(usable),
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        words.txt | words=1034 (uniq=1030, len 1-12, sha=abc123...) | skipped=2 | OK
    """
    status = "OK" if report["passed"] else "FAIL"
    sha = (report.get("sha256") or "")[:12]
    return (
        f"{Path(report['path']).name} | words={report['count']} "
        f"(uniq={report['unique_count']}, len {report['min_length']}-{report['max_length']}, "
        f"sha={sha}) | skipped={report['skipped_lines']} | {status}"
    )
