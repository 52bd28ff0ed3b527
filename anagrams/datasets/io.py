from __future__ import annotations
from pathlib import Path
from typing import Iterable, List

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_WORDLIST = DATA_DIR / "default_words.txt"


def read_lines(p: Path | str, encoding: str = "utf-8") -> List[str]:
    """
    Read a text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding=encoding).splitlines()]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    lines = list(lines)
    p.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return str(p)


def default_wordlist_path() -> Path:
    """Path of the word list bundled with the package."""
    return DEFAULT_WORDLIST
