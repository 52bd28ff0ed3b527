from pathlib import Path

import numpy as np
import pytest

from anagrams.datasets import DictionaryIndex, validate_wordlist, pretty_summary, default_wordlist_path
from anagrams.engine import Constraints, LetterMultiset, DictionaryLoadFailure, filter_candidates

from conftest import WORDS


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


# --- index ---
def test_load_skips_blank_and_foreign_words():
    idx = DictionaryIndex()
    added = idx.load(["Stone", "", "   ", "café", "123", "don't"])
    assert added == 2
    assert [e.word for e in idx] == ["Stone", "don't"]
    e = idx[0]
    assert e.key == "stone" and e.length == 5 and e.first_letter == "s" and e.position == 0
    assert idx[1].key == "dont" and idx[1].length == 4


def test_load_accepts_text_block():
    idx = DictionaryIndex()
    assert idx.load("tea\neat\n\nate\n") == 3


def test_duplicates_are_kept_across_loads():
    idx = DictionaryIndex(["stone", "notes"])
    idx.load(["stone"])
    assert len(idx) == 3
    assert [e.word for e in idx.anagrams_of("onset")] == ["stone", "notes", "stone"]
    assert idx.stats() == {"entries": 3, "unique_words": 2, "min_length": 5, "max_length": 5}


def test_add_word():
    idx = DictionaryIndex()
    assert idx.add_word("Tea") is True
    assert idx.add_word("  ") is False
    assert [e.word for e in idx] == ["Tea"]
    assert list(idx.by_first_letter) == ["t"]


def test_snapshot_ignores_later_loads():
    idx = DictionaryIndex(["stone"])
    snap = idx.snapshot()
    idx.load(["notes", "tones"])
    sig = LetterMultiset.from_text("stone").signature
    assert len(snap) == 1 and snap.matrix.shape == (1, 26)
    assert snap.with_signature(sig) == [0]
    assert idx.snapshot().with_signature(sig) == [0, 1, 2]
    with pytest.raises(IndexError):
        snap.entry(1)


def test_index_grows_past_initial_capacity():
    idx = DictionaryIndex()
    snap = None
    for i in range(DictionaryIndex.INITIAL_CAPACITY + 10):
        idx.add_word("ab" if i % 2 else "ba")
        if i == 5:
            snap = idx.snapshot()
    assert len(idx) == DictionaryIndex.INITIAL_CAPACITY + 10
    assert idx.snapshot().matrix[-1].sum() == 2
    assert len(snap) == 6 and snap.word(5) == "ab"


def test_candidates_for_budget_and_rules():
    idx = DictionaryIndex(WORDS)
    budget = LetterMultiset.from_text("anagram")
    c = Constraints.build(min_word_length=2)
    assert [e.word for e in idx.candidates_for(budget, c)] == \
        ["AN", "AGRAM", "ANAGRAM", "GRAM", "RAN", "MAN"]

    c = Constraints.build(min_word_length=1, must_start_with="g")
    assert [e.word for e in idx.candidates_for(budget, c, first=True)] == ["GRAM"]
    assert len(idx.candidates_for(budget, c)) == 7

    small = LetterMultiset.from_text("man")
    assert [e.word for e in idx.candidates_for(small, Constraints.build(min_word_length=1))] == \
        ["AN", "A", "MAN"]


def test_load_file_errors(tmp_path: Path):
    idx = DictionaryIndex()
    with pytest.raises(DictionaryLoadFailure):
        idx.load_file(tmp_path / "missing.txt")
    empty = tmp_path / "empty.txt"
    _write(empty, ["", "  ", "..."])
    with pytest.raises(DictionaryLoadFailure):
        idx.load_file(empty)
    assert len(idx) == 0


def test_load_file_appends(tmp_path: Path):
    p = tmp_path / "w.txt"
    _write(p, ["tea", "eat"])
    idx = DictionaryIndex(["ate"])
    assert idx.load_file(p) == 2
    assert [e.word for e in idx] == ["ate", "tea", "eat"]


# --- constraint filter ---
def test_filter_candidates_positions():
    idx = DictionaryIndex(WORDS)
    target = LetterMultiset.from_text("anagram").counts

    plan = filter_candidates(idx.snapshot(), target, Constraints.build(min_word_length=1))
    assert plan.first_position.tolist() == list(range(7))
    assert plan.first_position is plan.other_position

    plan = filter_candidates(idx.snapshot(), target,
                             Constraints.build(min_word_length=1, must_start_with="gr"))
    assert plan.first_position.tolist() == [4, 5]
    assert plan.other_position.tolist() == list(range(7))

    plan = filter_candidates(idx.snapshot(), target,
                             Constraints.build(min_word_length=1, can_only_ever_start_with="a"))
    assert plan.first_position.tolist() == plan.other_position.tolist() == [0, 1, 2, 3]

    plan = filter_candidates(idx.snapshot(), target,
                             Constraints.build(min_word_length=3, must_not_start_with="r"))
    assert plan.other_position.tolist() == [1, 2, 4, 6]

    plan = filter_candidates(idx.snapshot(), LetterMultiset.from_text("ran").counts,
                             Constraints.build(min_word_length=1))
    assert plan.other_position.tolist() == [0, 3, 5]
    assert isinstance(plan.other_position, np.ndarray)


# --- validator ---
def test_validate_wordlist_happy_path(tmp_path: Path):
    p = tmp_path / "words.txt"
    _write(p, ["stone", "notes", "tea"])
    rep = validate_wordlist(str(p))
    assert rep["passed"] is True
    assert rep["count"] == 3 and rep["min_length"] == 3 and rep["max_length"] == 5
    assert rep["issues"] == []
    s = pretty_summary(rep)
    assert "words=3" in s and s.endswith("OK")


def test_validate_wordlist_flags_skips_and_duplicates(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("stone\n\ncafé\nstone\n???\n", encoding="utf-8")
    rep = validate_wordlist(str(p))
    assert rep["passed"] is True
    assert rep["blank_lines"] == 1 and rep["skipped_lines"] == 2
    assert rep["count"] == 2 and rep["unique_count"] == 1
    assert any("skipped" in msg for msg in rep["issues"])
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_wordlist_splits_lines_like_the_loader(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("stone\x0bnotes\u2028tea\n", encoding="utf-8")
    rep = validate_wordlist(str(p))
    assert rep["count"] == 3 and rep["max_length"] == 5
    assert DictionaryIndex().load_file(p) == rep["count"]


def test_validate_wordlist_missing_or_empty(tmp_path: Path):
    rep = validate_wordlist(str(tmp_path / "nope.txt"))
    assert rep["passed"] is False and rep["exists"] is False
    empty = tmp_path / "empty.txt"
    empty.write_text("\n\n", encoding="utf-8")
    rep = validate_wordlist(str(empty))
    assert rep["passed"] is False
    assert "FAIL" in pretty_summary(rep)


def test_bundled_wordlist_is_valid():
    rep = validate_wordlist(str(default_wordlist_path()))
    assert rep["passed"] is True and rep["count"] > 500
