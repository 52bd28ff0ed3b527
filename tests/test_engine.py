import pytest
from anagrams.engine import (
    LetterMultiset, normalize_word, validate_phrase, Constraints, parse_letters,
    InvalidPhrase, InvalidConstraint,
)


# --- letter multisets ---
@pytest.mark.parametrize("text,letters", [
    ("Dormitory!", "dimoorrty"),
    ("dirty room", "dimoorrty"),
    ("A-n a.g R,a m", "aaagmnr"),
    ("   ", ""),
    ("123 ...", ""),
])
def test_from_text_ignores_non_letters(text, letters):
    assert LetterMultiset.from_text(text).letters() == letters


def test_contains_subtract_add():
    big = LetterMultiset.from_text("anagram")
    small = LetterMultiset.from_text("gram")
    assert big.contains(small) and small in big
    assert not small.contains(big)
    rest = big.subtract(small)
    assert rest.letters() == "aan"
    assert rest.add(small) == big
    assert rest.total() == 3 and len(rest) == 3
    assert big.count("A") == 3


def test_subtract_not_contained_raises():
    with pytest.raises(ValueError):
        LetterMultiset.from_text("cat").subtract(LetterMultiset.from_text("dog"))


def test_large_letter_counts():
    m = LetterMultiset.from_text("a" * 40000 + "b")
    assert m.count("a") == 40000 and m.total() == 40001
    assert m.contains(LetterMultiset.from_text("a" * 39999))


def test_is_empty_and_hash():
    assert LetterMultiset.from_text("...").is_empty()
    assert LetterMultiset.empty().is_empty()
    a, b = LetterMultiset.from_text("listen"), LetterMultiset.from_text("Silent")
    assert a == b and hash(a) == hash(b) and a.signature == b.signature
    assert len({a, b}) == 1


def test_counts_are_read_only():
    m = LetterMultiset.from_text("abc")
    with pytest.raises(ValueError):
        m.counts[0] = 5


def test_from_counts_validates():
    assert LetterMultiset.from_counts([1] + [0] * 25).letters() == "a"
    with pytest.raises(ValueError):
        LetterMultiset.from_counts([-1] + [0] * 25)
    with pytest.raises(ValueError):
        LetterMultiset.from_counts([1, 2, 3])


def test_normalize_word():
    assert normalize_word("  Don't ") == "dont"
    assert normalize_word("New York") == "newyork"


# --- phrase validation ---
@pytest.mark.parametrize("phrase", ["", "   ", "!!!", "12 34", "café", "naïve"])
def test_validate_phrase_rejects(phrase):
    with pytest.raises(InvalidPhrase):
        validate_phrase(phrase)


def test_validate_phrase_returns_multiset():
    assert validate_phrase("Dirty Room!") == LetterMultiset.from_text("dormitory")


# --- constraints ---
def test_parse_letters_forms():
    assert parse_letters(None) == frozenset()
    assert parse_letters("") == frozenset()
    assert parse_letters("TR") == frozenset("tr")
    assert parse_letters("t, r") == frozenset("tr")
    assert parse_letters(["T", "r"]) == frozenset("tr")
    with pytest.raises(InvalidConstraint):
        parse_letters("t1")


def test_constraints_defaults():
    c = Constraints.build()
    assert c.max_words == 4 and c.min_word_length == 2
    assert c.timeout_seconds == 30.0 and c.max_solutions == 20000
    assert c.must_start_with == frozenset()


@pytest.mark.parametrize("kwargs", [
    {"max_words": 0},
    {"max_words": -1},
    {"min_word_length": 0},
    {"timeout_seconds": -1},
    {"max_solutions": 0},
    {"max_solutions": 2.5},
    {"max_solutions": True},
    {"timeout_seconds": "5"},
    {"timeout_seconds": float("nan")},
    {"timeout_seconds": True},
    {"must_start_with": "t", "must_not_start_with": "st"},
    {"must_start_with": "tx", "can_only_ever_start_with": "tr"},
    {"can_only_ever_start_with": "ab", "must_not_start_with": "b"},
])
def test_constraints_reject_bad_settings(kwargs):
    with pytest.raises(InvalidConstraint):
        Constraints.build(**kwargs)


def test_constraints_allow_compatible_sets():
    c = Constraints.build(must_start_with="a", can_only_ever_start_with="ab")
    assert c.must_start_with == frozenset("a")
    c = Constraints.build(can_only_ever_start_with="ab", must_not_start_with="z")
    assert c.must_not_start_with == frozenset("z")


def test_constraints_describe_and_dict():
    c = Constraints.build(must_start_with="rt", max_words=3, min_word_length=1)
    assert c.describe() == "w3_l1_start-rt"
    d = c.to_dict()
    assert d["must_start_with"] == "rt" and d["max_words"] == 3


def test_unlimited_timeout_and_cap():
    c = Constraints.build(timeout_seconds=None, max_solutions=None)
    assert c.timeout_seconds is None and c.max_solutions is None
