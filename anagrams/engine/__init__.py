from .letters import LetterMultiset, normalize_word
from .constraints import Constraints, CandidatePlan, filter_candidates, parse_letters
from .validation import validate_phrase
from .errors import AnagramError, InvalidPhrase, InvalidConstraint, DictionaryLoadFailure

__all__ = [
    "LetterMultiset", "normalize_word",
    "Constraints", "CandidatePlan", "filter_candidates", "parse_letters",
    "validate_phrase",
    "AnagramError", "InvalidPhrase", "InvalidConstraint", "DictionaryLoadFailure",
]
