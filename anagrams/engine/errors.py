"""
Error taxonomy for the anagram solver.

All errors derive from ValueError so callers that already guard input
validation with `except ValueError` keep working. They are raised
synchronously, before any search begins. Timeouts and the solution cap are
NOT errors: they are reported as termination statuses on the result.
"""


class AnagramError(ValueError):
    """Base class for every validation failure raised by the solver."""


class InvalidPhrase(AnagramError):
    """The phrase has no usable letters (or letters outside a-z)."""


class InvalidConstraint(AnagramError):
    """A solve-time parameter is out of range or contradicts another one."""


class DictionaryLoadFailure(AnagramError):
    """A word list could not be read, or left the index with no usable words."""
