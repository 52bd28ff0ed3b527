import pytest

from anagrams.solvers import AnagramSolver

WORDS = ["AN", "AGRAM", "ANAGRAM", "A", "GRAM", "RAN", "MAN"]


class FakeClock:
    """Deterministic clock: every call advances time by `step` seconds."""

    def __init__(self, step: float = 1.0):
        self.t = 0.0
        self.step = step

    def __call__(self) -> float:
        now = self.t
        self.t += self.step
        return now


@pytest.fixture
def solver():
    return AnagramSolver(words=WORDS)
