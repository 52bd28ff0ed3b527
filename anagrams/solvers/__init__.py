from .base import BaseEngine, REGISTRY, DEFAULT_ENGINE, register, create_engine, get_engine_ids

from . import backtrack  # noqa: F401
from . import stack  # noqa: F401

from .sink import SolutionSink, SolveResult, TerminationStatus
from .solver import AnagramSolver

__all__ = ["AnagramSolver", "SolveResult", "SolutionSink", "TerminationStatus",
           "BaseEngine", "create_engine", "get_engine_ids", "register", "DEFAULT_ENGINE"]
