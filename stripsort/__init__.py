"""
stripsort: slice a picture into strips, shuffle them, and watch (and hear)
a sorting algorithm put them back.

The sorting engine has no pygame dependency; ``stripsort.viewer`` and
``stripsort.audio`` are the only modules that touch the screen or speakers.
"""
from .algorithms import (ALGORITHMS, DETERMINISTIC, Algorithm, AlgorithmId,
                         UnknownAlgorithmError, get_algorithm, get_generator)
from .engine import Outcome, SortRun, run_sort, start
from .sorts import BOGO_SAFETY_LIMIT
from .steps import SortStats, Step

__version__ = "1.0.0"

__all__ = [
    "ALGORITHMS", "DETERMINISTIC", "Algorithm", "AlgorithmId", "UnknownAlgorithmError",
    "get_algorithm", "get_generator", "Outcome", "SortRun", "run_sort", "start",
    "BOGO_SAFETY_LIMIT", "SortStats", "Step",
]
