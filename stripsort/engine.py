"""
Pull-driven sort runs.

A ``SortRun`` owns one algorithm generator and advances it one event at a
time. It never runs ahead: between two ``advance()`` calls the generator is
suspended and the array is exactly as the last step shows it.

    run = SortRun("quick", strips)
    for step in run:
        draw(step)
    run.outcome  # Outcome.SORTED
"""
import logging
from enum import Enum

from .algorithms import get_algorithm
from .steps import SortStats, Step

logger = logging.getLogger(__name__)


class Outcome(Enum):
    RUNNING   = "running"
    SORTED    = "sorted"
    GAVE_UP   = "gave_up"
    CANCELLED = "cancelled"


class SortRun:
    """
    One sort of one caller-owned list.

    The list is sorted in place and outlives the run. ``options`` are passed
    to the algorithm (e.g. ``rng``/``limit`` for bogo sort).
    """

    def __init__(self, algorithm, array, **options):
        if any(v < 0 for v in array):
            raise ValueError("strip indices must be non-negative")
        self.algorithm = get_algorithm(algorithm)
        self.array     = array
        self.length    = len(array)
        self.stats     = SortStats()
        self.steps     = 0
        self.last      = None
        self.outcome   = Outcome.RUNNING
        self._gen      = self.algorithm.sort(array, self.stats, **options)
        logger.debug("starting %s on %d strips", self.algorithm.name, self.length)

    @property
    def done(self) -> bool:
        return self.outcome is not Outcome.RUNNING

    def advance(self) -> Step | None:
        """Resume until the next step; None once the run has finished."""
        if self.done:
            return None
        try:
            step = next(self._gen)
        except StopIteration as stop:
            self.outcome = Outcome.GAVE_UP if stop.value is False else Outcome.SORTED
            logger.debug("%s finished (%s) after %d steps, %r",
                         self.algorithm.name, self.outcome.value, self.steps, self.stats)
            return None
        self.last = step
        self.steps += 1
        return step

    def __iter__(self):
        while True:
            step = self.advance()
            if step is None:
                return
            yield step

    def drain(self) -> Outcome:
        for _ in self:
            pass
        return self.outcome

    def close(self):
        """Abandon the run; the list keeps whatever state it has now."""
        if not self.done:
            self._gen.close()
            self.outcome = Outcome.CANCELLED

    @property
    def state(self) -> Step:
        """
        The current state as a step with no highlighted indices.

        Before the first step and after the last one this reflects the
        caller's list at its own length, so a finished run always has a
        well-formed terminal view even if it never yielded.
        """
        if self.last is not None and not self.done:
            arr, padding = self.last.array, self.last.padding
        else:
            arr, padding = tuple(self.array), 0
        return Step(arr, (), (), self.stats.comparisons,
                    self.stats.array_accesses, self.stats.swaps, padding)


def start(algorithm, array, **options) -> SortRun:
    return SortRun(algorithm, array, **options)


def run_sort(algorithm, array, **options) -> Outcome:
    """Sort ``array`` in place to completion and return the outcome."""
    return SortRun(algorithm, array, **options).drain()
