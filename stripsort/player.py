"""
Frame pacing for a ``SortRun``.

The run only advances when the player asks for a step; the player asks for
``steps_per_second * speed`` steps per second of wall time and carries the
fractional remainder into the next frame.
"""
import random

from .engine import Outcome, SortRun

STEPS_PER_SECOND = 120


def shuffled_indices(n, rng=None):
    arr = list(range(n))
    (rng or random).shuffle(arr)
    return arr


class Player:
    def __init__(self, run: SortRun, speed=1.0, steps_per_second=STEPS_PER_SECOND):
        self.run              = run
        self.speed            = speed
        self.steps_per_second = steps_per_second
        self._budget          = 0.0

    @property
    def done(self) -> bool:
        return self.run.done

    @property
    def outcome(self) -> Outcome:
        return self.run.outcome

    def tick(self, dt):
        """Advance by ``dt`` seconds; returns the steps due in this frame."""
        self._budget += dt * self.steps_per_second * self.speed
        due = int(self._budget)
        self._budget -= due
        steps = []
        for _ in range(due):
            step = self.run.advance()
            if step is None:
                break
            steps.append(step)
        return steps


class Sweep:
    """Left-to-right completion sweep over ``n`` slots, ``per_second`` slots/s."""

    def __init__(self, n, per_second):
        self.n          = n
        self.per_second = per_second
        self.index      = -1
        self._budget    = 0.0

    @property
    def done(self) -> bool:
        return self.index >= self.n - 1

    def tick(self, dt):
        """Advance; returns the slot indices newly covered in this frame."""
        self._budget += dt * self.per_second
        due = int(self._budget)
        self._budget -= due
        first = self.index + 1
        self.index = min(self.n - 1, self.index + due)
        return list(range(first, self.index + 1))
