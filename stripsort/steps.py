"""
Step snapshots and the per-run statistics counter.

Every sorting generator in this package yields ``Step`` objects. A step is
immutable: it holds a tuple copy of the array, never the live list.
"""
from typing import NamedTuple, Tuple


class SortStats:
    """
    Running counters for one sort run.

    One instance is created per run and handed down through every
    recursive helper, so all frames add to the same totals.
    """
    __slots__ = ('comparisons', 'array_accesses', 'swaps')

    def __init__(self):
        self.comparisons    = 0
        self.array_accesses = 0
        self.swaps          = 0

    def __repr__(self):
        return (f"SortStats(comparisons={self.comparisons}, "
                f"array_accesses={self.array_accesses}, swaps={self.swaps})")


class Step(NamedTuple):
    array:          Tuple[int, ...]
    comparing:      Tuple[int, ...] = ()
    swapping:       Tuple[int, ...] = ()
    comparisons:    int = 0
    array_accesses: int = 0
    swaps:          int = 0
    # trailing slots that only exist inside bitonic sort's padded buffer
    padding:        int = 0

    @property
    def public_length(self) -> int:
        return len(self.array) - self.padding

    @property
    def is_comparison(self) -> bool:
        return bool(self.comparing)

    @property
    def is_write(self) -> bool:
        return bool(self.swapping)

    def _pair_in_order(self):
        if len(self.comparing) != 2:
            return None
        a, b = sorted(self.comparing)
        return self.array[a] <= self.array[b]

    @property
    def correct_order(self) -> Tuple[int, ...]:
        """
        Compared indices whose slots are already in ascending order.

        Classification reads the slots as they are in ``array``. Sorts that
        compare against a held value (the insertion and shell sort key after
        its first shift, the cycle sort item after its first placement)
        name a slot standing in for that value. Once the slot stops holding
        it, the colour describes the slots rather than the comparison.
        """
        return self.comparing if self._pair_in_order() is True else ()

    @property
    def wrong_order(self) -> Tuple[int, ...]:
        """Compared indices whose values still need to be exchanged."""
        return self.comparing if self._pair_in_order() is False else ()


def _unique(indices):
    # a swap of i with itself names i once
    return tuple(dict.fromkeys(indices))


def compare(arr, stats, *indices, padding=0) -> Step:
    """Snapshot taken right after reading/comparing ``indices``."""
    return Step(tuple(arr), _unique(indices), (), stats.comparisons,
                stats.array_accesses, stats.swaps, padding)


def write(arr, stats, *indices, padding=0) -> Step:
    """Snapshot taken right after storing into ``indices``."""
    return Step(tuple(arr), (), _unique(indices), stats.comparisons,
                stats.array_accesses, stats.swaps, padding)
