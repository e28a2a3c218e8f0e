import random

from stripsort import Outcome, SortRun
from stripsort.player import Player, Sweep, shuffled_indices


def test_shuffled_indices_is_permutation():
    arr = shuffled_indices(50, random.Random(2))
    assert sorted(arr) == list(range(50))


def test_tick_paces_steps():
    run = SortRun("bubble", list(range(20, 0, -1)))
    player = Player(run, speed=1.0, steps_per_second=10)
    assert len(player.tick(0.5)) == 5
    # fractional budget carries over
    assert len(player.tick(0.05)) == 0
    assert len(player.tick(0.05)) == 1
    player.speed = 2.0
    assert len(player.tick(0.5)) == 10


def test_tick_stops_at_end():
    run = SortRun("bubble", [1, 0])
    player = Player(run, steps_per_second=100)
    steps = player.tick(1.0)
    assert len(steps) == 2
    assert player.done
    assert player.outcome is Outcome.SORTED
    assert player.tick(1.0) == []


def test_sweep():
    sweep = Sweep(10, per_second=20)
    assert sweep.tick(0.25) == [0, 1, 2, 3, 4]
    assert not sweep.done
    assert sweep.tick(10) == [5, 6, 7, 8, 9]
    assert sweep.done
    assert sweep.tick(1) == []
