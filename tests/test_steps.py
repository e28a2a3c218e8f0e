import random

import pytest

from stripsort import ALGORITHMS, SortRun, SortStats, Step

IDS = [a.id.value for a in ALGORITHMS]

INPUTS = [
    [],
    [42],
    [2, 1],
    [3, 1, 4, 1, 5, 9, 2, 6],
    [0, 7, 3, 3, 12, 5, 0, 1, 9, 4],
]


def _run(key, data):
    options = {"rng": random.Random(1), "limit": 200} if key == "bogo" else {}
    arr = list(data)
    run = SortRun(key, arr, **options)
    return run, list(run)


@pytest.mark.parametrize("key", IDS)
@pytest.mark.parametrize("data", INPUTS)
def test_step_invariants(key, data):
    run, steps = _run(key, data)
    prev = (0, 0, 0)
    for step in steps:
        # exactly one of the two highlight sets is populated
        assert bool(step.comparing) != bool(step.swapping)
        for i in step.comparing + step.swapping:
            assert 0 <= i < len(step.array)
        assert len(step.comparing) <= 2
        assert step.public_length == len(data)
        stats = (step.comparisons, step.array_accesses, step.swaps)
        assert all(a >= b for a, b in zip(stats, prev))
        prev = stats
    final = (run.stats.comparisons, run.stats.array_accesses, run.stats.swaps)
    if len(data) <= 1:
        assert steps == []
        assert final == (0, 0, 0)
    else:
        assert any(final)


@pytest.mark.parametrize("key", IDS)
def test_steps_are_copies(key):
    arr = [4, 2, 3, 0, 1]
    run = SortRun(key, arr, **({"rng": random.Random(3), "limit": 50} if key == "bogo" else {}))
    first = run.advance()
    assert isinstance(first.array, tuple)
    snapshot = first.array
    run.drain()
    assert first.array == snapshot


def test_merge_sort_first_step():
    arr = [3, 1, 4, 1, 5, 9, 2, 6]
    step = SortRun("merge", arr).advance()
    assert len(step.array) == 8
    assert step.comparing == (0, 1)
    assert step.swapping == ()
    assert isinstance(step.comparisons, int)
    assert isinstance(step.array_accesses, int)
    assert isinstance(step.swaps, int)


def test_comparison_followed_by_write():
    arr = [2, 1]
    steps = list(SortRun("bubble", arr))
    assert [bool(s.comparing) for s in steps] == [True, False]
    assert steps[0].comparing == (0, 1)
    assert steps[1].swapping == (0, 1)
    assert steps[1].array == (1, 2)


def test_order_classification():
    s = Step((1, 5, 3), comparing=(0, 1))
    assert s.correct_order == (0, 1)
    assert s.wrong_order == ()
    s = Step((1, 5, 3), comparing=(2, 1))
    assert s.correct_order == ()
    assert s.wrong_order == (2, 1)
    assert Step((1,), comparing=(0,)).correct_order == ()
    assert Step((1, 2), swapping=(0, 1)).wrong_order == ()


def test_stats_repr():
    stats = SortStats()
    stats.comparisons += 2
    assert "comparisons=2" in repr(stats)
