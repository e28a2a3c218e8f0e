import random

import pytest

from stripsort import (BOGO_SAFETY_LIMIT, AlgorithmId, Outcome, SortRun, UnknownAlgorithmError,
                       get_algorithm, get_generator, run_sort, start)


def test_advance_one_event_at_a_time():
    arr = [3, 2, 1]
    run = SortRun(AlgorithmId.BUBBLE, arr)
    step = run.advance()
    assert step.comparing == (0, 1)
    # suspended: nothing has been written yet
    assert arr == [3, 2, 1]
    step = run.advance()
    assert step.swapping == (0, 1)
    assert arr == [2, 3, 1]
    assert run.steps == 2
    assert run.last is step


def test_finished_run_keeps_returning_none():
    run = SortRun("merge", [1, 0])
    assert run.drain() is Outcome.SORTED
    assert run.done
    assert run.advance() is None
    assert run.advance() is None
    assert list(run) == []


def test_empty_run_has_terminal_state():
    run = SortRun("heap", [])
    assert run.advance() is None
    assert run.outcome is Outcome.SORTED
    state = run.state
    assert state.array == ()
    assert state.comparing == () and state.swapping == ()
    assert (state.comparisons, state.array_accesses, state.swaps) == (0, 0, 0)


def test_state_tracks_last_step():
    run = SortRun("selection", [2, 0, 1])
    assert run.state.array == (2, 0, 1)
    step = run.advance()
    assert run.state.array == step.array
    assert run.state.comparisons == step.comparisons


def test_close_cancels_and_leaves_array():
    arr = [5, 4, 3, 2, 1]
    run = SortRun("insertion", arr)
    for _ in range(4):
        run.advance()
    snapshot = list(arr)
    run.close()
    assert run.outcome is Outcome.CANCELLED
    assert run.advance() is None
    assert arr == snapshot


@pytest.mark.parametrize("data", [[3, 2, 1, 0], [4, 3, 2, 1, 0]])
def test_close_mid_bitonic_leaves_last_step(data):
    arr = list(data)
    run = SortRun("bitonic", arr)
    run.advance()
    last = run.advance()
    assert last.is_write
    run.close()
    assert run.outcome is Outcome.CANCELLED
    assert arr == list(last.array[:last.public_length])
    assert sorted(arr) == sorted(data)


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        SortRun("sleep", [1, 2])
    with pytest.raises(KeyError):
        get_algorithm("nope")


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        SortRun("quick", [1, -1])


def test_registry_closed_and_complete():
    assert len(AlgorithmId) == 20
    for key in AlgorithmId:
        algo = get_algorithm(key.value)
        assert algo.id is key
        assert algo.name and algo.name_ko and algo.time_complexity
        assert 0 < algo.complexity_multiplier <= 1


def test_get_generator_threads_stats():
    arr = [1, 0]
    gen = get_generator("quick", arr)
    steps = list(gen)
    assert arr == [0, 1]
    assert steps[-1].swaps == 1


def test_start_and_run_sort():
    arr = [2, 0, 1]
    assert isinstance(start("comb", list(arr)), SortRun)
    assert run_sort("comb", arr) is Outcome.SORTED
    assert arr == [0, 1, 2]


def test_bogo_sorted_input_needs_no_shuffle():
    arr = list(range(1, 11))
    run = SortRun("bogo", arr)
    assert run.advance() is None
    assert run.outcome is Outcome.SORTED
    assert run.stats.swaps == 0
    assert run.stats.comparisons == 9


def test_bogo_sorts_small_input_with_seeded_rng():
    arr = [2, 0, 1]
    assert run_sort("bogo", arr, rng=random.Random(5)) is Outcome.SORTED
    assert arr == [0, 1, 2]


def test_bogo_gives_up_at_limit():
    arr = list(range(12, 0, -1))
    original = sorted(arr)
    run = SortRun("bogo", arr, rng=random.Random(0), limit=3)
    assert run.drain() is Outcome.GAVE_UP
    assert sorted(arr) == original
    assert len(arr) == 12


def test_bogo_default_limit():
    assert BOGO_SAFETY_LIMIT == 100000
