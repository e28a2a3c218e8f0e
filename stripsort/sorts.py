"""
Instrumented sorting algorithms.

Every function here is a generator that sorts ``arr`` in place and yields a
``Step`` right after each comparison and right after each write. A comparison
and a write are never reported by the same step.

Signature: ``sort(arr, stats=None)``. All recursive helpers receive the same
``SortStats`` so the counters of one run only ever grow. Lists of length 0 or
1 finish immediately without yielding.
"""
import logging
import math
import random

from .steps import SortStats, compare, write

logger = logging.getLogger(__name__)

# Bogo sort gives up after this many shuffles.
BOGO_SAFETY_LIMIT = 100000

RADIX = 10


# ============================================================
# ================== SIMPLE COMPARISON SORTS =================
# ============================================================

def selection_sort(arr, stats=None):
    stats = stats or SortStats()
    n = len(arr)
    for i in range(n - 1):
        mi = i
        stats.array_accesses += 1
        for j in range(i + 1, n):
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, mi, j)
            if arr[j] < arr[mi]:
                mi = j
        if mi != i:
            arr[i], arr[mi] = arr[mi], arr[i]
            stats.array_accesses += 4
            stats.swaps += 1
            yield write(arr, stats, i, mi)


def insertion_sort(arr, stats=None):
    stats = stats or SortStats()
    for i in range(1, len(arr)):
        key = arr[i]
        stats.array_accesses += 1
        j = i - 1
        while j >= 0:
            stats.comparisons += 1
            stats.array_accesses += 1
            yield compare(arr, stats, j, j + 1)
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            stats.array_accesses += 2
            stats.swaps += 1
            yield write(arr, stats, j + 1)
            j -= 1
        if j + 1 != i:
            arr[j + 1] = key
            stats.array_accesses += 1
            stats.swaps += 1
            yield write(arr, stats, j + 1)


def binary_insertion_sort(arr, stats=None):
    """Insertion sort that finds the slot by binary search over ``arr[:i]``."""
    stats = stats or SortStats()
    for i in range(1, len(arr)):
        key = arr[i]
        stats.array_accesses += 1
        lo, hi = 0, i - 1
        while lo <= hi:
            mid = (lo + hi) // 2
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, mid, i)
            if arr[mid] > key:
                hi = mid - 1
            else:
                lo = mid + 1
        for j in range(i - 1, lo - 1, -1):
            arr[j + 1] = arr[j]
            stats.array_accesses += 2
            stats.swaps += 1
            yield write(arr, stats, j + 1)
        if lo != i:
            arr[lo] = key
            stats.array_accesses += 1
            yield write(arr, stats, lo)


def bubble_sort(arr, stats=None):
    stats = stats or SortStats()
    n = len(arr)
    for i in range(n - 1):
        for j in range(n - i - 1):
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, j, j + 1)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                stats.array_accesses += 4
                stats.swaps += 1
                yield write(arr, stats, j, j + 1)


def _compare_exchange(arr, stats, i, j):
    """Compare ``arr[i]`` with ``arr[j]`` (i < j) and swap if out of order.

    Returns True when a swap happened.
    """
    stats.comparisons += 1
    stats.array_accesses += 2
    yield compare(arr, stats, i, j)
    if arr[i] > arr[j]:
        arr[i], arr[j] = arr[j], arr[i]
        stats.array_accesses += 4
        stats.swaps += 1
        yield write(arr, stats, i, j)
        return True
    return False


def cocktail_sort(arr, stats=None):
    stats = stats or SortStats()
    lo, hi = 0, len(arr) - 1
    swapped = True
    while swapped:
        swapped = False
        for i in range(lo, hi):
            if (yield from _compare_exchange(arr, stats, i, i + 1)):
                swapped = True
        if not swapped:
            break
        swapped = False
        hi -= 1
        for i in range(hi - 1, lo - 1, -1):
            if (yield from _compare_exchange(arr, stats, i, i + 1)):
                swapped = True
        lo += 1


def gnome_sort(arr, stats=None):
    stats = stats or SortStats()
    i = 1
    while i < len(arr):
        if i == 0:
            i = 1
            continue
        stats.comparisons += 1
        stats.array_accesses += 2
        yield compare(arr, stats, i - 1, i)
        if arr[i] >= arr[i - 1]:
            i += 1
        else:
            arr[i], arr[i - 1] = arr[i - 1], arr[i]
            stats.array_accesses += 4
            stats.swaps += 1
            yield write(arr, stats, i - 1, i)
            i -= 1


def comb_sort(arr, stats=None, shrink=1.3):
    stats = stats or SortStats()
    n, gap = len(arr), len(arr)
    done = n <= 1
    while not done:
        gap = int(gap / shrink)
        if gap <= 1:
            gap = 1
            done = True
        for i in range(n - gap):
            if (yield from _compare_exchange(arr, stats, i, i + gap)):
                done = False


def shell_sort(arr, stats=None):
    stats = stats or SortStats()
    n = len(arr)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            t = arr[i]
            stats.array_accesses += 1
            j = i
            while j >= gap:
                stats.comparisons += 1
                stats.array_accesses += 2
                yield compare(arr, stats, j - gap, j)
                if arr[j - gap] <= t:
                    break
                arr[j] = arr[j - gap]
                stats.array_accesses += 2
                stats.swaps += 1
                yield write(arr, stats, j)
                j -= gap
            if j != i:
                arr[j] = t
                stats.array_accesses += 1
                yield write(arr, stats, j)
        gap //= 2


def odd_even_sort(arr, stats=None):
    stats = stats or SortStats()
    n = len(arr)
    done = n <= 1
    while not done:
        done = True
        for start in (1, 0):
            for i in range(start, n - 1, 2):
                if (yield from _compare_exchange(arr, stats, i, i + 1)):
                    done = False


def cycle_sort(arr, stats=None):
    """
    Cycle sort writes every element at most once.

    Each cycle rescans ``arr[cs+1:]`` to count smaller items (one comparison
    step per scanned element) and writes only when an item actually lands
    in a new slot.
    """
    stats = stats or SortStats()
    n = len(arr)
    for cs in range(n - 1):
        item = arr[cs]
        stats.array_accesses += 1
        pos = yield from _cycle_position(arr, stats, cs, item)
        if pos == cs:
            continue
        pos = yield from _skip_duplicates(arr, stats, cs, pos, item)
        arr[pos], item = item, arr[pos]
        stats.array_accesses += 2
        stats.swaps += 1
        yield write(arr, stats, pos)
        while pos != cs:
            pos = yield from _cycle_position(arr, stats, cs, item)
            pos = yield from _skip_duplicates(arr, stats, cs, pos, item)
            arr[pos], item = item, arr[pos]
            stats.array_accesses += 2
            stats.swaps += 1
            yield write(arr, stats, pos)


def _cycle_position(arr, stats, cs, item):
    pos = cs
    for i in range(cs + 1, len(arr)):
        stats.comparisons += 1
        stats.array_accesses += 2
        yield compare(arr, stats, cs, i)
        if arr[i] < item:
            pos += 1
    return pos


def _skip_duplicates(arr, stats, cs, pos, item):
    while True:
        stats.comparisons += 1
        stats.array_accesses += 1
        yield compare(arr, stats, cs, pos)
        if arr[pos] != item:
            return pos
        pos += 1


def pancake_sort(arr, stats=None):
    stats = stats or SortStats()

    def flip(k):
        lo, hi = 0, k
        while lo < hi:
            arr[lo], arr[hi] = arr[hi], arr[lo]
            stats.array_accesses += 4
            stats.swaps += 1
            yield write(arr, stats, lo, hi)
            lo += 1
            hi -= 1

    for size in range(len(arr), 1, -1):
        mi = 0
        for i in range(1, size):
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, mi, i)
            if arr[i] > arr[mi]:
                mi = i
        if mi != size - 1:
            yield from flip(mi)
            yield from flip(size - 1)


# ============================================================
# ================ DIVIDE AND CONQUER SORTS ==================
# ============================================================

def merge_sort(arr, stats=None):
    stats = stats or SortStats()
    yield from _merge_sort(arr, 0, len(arr) - 1, stats)


def _merge_sort(arr, lo, hi, stats):
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    yield from _merge_sort(arr, lo, mid, stats)
    yield from _merge_sort(arr, mid + 1, hi, stats)
    yield from _merge(arr, lo, mid, hi, stats)


def _merge(arr, lo, mid, hi, stats):
    left, right = arr[lo:mid + 1], arr[mid + 1:hi + 1]
    stats.array_accesses += len(left) + len(right)
    i = j = 0
    k = lo
    while i < len(left) and j < len(right):
        stats.comparisons += 1
        stats.array_accesses += 2
        yield compare(arr, stats, lo + i, mid + 1 + j)
        if left[i] <= right[j]:
            arr[k] = left[i]
            i += 1
        else:
            arr[k] = right[j]
            j += 1
        stats.array_accesses += 1
        stats.swaps += 1
        yield write(arr, stats, k)
        k += 1
    for v in left[i:] + right[j:]:
        arr[k] = v
        stats.array_accesses += 1
        stats.swaps += 1
        yield write(arr, stats, k)
        k += 1


def quick_sort(arr, stats=None):
    stats = stats or SortStats()
    yield from _quick_sort(arr, 0, len(arr) - 1, stats)


def _quick_sort(arr, lo, hi, stats):
    if lo < hi:
        p = yield from _partition(arr, lo, hi, stats)
        yield from _quick_sort(arr, lo, p - 1, stats)
        yield from _quick_sort(arr, p + 1, hi, stats)


def _partition(arr, lo, hi, stats):
    """Lomuto partition around ``arr[hi]``; returns the pivot's final index."""
    pivot = arr[hi]
    stats.array_accesses += 1
    i = lo - 1
    for j in range(lo, hi):
        stats.comparisons += 1
        stats.array_accesses += 2
        yield compare(arr, stats, j, hi)
        if arr[j] < pivot:
            i += 1
            if i != j:
                arr[i], arr[j] = arr[j], arr[i]
                stats.array_accesses += 4
                stats.swaps += 1
                yield write(arr, stats, i, j)
    if i + 1 != hi:
        arr[i + 1], arr[hi] = arr[hi], arr[i + 1]
        stats.array_accesses += 4
        stats.swaps += 1
        yield write(arr, stats, i + 1, hi)
    return i + 1


def heap_sort(arr, stats=None):
    stats = stats or SortStats()
    n = len(arr)
    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(arr, n, i, stats)
    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        stats.array_accesses += 4
        stats.swaps += 1
        yield write(arr, stats, 0, end)
        yield from _heapify(arr, end, 0, stats)


def _heapify(arr, size, i, stats):
    largest = i
    for child in (2 * i + 1, 2 * i + 2):
        if child < size:
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, largest, child)
            if arr[child] > arr[largest]:
                largest = child
    if largest != i:
        arr[i], arr[largest] = arr[largest], arr[i]
        stats.array_accesses += 4
        stats.swaps += 1
        yield write(arr, stats, i, largest)
        yield from _heapify(arr, size, largest, stats)


def bitonic_sort(arr, stats=None):
    """
    Bitonic sorting network over a power-of-two list.

    Inputs whose length is not a power of two are padded in place with
    ``max+1, max+2, ...``. Steps taken while padded carry ``padding`` = number
    of pad slots so a viewer can hide them. The pad is cut off again when the
    network finishes or the generator is closed early; a run closed while
    padded keeps the first ``n`` slots of its last step, pad values included.
    A finished padded run ends with one write step at the original length
    naming the slots it changed (every slot if it changed none).
    """
    stats = stats or SortStats()
    n = len(arr)
    if n <= 1:
        return
    size = 1
    while size < n:
        size *= 2
    pad = size - n
    start = list(arr)
    top = max(arr) + 1
    stats.array_accesses += n
    arr.extend(top + k for k in range(pad))
    try:
        yield from _bitonic_sort(arr, 0, size, True, stats, pad)
    finally:
        del arr[n:]
    assert len(arr) == n and all(v < top for v in arr)
    if pad:
        changed = [i for i in range(n) if arr[i] != start[i]]
        yield write(arr, stats, *(changed or range(n)))


def _bitonic_sort(arr, lo, count, ascending, stats, pad):
    if count > 1:
        k = count // 2
        yield from _bitonic_sort(arr, lo, k, True, stats, pad)
        yield from _bitonic_sort(arr, lo + k, k, False, stats, pad)
        yield from _bitonic_merge(arr, lo, count, ascending, stats, pad)


def _bitonic_merge(arr, lo, count, ascending, stats, pad):
    if count > 1:
        k = count // 2
        for i in range(lo, lo + k):
            stats.comparisons += 1
            stats.array_accesses += 2
            yield compare(arr, stats, i, i + k, padding=pad)
            if (arr[i] > arr[i + k]) == ascending:
                arr[i], arr[i + k] = arr[i + k], arr[i]
                stats.array_accesses += 4
                stats.swaps += 1
                yield write(arr, stats, i, i + k, padding=pad)
        yield from _bitonic_merge(arr, lo, k, ascending, stats, pad)
        yield from _bitonic_merge(arr, lo + k, k, ascending, stats, pad)


# ============================================================
# ================== DISTRIBUTION SORTS ======================
# ============================================================

def counting_sort(arr, stats=None):
    """
    Stable counting sort over ``max - min + 1`` counters.

    Memory grows with the value range, not with ``len(arr)``.
    """
    stats = stats or SortStats()
    n = len(arr)
    if n <= 1:
        return
    lo, hi = min(arr), max(arr)
    stats.array_accesses += n * 2
    count = [0] * (hi - lo + 1)
    for i in range(n):
        count[arr[i] - lo] += 1
        stats.array_accesses += 1
        yield compare(arr, stats, i)
    for d in range(1, len(count)):
        count[d] += count[d - 1]
    out = [0] * n
    for i in range(n - 1, -1, -1):
        d = arr[i] - lo
        stats.array_accesses += 1
        out[count[d] - 1] = arr[i]
        count[d] -= 1
    yield from _copy_back(arr, out, stats)


def _copy_back(arr, out, stats):
    for i, v in enumerate(out):
        arr[i] = v
        stats.array_accesses += 1
        stats.swaps += 1
        yield write(arr, stats, i)


def _counting_radix(arr, exp, base, stats):
    n = len(arr)
    count = [0] * base
    for i in range(n):
        count[(arr[i] // exp) % base] += 1
        stats.array_accesses += 1
        yield compare(arr, stats, i)
    for d in range(1, base):
        count[d] += count[d - 1]
    out = [0] * n
    for i in range(n - 1, -1, -1):
        d = (arr[i] // exp) % base
        stats.array_accesses += 1
        out[count[d] - 1] = arr[i]
        count[d] -= 1
    yield from _copy_back(arr, out, stats)


def lsd_radix_sort(arr, stats=None, base=RADIX):
    stats = stats or SortStats()
    if len(arr) <= 1:
        return
    mv, exp = max(arr), 1
    stats.array_accesses += len(arr)
    while mv // exp > 0:
        yield from _counting_radix(arr, exp, base, stats)
        exp *= base


def msd_radix_sort(arr, stats=None, base=RADIX):
    stats = stats or SortStats()
    if len(arr) <= 1:
        return
    mv, exp = max(arr), 1
    stats.array_accesses += len(arr)
    while mv // exp >= base:
        exp *= base
    yield from _msd_helper(arr, 0, len(arr), exp, base, stats)


def _msd_helper(arr, lo, hi, exp, base, stats):
    """Bucket ``arr[lo:hi]`` by the digit worth ``exp`` and recurse on ``exp // base``."""
    if hi - lo <= 1 or exp == 0:
        return
    buckets = [[] for _ in range(base)]
    for i in range(lo, hi):
        buckets[(arr[i] // exp) % base].append(arr[i])
        stats.array_accesses += 1
        yield compare(arr, stats, i)
    i = lo
    for bk in buckets:
        for v in bk:
            arr[i] = v
            stats.array_accesses += 1
            stats.swaps += 1
            yield write(arr, stats, i)
            i += 1
    i = lo
    for bk in buckets:
        if len(bk) > 1:
            yield from _msd_helper(arr, i, i + len(bk), exp // base, base, stats)
        i += len(bk)


def bucket_sort(arr, stats=None):
    """
    Scatter into ``ceil(sqrt(n))`` value-range buckets, insertion sort each
    bucket privately, then write the buckets back in order.

    Comparisons inside a bucket are counted but produce no steps; only the
    distribution reads and the final writes are shown.
    """
    stats = stats or SortStats()
    n = len(arr)
    if n <= 1:
        return
    lo, hi = min(arr), max(arr)
    stats.array_accesses += n * 2
    count = math.ceil(math.sqrt(n))
    width = (hi - lo) / count + 1
    buckets = [[] for _ in range(count)]
    for i in range(n):
        buckets[int((arr[i] - lo) / width)].append(arr[i])
        stats.array_accesses += 1
        yield compare(arr, stats, i)

    idx = 0
    for bk in buckets:
        for i in range(1, len(bk)):
            key = bk[i]
            j = i - 1
            while j >= 0 and bk[j] > key:
                stats.comparisons += 1
                bk[j + 1] = bk[j]
                j -= 1
            stats.comparisons += 1
            bk[j + 1] = key
        for v in bk:
            arr[idx] = v
            stats.array_accesses += 1
            stats.swaps += 1
            yield write(arr, stats, idx)
            idx += 1


# ============================================================
# ========================= BOGO =============================
# ============================================================

def _is_sorted(arr, stats):
    for i in range(1, len(arr)):
        stats.comparisons += 1
        stats.array_accesses += 2
        if arr[i] < arr[i - 1]:
            return False
    return True


def bogo_sort(arr, stats=None, rng=None, limit=BOGO_SAFETY_LIMIT):
    """
    Fisher-Yates shuffle until sorted, at most ``limit`` times.

    Sortedness is checked before the first shuffle, so sorted input yields
    nothing. Returns True if the list ended sorted and False if the limit
    was hit first; ``SortRun`` reports the latter as ``Outcome.GAVE_UP``.
    """
    stats = stats or SortStats()
    rng = rng or random
    shuffles = 0
    while not _is_sorted(arr, stats):
        if shuffles >= limit:
            logger.warning("bogo sort gave up after %d shuffles", shuffles)
            return False
        shuffles += 1
        for i in range(len(arr) - 1, 0, -1):
            j = rng.randint(0, i)
            if i == j:
                continue
            arr[i], arr[j] = arr[j], arr[i]
            stats.array_accesses += 4
            stats.swaps += 1
            yield write(arr, stats, i, j)
    return True
