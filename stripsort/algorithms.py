"""
Algorithm registry: a closed set of identifiers and their descriptors.
"""
from enum import Enum
from typing import Callable, NamedTuple

from . import sorts


class AlgorithmId(str, Enum):
    MERGE            = "merge"
    SELECTION        = "selection"
    INSERTION        = "insertion"
    BINARY_INSERTION = "binary_insertion"
    QUICK            = "quick"
    BUBBLE           = "bubble"
    COCKTAIL         = "cocktail"
    GNOME            = "gnome"
    COMB             = "comb"
    SHELL            = "shell"
    HEAP             = "heap"
    ODD_EVEN         = "oddeven"
    BITONIC          = "bitonic"
    CYCLE            = "cycle"
    LSD_RADIX        = "lsd_radix"
    MSD_RADIX        = "msd_radix"
    BUCKET           = "bucket"
    COUNTING         = "counting"
    PANCAKE          = "pancake"
    BOGO             = "bogo"


class Algorithm(NamedTuple):
    id:                    AlgorithmId
    name:                  str
    name_ko:               str
    sort:                  Callable
    # scales the strip count: 1.0 = O(n log n) or better, 0.25 = O(n^2)
    complexity_multiplier: float
    time_complexity:       str


class UnknownAlgorithmError(KeyError):
    pass


A = AlgorithmId

ALGORITHMS = [
    Algorithm(A.MERGE,            "Merge Sort",            "병합 정렬",          sorts.merge_sort,            1.0,  "O(n log n)"),
    Algorithm(A.SELECTION,        "Selection Sort",        "선택 정렬",          sorts.selection_sort,        0.25, "O(n²)"),
    Algorithm(A.INSERTION,        "Insertion Sort",        "삽입 정렬",          sorts.insertion_sort,        0.25, "O(n²)"),
    Algorithm(A.BINARY_INSERTION, "Binary Insertion Sort", "이진 삽입 정렬",     sorts.binary_insertion_sort, 0.25, "O(n²)"),
    Algorithm(A.QUICK,            "Quick Sort",            "퀵 정렬",            sorts.quick_sort,            1.0,  "O(n log n)"),
    Algorithm(A.BUBBLE,           "Bubble Sort",           "버블 정렬",          sorts.bubble_sort,           0.25, "O(n²)"),
    Algorithm(A.COCKTAIL,         "Cocktail Shaker Sort",  "칵테일 셰이커 정렬", sorts.cocktail_sort,         0.25, "O(n²)"),
    Algorithm(A.GNOME,            "Gnome Sort",            "그놈 정렬",          sorts.gnome_sort,            0.25, "O(n²)"),
    Algorithm(A.COMB,             "Comb Sort",             "콤 정렬",            sorts.comb_sort,             0.5,  "O(n²)"),
    Algorithm(A.SHELL,            "Shell Sort",            "셸 정렬",            sorts.shell_sort,            0.5,  "O(n^1.5)"),
    Algorithm(A.HEAP,             "Heap Sort",             "힙 정렬",            sorts.heap_sort,             1.0,  "O(n log n)"),
    Algorithm(A.ODD_EVEN,         "Odd-Even Sort",         "홀짝 정렬",          sorts.odd_even_sort,         0.25, "O(n²)"),
    Algorithm(A.BITONIC,          "Bitonic Sort",          "바이토닉 정렬",      sorts.bitonic_sort,          1.0,  "O(n log² n)"),
    Algorithm(A.CYCLE,            "Cycle Sort",            "사이클 정렬",        sorts.cycle_sort,            0.25, "O(n²)"),
    Algorithm(A.LSD_RADIX,        "LSD Radix Sort",        "LSD 기수 정렬",      sorts.lsd_radix_sort,        1.0,  "O(nk)"),
    Algorithm(A.MSD_RADIX,        "MSD Radix Sort",        "MSD 기수 정렬",      sorts.msd_radix_sort,        1.0,  "O(nk)"),
    Algorithm(A.BUCKET,           "Bucket Sort",           "버킷 정렬",          sorts.bucket_sort,           0.5,  "O(n²)"),
    Algorithm(A.COUNTING,         "Counting Sort",         "계수 정렬",          sorts.counting_sort,         1.0,  "O(n+k)"),
    Algorithm(A.PANCAKE,          "Pancake Sort",          "팬케이크 정렬",      sorts.pancake_sort,          0.25, "O(n²)"),
    Algorithm(A.BOGO,             "Bogo Sort",             "보고 정렬",          sorts.bogo_sort,             0.05, "O(∞)"),
]

_BY_ID = {a.id: a for a in ALGORITHMS}

# everything except bogo sort always ends sorted
DETERMINISTIC = [a for a in ALGORITHMS if a.id is not A.BOGO]


def get_algorithm(key) -> Algorithm:
    """Look up a descriptor by ``AlgorithmId`` or its string value."""
    try:
        return _BY_ID[AlgorithmId(key)]
    except ValueError:
        raise UnknownAlgorithmError(key) from None


def get_generator(key, arr, stats=None, **options):
    return get_algorithm(key).sort(arr, stats, **options)
