import heapq
from functools import cmp_to_key
from itertools import islice
from operator import itemgetter
from typing import Any, Callable, Iterable, List, Mapping, Tuple, TypeVar

# Ranking of (key, count) pairs: descending by count, with ties resolved by
# a caller supplied comparator or by the natural order of the keys.

T = TypeVar('T')

Tiebreaker = Callable[[Any, Any], int]


def most_common(items: Iterable[Tuple[T, Any]]) -> List[Tuple[T, Any]]:
    # Stable sort: ties keep their iteration order, which callers must not rely on.
    return sorted(items, key=itemgetter(1), reverse=True)


def most_common_tiebreaker(items: Iterable[Tuple[T, Any]], tiebreaker: Tiebreaker) -> List[Tuple[T, Any]]:
    """Sort pairs by descending count, ordering equal counts with `tiebreaker`.

    `tiebreaker(a, b)` follows the ``cmp`` convention (negative, zero or
    positive) and is only called for pairs whose counts are equal.
    """
    def compare(a: Tuple[T, Any], b: Tuple[T, Any]) -> int:
        if a[1] > b[1]:
            return -1
        if b[1] > a[1]:
            return 1
        return tiebreaker(a[0], b[0])

    return sorted(items, key=cmp_to_key(compare))


def most_common_ordered(items: Iterable[Tuple[T, Any]]) -> List[Tuple[T, Any]]:
    # Two stable passes: keys ascending, then counts descending.
    ranked = sorted(items, key=itemgetter(0))
    ranked.sort(key=itemgetter(1), reverse=True)
    return ranked


class _Ranked:
    """Heap entry ordered from weakest to strongest.

    An entry is weaker when its count is lower, or when counts are equal and
    its key is larger, so the heap root is always the first to be evicted.
    """
    __slots__ = ['count', 'key']

    def __init__(self, count: Any, key: Any) -> None:
        self.count = count
        self.key = key

    def __lt__(self, other: '_Ranked') -> bool:
        if self.count < other.count:
            return True
        return self.count == other.count and other.key < self.key


def k_most_common_ordered(entries: Mapping[T, Any], k: int) -> List[Tuple[T, Any]]:
    """Return the `k` highest ranked pairs of `entries` in natural tie order.

    Equivalent to ``most_common_ordered(entries.items())[:k]`` but selects
    with a bounded min-heap of size `k`:

    1. heapify the first `k` pairs, O(k) comparisons;
    2. scan the remaining ``n - k`` pairs, replacing the heap root whenever
       a pair ranks strictly above it; for fixed `k` this is close to n
       comparisons since replacements become rare;
    3. sort the `k` survivors, O(k log k).

    When ``k >= n`` the full sort is cheaper and is used instead.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    if k == 0:
        return []
    if k >= len(entries):
        return most_common_ordered(entries.items())

    pairs = iter(entries.items())
    heap = [_Ranked(count, key) for key, count in islice(pairs, k)]
    heapq.heapify(heap)

    for key, count in pairs:
        assert heap, "the heap is empty"
        root = heap[0]
        if count > root.count or (count == root.count and key < root.key):
            heapq.heapreplace(heap, _Ranked(count, key))

    return [(entry.key, entry.count) for entry in sorted(heap, reverse=True)]
