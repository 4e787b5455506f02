import time
from pprint import pformat
from typing import Any, List, Tuple

from counters.multiset import Multiset, aggregate_multisets
from runners.method_runner_base import RankingRunnerBase


class FullSortRunner(RankingRunnerBase):
    """
    Counts each partition in its own Multiset, merges them at the end of the
    window and ranks the merged counts with a full sort.
    """

    def __init__(self, m: int, n: int, verbose: bool = False):
        if m <= 0 or n < 0:
            raise ValueError(f"need m > 0 and n >= 0, got m={m}, n={n}")
        self.m = m
        self.n = n
        self.verbose = verbose
        self.counters: List[Multiset] = []
        self.ranked: List[Tuple[Any, Any]] = []
        self.rank_seconds = 0.0

    def initialize_counters(self, window_id: int):
        self.counters = [Multiset() for _ in range(self.m)]

    def insert_item(self, partition_id: int, item):
        self.counters[partition_id].insert(item)

    def rank(self, merged: Multiset) -> List[Tuple[Any, Any]]:
        return merged.most_common_ordered()[:self.n]

    def finalize_window(self, window_id: int) -> dict:
        merged = aggregate_multisets(self.counters)
        start = time.perf_counter()
        self.ranked = self.rank(merged)
        self.rank_seconds = time.perf_counter() - start
        if self.verbose:
            print(f"{self.__class__.__name__} window {window_id + 1}: "
                  f"{len(merged)} keys ranked in {self.rank_seconds * 1000:.3f} ms")
        return {
            "window": window_id + 1,
            "distinct_keys": len(merged),
            "total": merged.total(),
            "top_n": self.ranked,
            "rank_seconds": self.rank_seconds,
        }

    def __str__(self) -> str:
        """Pretty-prints all attributes, excluding per-window state."""
        excluded_attrs = {'verbose', 'counters', 'ranked'}
        attributes = {
            key: value
            for key, value in vars(self).items()
            if key not in excluded_attrs
        }
        pretty_attrs = pformat(attributes, indent=2, width=80, depth=2)
        return f"{self.__class__.__name__}(\n{pretty_attrs}\n)"
