from typing import Any, List, Tuple

from counters.multiset import Multiset
from runners.full_sort_runner import FullSortRunner


class BoundedTopKRunner(FullSortRunner):
    """
    Same counting as FullSortRunner, but ranks with the bounded heap
    selection, which only orders the n survivors.
    """

    def rank(self, merged: Multiset) -> List[Tuple[Any, Any]]:
        return merged.k_most_common_ordered(self.n)
