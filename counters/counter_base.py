from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Tuple, TypeVar, Any

T = TypeVar('T')


class CounterBase(ABC, Generic[T]):
    """
    Abstract base class for frequency counters.
    """

    @abstractmethod
    def insert(self, item: T) -> None:
        """
        Count one occurrence of an item.
        """
        pass

    @abstractmethod
    def topk(self, k: Optional[int] = None) -> List[Tuple[T, Any]]:
        """
        Return the top-k elements (item, count). If k is None, return all.
        """
        pass

    @abstractmethod
    def total_count(self) -> Any:
        """
        Return the sum of all counts held by the counter.
        """
        pass
