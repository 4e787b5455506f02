from itertools import chain
from typing import Any, Dict, Generic, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar, Union

from counters.counter_base import CounterBase
from counters.numeric import INTEGER, NumericPolicy
from counters import ranking

# Multiset (bag) of hashable keys with generic counts. Absent keys read as the
# policy's zero without being stored. Only subtract() and the subtractive
# merge remove entries; every other path may leave zero or negative counts.

T = TypeVar('T')
N = TypeVar('N')

Pairs = Union[Mapping[T, Any], Iterable[Tuple[T, Any]]]


class Multiset(CounterBase[T], Generic[T, N]):
    """Mapping from keys to occurrence counts with multiset semantics.

    Attributes:
        policy: NumericPolicy of the count type.

    Operators:
        ``a + b`` / ``a += b``   additive merge (``b`` a Multiset) or update (any iterable)
        ``a - b`` / ``a -= b``   positive-remainder merge (``b`` a Multiset) or subtract (any iterable)
        ``a & b`` / ``a &= b``   intersection, minimum count over keys present in both
        ``a | b`` / ``a |= b``   union, maximum count over keys present in either
        ``a <= b`` / ``a >= b``  is_subset / is_superset

    Note:
        ``a - b`` with a Multiset is NOT algebraic subtraction. A key whose
        count in ``b`` exceeds its count in ``a`` is dropped from ``a``
        instead of going negative, so negative remainders are silently lost
        even for signed count types. Use per-key writes when the signed
        difference is wanted.

        When the operands carry different policies, the right-hand counts are
        passed through ``self.policy.coerce`` first, so a count the left
        policy cannot represent raises TypeError or ValueError.
    """

    def __init__(self, iterable: Optional[Iterable[T]] = None, policy: NumericPolicy = INTEGER):
        self.policy = policy
        self._entries: Dict[T, N] = {}
        # Returned for reads of absent keys.
        self._zero: N = policy.zero()
        if iterable is not None:
            self.update(iterable)

    @classmethod
    def init(cls, iterable: Iterable[T], policy: NumericPolicy = INTEGER) -> 'Multiset[T, N]':
        """Create a multiset counting one occurrence per element of `iterable`."""
        return cls(iterable, policy=policy)

    @classmethod
    def from_pairs(cls, pairs: Pairs, policy: NumericPolicy = INTEGER) -> 'Multiset[T, N]':
        """Create a multiset from (key, count) pairs; duplicate keys accumulate."""
        counter = cls(policy=policy)
        counter.extend_counts(pairs)
        return counter

    # ---------- Update engine ----------
    def update(self, iterable: Iterable[T]) -> None:
        """Add one occurrence for each element of `iterable`."""
        entries = self._entries
        zero = self._zero
        one = self.policy.one()
        for item in iterable:
            entries[item] = entries.get(item, zero) + one

    def extend(self, iterable: Iterable[T]) -> None:
        self.update(iterable)

    def subtract(self, iterable: Iterable[T]) -> None:
        """Remove one occurrence for each element of `iterable`.

        Positive counts are decremented; an entry is removed once its count
        equals zero. Absent keys are ignored and negative counts are left as
        they are.
        """
        if iterable is self:
            iterable = list(self._entries)
        entries = self._entries
        zero = self._zero
        one = self.policy.one()
        for item in iterable:
            if item not in entries:
                continue
            count = entries[item]
            if count > zero:
                count = count - one
                entries[item] = count
            if count == zero:
                del entries[item]

    def extend_counts(self, pairs: Pairs) -> None:
        """Add counts from a mapping or an iterable of (key, count) pairs."""
        if isinstance(pairs, Multiset):
            pairs = pairs._entries.items()
        elif isinstance(pairs, Mapping):
            pairs = pairs.items()
        entries = self._entries
        zero = self._zero
        for key, count in pairs:
            entries[key] = entries.get(key, zero) + self.policy.coerce(count)

    def _foreign_items(self, other: 'Multiset[T, N]') -> List[Tuple[T, N]]:
        # Counts of another policy are brought into ours before they are stored.
        if other.policy is self.policy:
            return list(other._entries.items())
        coerce = self.policy.coerce
        return [(key, coerce(count)) for key, count in other._entries.items()]

    def _replace_entries(self, result: 'Multiset[T, N]') -> None:
        # The dict handed out by `mapping` must keep backing the store.
        self._entries.clear()
        self._entries.update(result._entries)

    def _merge_add(self, other: 'Multiset[T, N]') -> None:
        entries = self._entries
        zero = self._zero
        for key, count in self._foreign_items(other):
            entries[key] = entries.get(key, zero) + count

    def _merge_sub(self, other: 'Multiset[T, N]') -> None:
        entries = self._entries
        zero = self._zero
        for key, count in self._foreign_items(other):
            if key not in entries:
                continue
            current = entries[key]
            if current >= count:
                current = current - count
                if current == zero:
                    del entries[key]
                else:
                    entries[key] = current
            else:
                del entries[key]

    def __iadd__(self, other: Iterable[T]) -> 'Multiset[T, N]':
        if isinstance(other, Multiset):
            self._merge_add(other)
        else:
            self.update(other)
        return self

    def __add__(self, other: Iterable[T]) -> 'Multiset[T, N]':
        result = self.copy()
        result += other
        return result

    def __isub__(self, other: Iterable[T]) -> 'Multiset[T, N]':
        if isinstance(other, Multiset):
            self._merge_sub(other)
        else:
            self.subtract(other)
        return self

    def __sub__(self, other: Iterable[T]) -> 'Multiset[T, N]':
        result = self.copy()
        result -= other
        return result

    # ---------- Set algebra ----------
    def __and__(self, other: 'Multiset[T, N]') -> 'Multiset[T, N]':
        if not isinstance(other, Multiset):
            return NotImplemented
        result = Multiset(policy=self.policy)
        theirs = dict(self._foreign_items(other))
        for key, count in self._entries.items():
            if key in theirs:
                result._entries[key] = min(count, theirs[key])
        return result

    def __iand__(self, other: 'Multiset[T, N]') -> 'Multiset[T, N]':
        if not isinstance(other, Multiset):
            return NotImplemented
        self._replace_entries(self & other)
        return self

    def __or__(self, other: 'Multiset[T, N]') -> 'Multiset[T, N]':
        if not isinstance(other, Multiset):
            return NotImplemented
        result = Multiset(policy=self.policy)
        others = dict(self._foreign_items(other))
        for key in chain(self._entries, others):
            if key in result._entries:
                continue
            mine = self[key]
            theirs = others.get(key, self._zero)
            # Ties take the right-hand value.
            result._entries[key] = theirs if theirs >= mine else mine
        return result

    def __ior__(self, other: 'Multiset[T, N]') -> 'Multiset[T, N]':
        if not isinstance(other, Multiset):
            return NotImplemented
        self._replace_entries(self | other)
        return self

    def is_subset(self, other: 'Multiset[T, N]') -> bool:
        """True if every count of self is at most the matching count of `other`.

        Both key sets are scanned: with signed counts a key missing from self
        but negative in `other` makes self not a subset.
        """
        return all(self[key] <= other[key] for key in chain(self._entries, other._entries))

    def is_superset(self, other: 'Multiset[T, N]') -> bool:
        return all(self[key] >= other[key] for key in chain(self._entries, other._entries))

    def __le__(self, other: 'Multiset[T, N]') -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_subset(other)

    def __ge__(self, other: 'Multiset[T, N]') -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.is_superset(other)

    # ---------- Ranking ----------
    def most_common(self) -> List[Tuple[T, N]]:
        return ranking.most_common(self._entries.items())

    def most_common_tiebreaker(self, tiebreaker: ranking.Tiebreaker) -> List[Tuple[T, N]]:
        return ranking.most_common_tiebreaker(self._entries.items(), tiebreaker)

    def most_common_ordered(self) -> List[Tuple[T, N]]:
        return ranking.most_common_ordered(self._entries.items())

    def k_most_common_ordered(self, k: int) -> List[Tuple[T, N]]:
        return ranking.k_most_common_ordered(self._entries, k)

    def min_count(self, threshold: Any) -> List[Tuple[T, N]]:
        """Return the (key, count) pairs whose count is at least `threshold`."""
        return [(key, count) for key, count in self._entries.items() if count >= threshold]

    # ---------- CounterBase ----------
    def insert(self, item: T) -> None:
        self._entries[item] = self._entries.get(item, self._zero) + self.policy.one()

    def topk(self, k: Optional[int] = None) -> List[Tuple[T, N]]:
        if k is None:
            return self.most_common_ordered()
        return self.k_most_common_ordered(k)

    def total_count(self) -> N:
        return self.total()

    def total(self) -> N:
        """Return the sum of the counts (``len`` gives the number of distinct keys)."""
        return sum(self._entries.values(), self._zero)

    # ---------- Indexing ----------
    def __getitem__(self, key: T) -> N:
        return self._entries.get(key, self._zero)

    def __setitem__(self, key: T, count: Any) -> None:
        self._entries[key] = self.policy.coerce(count)

    def __delitem__(self, key: T) -> None:
        del self._entries[key]

    def entry(self, key: T) -> N:
        """Return the stored count of `key`, storing a zero count first if absent."""
        return self._entries.setdefault(key, self._zero)

    # ---------- Mapping access ----------
    @property
    def mapping(self) -> Dict[T, N]:
        """The underlying dict, by reference.

        Writes through it bypass the update engine and may leave zero or
        negative entries behind.
        """
        return self._entries

    def to_dict(self) -> Dict[T, N]:
        return dict(self._entries)

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self):
        return self._entries.items()

    def copy(self) -> 'Multiset[T, N]':
        result = Multiset(policy=self.policy)
        result._entries = dict(self._entries)
        return result

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"


def aggregate_multisets(counters: List[Multiset], capacity: Optional[int] = None) -> Multiset:
    """Merge multiple multisets into a single one by adding their counts.

    Arguments:
        counters: The multisets to merge. The result uses the policy of the first.
        capacity: Optional limit on the number of keys to keep. If provided,
                  only the top `capacity` keys by merged count (ties in natural
                  key order) are retained.

    Returns:
        A new Multiset; the inputs are left untouched.
    """
    if not counters:
        return Multiset()

    merged = Multiset(policy=counters[0].policy)
    for c in counters:
        merged += c

    if capacity is not None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        merged = Multiset.from_pairs(merged.k_most_common_ordered(capacity), policy=merged.policy)

    return merged
