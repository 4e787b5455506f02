import numpy as np
from abc import ABC, abstractmethod
from typing import Optional

from counters.multiset import Multiset


# === Generator Interface ===

class FrequencyDistributionGenerator(ABC):
    """Builds a Multiset of `num_keys` keys whose counts sum to `total_items`."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    @abstractmethod
    def generate(self, total_items: int, num_keys: int) -> Multiset:
        pass

    @staticmethod
    def _check(total_items: int, num_keys: int) -> None:
        if num_keys <= 0:
            raise ValueError(f"num_keys must be positive, got {num_keys}")
        if total_items < 0:
            raise ValueError(f"total_items must be non-negative, got {total_items}")

    @staticmethod
    def _to_multiset(freqs) -> Multiset:
        # numpy ints are converted so counts stay plain Python ints
        return Multiset.from_pairs((f'key_{i+1}', int(f)) for i, f in enumerate(freqs) if f > 0)

    @staticmethod
    def _fill_remainder(freqs: np.ndarray, total_items: int) -> np.ndarray:
        freqs = np.floor(freqs).astype(int)
        for i in range(total_items - int(freqs.sum())):
            freqs[i % len(freqs)] += 1
        return freqs

# === Distribution Generators ===

class UniformDistributionGenerator(FrequencyDistributionGenerator):
    def generate(self, total_items: int, num_keys: int) -> Multiset:
        self._check(total_items, num_keys)
        base = total_items // num_keys
        remainder = total_items % num_keys
        return self._to_multiset(base + 1 if i < remainder else base for i in range(num_keys))


class NormalDistributionGenerator(FrequencyDistributionGenerator):
    def generate(self, total_items: int, num_keys: int) -> Multiset:
        self._check(total_items, num_keys)
        center = 0.05 * num_keys
        std = max(0.031 * num_keys, 1.0)
        x = np.linspace(0, num_keys - 1, num_keys)
        freqs = np.exp(-0.5 * ((x - center) / std) ** 2)
        freqs = freqs / freqs.sum() * total_items
        return self._to_multiset(self._fill_remainder(freqs, total_items))


class ZipfianDistributionGenerator(FrequencyDistributionGenerator):
    def __init__(self, s: float = 1.2, seed: Optional[int] = None):
        super().__init__(seed)
        self.s = s

    def generate(self, total_items: int, num_keys: int) -> Multiset:
        self._check(total_items, num_keys)
        ranks = np.arange(1, num_keys + 1)
        weights = 1 / ranks**self.s
        weights /= weights.sum()
        return self._to_multiset(self._fill_remainder(weights * total_items, total_items))


class FlattenedHHDistributionGenerator(FrequencyDistributionGenerator):
    """A few near-equal heavy hitters above total/n, a linear tail below."""

    def __init__(self, n: int = 10, num_hh: int = 5, flatness: float = 0.5, seed: Optional[int] = None):
        super().__init__(seed)
        if n < 2:
            raise ValueError(f"n must be at least 2, got {n}")
        self.n = n
        self.num_hh = min(num_hh, n - 1)
        self.flatness = flatness

    def generate(self, total_items: int, num_keys: int) -> Multiset:
        self._check(total_items, num_keys)
        min_hh = total_items // self.n + 1
        max_possible = 2 * (total_items - 1) / self.num_hh - min_hh
        max_hh = int(min_hh + self.flatness * (max_possible - min_hh))
        step = (max_hh - min_hh) // max(self.num_hh - 1, 1)
        hh = [max(max_hh - i * step, min_hh) for i in range(self.num_hh)]
        rest = total_items - sum(hh)
        if rest < 0:
            raise ValueError("total_items too small for the requested heavy hitters")

        tail_keys = max(num_keys - self.num_hh, 1)
        tail = np.linspace(max(min_hh - 1, 1), 1, tail_keys)
        tail = tail / tail.sum() * rest
        tail = self._fill_remainder(tail, rest)

        freqs = np.concatenate([np.array(hh, dtype=int), tail])
        self.rng.shuffle(freqs)
        return self._to_multiset(freqs)


class TiedDistributionGenerator(FrequencyDistributionGenerator):
    """Counts drawn from a handful of levels, so most keys share their count."""

    def __init__(self, levels: int = 3, seed: Optional[int] = None):
        super().__init__(seed)
        if levels <= 0:
            raise ValueError(f"levels must be positive, got {levels}")
        self.levels = levels

    def generate(self, total_items: int, num_keys: int) -> Multiset:
        self._check(total_items, num_keys)
        level_of = self.rng.integers(1, self.levels + 1, size=num_keys)
        unit = total_items // int(level_of.sum())
        freqs = level_of * unit
        # the leftover goes to the first key, which keeps every other tie intact
        freqs[0] += total_items - int(freqs.sum())
        return self._to_multiset(freqs)
