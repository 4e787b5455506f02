import random
import math
import operator
from typing import List, Optional

from counters.multiset import Multiset


def assign_partitions(
    freq_dist: Multiset,
    num_partitions: int,
    top_n: int = 100,
    skewed_fraction: float = 0.5,
    skew_ratio: float = 0.75,
    skew_jitter: float = 0.15,
    seed: Optional[int] = None
) -> List[Multiset]:
    """
    Split a frequency multiset of non-negative integer counts across
    partitions so that merging the partitions with `+` gives back
    `freq_dist` (keys stored with a zero count are not carried over).
    Raises TypeError for non-integral counts and ValueError for negative ones.

    For the top-n keys:
      - Uniform: assigned equally to all partitions.
      - Skewed: θ (≈75%±15%) assigned to a small partition subset, rest diffused.
    All other keys are spread round robin.
    Returns: [Multiset per partition]
    """
    if num_partitions <= 0:
        raise ValueError(f"num_partitions must be positive, got {num_partitions}")
    for k, freq in freq_dist.items():
        if operator.index(freq) < 0:
            raise ValueError(f"cannot partition negative count {freq} of key {k!r}")
    rng = random.Random(seed)
    partitioned = [Multiset(policy=freq_dist.policy) for _ in range(num_partitions)]
    top_keys = {k for k, _ in freq_dist.k_most_common_ordered(top_n)}

    def spread_evenly(key, freq, targets):
        base = freq // len(targets)
        remainder = freq % len(targets)
        for i, p in enumerate(targets):
            share = base + (1 if i < remainder else 0)
            if share > 0:
                partitioned[p][key] += share

    for k, freq in freq_dist.items():
        freq = operator.index(freq)
        if k not in top_keys or num_partitions < 3 or rng.random() >= skewed_fraction:
            spread_evenly(k, freq, range(num_partitions))
            continue

        skew_part_count = rng.randint(
            math.ceil(num_partitions / 6), math.floor(num_partitions / 3)
        )
        skew_partitions = rng.sample(range(num_partitions), skew_part_count)
        rest_partitions = [p for p in range(num_partitions) if p not in skew_partitions]

        theta = rng.uniform(skew_ratio - skew_jitter, skew_ratio + skew_jitter)
        skew_mass = int(round(freq * theta))
        spread_evenly(k, skew_mass, skew_partitions)

        # Randomly assign remaining mass in other partitions
        for _ in range(freq - skew_mass):
            partitioned[rng.choice(rest_partitions)][k] += 1

    return partitioned
