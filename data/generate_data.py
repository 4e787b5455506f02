import random
from typing import Any, Dict, List, Optional, Tuple

from counters.multiset import Multiset
from data.distributions import (
    ZipfianDistributionGenerator,
    UniformDistributionGenerator,
    NormalDistributionGenerator,
    FlattenedHHDistributionGenerator,
    TiedDistributionGenerator
)
from data.partitioning import assign_partitions


GENERATORS = {
    'uniform': UniformDistributionGenerator,
    'normal': NormalDistributionGenerator,
    'flattened': FlattenedHHDistributionGenerator,
    'zipfian': ZipfianDistributionGenerator,
    'tied': TiedDistributionGenerator
}


# === Scenario Runner ===

def run_scenario(scenario: List[Dict[str, Any]], total_items: int, num_keys: int) -> List[Tuple[str, Multiset, int]]:
    """
    Expand a scenario into windows of (distribution type, ground-truth multiset, n).

    Each step is {'type', 'duration', 'params', 'n'}; it yields `duration`
    windows drawn from the same generator.
    """
    output = []
    for step in scenario:
        if step['type'] not in GENERATORS:
            raise ValueError(f"unknown distribution type {step['type']!r}")
        gen = GENERATORS[step['type']](**step.get('params', {}))
        win_n = step.get('n', 10)
        for _ in range(step['duration']):
            output.append((step['type'], gen.generate(total_items, num_keys), win_n))

    return output


def reconstruct_stream(freq: Multiset, seed: Optional[int] = None) -> List[Any]:
    """
    Expand a multiset into a shuffled list holding each key `count` times.
    Non-positive counts contribute nothing.
    """
    rng = random.Random(seed)
    stream = []
    for key, count in freq.items():
        stream.extend([key] * max(int(count), 0))
    rng.shuffle(stream)
    return stream


def prepare_windows(seed: int = 42, total_items: int = 10_000, num_keys: int = 1_000, m: int = 10,
                    scenario: Optional[List[Dict[str, Any]]] = None,
                    skewed_fraction: float = 0.5,
                    plot_distr: bool = False,
                    save_info: tuple[str | None, str | None] = ('./plots/data', 'png')
                    ) -> List[Dict[str, Any]]:
    """
    Build the windowed input of the ranking benchmark.

    Returns a list of dicts with:
        - 'type': distribution name of the window
        - 'n': number of top keys to rank
        - 'truth': ground-truth Multiset of the window
        - 'partitions': {partition_id: shuffled stream of keys}
    """
    if not scenario:
        scenario = [{'type': 'uniform', 'duration': 2, 'params': {}, 'n': 100}]

    windows = []
    for idx, (dist_type, freq_dist, win_n) in enumerate(run_scenario(scenario, total_items, num_keys)):
        if plot_distr:
            from visualisation.data_visualiser import plot_frequency_distribution
            plot_frequency_distribution(freq_dist, win_n, save_info, f"Window {idx+1}: {dist_type.capitalize()}")

        parts = assign_partitions(freq_dist, num_partitions=m, top_n=win_n,
                                  skewed_fraction=skewed_fraction, seed=seed + idx)
        windows.append({
            'type': dist_type,
            'n': win_n,
            'truth': freq_dist,
            'partitions': {p: reconstruct_stream(part, seed + idx * m + p) for p, part in enumerate(parts)},
        })

    return windows
