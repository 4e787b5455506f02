import random

import pytest

from counters import ranking
from counters.multiset import Multiset
from data.distributions import TiedDistributionGenerator, ZipfianDistributionGenerator


def test_most_common(letters):
    by_common = letters("abbccc").most_common()
    assert by_common == [("c", 3), ("b", 2), ("a", 1)]


def test_most_common_tiebreaker(letters):
    by_common = letters("eaddbbccc").most_common_tiebreaker(lambda a, b: (a > b) - (a < b))
    assert by_common == [("c", 3), ("b", 2), ("d", 2), ("a", 1), ("e", 1)]


def test_most_common_tiebreaker_reversed(letters):
    by_common = letters("eaddbbccc").most_common_tiebreaker(lambda a, b: (b > a) - (b < a))
    assert by_common == [("c", 3), ("d", 2), ("b", 2), ("e", 1), ("a", 1)]


def test_tiebreaker_only_called_on_ties(letters):
    calls = []

    def counting(a, b):
        calls.append((a, b))
        return (a > b) - (a < b)

    letters("abbcccdddd").most_common_tiebreaker(counting)
    assert calls == []

    letters("eaddbbccc").most_common_tiebreaker(counting)
    assert calls
    assert all({a, b} <= set("bdae") for a, b in calls)


def test_most_common_ordered(letters):
    by_common = letters("eaddbbccc").most_common_ordered()
    assert by_common == [("c", 3), ("b", 2), ("d", 2), ("a", 1), ("e", 1)]


def test_k_most_common_ordered(letters):
    counter = letters("eaddbbccc")
    assert counter.k_most_common_ordered(2) == [("c", 3), ("b", 2)]
    expected = counter.most_common_ordered()
    for k in range(len(expected) + 3):
        assert counter.k_most_common_ordered(k) == expected[:k]


def test_k_most_common_ordered_edge_cases(letters):
    counter = letters("eaddbbccc")
    assert counter.k_most_common_ordered(0) == []
    assert Multiset().k_most_common_ordered(3) == []
    with pytest.raises(ValueError):
        counter.k_most_common_ordered(-1)


def test_k_most_common_ordered_heavy():
    rng = random.Random(1)
    for _ in range(50):
        size = rng.randint(0, 300)
        spread = rng.choice([2, 5, 50, 1000])
        counter = Multiset.from_pairs((rng.randrange(10_000), rng.randint(1, spread)) for _ in range(size))
        expected = counter.most_common_ordered()
        for k in {0, 1, 2, 3, 10, len(counter) // 2, len(counter) - 1, len(counter), len(counter) + 1}:
            if k >= 0:
                assert counter.k_most_common_ordered(k) == expected[:k]


@pytest.mark.parametrize("generator", [
    TiedDistributionGenerator(levels=2, seed=3),
    TiedDistributionGenerator(levels=5, seed=4),
    ZipfianDistributionGenerator(s=1.1),
])
def test_k_most_common_ordered_on_generated_distributions(generator):
    counter = generator.generate(total_items=5_000, num_keys=400)
    expected = counter.most_common_ordered()
    for k in (1, 7, 50, 399, 400):
        assert counter.k_most_common_ordered(k) == expected[:k]


def test_ranking_functions_accept_plain_mappings():
    counts = {"x": 2, "y": 5, "z": 2, "w": 1}
    assert ranking.most_common_ordered(counts.items()) == [("y", 5), ("x", 2), ("z", 2), ("w", 1)]
    assert ranking.k_most_common_ordered(counts, 2) == [("y", 5), ("x", 2)]
    assert ranking.most_common(counts.items())[0] == ("y", 5)
