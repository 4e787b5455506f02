import math
from typing import Any, Dict, Mapping


def relative_frequencies(counts: Mapping[Any, Any]) -> Dict[Any, float]:
    """
    Convert a count mapping (or Multiset) into key -> count / total.
    Returns an empty dict when the total is not positive.
    """
    total = float(sum(counts.values()))
    if total <= 0:
        return {}
    return {k: float(v) / total for k, v in counts.items()}


def compute_entropy(freqs: Mapping[Any, float]) -> float:
    """
    Compute Shannon entropy for a given probability distribution.
    """
    return -sum(p * math.log(p, 2) for p in freqs.values() if p > 0)


def normalize_entropy(entropy: float, num_elements: int) -> float:
    """
    Normalize entropy relative to the number of unique elements (max entropy = log2(n)).
    Returns value in [0, 1].
    """
    if num_elements <= 1:
        return 0.0
    return entropy / math.log(num_elements, 2)
