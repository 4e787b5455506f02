from typing import Any, Mapping

import numpy as np
from scipy.spatial.distance import jensenshannon


def compute_jsd(p: Mapping[Any, Any], q: Mapping[Any, Any], base: float = 2.0) -> float:
    """
    Compute Jensen–Shannon divergence between two count or probability mappings.
    Both inputs are normalised first, so Multisets can be passed directly.
    Returns JSD^2 to represent divergence (bounded in [0, 1]).
    """
    all_keys = list(set(p.keys()) | set(q.keys()))
    if not all_keys:
        return 0.0
    p_vec = np.array([float(p[k]) if k in p else 0.0 for k in all_keys])
    q_vec = np.array([float(q[k]) if k in q else 0.0 for k in all_keys])

    p_sum = p_vec.sum()
    q_sum = q_vec.sum()
    if p_sum <= 0 or q_sum <= 0:
        # jensenshannon is undefined for an all-zero vector
        return 0.0 if p_sum == q_sum else 1.0

    p_vec /= p_sum
    q_vec /= q_sum

    return float(jensenshannon(p_vec, q_vec, base=base) ** 2)

