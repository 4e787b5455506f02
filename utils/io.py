import gzip
import json
from fractions import Fraction
from pathlib import Path

import numpy as np

from counters.multiset import Multiset


def to_serializable(obj):
    if isinstance(obj, np.generic):
        return obj.item()
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, Multiset):
        return {str(k): to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, Fraction):
        return str(obj)
    elif isinstance(obj, dict):
        return {str(k): to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple, set)):
        return [to_serializable(i) for i in obj]
    elif isinstance(obj, (int, float, str, bool)) or obj is None:
        return obj
    else:
        # Final fallback
        return str(obj)


def save_jsonl_gz(data, filepath):
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(filepath, "wt", encoding="utf-8") as f:
        for item in data:
            json.dump(to_serializable(item), f)
            f.write("\n")


def load_jsonl_gz(filepath):
    if not Path(filepath).exists():
        raise FileNotFoundError(f"File {filepath} not found")
    with gzip.open(filepath, "rt", encoding="utf-8") as f:
        return [json.loads(line) for line in f]
