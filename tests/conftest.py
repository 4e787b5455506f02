from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from counters.multiset import Multiset


@pytest.fixture
def letters():
    def _make(text: str, **kwargs) -> Multiset:
        return Multiset.init(text, **kwargs)

    return _make
