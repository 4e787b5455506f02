import operator
from fractions import Fraction
from typing import Any, Callable, Generic, TypeVar

import numpy as np

# A NumericPolicy describes the count type of a Multiset: how to build the
# additive identity, the single-occurrence increment, and how to convert
# externally supplied values. Addition, subtraction and ordering are taken
# from the count values themselves.

N = TypeVar('N')


class NumericPolicy(Generic[N]):
    """Capabilities required from a count type.

    Attributes:
        name: Human readable name of the count type.
        signed: Whether negative counts can be represented.
    """

    def __init__(self, name: str, zero: Callable[[], N], one: Callable[[], N],
                 coerce: Callable[[Any], N], signed: bool = True):
        self.name = name
        self.signed = signed
        self._zero = zero
        self._one = one
        self._coerce = coerce

    def zero(self) -> N:
        return self._zero()

    def one(self) -> N:
        return self._one()

    def is_zero(self, value: N) -> bool:
        return value == self._zero()

    def coerce(self, value: Any) -> N:
        """Convert `value` to the count type, raising on values it cannot hold."""
        return self._coerce(value)

    def __repr__(self) -> str:
        return f"NumericPolicy({self.name!r})"


def _coerce_fraction(value: Any) -> Fraction:
    if isinstance(value, float):
        raise TypeError(f"refusing lossy float count {value!r}; pass a Fraction or int")
    return Fraction(value)


INTEGER: NumericPolicy[int] = NumericPolicy(
    'int', zero=lambda: 0, one=lambda: 1, coerce=operator.index
)

FRACTION: NumericPolicy[Fraction] = NumericPolicy(
    'fraction', zero=lambda: Fraction(0), one=lambda: Fraction(1), coerce=_coerce_fraction
)

# Floats are only partially ordered (NaN); ranking and set algebra still run
# but NaN counts give an unspecified order.
FLOAT: NumericPolicy[float] = NumericPolicy(
    'float', zero=lambda: 0.0, one=lambda: 1.0, coerce=float
)


def numpy_policy(dtype: Any) -> NumericPolicy:
    """Build a policy for fixed-width numpy scalar counts (e.g. ``np.int8``).

    Arithmetic on numpy scalars keeps the dtype, so overflow wraps around
    exactly like the fixed-width type would. Values outside the dtype's range
    are rejected on coercion.
    """
    dt = np.dtype(dtype)
    if not (np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating)):
        raise ValueError(f"unsupported count dtype {dt}")
    scalar = dt.type
    signed = not np.issubdtype(dt, np.unsignedinteger)

    def coerce(value: Any):
        if np.issubdtype(dt, np.integer):
            info = np.iinfo(dt)
            as_int = operator.index(value)
            if as_int < info.min or as_int > info.max:
                raise ValueError(f"count {as_int} out of range for {dt}")
            return scalar(as_int)
        return scalar(value)

    return NumericPolicy(dt.name, zero=lambda: scalar(0), one=lambda: scalar(1),
                         coerce=coerce, signed=signed)
