"""Non-mutating vector helpers. Each copies its operand and delegates."""
from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from tick_vector.config import SqrtMode
from tick_vector.rsqrt import rsqrt_many
from tick_vector.scalar import is_floating
from tick_vector.types import ScalarTypeError
from tick_vector.vector import FixedVector


def cross(a: FixedVector, b: FixedVector) -> FixedVector:
    return a.copy().cross(b)


def normalize(v: FixedVector) -> FixedVector:
    return v.copy().normalize()


def dot(a: FixedVector, b: FixedVector) -> Any:
    return a.dot(b)


def length(v: FixedVector) -> Any:
    return v.length()


def normalize_many(vectors: Sequence[FixedVector]) -> list[FixedVector]:
    """Normalize same-typed floating vectors in one NumPy pass.

    Zero vectors come back unchanged, as with FixedVector.normalize.
    """
    if not vectors:
        return []
    cls = type(vectors[0])
    for v in vectors:
        if type(v) is not cls:
            raise TypeError(
                f"normalize_many needs one vector type, got {cls.__name__} "
                f"and {type(v).__name__}"
            )
    if not is_floating(cls.scalar):
        raise ScalarTypeError(
            f"normalize is only defined for floating scalars, not {cls.scalar.__name__}"
        )

    arr = np.array([v.data for v in vectors], dtype=cls.scalar)
    sq = np.einsum("ij,ij->i", arr, arr)
    if cls.config.sqrt_mode is SqrtMode.EXACT:
        with np.errstate(divide="ignore"):
            inv = 1.0 / np.sqrt(sq)
    else:
        inv = rsqrt_many(sq, cls.config.newton_iterations)
    scale = np.where(sq > 0, inv, 1.0)
    return [cls.from_array(row) for row in arr * scale[:, None]]
