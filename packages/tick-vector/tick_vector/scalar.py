"""Scalar arithmetic primitives shared by every vector type."""
from __future__ import annotations

import math
import numbers
from typing import Any

import numpy as np

from tick_vector.types import ScalarTypeError

_NARROW_FLOATS = (np.float16, np.float32)


def check_scalar_type(scalar: Any) -> type:
    """Validate a scalar type. Raises ScalarTypeError for unsupported types."""
    if not isinstance(scalar, type):
        raise ScalarTypeError(f"scalar type must be a type, got {scalar!r}")
    if scalar is bool or issubclass(scalar, np.bool_):
        raise ScalarTypeError("bool is not a supported scalar type")
    if scalar in (float, int) or issubclass(scalar, (np.floating, np.integer)):
        return scalar
    raise ScalarTypeError(f"unsupported scalar type {scalar.__name__}")


def is_floating(scalar: type) -> bool:
    return scalar is float or issubclass(scalar, np.floating)


def zero(scalar: type) -> Any:
    return scalar(0)


def coerce(scalar: type, value: Any) -> Any:
    """Convert a computed value back into the scalar type.

    Integer scalars truncate toward zero, so 7 / 2 stores 3 and -7 / 2
    stores -3.
    """
    if scalar is float:
        return float(value)
    if not is_floating(scalar) and isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot store {value} in an integer vector")
        return scalar(math.trunc(value))
    return scalar(value)


def divide(scalar: type, a: Any, b: Any) -> Any:
    """a / b in the scalar type. Integer quotients truncate toward zero exactly."""
    if is_floating(scalar):
        return coerce(scalar, a / b)
    a, b = int(a), int(b)
    q = abs(a) // abs(b)
    return scalar(q if (a < 0) == (b < 0) else -q)


def float_bits(scalar: type) -> int:
    """Width of the bit-trick used for approximate square roots."""
    if issubclass(scalar, _NARROW_FLOATS):
        return 32
    return 64


def is_scalar(value: Any) -> bool:
    """True for real numeric operands (NumPy scalars included), False for bools and complex."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)
