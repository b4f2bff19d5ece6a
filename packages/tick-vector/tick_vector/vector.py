"""FixedVector - fixed-dimension numeric vectors.

A concrete vector class is bound to a scalar type, a dimension, a VecType
and an EvalType, e.g. ``FixedVector[float, 3]``. Everything that depends on
those parameters is decided when the class is created: which named
accessors exist, whether ``cross`` is available and which
EvaluationStrategy computes scalar addition. Instances then only hold their
component list.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterator

import numpy as np

from tick_vector.config import DEFAULT_CONFIG, VectorConfig
from tick_vector.rsqrt import sqrt
from tick_vector.scalar import (
    check_scalar_type,
    coerce,
    divide,
    float_bits,
    is_floating,
    is_scalar,
    zero,
)
from tick_vector.strategy import EvaluationStrategy, resolve_strategy
from tick_vector.types import AccessorError, DimensionError, EvalType, ScalarTypeError, VecType

logger = logging.getLogger(__name__)

# name -> component index; a name exists only where index < size.
_NAMED = {"x": 0, "y": 1, "z": 2, "r": 0, "g": 1, "b": 2, "a": 3}


class _Component:
    """Read/write accessor for one named component."""

    def __init__(self, name: str, index: int) -> None:
        self.name = name
        self.index = index

    def __get__(self, obj: FixedVector | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.data[self.index]

    def __set__(self, obj: FixedVector, value: Any) -> None:
        obj.data[self.index] = coerce(obj.scalar, value)


class _Unavailable:
    """Placeholder for a named component beyond the class's dimension."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, obj: FixedVector | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        raise AccessorError(self.name, obj.size)

    def __set__(self, obj: FixedVector, value: Any) -> None:
        raise AccessorError(self.name, obj.size)


def _cross_unavailable(self: FixedVector, rhs: FixedVector) -> FixedVector:
    raise DimensionError(
        f"cannot take cross product of a {self.size}-component vector"
    )


class FixedVector:
    """Fixed-size ordered tuple of scalars with in-place and value arithmetic.

    Use ``FixedVector[T, N]`` (optionally followed by a VecType and an
    EvalType) or ``vector_type(...)`` to get a concrete class.

    Construction on a concrete class ``V`` of size N:
        V()              zero vector
        V(s)             every component set to s
        V(c0, ..., cN-1) positional components
        V(seq)           first N items of a list, tuple, array or ndarray
        V(other)         first min(N, S) components of any vector, rest zero
        V(other, s)      extend a vector of size N - 1 with a last component

    Index access is checked with ``assert``; under ``python -O`` the check is
    gone and out-of-range indices follow plain list indexing.
    """

    __slots__ = ("data",)
    # Keeps NumPy scalars from broadcasting over vectors in ``np.float32(2) * v``.
    __array_ufunc__ = None

    scalar: ClassVar[type]
    size: ClassVar[int]
    vec_type: ClassVar[VecType]
    eval_type: ClassVar[EvalType]
    config: ClassVar[VectorConfig]
    strategy: ClassVar[type[EvaluationStrategy]]

    def __class_getitem__(cls, params: Any) -> type[FixedVector]:
        if not isinstance(params, tuple):
            params = (params,)
        if not 2 <= len(params) <= 4:
            raise TypeError(
                "FixedVector[...] takes a scalar type, a size and optional "
                "VecType and EvalType"
            )
        return vector_type(*params)

    def __init__(self, *args: Any) -> None:
        cls = type(self)
        if getattr(cls, "size", None) is None:
            raise TypeError(
                "FixedVector must be parameterised first, e.g. FixedVector[float, 3]"
            )
        n = cls.size
        scalar = cls.scalar

        if not args:
            self.data = [zero(scalar)] * n
        elif isinstance(args[0], FixedVector):
            src = args[0]
            if len(args) == 1:
                head = [coerce(scalar, v) for v in src.data[:n]]
                self.data = head + [zero(scalar)] * (n - len(head))
            elif len(args) == 2 and src.size == n - 1 and is_scalar(args[1]):
                self.data = [coerce(scalar, v) for v in src.data]
                self.data.append(coerce(scalar, args[1]))
            else:
                raise DimensionError(
                    f"extend construction of a {n}-vector needs a "
                    f"{n - 1}-vector and one scalar"
                )
        elif len(args) == 1 and is_scalar(args[0]):
            self.data = [coerce(scalar, args[0])] * n
        elif len(args) == 1:
            self.data = _read_components(scalar, n, args[0], 0)
        elif len(args) == n:
            if not all(is_scalar(v) for v in args):
                raise ScalarTypeError("components must be numeric scalars")
            self.data = [coerce(scalar, v) for v in args]
        else:
            raise DimensionError(
                f"{cls.__name__} takes {n} components, got {len(args)}"
            )

    @classmethod
    def from_array(cls, buf: Any, offset: int = 0) -> FixedVector:
        """Copy ``size`` values from buf starting at offset."""
        obj = cls.__new__(cls)
        obj.data = _read_components(cls.scalar, cls.size, buf, offset)
        return obj

    # ── access ────────────────────────────────────────────────────

    def __getitem__(self, n: int) -> Any:
        assert 0 <= n < self.size, f"index {n} out of range for {self.size}-vector"
        return self.data[n]

    def __setitem__(self, n: int, value: Any) -> None:
        assert 0 <= n < self.size, f"index {n} out of range for {self.size}-vector"
        self.data[n] = coerce(self.scalar, value)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedVector):
            return NotImplemented
        return self.size == other.size and self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(v) for v in self.data)})"

    def copy(self) -> FixedVector:
        clone = object.__new__(type(self))
        clone.data = list(self.data)
        return clone

    def to_tuple(self) -> tuple[Any, ...]:
        return tuple(self.data)

    def to_numpy(self) -> np.ndarray:
        return np.array(self.data, dtype=self.scalar)

    # ── in-place arithmetic ───────────────────────────────────────

    def __iadd__(self, rhs: Any) -> FixedVector:
        if isinstance(rhs, FixedVector):
            self._check_scalar(rhs)
            scalar, data, other = self.scalar, self.data, rhs.data
            for i in range(min(self.size, rhs.size)):
                data[i] = coerce(scalar, data[i] + other[i])
            return self
        if is_scalar(rhs):
            self.strategy.add_scalar(self, coerce(self.scalar, rhs))
            return self
        return NotImplemented

    def __isub__(self, rhs: Any) -> FixedVector:
        scalar, data = self.scalar, self.data
        if isinstance(rhs, FixedVector):
            self._check_scalar(rhs)
            other = rhs.data
            for i in range(min(self.size, rhs.size)):
                data[i] = coerce(scalar, data[i] - other[i])
            return self
        if is_scalar(rhs):
            value = coerce(scalar, rhs)
            for i in range(self.size):
                data[i] = coerce(scalar, data[i] - value)
            return self
        return NotImplemented

    def __imul__(self, rhs: Any) -> FixedVector:
        if isinstance(rhs, FixedVector):
            raise TypeError("in-place multiply takes a scalar; use v * w for the dot product")
        if not is_scalar(rhs):
            return NotImplemented
        scalar, data = self.scalar, self.data
        value = coerce(scalar, rhs)
        for i in range(self.size):
            data[i] = coerce(scalar, data[i] * value)
        return self

    def __itruediv__(self, rhs: Any) -> FixedVector:
        if not is_scalar(rhs):
            return NotImplemented
        scalar, data = self.scalar, self.data
        value = coerce(scalar, rhs)
        # Division by zero leaves the vector unchanged.
        if value != 0:
            for i in range(self.size):
                data[i] = divide(scalar, data[i], value)
        return self

    def cross(self, rhs: FixedVector) -> FixedVector:
        """Replace components 0..2 with self x rhs; later components are kept."""
        self._check_scalar(rhs)
        if rhs.size < 3:
            raise DimensionError(
                f"cannot take cross product with a {rhs.size}-component vector"
            )
        scalar, d, o = self.scalar, self.data, rhs.data
        x, y, z = d[0], d[1], d[2]
        ox, oy, oz = o[0], o[1], o[2]
        d[0] = coerce(scalar, y * oz - z * oy)
        d[1] = coerce(scalar, z * ox - x * oz)
        d[2] = coerce(scalar, x * oy - y * ox)
        return self

    def normalize(self) -> FixedVector:
        """Scale to unit length. A zero vector stays zero."""
        return self.__itruediv__(self.length())

    # ── derived scalars ───────────────────────────────────────────

    def dot(self, rhs: FixedVector) -> Any:
        self._check_scalar(rhs)
        if rhs.size != self.size:
            raise DimensionError(
                f"dot product needs equal sizes, got {self.size} and {rhs.size}"
            )
        total = zero(self.scalar)
        for a, b in zip(self.data, rhs.data):
            total += a * b
        return total

    def length_sq(self) -> Any:
        return self.dot(self)

    def length(self) -> Any:
        """Euclidean length. Approximate unless the class config asks for EXACT."""
        scalar = self.scalar
        if not is_floating(scalar):
            raise ScalarTypeError(
                f"length is only defined for floating scalars, not {scalar.__name__}"
            )
        return coerce(scalar, sqrt(self.length_sq(), self.config, float_bits(scalar)))

    distance = length

    # ── value operators ───────────────────────────────────────────

    def __add__(self, rhs: Any) -> FixedVector:
        if not (isinstance(rhs, FixedVector) or is_scalar(rhs)):
            return NotImplemented
        return self.copy().__iadd__(rhs)

    def __radd__(self, lhs: Any) -> FixedVector:
        if not is_scalar(lhs):
            return NotImplemented
        return self.copy().__iadd__(lhs)

    def __sub__(self, rhs: Any) -> FixedVector:
        if not (isinstance(rhs, FixedVector) or is_scalar(rhs)):
            return NotImplemented
        return self.copy().__isub__(rhs)

    def __mul__(self, rhs: Any) -> Any:
        if isinstance(rhs, FixedVector):
            return self.dot(rhs)
        if not is_scalar(rhs):
            return NotImplemented
        return self.copy().__imul__(rhs)

    def __rmul__(self, lhs: Any) -> FixedVector:
        if not is_scalar(lhs):
            return NotImplemented
        return self.copy().__imul__(lhs)

    def __truediv__(self, rhs: Any) -> FixedVector:
        if not is_scalar(rhs):
            return NotImplemented
        return self.copy().__itruediv__(rhs)

    def __neg__(self) -> FixedVector:
        clone = self.copy()
        scalar = self.scalar
        clone.data = [coerce(scalar, -v) for v in self.data]
        return clone

    def _check_scalar(self, rhs: FixedVector) -> None:
        if rhs.scalar is not self.scalar:
            raise ScalarTypeError(
                f"cannot combine {self.scalar.__name__} and {rhs.scalar.__name__} vectors"
            )


def _read_components(scalar: type, n: int, buf: Any, offset: int) -> list[Any]:
    if isinstance(buf, (str, bytes)):
        raise ScalarTypeError("cannot build a vector from a string")
    if not hasattr(buf, "__len__"):
        raise ScalarTypeError(f"cannot build a vector from {type(buf).__name__}")
    if offset < 0 or len(buf) - offset < n:
        raise DimensionError(
            f"need {n} values from offset {offset}, buffer has {len(buf)}"
        )
    values = [buf[i] for i in range(offset, offset + n)]
    if not all(is_scalar(v) for v in values):
        raise ScalarTypeError("components must be numeric scalars")
    return [coerce(scalar, v) for v in values]


_types: dict[tuple[Any, ...], type[FixedVector]] = {}


def vector_type(
    scalar: type,
    size: int,
    vec_type: VecType = VecType.GENERIC,
    eval_type: EvalType = EvalType.SCALAR,
    config: VectorConfig | None = None,
) -> type[FixedVector]:
    """Return the concrete vector class for these parameters, creating it once."""
    check_scalar_type(scalar)
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise DimensionError(f"vector size must be a positive int, got {size!r}")
    if not isinstance(vec_type, VecType):
        raise TypeError(f"vec_type must be a VecType, got {vec_type!r}")
    if not isinstance(eval_type, EvalType):
        raise TypeError(f"eval_type must be an EvalType, got {eval_type!r}")
    if config is None:
        config = DEFAULT_CONFIG

    key = (scalar, size, vec_type, eval_type, config)
    cls = _types.get(key)
    if cls is not None:
        return cls

    strategy = resolve_strategy(scalar, size, vec_type, eval_type)
    namespace: dict[str, Any] = {
        "__slots__": (),
        "scalar": scalar,
        "size": size,
        "vec_type": vec_type,
        "eval_type": eval_type,
        "config": config,
        "strategy": strategy,
    }
    for name, index in _NAMED.items():
        namespace[name] = _Component(name, index) if index < size else _Unavailable(name)
    if size < 3:
        namespace["cross"] = _cross_unavailable

    params = [scalar.__name__, str(size)]
    if vec_type is not VecType.GENERIC or eval_type is not EvalType.SCALAR:
        params.append(vec_type.name)
    if eval_type is not EvalType.SCALAR:
        params.append(eval_type.name)
    cls = type(f"FixedVector[{', '.join(params)}]", (FixedVector,), namespace)
    _types[key] = cls
    logger.debug("Created %s using %s", cls.__name__, strategy.__name__)
    return cls


Vec2f = vector_type(float, 2)
Vec3f = vector_type(float, 3)
Vec4f = vector_type(float, 4)
Vec2i = vector_type(int, 2)
Vec3i = vector_type(int, 3)
Color3f = vector_type(float, 3, VecType.COLOR)
Color4f = vector_type(float, 4, VecType.COLOR)
