"""Evaluation strategies: how strategy-routed vector operations are computed.

A strategy is selected once per concrete vector class from the key
(scalar type, dimension, VecType, EvalType). Unregistered keys fall back to
EvaluationStrategy, the per-component loop. Every registered strategy must
leave vectors component-wise equal to that loop.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from tick_vector.scalar import coerce
from tick_vector.types import EvalType, VecType

if TYPE_CHECKING:
    from tick_vector.vector import FixedVector

logger = logging.getLogger(__name__)

StrategyKey = tuple[type, int, "VecType | None", EvalType]


class EvaluationStrategy:
    """Per-component loop. Base class for specialised backends.

    Operands arrive already coerced to the vector's scalar type.
    """

    @staticmethod
    def add_scalar(vec: FixedVector, value: Any) -> None:
        scalar = vec.scalar
        data = vec.data
        for i in range(len(data)):
            data[i] = coerce(scalar, data[i] + value)


class BatchedStrategy(EvaluationStrategy):
    """Whole-vector NumPy arithmetic in the vector's own precision.

    Serves as the reference batched backend: it copies the components into an
    array on every call, so for 2-4 components it is slower than the loop.
    Width-specific backends should match its results.
    """

    @staticmethod
    def add_scalar(vec: FixedVector, value: Any) -> None:
        scalar = vec.scalar
        arr = np.array(vec.data, dtype=scalar)
        arr += value
        vec.data[:] = [coerce(scalar, v) for v in arr]


_registry: dict[StrategyKey, type[EvaluationStrategy]] = {}


def register_strategy(
    scalar: type,
    size: int,
    vec_type: VecType | None = None,
    eval_type: EvalType = EvalType.BATCHED,
) -> Callable[[type[EvaluationStrategy]], type[EvaluationStrategy]]:
    """Class decorator registering a strategy. vec_type=None matches every flavour.

    Vector classes resolve their strategy when first created, so register
    before the matching vector type is used.
    """

    def decorator(cls: type[EvaluationStrategy]) -> type[EvaluationStrategy]:
        key = (scalar, size, vec_type, eval_type)
        previous = _registry.get(key)
        if previous is not None and previous is not cls:
            logger.warning(
                "Replacing strategy %s with %s for %s",
                previous.__name__, cls.__name__, _describe(key),
            )
        _registry[key] = cls
        logger.debug("Registered %s for %s", cls.__name__, _describe(key))
        return cls

    return decorator


def unregister_strategy(
    scalar: type,
    size: int,
    vec_type: VecType | None = None,
    eval_type: EvalType = EvalType.BATCHED,
) -> None:
    """Remove a registration. Raises KeyError if the key is not registered."""
    key = (scalar, size, vec_type, eval_type)
    if key not in _registry:
        raise KeyError(_describe(key))
    del _registry[key]


def resolve_strategy(
    scalar: type,
    size: int,
    vec_type: VecType,
    eval_type: EvalType,
) -> type[EvaluationStrategy]:
    """Exact key first, then the flavour wildcard, then the per-component loop."""
    for key in (
        (scalar, size, vec_type, eval_type),
        (scalar, size, None, eval_type),
    ):
        strategy = _registry.get(key)
        if strategy is not None:
            return strategy
    return EvaluationStrategy


def registered() -> dict[StrategyKey, type[EvaluationStrategy]]:
    """Return a copy of the registry."""
    return dict(_registry)


def verify_strategy(vector_cls: type[FixedVector], vector: FixedVector, value: Any) -> bool:
    """Check that vector_cls's strategy agrees with the loop for one input."""
    fast = vector_cls(vector)
    fast += value
    slow = vector_cls(vector)
    EvaluationStrategy.add_scalar(slow, coerce(vector_cls.scalar, value))
    return fast.to_tuple() == slow.to_tuple()


def _describe(key: StrategyKey) -> str:
    scalar, size, vec_type, eval_type = key
    flavour = "*" if vec_type is None else vec_type.value
    return f"({scalar.__name__}, {size}, {flavour}, {eval_type.value})"


for _scalar in (float, np.float32):
    for _size in (2, 3, 4):
        register_strategy(_scalar, _size)(BatchedStrategy)
