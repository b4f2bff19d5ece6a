"""tick-vector - Fixed-dimension vectors with pluggable evaluation strategies."""
from __future__ import annotations

from tick_vector.config import DEFAULT_CONFIG, SqrtMode, VectorConfig
from tick_vector.ops import cross, dot, length, normalize, normalize_many
from tick_vector.rsqrt import q_sqrt, rsqrt, rsqrt_many
from tick_vector.strategy import (
    BatchedStrategy,
    EvaluationStrategy,
    register_strategy,
    resolve_strategy,
    unregister_strategy,
    verify_strategy,
)
from tick_vector.types import AccessorError, DimensionError, EvalType, ScalarTypeError, VecType
from tick_vector.vector import (
    Color3f,
    Color4f,
    FixedVector,
    Vec2f,
    Vec2i,
    Vec3f,
    Vec3i,
    Vec4f,
    vector_type,
)

__all__ = [
    "AccessorError",
    "BatchedStrategy",
    "Color3f",
    "Color4f",
    "DEFAULT_CONFIG",
    "DimensionError",
    "EvalType",
    "EvaluationStrategy",
    "FixedVector",
    "ScalarTypeError",
    "SqrtMode",
    "Vec2f",
    "Vec2i",
    "Vec3f",
    "Vec3i",
    "Vec4f",
    "VecType",
    "VectorConfig",
    "cross",
    "dot",
    "length",
    "normalize",
    "normalize_many",
    "q_sqrt",
    "register_strategy",
    "resolve_strategy",
    "rsqrt",
    "rsqrt_many",
    "unregister_strategy",
    "verify_strategy",
]
