"""Shared error types and dispatch tags for tick-vector."""
from __future__ import annotations

from enum import Enum


class VecType(Enum):
    """Semantic flavour of a vector. Part of the strategy dispatch key."""

    GENERIC = "generic"
    POINT = "point"
    DIRECTION = "direction"
    COLOR = "color"


class EvalType(Enum):
    """Evaluation family used for strategy-routed operations."""

    SCALAR = "scalar"
    BATCHED = "batched"


class DimensionError(ValueError):
    """Raised when vector dimensions do not fit the requested operation."""


class AccessorError(AttributeError):
    """Raised when a named component lies beyond the vector's dimension."""

    def __init__(self, name: str, size: int) -> None:
        self.name = name
        self.size = size
        super().__init__(f"cannot access {name} on a {size}-component vector")


class ScalarTypeError(TypeError):
    """Raised for unsupported or mismatched scalar types."""
