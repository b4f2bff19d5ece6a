"""Vector configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SqrtMode(Enum):
    APPROXIMATE = "approximate"
    EXACT = "exact"


@dataclass(frozen=True)
class VectorConfig:
    """Immutable per-type configuration for derived scalar operations.

    Attributes:
        sqrt_mode: APPROXIMATE uses the bit-trick reciprocal square root,
            EXACT uses math.sqrt.
        newton_iterations: Newton-Raphson refinements applied to the
            approximate estimate. One keeps relative error below 0.2%.
    """

    sqrt_mode: SqrtMode = SqrtMode.APPROXIMATE
    newton_iterations: int = 1

    def __post_init__(self) -> None:
        if self.newton_iterations < 0:
            raise ValueError(
                f"newton_iterations must be >= 0, got {self.newton_iterations}"
            )


DEFAULT_CONFIG = VectorConfig()
