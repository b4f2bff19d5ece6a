"""Vector basics -- the tick-vector types in a few lines each.

Demonstrates:
- Getting concrete vector types with FixedVector[T, N, ...]
- Construction: positional, fill, resize and extend
- Scalar and vector arithmetic, dot and cross products
- Approximate vs exact lengths
- Switching scalar addition to the batched backend

Run: python -m examples.basics
"""

import math

import numpy as np

from tick_vector import (
    EvalType,
    FixedVector,
    SqrtMode,
    Vec2f,
    Vec3f,
    Vec4f,
    VecType,
    VectorConfig,
    cross,
    normalize,
    vector_type,
)


def main() -> None:
    print("=== Construction ===\n")
    position = Vec3f(1.0, 2.0, 3.0)
    print(f"  positional   {position}")
    print(f"  fill         {Vec3f(0.5)}")
    print(f"  resize up    {Vec4f(Vec2f(1.0, 2.0))}")
    print(f"  extend       {Vec4f(position, 1.0)}")

    print("\n=== Arithmetic ===\n")
    velocity = Vec3f(0.0, -9.8, 0.0)
    dt = 1.0 / 60.0
    print(f"  integrate    {position + velocity * dt}")
    print(f"  overlap add  {position + Vec2f(10.0, 20.0)}")
    print(f"  div by zero  {position / 0.0}")
    print(f"  dot          {position * Vec3f(4.0, 5.0, 6.0)}")
    print(f"  cross        {cross(Vec3f(1.0, 0.0, 0.0), Vec3f(0.0, 1.0, 0.0))}")

    print("\n=== Lengths ===\n")
    exact_type = vector_type(float, 3, config=VectorConfig(sqrt_mode=SqrtMode.EXACT))
    approx = position.length()
    exact = exact_type(position).length()
    print(f"  approximate  {approx:.6f}")
    print(f"  exact        {exact:.6f}  (math.sqrt {math.sqrt(14.0):.6f})")
    print(f"  rel error    {abs(approx - exact) / exact:.2e}")
    print(f"  normalized   {normalize(position)}")

    print("\n=== Batched backend ===\n")
    Color = FixedVector[np.float32, 4, VecType.COLOR, EvalType.BATCHED]
    tint = Color(0.2, 0.4, 0.6, 1.0)
    tint += 0.1
    print(f"  {Color.__name__} uses {Color.strategy.__name__}")
    print(f"  brightened   {tint}")


if __name__ == "__main__":
    main()
