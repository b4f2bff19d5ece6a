"""Tests for evaluation strategy registration, resolution and equivalence."""
from __future__ import annotations

import logging
import random
from typing import Any, Iterator

import numpy as np
import pytest

from tick_vector import (
    BatchedStrategy,
    EvalType,
    EvaluationStrategy,
    FixedVector,
    Vec3f,
    VecType,
    register_strategy,
    resolve_strategy,
    unregister_strategy,
    vector_type,
    verify_strategy,
)
from tick_vector.strategy import registered


class CountingStrategy(EvaluationStrategy):
    calls = 0

    @staticmethod
    def add_scalar(vec: Any, value: Any) -> None:
        CountingStrategy.calls += 1
        EvaluationStrategy.add_scalar(vec, value)


class BrokenStrategy(EvaluationStrategy):
    @staticmethod
    def add_scalar(vec: Any, value: Any) -> None:
        EvaluationStrategy.add_scalar(vec, value + 1)


@pytest.fixture
def cleanup() -> Iterator[list[tuple[Any, ...]]]:
    keys: list[tuple[Any, ...]] = []
    yield keys
    for key in keys:
        if key in registered():
            unregister_strategy(*key)


# ── resolution ────────────────────────────────────────────────────


class TestResolve:
    def test_default_is_loop(self) -> None:
        assert resolve_strategy(float, 3, VecType.GENERIC, EvalType.SCALAR) is EvaluationStrategy
        assert Vec3f.strategy is EvaluationStrategy

    @pytest.mark.parametrize("scalar", [float, np.float32])
    @pytest.mark.parametrize("size", [2, 3, 4])
    def test_batched_registered(self, scalar: type, size: int) -> None:
        for flavour in VecType:
            assert resolve_strategy(scalar, size, flavour, EvalType.BATCHED) is BatchedStrategy

    def test_unregistered_size_falls_back(self) -> None:
        V = FixedVector[float, 5, VecType.GENERIC, EvalType.BATCHED]
        assert V.strategy is EvaluationStrategy

    def test_int_batched_falls_back(self) -> None:
        V = FixedVector[int, 3, VecType.POINT, EvalType.BATCHED]
        assert V.strategy is EvaluationStrategy

    def test_class_binds_strategy(self) -> None:
        V = FixedVector[float, 3, VecType.COLOR, EvalType.BATCHED]
        assert V.strategy is BatchedStrategy


# ── registration ──────────────────────────────────────────────────


class TestRegistration:
    def test_custom_strategy_intercepts_scalar_add(self, cleanup: list) -> None:
        register_strategy(float, 6, VecType.POINT)(CountingStrategy)
        cleanup.append((float, 6, VecType.POINT, EvalType.BATCHED))
        V = vector_type(float, 6, VecType.POINT, EvalType.BATCHED)
        assert V.strategy is CountingStrategy

        before = CountingStrategy.calls
        v = V(1.0)
        v += 2.0
        _ = v + 1.0
        assert CountingStrategy.calls == before + 2
        assert v == V(3.0)

    def test_sub_and_vector_add_bypass_strategy(self, cleanup: list) -> None:
        register_strategy(float, 7, VecType.POINT)(CountingStrategy)
        cleanup.append((float, 7, VecType.POINT, EvalType.BATCHED))
        V = vector_type(float, 7, VecType.POINT, EvalType.BATCHED)

        before = CountingStrategy.calls
        v = V(1.0)
        v -= 1.0
        v += V(2.0)
        v *= 3.0
        assert CountingStrategy.calls == before
        assert v == V(6.0)

    def test_exact_key_beats_wildcard(self, cleanup: list) -> None:
        register_strategy(int, 8)(BatchedStrategy)
        register_strategy(int, 8, VecType.COLOR)(CountingStrategy)
        cleanup.extend([
            (int, 8, None, EvalType.BATCHED),
            (int, 8, VecType.COLOR, EvalType.BATCHED),
        ])
        assert resolve_strategy(int, 8, VecType.COLOR, EvalType.BATCHED) is CountingStrategy
        assert resolve_strategy(int, 8, VecType.POINT, EvalType.BATCHED) is BatchedStrategy
        assert resolve_strategy(int, 8, VecType.POINT, EvalType.SCALAR) is EvaluationStrategy

    def test_decorator_returns_class(self, cleanup: list) -> None:
        @register_strategy(float, 9, eval_type=EvalType.SCALAR)
        class Local(EvaluationStrategy):
            pass

        cleanup.append((float, 9, None, EvalType.SCALAR))
        assert isinstance(Local, type)
        assert resolve_strategy(float, 9, VecType.GENERIC, EvalType.SCALAR) is Local

    def test_replacement_logs_warning(self, cleanup: list, caplog: pytest.LogCaptureFixture) -> None:
        register_strategy(float, 10)(BatchedStrategy)
        cleanup.append((float, 10, None, EvalType.BATCHED))
        with caplog.at_level(logging.WARNING, logger="tick_vector.strategy"):
            register_strategy(float, 10)(CountingStrategy)
        assert "Replacing strategy BatchedStrategy with CountingStrategy" in caplog.text

    def test_reregistering_same_class_is_quiet(self, cleanup: list, caplog: pytest.LogCaptureFixture) -> None:
        register_strategy(float, 11)(BatchedStrategy)
        cleanup.append((float, 11, None, EvalType.BATCHED))
        with caplog.at_level(logging.WARNING, logger="tick_vector.strategy"):
            register_strategy(float, 11)(BatchedStrategy)
        assert caplog.text == ""

    def test_unregister(self) -> None:
        register_strategy(float, 12)(CountingStrategy)
        unregister_strategy(float, 12)
        assert resolve_strategy(float, 12, VecType.GENERIC, EvalType.BATCHED) is EvaluationStrategy

    def test_unregister_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            unregister_strategy(float, 13, VecType.POINT)

    def test_registered_is_a_copy(self) -> None:
        snapshot = registered()
        snapshot.clear()
        assert registered()


# ── equivalence ───────────────────────────────────────────────────


class TestEquivalence:
    @pytest.mark.parametrize("scalar", [float, np.float32])
    @pytest.mark.parametrize("size", [2, 3, 4])
    def test_batched_matches_loop(self, scalar: type, size: int) -> None:
        V = vector_type(scalar, size, VecType.GENERIC, EvalType.BATCHED)
        assert V.strategy is BatchedStrategy
        rng = random.Random(size)
        for _ in range(100):
            v = V(*[rng.uniform(-1e4, 1e4) for _ in range(size)])
            assert verify_strategy(V, v, rng.uniform(-1e4, 1e4))

    def test_batched_keeps_scalar_type(self) -> None:
        V = vector_type(np.float32, 4, VecType.COLOR, EvalType.BATCHED)
        v = V(0.1, 0.2, 0.3, 0.4)
        v += 0.5
        assert all(isinstance(c, np.float32) for c in v)
        W = vector_type(float, 3, VecType.POINT, EvalType.BATCHED)
        w = W(1.0, 2.0, 3.0)
        w += 1
        assert all(type(c) is float for c in w)
        assert w == W(2.0, 3.0, 4.0)

    def test_scalar_and_batched_types_agree(self) -> None:
        slow = Vec3f(0.1, 0.2, 0.3)
        fast = vector_type(float, 3, VecType.GENERIC, EvalType.BATCHED)(0.1, 0.2, 0.3)
        slow += 0.7
        fast += 0.7
        assert slow.to_tuple() == fast.to_tuple()

    def test_verify_detects_divergence(self, cleanup: list) -> None:
        register_strategy(float, 14)(BrokenStrategy)
        cleanup.append((float, 14, None, EvalType.BATCHED))
        V = vector_type(float, 14, eval_type=EvalType.BATCHED)
        assert not verify_strategy(V, V(1.0), 1.0)
