"""Tests for debug mode functionality."""

import numpy as np
import pytest

from localopt import Function, GradNormTest, IterationStatus, PointState
from localopt.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    validate_if_debug,
)
from localopt.optimize import BFGS, NelderMead, NelderMeadSetup


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        # Back to previous (False in this block)
        assert not is_debug_enabled()

        set_debug_enabled(True)
        assert is_debug_enabled()

        with debug_context(False):
            assert not is_debug_enabled()

        # Back to True
        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_nested() -> None:
    """Test nested debug contexts."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)

        with debug_context(True):
            assert is_debug_enabled()

            with debug_context(False):
                assert not is_debug_enabled()

            assert is_debug_enabled()

        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_restores_after_error() -> None:
    original = is_debug_enabled()
    with pytest.raises(RuntimeError):
        with debug_context(not original):
            raise RuntimeError("boom")
    assert is_debug_enabled() == original


def test_point_solver_runs_cleanly_in_debug_mode(rosen) -> None:
    """Every archived single-point state passes validation."""
    with debug_context(True):
        res = BFGS().solve(rosen, np.array([-1.2, 1.0]), GradNormTest(1e-5))
    assert res.status is IterationStatus.SUCCESS


def test_simplex_solver_runs_cleanly_in_debug_mode() -> None:
    """Multi-column states are validated as well."""
    func = Function(lambda x: float(np.sum((x - 1.0) ** 2)), dim=3)
    with debug_context(True):
        res = NelderMead().solve(func, np.zeros(3), solver_setup=NelderMeadSetup(max_iter=5000))
    assert res.converged


def test_set_debug_enabled_returns_previous_setting() -> None:
    original = is_debug_enabled()
    try:
        assert set_debug_enabled(True) == original
        assert set_debug_enabled(False) is True
    finally:
        set_debug_enabled(original)


def test_validate_if_debug_only_checks_when_enabled() -> None:
    malformed = PointState(f=0.0, x=np.zeros((2, 1)))
    with debug_context(False):
        validate_if_debug(malformed)
    with debug_context(True):
        with pytest.raises(ValueError):
            validate_if_debug(malformed)
        validate_if_debug(PointState(f=0.0, x=np.zeros(2)))
