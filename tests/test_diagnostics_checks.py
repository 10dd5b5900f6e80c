"""Tests for state consistency checks."""

import numpy as np
import pytest

from localopt import PointState, SimplexState
from localopt.diagnostics import assert_state_consistent, is_finite_state


def test_single_point_state_is_consistent():
    assert_state_consistent(PointState(f=1.0, x=np.array([1.0, 2.0])))


def test_simplex_state_is_consistent():
    vertices = np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    state = SimplexState(f=0.0, x=vertices[:, 0].copy(), vertices=vertices, fvals=np.array([0.0, 1.0, 1.0]))
    assert_state_consistent(state)


class _Raw:
    def __init__(self, f, x, X):
        self.f, self.x, self.X = f, x, X


@pytest.mark.parametrize(
    "state",
    [
        _Raw(0.0, np.zeros((2, 1)), np.zeros((2, 1))),
        _Raw(0.0, np.zeros(0), np.zeros((0, 1))),
        _Raw(0.0, np.zeros(2), np.zeros(2)),
        _Raw(0.0, np.zeros(2), np.zeros((3, 1))),
        _Raw(0.0, np.zeros(2), np.zeros((2, 0))),
        _Raw(0.0, np.zeros(2), np.ones((2, 1))),
        _Raw(np.zeros(2), np.zeros(2), np.zeros((2, 1))),
    ],
)
def test_inconsistent_states_are_rejected(state):
    with pytest.raises(ValueError):
        assert_state_consistent(state)


def test_tolerance_for_single_column():
    state = _Raw(0.0, np.zeros(2), np.full((2, 1), 1e-10))
    with pytest.raises(ValueError):
        assert_state_consistent(state)
    assert_state_consistent(state, atol=1e-9)


def test_is_finite_state():
    assert is_finite_state(PointState(f=1.0, x=np.ones(2)))
    assert not is_finite_state(PointState(f=np.inf, x=np.ones(2)))
    assert not is_finite_state(PointState(f=1.0, x=np.array([1.0, np.nan])))
