import numpy as np
import pytest

from localopt import LineSearchState, PointState, SimplexState, State


def test_single_point_array_is_column_of_x():
    state = PointState(f=1.0, x=np.array([1.0, 2.0, 3.0]))
    assert state.X.shape == (3, 1)
    assert np.array_equal(state.X[:, 0], state.x)
    assert state.n == 3


def test_clone_is_independent_of_live_state():
    live = PointState(f=4.0, x=np.array([2.0, -1.0]), gradient=np.array([4.0, -2.0]))
    snapshot = live.clone()

    live.x[0] = 100.0
    live.gradient[:] = 0.0
    live.f = -1.0

    assert snapshot.f == 4.0
    assert np.array_equal(snapshot.x, [2.0, -1.0])
    assert np.array_equal(snapshot.X[:, 0], [2.0, -1.0])
    assert np.array_equal(snapshot.gradient, [4.0, -2.0])


def test_clone_is_read_only():
    snapshot = PointState(f=0.0, x=np.zeros(2)).clone()
    with pytest.raises(ValueError):
        snapshot.x[0] = 1.0


def test_clone_preserves_subclass_fields():
    state = LineSearchState(
        f=1.0, x=np.ones(2), direction=np.array([-1.0, 0.0]), step_length=0.5
    )
    snapshot = state.clone()
    assert isinstance(snapshot, LineSearchState)
    assert snapshot.step_length == 0.5
    assert np.array_equal(snapshot.direction, [-1.0, 0.0])
    assert snapshot.direction is not state.direction


def test_simplex_state_exposes_vertices():
    vertices = np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    state = SimplexState(
        f=0.0, x=vertices[:, 0].copy(), vertices=vertices, fvals=np.array([0.0, 1.0, 1.0])
    )
    assert state.X.shape == (2, 3)
    assert state.diameter == pytest.approx(1.0)
    snapshot = state.clone()
    vertices[0, 1] = 5.0
    assert snapshot.X[0, 1] == 1.0


def test_base_state_is_single_point():
    state = State(f=2.0, x=np.array([1.0]))
    assert state.X.shape == (1, 1)
