"""Consistency checks for solver states."""

from __future__ import annotations

import numpy as np


def assert_state_consistent(state, atol: float = 0.0) -> None:
    """
    Assert that a solver state honours the point/array invariants.

    ``X`` must be a 2-D array with one row per coordinate of ``x`` and at
    least one column. When it has a single column, that column must equal
    ``x``.

    Parameters
    ----------
    state:
        Any object exposing ``f``, ``x`` and ``X``.
    atol:
        Absolute tolerance used when comparing the single column to ``x``.

    Raises
    ------
    ValueError
        If any invariant is violated.
    """
    x = np.asarray(state.x)
    X = np.asarray(state.X)
    if x.ndim != 1 or x.size == 0:
        raise ValueError(f"State point must be a non-empty vector, got shape {x.shape}.")
    if X.ndim != 2:
        raise ValueError(f"State point array must be 2-D, got shape {X.shape}.")
    if X.shape[0] != x.size:
        raise ValueError(
            f"State point array has {X.shape[0]} rows but the point has {x.size} entries."
        )
    if X.shape[1] < 1:
        raise ValueError("State point array must hold at least one column.")
    if X.shape[1] == 1 and not np.allclose(X[:, 0], x, rtol=0.0, atol=atol, equal_nan=True):
        raise ValueError("Single-column state point array differs from the current point.")
    if np.ndim(state.f) != 0:
        raise ValueError("State function value must be a scalar.")


def is_finite_state(state) -> bool:
    """Return True if the function value and every point of ``state`` are finite."""
    return bool(
        np.isfinite(state.f)
        and np.all(np.isfinite(state.x))
        and np.all(np.isfinite(state.X))
    )
