"""Solver state snapshots.

A state captures the function value and the point(s) a solver holds after an
iteration. Solvers replace their live state on every step and the solve loop
archives independent clones of it, so a recorded history never changes when
the solver moves on.

Single-point solvers expose their point array ``X`` as an ``n x 1`` view of
``x``. Multi-point solvers (direct search methods) override ``X`` to return
every point produced in the step, one per column.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Optional

import numpy as np


@dataclass
class State:
    """Function value ``f`` at the current iterate ``x``."""

    f: float
    x: np.ndarray

    @property
    def X(self) -> np.ndarray:
        """Matrix whose columns are the points of the current step."""
        return self.x.reshape(-1, 1)

    @property
    def n(self) -> int:
        return int(self.x.size)

    def clone(self) -> "State":
        """Return a deep, read-only copy suitable for archival."""
        snapshot = copy.deepcopy(self)
        for item in fields(snapshot):
            value = getattr(snapshot, item.name)
            if isinstance(value, np.ndarray):
                value.setflags(write=False)
        return snapshot


@dataclass
class PointState(State):
    """Single-point state with optional cached derivatives.

    ``gradient`` and ``hessian`` hold the derivatives at ``x`` when the solver
    computed them during the step, and are ``None`` otherwise.
    """

    gradient: Optional[np.ndarray] = None
    hessian: Optional[np.ndarray] = None


@dataclass
class LineSearchState(PointState):
    """State of a descent method: last search direction and accepted step length."""

    direction: Optional[np.ndarray] = None
    step_length: float = 0.0


@dataclass
class TrustRegionState(PointState):
    """State of a trust-region method."""

    radius: float = 1.0
    ratio: float = 0.0
    accepted: bool = True


@dataclass
class SimplexState(State):
    """State of a simplex method.

    ``vertices`` is an ``n x (n + 1)`` matrix holding one vertex per column,
    sorted by increasing function value, with matching ``fvals``. ``x`` and
    ``f`` are the best vertex and its value.
    """

    vertices: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))
    fvals: np.ndarray = field(default_factory=lambda: np.empty(0))
    operation: str = "initial"

    @property
    def X(self) -> np.ndarray:
        return self.vertices

    @property
    def diameter(self) -> float:
        """Largest distance from the best vertex to any other vertex."""
        offsets = self.vertices - self.x.reshape(-1, 1)
        return float(np.max(np.linalg.norm(offsets, axis=0)))


__all__ = [
    "State",
    "PointState",
    "LineSearchState",
    "TrustRegionState",
    "SimplexState",
]
