"""Stopping criteria evaluated by the solve loop after every iteration.

A criterion is a deterministic predicate over the observable state of a
solver. Criteria compose with ``|`` (stop when any is satisfied) and ``&``
(stop when all are satisfied)::

    crit = GradNormTest(1e-8) | MaxNumIterTest(500)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .errors import ConfigurationError, DimensionMismatchError

if TYPE_CHECKING:
    from .solver import Solver


class StoppingCriterion(ABC):
    """Predicate deciding whether a run has reached its goal."""

    @abstractmethod
    def test(self, solver: "Solver") -> bool:
        """Return True if the iteration should stop."""

    def check_dim(self, n: int) -> None:
        """Raise :class:`DimensionMismatchError` if the criterion cannot apply to R^n."""

    def __call__(self, solver: "Solver") -> bool:
        return self.test(solver)

    def __or__(self, other: "StoppingCriterion") -> "AnyOf":
        return AnyOf((self, other))

    def __and__(self, other: "StoppingCriterion") -> "AllOf":
        return AllOf((self, other))


@dataclass(frozen=True)
class GradNormTest(StoppingCriterion):
    """Stop when the Euclidean norm of the gradient drops below ``eps``."""

    eps: float = 1e-6

    def __post_init__(self) -> None:
        if self.eps <= 0:
            raise ConfigurationError("eps must be positive")

    def test(self, solver: "Solver") -> bool:
        return bool(np.linalg.norm(solver.get_gradient()) < self.eps)


@dataclass(frozen=True)
class FDistToMinTest(StoppingCriterion):
    """Stop when the function value is within ``eps`` of a known minimum value."""

    f_min: float
    eps: float = 1e-6
    relative: bool = False

    def test(self, solver: "Solver") -> bool:
        dist = abs(solver.get_f_val() - self.f_min)
        if self.relative and self.f_min != 0.0:
            dist /= abs(self.f_min)
        return bool(dist < self.eps)


@dataclass(frozen=True, eq=False)
class XDistToMinTest(StoppingCriterion):
    """Stop when the iterate is within ``eps`` of a known minimizer."""

    x_min: np.ndarray
    eps: float = 1e-6
    relative: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "x_min", np.array(self.x_min, dtype=float).ravel())

    def check_dim(self, n: int) -> None:
        if self.x_min.size != n:
            raise DimensionMismatchError(n, self.x_min.size, what="x_min")

    def test(self, solver: "Solver") -> bool:
        x = solver.get_x()
        if x.shape != self.x_min.shape:
            raise ValueError(
                f"Iterate has shape {x.shape}, expected {self.x_min.shape}."
            )
        dist = float(np.linalg.norm(x - self.x_min))
        scale = float(np.linalg.norm(self.x_min))
        if self.relative and scale > 0.0:
            dist /= scale
        return dist < self.eps

    def __repr__(self) -> str:
        return f"XDistToMinTest(x_min={self.x_min.tolist()}, eps={self.eps}, relative={self.relative})"


@dataclass(frozen=True)
class MaxNumIterTest(StoppingCriterion):
    """Stop once ``max_iter`` iterations have been taken."""

    max_iter: int

    def __post_init__(self) -> None:
        if self.max_iter < 1:
            raise ConfigurationError("max_iter must be at least 1.")

    def test(self, solver: "Solver") -> bool:
        return solver.get_num_iter() >= self.max_iter


@dataclass(frozen=True)
class AnyOf(StoppingCriterion):
    """Satisfied when at least one of ``criteria`` is satisfied."""

    criteria: Tuple[StoppingCriterion, ...] = field(default_factory=tuple)

    def check_dim(self, n: int) -> None:
        for crit in self.criteria:
            crit.check_dim(n)

    def test(self, solver: "Solver") -> bool:
        # no short-circuit: each member may query the objective
        results = [crit.test(solver) for crit in self.criteria]
        return any(results)

    def __repr__(self) -> str:
        return " | ".join(repr(crit) for crit in self.criteria)


@dataclass(frozen=True)
class AllOf(StoppingCriterion):
    """Satisfied when every one of ``criteria`` is satisfied."""

    criteria: Tuple[StoppingCriterion, ...] = field(default_factory=tuple)

    def check_dim(self, n: int) -> None:
        for crit in self.criteria:
            crit.check_dim(n)

    def test(self, solver: "Solver") -> bool:
        results = [crit.test(solver) for crit in self.criteria]
        return bool(results) and all(results)

    def __repr__(self) -> str:
        return " & ".join(repr(crit) for crit in self.criteria)


__all__ = [
    "StoppingCriterion",
    "GradNormTest",
    "FDistToMinTest",
    "XDistToMinTest",
    "MaxNumIterTest",
    "AnyOf",
    "AllOf",
]
