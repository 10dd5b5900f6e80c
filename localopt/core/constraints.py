"""
Constraint descriptions consumed by solvers.

Bounds follow the usual element-wise convention: ``None`` denotes a free
side, while ``np.inf`` or ``-np.inf`` entries give one-sided bounds on
individual coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import ConfigurationError, DimensionMismatchError


class Constraints:
    """Base class of all constraint descriptions."""

    def check_dim(self, n: int) -> None:
        """Raise :class:`DimensionMismatchError` if incompatible with ``n`` variables."""

    def contains(self, x: np.ndarray) -> bool:
        return True

    def project(self, x: np.ndarray) -> np.ndarray:
        """Return the feasible point closest to ``x``."""
        return np.array(x, dtype=float, copy=True)


@dataclass(frozen=True, eq=False)
class NoConstraints(Constraints):
    """Unconstrained problem."""


@dataclass(frozen=True, eq=False)
class BoundConstraints(Constraints):
    """Box constraints ``lower <= x <= upper``."""

    lower: Optional[np.ndarray] = None
    upper: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        lower = None if self.lower is None else np.array(self.lower, dtype=float).ravel()
        upper = None if self.upper is None else np.array(self.upper, dtype=float).ravel()
        if lower is not None and upper is not None:
            if lower.shape != upper.shape:
                raise ConfigurationError(
                    f"Bounds have mismatched shapes {lower.shape} and {upper.shape}."
                )
            if np.any(lower > upper):
                raise ConfigurationError("Lower bounds must not exceed upper bounds.")
        for bound in (lower, upper):
            if bound is not None and np.any(np.isnan(bound)):
                raise ConfigurationError("Bounds must not contain NaN.")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    def check_dim(self, n: int) -> None:
        for bound in (self.lower, self.upper):
            if bound is not None and bound.size != n:
                raise DimensionMismatchError(n, bound.size, what="bounds")

    def contains(self, x: np.ndarray) -> bool:
        x = np.asarray(x, dtype=float)
        if self.lower is not None and np.any(x < self.lower):
            return False
        if self.upper is not None and np.any(x > self.upper):
            return False
        return True

    def project(self, x: np.ndarray) -> np.ndarray:
        projected = np.array(x, dtype=float, copy=True)
        if self.lower is not None:
            projected = np.maximum(projected, self.lower)
        if self.upper is not None:
            projected = np.minimum(projected, self.upper)
        return projected


__all__ = ["Constraints", "NoConstraints", "BoundConstraints"]
