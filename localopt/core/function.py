"""Objective functions with evaluation accounting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from .errors import ConfigurationError, DimensionMismatchError
from .findiff import approx_grad, approx_hessian

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]


@dataclass
class Function:
    """Objective function f: R^n -> R that counts its own evaluations.

    Every call to :meth:`value`, :meth:`gradient` or :meth:`hessian` increments
    the matching counter. When ``grad`` or ``hess`` is missing the derivative
    is approximated by central differences; the function evaluations spent
    on the approximation are added to ``num_func_eval`` as well.

    Counters are reset only by :meth:`localopt.core.solver.Solver.setup`.

    Attributes:
        fun: Objective returning a scalar for a 1-D array.
        grad: Optional analytic gradient.
        hess: Optional analytic Hessian.
        dim: Dimension of the domain, or ``None`` to accept any vector.
        name: Label used in log messages.
        fd_eps: Relative step of the finite-difference gradient.
        fd_hess_eps: Relative step of the finite-difference Hessian.
    """

    fun: Objective
    grad: Optional[Gradient] = None
    hess: Optional[Hessian] = None
    dim: Optional[int] = None
    name: Optional[str] = None
    fd_eps: float = 1e-6
    fd_hess_eps: float = 1e-4
    num_func_eval: int = field(default=0, init=False)
    num_grad_eval: int = field(default=0, init=False)
    num_hess_eval: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.dim is not None and self.dim < 1:
            raise ConfigurationError(f"Function dimension must be positive, got {self.dim}.")
        if self.name is None:
            self.name = getattr(self.fun, "__name__", "f")

    @property
    def has_analytic_gradient(self) -> bool:
        return self.grad is not None

    @property
    def has_analytic_hessian(self) -> bool:
        return self.hess is not None

    def value(self, x: Array) -> float:
        self.num_func_eval += 1
        return float(self.fun(np.asarray(x, dtype=float)))

    __call__ = value

    def gradient(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        self.num_grad_eval += 1
        if self.grad is not None:
            return np.asarray(self.grad(x), dtype=float).reshape(x.shape)
        grad, evals = approx_grad(self.fun, x, eps=self.fd_eps, return_evals=True)
        self.num_func_eval += evals
        return grad

    def hessian(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        self.num_hess_eval += 1
        if self.hess is not None:
            return np.asarray(self.hess(x), dtype=float).reshape(x.size, x.size)
        hess, evals = approx_hessian(self.fun, x, eps=self.fd_hess_eps, return_evals=True)
        self.num_func_eval += evals
        return hess

    def reset_counters(self) -> None:
        self.num_func_eval = 0
        self.num_grad_eval = 0
        self.num_hess_eval = 0

    def check_point(self, x: Array, what: str = "x0") -> Array:
        """Return ``x`` as a float vector after validating its shape.

        Raises:
            ConfigurationError: If ``x`` is not a non-empty 1-D array of reals.
            DimensionMismatchError: If ``x`` does not match ``dim``.
        """
        try:
            point = np.array(x, dtype=float)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{what} is not a real vector: {exc}") from exc
        if point.ndim != 1 or point.size == 0:
            raise ConfigurationError(
                f"{what} must be a non-empty 1-D array, got shape {point.shape}."
            )
        if self.dim is not None and point.size != self.dim:
            raise DimensionMismatchError(self.dim, point.size, what=what)
        return point


__all__ = ["Array", "Objective", "Gradient", "Hessian", "Function"]
