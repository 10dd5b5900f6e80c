"""Base class of the iterative local solvers.

A concrete solver supplies only the per-step update rule: it creates its
initial state in :meth:`Solver._initialize` and advances it in
:meth:`Solver._iterate`. Iteration counting, configuration checks, the
solve loop and result packaging live here so that every algorithm shares
the same bookkeeping.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..diagnostics import is_finite_state, validate_if_debug
from ..logging import get_logger
from .config import Setup
from .constraints import Constraints, NoConstraints
from .errors import ConfigurationError
from .function import Function
from .results import Results
from .state import PointState, State
from .status import IterationStatus
from .stopping import StoppingCriterion

logger = get_logger(__name__)

_STATUS_MESSAGES = {
    IterationStatus.SUCCESS: "Solver reported success.",
    IterationStatus.NO_PROGRESS: "Solver is not making progress.",
    IterationStatus.OUT_OF_CONTROL: "Iteration diverged or produced non-finite values.",
}


class Solver(ABC):
    """Finds a local minimum of a function f: R^n -> R.

    Subclasses implement :meth:`get_state`, :meth:`_initialize`,
    :meth:`_iterate` and :meth:`has_builtin_stopping_criterion`, and may
    declare a :class:`Setup` subclass in ``setup_type`` for their options.
    """

    name: str = "solver"
    setup_type: type = Setup

    def __init__(self) -> None:
        self.n_iter = 0
        self._obj_func: Optional[Function] = None
        self._setup: Optional[Setup] = None
        self._constraints: Constraints = NoConstraints()
        self._state: Optional[State] = None

    # ------------------------------------------------------------------
    # Accessors derived from the state
    # ------------------------------------------------------------------

    def get_x(self) -> np.ndarray:
        """Return the current iterate x_k."""
        return np.array(self.get_state().x, dtype=float)

    def get_x_array(self) -> np.ndarray:
        """Return the points of the current step, one per column.

        For single-point solvers this is an ``n x 1`` matrix equal to
        :meth:`get_x`.
        """
        return np.array(self.get_state().X, dtype=float)

    def get_f_val(self) -> float:
        """Return the current function value f(x_k)."""
        return float(self.get_state().f)

    def get_gradient(self) -> np.ndarray:
        """Return the gradient at the current iterate.

        Evaluated by the objective function, which counts the evaluation.
        Solvers that cache the gradient in their state override this.
        """
        return self.get_objective_function().gradient(self.get_state().x)

    def get_hessian(self) -> np.ndarray:
        """Return the Hessian at the current iterate."""
        return self.get_objective_function().hessian(self.get_state().x)

    def get_num_iter(self) -> int:
        return self.n_iter

    def get_num_func_eval(self) -> int:
        return self.get_objective_function().num_func_eval

    def get_num_grad_eval(self) -> int:
        return self.get_objective_function().num_grad_eval

    def get_num_hess_eval(self) -> int:
        return self.get_objective_function().num_hess_eval

    def get_objective_function(self) -> Function:
        if self._obj_func is None:
            raise RuntimeError(f"{self.name} has not been set up; call setup() or solve() first.")
        return self._obj_func

    def get_setup(self) -> Setup:
        if self._setup is None:
            raise RuntimeError(f"{self.name} has not been set up; call setup() or solve() first.")
        return self._setup

    def get_constraints(self) -> Constraints:
        return self._constraints

    @abstractmethod
    def get_state(self) -> State:
        """Return the current state. Raises RuntimeError before setup."""

    @abstractmethod
    def has_builtin_stopping_criterion(self) -> bool:
        """Whether the solver decides termination itself during :meth:`iterate`."""

    def supports_constraints(self, constraints: Constraints) -> bool:
        return isinstance(constraints, NoConstraints)

    # ------------------------------------------------------------------
    # Setup and iteration
    # ------------------------------------------------------------------

    def setup(
        self,
        obj_func: Function,
        x0: np.ndarray,
        solver_setup: Optional[Setup] = None,
        constraints: Optional[Constraints] = None,
    ) -> None:
        """Bind a problem to the solver and compute the initial state.

        Resets the iteration counter and the evaluation counters of
        ``obj_func``.

        Raises:
            ConfigurationError: If the setup or constraints are unusable by
                this solver, or ``x0`` is not a finite real vector.
                Also raised, chained to the original error, when the objective
                fails with ``IndexError``, ``TypeError`` or ``ValueError`` while
                the initial state is built; the solver is then left unbound.
            DimensionMismatchError: If ``x0`` or the constraints do not match
                the dimension of ``obj_func``.
        """
        x0 = obj_func.check_point(x0)
        if not np.all(np.isfinite(x0)):
            raise ConfigurationError("x0 must be finite.")

        if solver_setup is None:
            solver_setup = self.setup_type()
        if not isinstance(solver_setup, self.setup_type):
            raise ConfigurationError(
                f"{self.name} expects a {self.setup_type.__name__}, "
                f"got {type(solver_setup).__name__}."
            )
        solver_setup.validate()

        if constraints is None:
            constraints = NoConstraints()
        if not self.supports_constraints(constraints):
            raise ConfigurationError(
                f"{self.name} does not support {type(constraints).__name__}."
            )
        constraints.check_dim(x0.size)
        if not constraints.contains(x0):
            raise ConfigurationError("x0 violates the constraints.")

        self.n_iter = 0
        obj_func.reset_counters()
        self._state = None
        self._obj_func = obj_func
        self._setup = solver_setup
        self._constraints = constraints
        try:
            self._initialize(x0)
        except Exception as exc:
            self._unbind()
            # the objective rejects a point of this size or type
            if isinstance(exc, (IndexError, TypeError, ValueError)) and not isinstance(
                exc, ConfigurationError
            ):
                raise ConfigurationError(
                    f"{obj_func.name} cannot be evaluated at x0 of dimension {x0.size}: {exc}"
                ) from exc
            raise

    def _unbind(self) -> None:
        self._state = None
        self._obj_func = None
        self._setup = None
        self._constraints = NoConstraints()

    def iterate(self) -> IterationStatus:
        """Take one iteration step and return the status of the algorithm."""
        if self._obj_func is None:
            raise RuntimeError(f"{self.name} has not been set up; call setup() or solve() first.")
        self.n_iter += 1
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            status = self._iterate()
        if not isinstance(status, IterationStatus):
            raise TypeError(
                f"{type(self).__name__}._iterate() must return an IterationStatus, "
                f"got {type(status).__name__}."
            )
        return status

    @abstractmethod
    def _initialize(self, x0: np.ndarray) -> None:
        """Create the initial state at ``x0`` and reset algorithm memory."""

    @abstractmethod
    def _iterate(self) -> IterationStatus:
        """Advance the state by one step."""

    # ------------------------------------------------------------------
    # Solve loop
    # ------------------------------------------------------------------

    def solve(
        self,
        obj_func: Function,
        x0: np.ndarray,
        stop_crit: Optional[StoppingCriterion] = None,
        solver_setup: Optional[Setup] = None,
        constraints: Optional[Constraints] = None,
        time_test: bool = False,
    ) -> Results:
        """Run the solver from ``x0`` until a terminal status is reached.

        Solvers without a built-in stopping criterion stop with ``SUCCESS``
        when ``stop_crit`` is satisfied after an iteration. Solvers with one
        ignore ``stop_crit`` and are governed by their own status.

        Args:
            obj_func: Objective function; its counters are reset.
            x0: Starting point.
            stop_crit: Stopping criterion, required unless the solver has a
                built-in one.
            solver_setup: Solver configuration, defaults to ``setup_type()``.
            constraints: Constraints, defaults to :class:`NoConstraints`.
            time_test: Record the wall-clock time of the run.

        Returns:
            Results with a terminal status and every archived state.

        Raises:
            ConfigurationError: On any configuration problem, before the
                first iteration.
        """
        builtin = self.has_builtin_stopping_criterion()
        if builtin:
            if stop_crit is not None:
                logger.info("%s has a built-in stopping criterion; ignoring %r", self.name, stop_crit)
        elif stop_crit is None:
            raise ConfigurationError(f"{self.name} requires a stopping criterion.")
        else:
            stop_crit.check_dim(obj_func.check_point(x0).size)

        start = time.perf_counter() if time_test else None
        self.setup(obj_func, x0, solver_setup, constraints)
        solver_setup = self.get_setup()

        logger.info(
            "Starting %s on %s with n=%d", self.name, obj_func.name, self.get_state().n
        )
        states = [self._archive()]
        stalled = 0

        while True:
            if solver_setup.max_iter is not None and self.n_iter >= solver_setup.max_iter:
                status = IterationStatus.NO_PROGRESS
                message = "Maximum iterations reached."
                break

            status = self.iterate()
            states.append(self._archive())
            current = states[-1]
            logger.debug("iter %d: f=%.10g status=%s", self.n_iter, current.f, status.name)

            if status is IterationStatus.CONTINUE and not is_finite_state(current):
                status = IterationStatus.OUT_OF_CONTROL
            if status.is_terminal:
                message = _STATUS_MESSAGES[status]
                break

            if not builtin and stop_crit.test(self):
                status = IterationStatus.SUCCESS
                message = f"Stopping criterion satisfied: {stop_crit!r}."
                break

            stalled = stalled + 1 if self._unchanged(states[-2], current) else 0
            if solver_setup.stall_iterations is not None and stalled >= solver_setup.stall_iterations:
                status = IterationStatus.NO_PROGRESS
                message = f"No change in {stalled} consecutive iterations."
                break

        elapsed = time.perf_counter() - start if start is not None else None
        if status in (IterationStatus.NO_PROGRESS, IterationStatus.OUT_OF_CONTROL):
            logger.warning("%s stopped after %d iterations: %s", self.name, self.n_iter, message)
        else:
            logger.info("%s stopped after %d iterations: %s", self.name, self.n_iter, message)

        return Results(
            status=status,
            message=message,
            num_iter=self.n_iter,
            num_func_eval=self.get_num_func_eval(),
            num_grad_eval=self.get_num_grad_eval(),
            num_hess_eval=self.get_num_hess_eval(),
            states=states,
            time=elapsed,
            solver_name=self.name,
        )

    def _archive(self) -> State:
        snapshot = self.get_state().clone()
        validate_if_debug(snapshot)
        return snapshot

    def _unchanged(self, previous: State, current: State) -> bool:
        solver_setup = self.get_setup()
        if previous.X.shape != current.X.shape:
            return False
        if abs(current.f - previous.f) > solver_setup.stall_ftol:
            return False
        return bool(np.max(np.abs(current.X - previous.X)) <= solver_setup.stall_xtol)


class PointSolver(Solver):
    """Base class of solvers that move a single point.

    The live state is a :class:`PointState`; when it caches the gradient or
    Hessian at ``x`` the accessors return the cached value instead of
    evaluating the objective again.
    """

    _state: Optional[PointState]

    def get_state(self) -> PointState:
        if self._state is None:
            raise RuntimeError(f"{self.name} has not been set up; call setup() or solve() first.")
        return self._state

    def get_gradient(self) -> np.ndarray:
        state = self.get_state()
        if state.gradient is not None:
            return np.array(state.gradient, dtype=float)
        return super().get_gradient()

    def get_hessian(self) -> np.ndarray:
        state = self.get_state()
        if state.hessian is not None:
            return np.array(state.hessian, dtype=float)
        return super().get_hessian()

    def has_builtin_stopping_criterion(self) -> bool:
        return False


__all__ = ["Solver", "PointSolver"]
