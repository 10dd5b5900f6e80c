"""Result record returned by :meth:`localopt.core.solver.Solver.solve`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import numpy as np

from .state import State
from .status import IterationStatus


@dataclass
class Results:
    """
    Outcome of a complete solver run.

    Attributes:
        status: Terminal status of the run.
        message: Human-readable explanation of the status.
        num_iter: Number of iterations taken.
        num_func_eval: Function evaluations spent by the run.
        num_grad_eval: Gradient evaluations spent by the run.
        num_hess_eval: Hessian evaluations spent by the run.
        states: Read-only snapshots in chronological order: the initial state
            followed by one state per iteration.
        time: Wall-clock seconds of the run, or ``None`` when timing was not
            requested.
        solver_name: Name of the algorithm that produced the run.
    """

    status: IterationStatus
    message: str
    num_iter: int
    num_func_eval: int
    num_grad_eval: int
    num_hess_eval: int
    states: List[State] = field(default_factory=list)
    time: Optional[float] = None
    solver_name: str = ""

    @property
    def converged(self) -> bool:
        return self.status is IterationStatus.SUCCESS

    @property
    def final_state(self) -> State:
        return self.states[-1]

    @property
    def x_min(self) -> np.ndarray:
        return self.final_state.x

    @property
    def f_min(self) -> float:
        return float(self.final_state.f)

    @property
    def trajectory(self) -> np.ndarray:
        """Iterates stacked row-wise, shape ``(len(states), n)``."""
        return np.vstack([state.x for state in self.states])

    @property
    def f_history(self) -> np.ndarray:
        return np.array([state.f for state in self.states], dtype=float)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[State]:
        return iter(self.states)


__all__ = ["Results"]
