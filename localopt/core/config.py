"""Solver configuration objects (the run `Setup`)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class Setup:
    """
    Configuration shared by every solver.

    Solvers that take options define a subclass adding their own fields and
    extending :meth:`validate`. A default-constructed instance is used when
    the caller supplies none.

    Args:
        max_iter: Maximum number of iterations of a run. ``None`` leaves the
            run unbounded. Reaching it ends the run with ``NO_PROGRESS``.
        stall_iterations: Number of consecutive iterations over which the
            function value and every point may stay unchanged before the run
            is stopped with ``NO_PROGRESS``. ``None`` disables the check.
        stall_ftol: Largest change of the function value still counted as
            unchanged.
        stall_xtol: Largest change of any point coordinate still counted as
            unchanged.
    """

    max_iter: Optional[int] = None
    stall_iterations: Optional[int] = 10
    stall_ftol: float = 0.0
    stall_xtol: float = 0.0

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` for malformed values."""
        if self.max_iter is not None and self.max_iter < 0:
            raise ConfigurationError("max_iter must be non-negative.")
        if self.stall_iterations is not None and self.stall_iterations < 1:
            raise ConfigurationError("stall_iterations must be at least 1.")
        if self.stall_ftol < 0.0 or self.stall_xtol < 0.0:
            raise ConfigurationError("Stall tolerances must be non-negative.")


__all__ = ["Setup"]
