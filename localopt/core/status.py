"""Outcome of a single solver iteration."""

from __future__ import annotations

from enum import Enum


class IterationStatus(Enum):
    """Status reported by a solver after one iteration step.

    ``CONTINUE`` is the only non-terminal value; once any other value is
    reached no further iterations are taken.
    """

    CONTINUE = "continue"
    SUCCESS = "success"
    NO_PROGRESS = "no_progress"
    OUT_OF_CONTROL = "out_of_control"

    @property
    def is_terminal(self) -> bool:
        return self is not IterationStatus.CONTINUE


__all__ = ["IterationStatus"]
