"""Exceptions raised when a solver run is misconfigured."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a solver is given an unusable setup, start point or constraints."""


class DimensionMismatchError(ConfigurationError):
    """Raised when a point does not match the dimension of the problem."""

    def __init__(self, expected: int, actual: int, what: str = "x0") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} has dimension {actual} but the problem has dimension {expected}."
        )


__all__ = ["ConfigurationError", "DimensionMismatchError"]
