"""Debug switch for solver runs.

With debug mode on, every state the solve loop archives is checked by
:func:`~localopt.diagnostics.checks.assert_state_consistent`, so a solver
that builds a malformed state fails at the iteration that produced it
instead of somewhere downstream. The switch starts from the
``LOCALOPT_DEBUG`` environment variable and can be flipped at runtime.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from .checks import assert_state_consistent

_ENV_VAR = "LOCALOPT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env() -> bool:
    return os.getenv(_ENV_VAR, "").strip().lower() in _TRUTHY


_enabled = _flag_from_env()


def is_debug_enabled() -> bool:
    """Whether archived solver states are validated."""
    return _enabled


def set_debug_enabled(enabled: bool) -> bool:
    """Turn state validation on or off; returns the previous setting."""
    global _enabled
    previous, _enabled = _enabled, bool(enabled)
    return previous


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch state validation, restoring the old setting on exit.

    Example
    -------
    >>> with debug_context(True):
    ...     res = solver.solve(func, x0, stop_crit)  # doctest: +SKIP
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)


def validate_if_debug(state) -> None:
    """Run the state consistency checks when debug mode is on.

    Raises:
        ValueError: If debug mode is on and ``state`` is malformed.
    """
    if _enabled:
        assert_state_consistent(state)


__all__ = ["is_debug_enabled", "set_debug_enabled", "debug_context", "validate_if_debug"]
