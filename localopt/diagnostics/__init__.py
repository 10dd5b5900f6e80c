"""Diagnostics and debugging utilities for localopt."""

from .checks import assert_state_consistent, is_finite_state
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    validate_if_debug,
)

__all__ = [
    "assert_state_consistent",
    "is_finite_state",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "validate_if_debug",
]
