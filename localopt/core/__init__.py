"""Shared solver machinery: states, statuses, objectives, criteria and the solve loop."""

from .config import Setup
from .constraints import BoundConstraints, Constraints, NoConstraints
from .errors import ConfigurationError, DimensionMismatchError
from .findiff import approx_grad, approx_hessian, is_pos_def, safe_solve
from .function import Function
from .results import Results
from .solver import PointSolver, Solver
from .state import LineSearchState, PointState, SimplexState, State, TrustRegionState
from .status import IterationStatus
from .stopping import (
    AllOf,
    AnyOf,
    FDistToMinTest,
    GradNormTest,
    MaxNumIterTest,
    StoppingCriterion,
    XDistToMinTest,
)

__all__ = [
    "AllOf",
    "AnyOf",
    "BoundConstraints",
    "ConfigurationError",
    "Constraints",
    "DimensionMismatchError",
    "FDistToMinTest",
    "Function",
    "GradNormTest",
    "IterationStatus",
    "LineSearchState",
    "MaxNumIterTest",
    "NoConstraints",
    "PointSolver",
    "PointState",
    "Results",
    "Setup",
    "SimplexState",
    "Solver",
    "State",
    "StoppingCriterion",
    "TrustRegionState",
    "XDistToMinTest",
    "approx_grad",
    "approx_hessian",
    "is_pos_def",
    "safe_solve",
]
