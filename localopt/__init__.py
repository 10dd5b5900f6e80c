"""localopt - iterative local optimization with a shared solver state machine."""

__version__ = "0.1.0"

from .core import (
    AllOf,
    AnyOf,
    BoundConstraints,
    ConfigurationError,
    Constraints,
    DimensionMismatchError,
    FDistToMinTest,
    Function,
    GradNormTest,
    IterationStatus,
    LineSearchState,
    MaxNumIterTest,
    NoConstraints,
    PointSolver,
    PointState,
    Results,
    Setup,
    SimplexState,
    Solver,
    State,
    StoppingCriterion,
    TrustRegionState,
    XDistToMinTest,
    approx_grad,
    approx_hessian,
    is_pos_def,
    safe_solve,
)
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    BFGS,
    LBFGS,
    DoglegTrustRegion,
    FixedStepSetup,
    GradientDescent,
    LBFGSSetup,
    LineSearchSetup,
    NelderMead,
    NelderMeadSetup,
    Newton,
    NewtonSetup,
    SteepestDescent,
    TrustRegionSetup,
    WolfeSetup,
)

__all__ = [
    "__version__",
    # core
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
    # solvers
    "BFGS",
    "DoglegTrustRegion",
    "FixedStepSetup",
    "GradientDescent",
    "LBFGS",
    "LBFGSSetup",
    "LineSearchSetup",
    "NelderMead",
    "NelderMeadSetup",
    "Newton",
    "NewtonSetup",
    "SteepestDescent",
    "TrustRegionSetup",
    "WolfeSetup",
    # diagnostics and logging
    "configure_logging",
    "debug_context",
    "get_logger",
    "is_debug_enabled",
    "set_debug_enabled",
    "set_log_level",
]
