"""Concrete local solvers built on :class:`localopt.core.Solver`.

Example
-------
>>> import numpy as np
>>> from localopt import Function, GradNormTest
>>> from localopt.optimize import BFGS
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> def rosen_grad(x):
...     return np.array([
...         -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
...         200 * (x[1] - x[0] ** 2),
...     ])
>>> res = BFGS().solve(Function(rosen, grad=rosen_grad, dim=2),
...                    np.array([-1.2, 1.0]), GradNormTest(1e-6))
>>> res.converged
True
"""

from .gradient import FixedStepSetup, GradientDescent, LineSearchSetup, SteepestDescent
from .line_search import backtracking_armijo, wolfe_line_search
from .nelder_mead import NelderMead, NelderMeadSetup
from .newton import Newton, NewtonSetup
from .quasi_newton import BFGS, LBFGS, BFGSState, LBFGSSetup, WolfeSetup
from .trust_region import DoglegTrustRegion, TrustRegionSetup

__all__ = [
    "BFGS",
    "BFGSState",
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
    "backtracking_armijo",
    "wolfe_line_search",
]
