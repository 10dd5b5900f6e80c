"""Pytest configuration and shared fixtures for localopt tests.

This module provides:
- A deterministic NumPy RNG fixture
- Shared objective functions used across solver tests
"""

import os

import numpy as np
import pytest

from localopt import Function


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the legacy global numpy RNG for every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


def rosenbrock(x: np.ndarray) -> float:
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def rosenbrock_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def rosenbrock_hess(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            [1200 * x[0] ** 2 - 400 * x[1] + 2, -400 * x[0]],
            [-400 * x[0], 200],
        ]
    )


def square(x: np.ndarray) -> float:
    return float(x[0] ** 2)


def square_grad(x: np.ndarray) -> np.ndarray:
    return 2 * x


@pytest.fixture
def rosen() -> Function:
    return Function(rosenbrock, grad=rosenbrock_grad, hess=rosenbrock_hess, dim=2)


@pytest.fixture
def parabola() -> Function:
    """f(x) = x^2 on R."""
    return Function(square, grad=square_grad, dim=1)
