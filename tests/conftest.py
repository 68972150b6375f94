"""Shared fixtures for the test suite."""

import logging

import numpy as np
import pytest

from poisson_multigrid.applications import PoissonProblem


@pytest.fixture
def random_forcing():
    """Factory for a reproducible right-hand side with zero boundary."""
    def make(n, seed=0):
        f = np.zeros((n, n))
        f[1:-1, 1:-1] = np.random.default_rng(seed).standard_normal((n - 2, n - 2))
        return f
    return make


@pytest.fixture
def unit_square_problem():
    """Manufactured problem on level 5 of the unit square."""
    return PoissonProblem.on_unit_square(5)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging configuration done by the code under test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    # setup_logging only installs plain stream and file handlers
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
