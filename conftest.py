"""Global configuration for pytest"""

import random

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def predictable_random_numbers():
    """
    Called at start of each test, guarantees that generated instance ids (and
    other random numbers) are the same over subsequent test runs.
    """
    np.random.seed(0)
    random.seed(0)


@pytest.fixture(autouse=True, scope="session")
def numerical_exceptions():
    """
    Ensure any numerical errors raise in our test suite.
    The point is that we enforce such cases to be handled explicitly in our code.
    """
    np.seterr(all="raise")
