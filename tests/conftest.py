"""Pytest configuration and fixtures."""

import pytest

from pgpartition import seed_everything


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment with fixed seed for generated keys."""
    seed_everything(42)
    yield


@pytest.fixture
def int64_bounds():
    """Extreme and sign-boundary bigint values."""
    return [
        -(2**63),
        -(2**63) + 1,
        -(2**32),
        -(2**31) - 1,
        -(2**31),
        -1,
        0,
        1,
        2**31 - 1,
        2**31,
        2**32,
        2**63 - 1,
    ]


@pytest.fixture
def int32_bounds():
    """Extreme and sign-boundary integer values."""
    return [-(2**31), -(2**31) + 1, -1, 0, 1, 2**31 - 2, 2**31 - 1]
