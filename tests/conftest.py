"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return {
        "s": 100.0,
        "k": 100.0,
        "rate": 0.05,
        "sigma": 0.20,
        "maturity": 1.0,
    }


@pytest.fixture
def reference_params():
    """Parameters with published reference prices (call 0.98487, put 0.26540)."""
    return {
        "s": 5.0,
        "k": 4.5,
        "rate": 0.05,
        "sigma": 0.30,
        "maturity": 1.0,
    }


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return {
        "s": 110.0,
        "k": 100.0,
        "rate": 0.05,
        "sigma": 0.20,
        "maturity": 1.0,
    }


@pytest.fixture
def with_dividend_params():
    """Parameters with non-zero dividend yield."""
    return {
        "s": 100.0,
        "k": 100.0,
        "rate": 0.05,
        "sigma": 0.20,
        "maturity": 1.0,
        "dividend_yield": 0.02,
    }
