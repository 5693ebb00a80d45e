"""Unit tests for arbitrage diagnostics."""

import math

import pytest

from black_scholes.core.pricing import call, put
from black_scholes.diagnostics.arbitrage import (
    call_bound_violation,
    call_price_bounds,
    check_price_bounds,
    check_put_call_parity,
    put_to_call_price,
)


def test_call_price_bounds():
    lower, upper = call_price_bounds(110.0, 100.0, 0.05, 1.0)
    assert abs(lower - (110.0 - 100.0 * math.exp(-0.05))) < 1e-12
    assert upper == 110.0


def test_call_price_bounds_otm_floor():
    lower, _ = call_price_bounds(80.0, 100.0, 0.05, 1.0)
    assert lower == 0.0


def test_put_to_call_price_matches_parity(standard_params):
    converted = put_to_call_price(
        put(**standard_params),
        standard_params["s"],
        standard_params["k"],
        standard_params["rate"],
        standard_params["maturity"],
    )
    assert abs(converted - call(**standard_params)) < 1e-9


def test_bound_violation_valid():
    assert call_bound_violation(10.0, 100.0, 100.0, 0.05, 1.0) is None


def test_bound_violation_below_lower():
    """Call price below lower bound should fail."""
    violation = call_bound_violation(3.0, 110.0, 100.0, 0.05, 1.0)
    assert violation is not None
    assert "below lower bound" in violation


def test_bound_violation_above_upper():
    """Call price above spot should fail."""
    violation = call_bound_violation(110.0, 100.0, 100.0, 0.05, 1.0)
    assert violation is not None
    assert "above upper bound" in violation


@pytest.mark.parametrize("call_price", [0.0, 100.0])
def test_bound_violation_at_bounds(call_price):
    """Prices exactly on a bound are reached only in a limit of σ."""
    assert call_bound_violation(call_price, 100.0, 200.0, 0.05, 1.0) is not None


def test_bound_violation_nan_price():
    assert call_bound_violation(math.nan, 100.0, 100.0, 0.05, 1.0) is not None


def test_price_bounds_valid():
    """Valid prices should pass bounds check."""
    result = check_price_bounds(10.0, 5.0, 100.0, 100.0, 0.05, 1.0)
    assert result.is_valid
    assert result.violations == []
    assert result.details["call_upper_bound"] == 100.0


def test_price_bounds_put_above_discounted_strike():
    result = check_price_bounds(10.0, 99.0, 100.0, 100.0, 0.05, 1.0)
    assert not result.is_valid
    assert any("Put price" in v for v in result.violations)


def test_price_bounds_call_below_intrinsic():
    result = check_price_bounds(5.0, 1.0, 110.0, 100.0, 0.05, 1.0)
    assert not result.is_valid
    assert any("Call price" in v for v in result.violations)


def test_put_call_parity_valid():
    """Valid prices should satisfy put-call parity."""
    s, k, rate, maturity = 100.0, 100.0, 0.05, 1.0
    call_price = 10.0
    put_price = call_price - (s - k * math.exp(-rate * maturity))

    result = check_put_call_parity(call_price, put_price, s, k, rate, maturity)
    assert result.is_valid
    assert result.details["difference"] < 1e-12


def test_put_call_parity_violated():
    result = check_put_call_parity(10.0, 10.0, 100.0, 100.0, 0.05, 1.0)
    assert not result.is_valid
    assert "parity violated" in result.violations[0]
