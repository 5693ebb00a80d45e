"""
Unit tests for single-pass price and Greek evaluation.

This module validates:
1. compute_all agrees with the individual formulas
2. bsm_compute_all reduces to compute_all when q = 0
3. Parity and finite-difference checks for the dividend and forward models
4. Batch evaluation over a strike/maturity grid
"""

import math

import pytest

from black_scholes.core import greeks, pricing
from black_scholes.core.batch import (
    black76,
    bsm_compute_all,
    compute_all,
    evaluate,
    evaluate_many,
    strike_maturity_grid,
)
from black_scholes.utils.types import GREEK_NAMES, MarketInputs

CASES = [
    (100.0, 100.0, 0.05, 0.20, 1.0),
    (110.0, 100.0, 0.05, 0.20, 1.0),
    (90.0, 100.0, 0.03, 0.35, 0.5),
    (5.0, 4.5, 0.05, 0.30, 1.0),
    (100.0, 120.0, -0.01, 0.50, 2.0),
]


# ===========================
# Agreement With Individual Formulas
# ===========================


@pytest.mark.parametrize("s,k,rate,sigma,maturity", CASES)
def test_compute_all_matches_individual_formulas(s, k, rate, sigma, maturity):
    result = compute_all(s, k, rate, sigma, maturity)
    args = (s, k, rate, sigma, maturity)

    expected = {
        "call_price": pricing.call(*args),
        "put_price": pricing.put(*args),
    }
    for name in GREEK_NAMES[1:]:
        for side in ("call", "put"):
            expected[f"{side}_{name}"] = getattr(greeks, f"{side}_{name}")(*args)

    actual = result.as_dict()
    for field, value in expected.items():
        assert abs(actual[field] - value) < 1e-6, field


def test_compute_all_reference(reference_params):
    result = compute_all(**reference_params)
    assert abs(result.call_price - 0.9848721043419868) < 1e-12
    assert abs(result.put_price - 0.2654045145951993) < 1e-9


@pytest.mark.parametrize("s,k,rate,sigma,maturity", CASES)
def test_bsm_without_dividend_matches_compute_all(s, k, rate, sigma, maturity):
    plain = compute_all(s, k, rate, sigma, maturity).as_dict()
    merton = bsm_compute_all(s, k, sigma, rate, 0.0, maturity).as_dict()
    for field, value in plain.items():
        assert abs(merton[field] - value) < 1e-12, field


# ===========================
# Parity Relationships
# ===========================


@pytest.mark.parametrize("s,k,rate,sigma,maturity", CASES)
def test_compute_all_parity(s, k, rate, sigma, maturity):
    result = compute_all(s, k, rate, sigma, maturity)
    assert abs(result.call_price - result.put_price - (s - k * math.exp(-rate * maturity))) < 1e-9


@pytest.mark.parametrize("s,k,rate,sigma,maturity", CASES)
def test_bsm_parity(s, k, rate, sigma, maturity):
    q = 0.03
    result = bsm_compute_all(s, k, sigma, rate, q, maturity)
    forward_value = s * math.exp(-q * maturity) - k * math.exp(-rate * maturity)
    assert abs(result.call_price - result.put_price - forward_value) < 1e-9


@pytest.mark.parametrize("f,k,rate,sigma,maturity", CASES)
def test_black76_parity(f, k, rate, sigma, maturity):
    result = black76(f, k, rate, sigma, maturity)
    forward_value = math.exp(-rate * maturity) * (f - k)
    assert abs(result.call_price - result.put_price - forward_value) < 1e-9


def test_black76_is_bsm_on_forward():
    """Black76 on F = S·e^((r-q)T) prices the same as BSM on S."""
    s, k, rate, q, sigma, maturity = 100.0, 95.0, 0.04, 0.01, 0.25, 0.75
    forward = s * math.exp((rate - q) * maturity)
    merton = bsm_compute_all(s, k, sigma, rate, q, maturity)
    forward_model = black76(forward, k, rate, sigma, maturity)
    assert abs(merton.call_price - forward_model.call_price) < 1e-9
    assert abs(merton.put_price - forward_model.put_price) < 1e-9


# ===========================
# Finite-Difference Validation
# ===========================


def _bsm(s, k, sigma, rate, q, maturity):
    return bsm_compute_all(s, k, sigma, rate, q, maturity)


@pytest.mark.parametrize("s,k,rate,sigma,maturity", CASES)
@pytest.mark.parametrize("side", ["call", "put"])
def test_bsm_greeks_finite_difference(s, k, rate, sigma, maturity, side):
    q = 0.02
    h = 1e-5
    h_spot = 1e-3 * s
    result = _bsm(s, k, sigma, rate, q, maturity).side(side)

    def value(**overrides):
        params = {"s": s, "k": k, "sigma": sigma, "rate": rate, "q": q, "maturity": maturity}
        params.update(overrides)
        return _bsm(**params).side(side)

    delta = (value(s=s + h_spot).price - value(s=s - h_spot).price) / (2 * h_spot)
    gamma = (value(s=s + h_spot).delta - value(s=s - h_spot).delta) / (2 * h_spot)
    vega = (value(sigma=sigma + h).price - value(sigma=sigma - h).price) / (2 * h)
    theta = (value(maturity=maturity - h).price - value(maturity=maturity + h).price) / (2 * h)
    rho = (value(rate=rate + h).price - value(rate=rate - h).price) / (2 * h)
    vanna = (value(sigma=sigma + h).delta - value(sigma=sigma - h).delta) / (2 * h)
    charm = (value(maturity=maturity - h).delta - value(maturity=maturity + h).delta) / (2 * h)

    assert abs(result.delta - delta) < 1e-5
    assert abs(result.gamma - gamma) < 1e-5
    assert abs(result.vega - vega) < 1e-4
    assert abs(result.theta - theta) < 1e-4
    assert abs(result.rho - rho) < 1e-4
    assert abs(result.vanna - vanna) < 1e-5
    assert abs(result.charm - charm) < 1e-5


@pytest.mark.parametrize("f,k,rate,sigma,maturity", CASES)
@pytest.mark.parametrize("side", ["call", "put"])
def test_black76_greeks_finite_difference(f, k, rate, sigma, maturity, side):
    h = 1e-5
    h_forward = 1e-3 * f
    result = black76(f, k, rate, sigma, maturity).side(side)

    def value(**overrides):
        params = {"f": f, "k": k, "rate": rate, "sigma": sigma, "maturity": maturity}
        params.update(overrides)
        return black76(**params).side(side)

    delta = (value(f=f + h_forward).price - value(f=f - h_forward).price) / (2 * h_forward)
    vega = (value(sigma=sigma + h).price - value(sigma=sigma - h).price) / (2 * h)
    theta = (value(maturity=maturity - h).price - value(maturity=maturity + h).price) / (2 * h)
    rho = (value(rate=rate + h).price - value(rate=rate - h).price) / (2 * h)
    charm = (value(maturity=maturity - h).delta - value(maturity=maturity + h).delta) / (2 * h)
    vomma = (value(sigma=sigma + h).vega - value(sigma=sigma - h).vega) / (2 * h)

    assert abs(result.delta - delta) < 1e-5
    assert abs(result.vega - vega) < 1e-4
    assert abs(result.theta - theta) < 1e-4
    assert abs(result.rho - rho) < 1e-4
    assert abs(result.charm - charm) < 1e-5
    assert abs(result.vomma - vomma) < 1e-3


# ===========================
# Zero-Variance Branch
# ===========================


@pytest.mark.parametrize(
    "model",
    [
        lambda s, k, sigma, maturity: compute_all(s, k, 0.05, sigma, maturity),
        lambda s, k, sigma, maturity: bsm_compute_all(s, k, sigma, 0.05, 0.02, maturity),
        lambda s, k, sigma, maturity: black76(s, k, 0.05, sigma, maturity),
    ],
)
@pytest.mark.parametrize("sigma,maturity", [(0.3, 0.0), (0.0, 1.0), (0.3, -0.5)])
def test_degenerate_branch(model, sigma, maturity):
    itm_call = model(5.0, 4.5, sigma, maturity)
    assert itm_call.call_price == 0.5
    assert itm_call.put_price == 0.0
    assert itm_call.call_delta == 1.0
    assert itm_call.put_delta == 0.0

    itm_put = model(4.5, 5.0, sigma, maturity)
    assert itm_put.call_price == 0.0
    assert itm_put.put_price == 0.5
    assert itm_put.call_delta == 0.0
    assert itm_put.put_delta == -1.0

    for side in ("call", "put"):
        for name in GREEK_NAMES[2:]:
            assert getattr(itm_call, f"{side}_{name}") == 0.0
            assert getattr(itm_put, f"{side}_{name}") == 0.0


# ===========================
# Batch Evaluation
# ===========================


def test_evaluate_uses_dividend_model(with_dividend_params):
    p = with_dividend_params
    inputs = MarketInputs(
        spot=p["s"],
        strike=p["k"],
        rate=p["rate"],
        sigma=p["sigma"],
        maturity=p["maturity"],
        dividend_yield=p["dividend_yield"],
    )
    expected = bsm_compute_all(
        p["s"], p["k"], p["sigma"], p["rate"], p["dividend_yield"], p["maturity"]
    )
    assert evaluate(inputs) == expected


def test_strike_maturity_grid_layout():
    grid = strike_maturity_grid(100.0, [90.0, 100.0, 110.0], [0.5, 1.0], 0.05, 0.2)
    assert len(grid) == 6
    assert [(g.maturity, g.strike) for g in grid] == [
        (0.5, 90.0),
        (0.5, 100.0),
        (0.5, 110.0),
        (1.0, 90.0),
        (1.0, 100.0),
        (1.0, 110.0),
    ]
    assert all(g.spot == 100.0 and g.dividend_yield == 0.0 for g in grid)


def test_evaluate_many_preserves_order():
    grid = strike_maturity_grid(100.0, [80.0, 90.0, 100.0, 110.0, 120.0], [0.25, 1.0, 2.0], 0.05, 0.2)
    results = evaluate_many(grid, max_workers=4)
    assert len(results) == len(grid)
    for inputs, result in zip(grid, results):
        assert result == evaluate(inputs)


def test_evaluate_many_empty():
    assert evaluate_many([]) == []
