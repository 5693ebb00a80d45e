"""Unit tests for the standard normal CDF and PDF."""

import math

import pytest
from scipy.stats import norm

from black_scholes.core.distributions import cum_norm, inc_norm

GRID = [-12.0, -8.5, -3.0, -1.96, -0.5, 0.0, 0.25, 1.0, 1.96, 4.0, 9.0, 15.0]


def test_cdf_median():
    assert cum_norm(0.0) == 0.5


def test_pdf_peak():
    assert abs(inc_norm(0.0) - 1.0 / math.sqrt(2.0 * math.pi)) < 1e-15


@pytest.mark.parametrize("x", GRID)
def test_cdf_symmetry(x):
    """Φ(x) + Φ(-x) = 1."""
    assert abs(cum_norm(x) + cum_norm(-x) - 1.0) < 1e-9


@pytest.mark.parametrize("x", GRID)
def test_pdf_symmetry(x):
    """φ(x) = φ(-x)."""
    assert abs(inc_norm(x) - inc_norm(-x)) < 1e-9


@pytest.mark.parametrize("x", GRID)
def test_matches_scipy(x):
    assert abs(cum_norm(x) - norm.cdf(x)) < 1e-12
    assert abs(inc_norm(x) - norm.pdf(x)) < 1e-12


def test_cdf_tails():
    assert cum_norm(-40.0) == 0.0
    assert cum_norm(40.0) == 1.0


def test_nan_propagates():
    assert math.isnan(cum_norm(math.nan))
    assert math.isnan(inc_norm(math.nan))
