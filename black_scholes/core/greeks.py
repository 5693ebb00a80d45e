"""
Black-Scholes Greeks for European calls and puts.

Every function takes the standard (s, k, rate, sigma, maturity) tuple.
On the diffusive branch (σ√T > 0) the closed-form sensitivity is
returned; otherwise delta collapses to a binary indicator and every other
Greek to zero.

Units: theta and charm are annualized (∂/∂t per year of calendar time),
vega and rho are per unit change of volatility and rate.

Gamma, vega, vanna, vomma and charm are identical for calls and puts, so
the put versions delegate to the call formulas.
"""

import numpy as np

from black_scholes.core.distributions import cum_norm, inc_norm
from black_scholes.core.moments import d1 as _d1
from black_scholes.core.pricing import discount_and_total_volatility


def call_delta(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate call delta (∂C/∂S).

    Formula:
        Δ_c = N(d1)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        return cum_norm(_d1(s, k, discount, sqrt_maturity_sigma))
    # Edge case: no variance, delta is a step function
    return 1.0 if s > k else 0.0


def put_delta(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate put delta (∂P/∂S).

    Formula:
        Δ_p = N(d1) - 1
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        return cum_norm(_d1(s, k, discount, sqrt_maturity_sigma)) - 1.0
    # Edge case: no variance, delta is a step function
    return -1.0 if k > s else 0.0


def call_gamma(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate gamma (∂²V/∂S²).

    Formula:
        Γ = φ(d1) / (S·σ√T)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return inc_norm(d1) / (s * sqrt_maturity_sigma)
    return 0.0


def call_vega(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate vega (∂V/∂σ).

    Formula:
        ν = S·φ(d1)·√T

    Notes:
        This is the derivative used by the Newton-Raphson implied
        volatility solver.
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return s * inc_norm(d1) * np.sqrt(maturity)
    return 0.0


def call_theta(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate call theta (∂C/∂t), annualized.

    Formula:
        Θ_c = -S·φ(d1)·σ/(2√T) - r·K·e^(-rT)·N(d2)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return (
            -s * inc_norm(d1) * sigma / (2.0 * np.sqrt(maturity))
            - rate * k * discount * cum_norm(d1 - sqrt_maturity_sigma)
        )
    return 0.0


def put_theta(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate put theta (∂P/∂t), annualized.

    Formula:
        Θ_p = -S·φ(d1)·σ/(2√T) + r·K·e^(-rT)·N(-d2)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return (
            -s * inc_norm(d1) * sigma / (2.0 * np.sqrt(maturity))
            + rate * k * discount * cum_norm(sqrt_maturity_sigma - d1)
        )
    return 0.0


def call_rho(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate call rho (∂C/∂r).

    Formula:
        ρ_c = K·T·e^(-rT)·N(d2)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return k * discount * maturity * cum_norm(d1 - sqrt_maturity_sigma)
    return 0.0


def put_rho(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate put rho (∂P/∂r).

    Formula:
        ρ_p = -K·T·e^(-rT)·N(-d2)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return -k * discount * maturity * cum_norm(sqrt_maturity_sigma - d1)
    return 0.0


def call_vanna(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate vanna (∂²V/∂S∂σ, equivalently ∂Δ/∂σ).

    Formula:
        vanna = -φ(d1)·d2/σ
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return -inc_norm(d1) * (d1 - sqrt_maturity_sigma) / sigma
    return 0.0


def call_vomma(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate vomma (∂²V/∂σ², sometimes called volga).

    Formula:
        vomma = S·φ(d1)·d1·d2·T/(σ√T)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        d2 = d1 - sqrt_maturity_sigma
        return s * inc_norm(d1) * d1 * d2 * maturity / sqrt_maturity_sigma
    return 0.0


def call_charm(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate charm (∂Δ/∂t), annualized.

    Formula:
        charm = -φ(d1)·(2rT - d2·σ√T) / (2T·σ√T)

    Notes:
        The zero returned on the intrinsic-value branch is a convention
        that has not been checked against a limiting argument.
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        d2 = d1 - sqrt_maturity_sigma
        return (
            -inc_norm(d1)
            * (2.0 * rate * maturity - d2 * sqrt_maturity_sigma)
            / (2.0 * maturity * sqrt_maturity_sigma)
        )
    return 0.0


def put_gamma(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    return call_gamma(s, k, rate, sigma, maturity)


def put_vega(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    return call_vega(s, k, rate, sigma, maturity)


def put_vanna(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    return call_vanna(s, k, rate, sigma, maturity)


def put_vomma(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    return call_vomma(s, k, rate, sigma, maturity)


def put_charm(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    return call_charm(s, k, rate, sigma, maturity)
