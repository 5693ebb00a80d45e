"""
Single-pass evaluation of prices and Greeks.

The transcendental evaluations (log, exp, erf) dominate the cost of the
closed-form formulas. Each function here evaluates d1, d2, N(d1), N(d2)
and φ(d1) exactly once and derives all eighteen outputs of
PricesAndGreeks algebraically from them. The results agree with the
individual formulas in ``pricing`` and ``greeks`` to floating-point
tolerance.

Three model variants are provided:
    - compute_all: plain Black-Scholes on spot
    - bsm_compute_all: Black-Scholes-Merton with continuous dividend yield q
    - black76: Black (1976) on a forward price, discounted at the risk-free rate

All three share the zero-variance convention: when σ√T <= 0 the prices
are the raw intrinsic values, delta is a binary indicator and every other
Greek is zero.

Evaluations are independent pure functions, so ``evaluate_many`` simply
maps them over a thread pool.
"""

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from black_scholes.core.distributions import cum_norm, inc_norm
from black_scholes.core.moments import d1 as _d1
from black_scholes.core.pricing import discount_and_total_volatility
from black_scholes.utils.types import MarketInputs, PricesAndGreeks


def _intrinsic(s: float, k: float) -> PricesAndGreeks:
    """Zero-variance branch shared by every model."""
    return PricesAndGreeks(
        call_price=s - k if s > k else 0.0,
        call_delta=1.0 if s > k else 0.0,
        call_gamma=0.0,
        call_theta=0.0,
        call_vega=0.0,
        call_rho=0.0,
        call_vanna=0.0,
        call_vomma=0.0,
        call_charm=0.0,
        put_price=k - s if k > s else 0.0,
        put_delta=-1.0 if k > s else 0.0,
        put_gamma=0.0,
        put_theta=0.0,
        put_vega=0.0,
        put_rho=0.0,
        put_vanna=0.0,
        put_vomma=0.0,
        put_charm=0.0,
    )


def compute_all(s: float, k: float, rate: float, sigma: float, maturity: float) -> PricesAndGreeks:
    """
    Calculate call and put prices with all Greeks in one pass.

    Args:
        s: Current spot price
        k: Strike price
        rate: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)
        maturity: Time to expiration in years

    Returns:
        PricesAndGreeks with eighteen fields

    Example:
        >>> result = compute_all(5.0, 4.5, 0.05, 0.3, 1.0)
        >>> abs(result.call_price - 0.9848721043419868) < 1e-12
        True
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    # Edge case: no variance left (T <= 0 or σ <= 0)
    if not sqrt_maturity_sigma > 0.0:
        return _intrinsic(s, k)

    # Shared scalars, each evaluated once
    sqrt_maturity = np.sqrt(maturity)
    k_discount = k * discount

    d1 = _d1(s, k, discount, sqrt_maturity_sigma)
    d2 = d1 - sqrt_maturity_sigma
    cdf_d1 = cum_norm(d1)
    cdf_d2 = cum_norm(d2)
    pdf_d1 = inc_norm(d1)

    call_price = s * cdf_d1 - k_discount * cdf_d2
    gamma = pdf_d1 / (s * sqrt_maturity_sigma)
    vega = s * pdf_d1 * sqrt_maturity
    decay = -s * pdf_d1 * sigma / (2.0 * sqrt_maturity)
    vanna = -pdf_d1 * d2 / sigma
    vomma = vega * d1 * d2 / sigma
    charm = (
        -pdf_d1
        * (2.0 * rate * maturity - d2 * sqrt_maturity_sigma)
        / (2.0 * maturity * sqrt_maturity_sigma)
    )

    return PricesAndGreeks(
        call_price=call_price,
        call_delta=cdf_d1,
        call_gamma=gamma,
        call_theta=decay - rate * k_discount * cdf_d2,
        call_vega=vega,
        call_rho=k_discount * maturity * cdf_d2,
        call_vanna=vanna,
        call_vomma=vomma,
        call_charm=charm,
        put_price=call_price + k_discount - s,
        put_delta=cdf_d1 - 1.0,
        put_gamma=gamma,
        put_theta=decay + rate * k_discount * (1.0 - cdf_d2),
        put_vega=vega,
        put_rho=-k_discount * maturity * (1.0 - cdf_d2),
        put_vanna=vanna,
        put_vomma=vomma,
        put_charm=charm,
    )


def bsm_compute_all(
    s: float, k: float, sigma: float, rate: float, dividend_yield: float, maturity: float
) -> PricesAndGreeks:
    """
    Black-Scholes-Merton prices and Greeks with a continuous dividend yield.

    Note the argument order (spot, strike, sigma, rate, dividend_yield,
    maturity), which differs from ``compute_all``.

    Formulas (D_q = e^(-qT), D_r = e^(-rT)):
        d1 = [ln(S/K) + (r - q + σ²/2)T] / (σ√T)
        C  = S·D_q·N(d1) - K·D_r·N(d2)
        Θ_c = -S·D_q·φ(d1)·σ/(2√T) - r·K·D_r·N(d2) + q·S·D_q·N(d1)
        Θ_p = -S·D_q·φ(d1)·σ/(2√T) + r·K·D_r·N(-d2) - q·S·D_q·N(-d1)
        charm_c =  q·D_q·N(d1)  - D_q·φ(d1)·(2(r-q)T - d2·σ√T)/(2T·σ√T)
        charm_p = -q·D_q·N(-d1) - D_q·φ(d1)·(2(r-q)T - d2·σ√T)/(2T·σ√T)

    With dividend_yield = 0 every field equals ``compute_all``.
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    # Edge case: no variance left (T <= 0 or σ <= 0)
    if not sqrt_maturity_sigma > 0.0:
        return _intrinsic(s, k)

    # Shared scalars, each evaluated once
    sqrt_maturity = np.sqrt(maturity)
    dividend_discount = np.exp(-dividend_yield * maturity)
    s_dividend = s * dividend_discount
    k_discount = k * discount

    d1 = _d1(s_dividend, k, discount, sqrt_maturity_sigma)
    d2 = d1 - sqrt_maturity_sigma
    cdf_d1 = cum_norm(d1)
    cdf_d2 = cum_norm(d2)
    pdf_d1 = inc_norm(d1)

    call_price = s_dividend * cdf_d1 - k_discount * cdf_d2
    gamma = dividend_discount * pdf_d1 / (s * sqrt_maturity_sigma)
    vega = s_dividend * pdf_d1 * sqrt_maturity
    decay = -s_dividend * pdf_d1 * sigma / (2.0 * sqrt_maturity)
    vanna = -dividend_discount * pdf_d1 * d2 / sigma
    vomma = vega * d1 * d2 / sigma
    charm_drift = (
        -dividend_discount
        * pdf_d1
        * (2.0 * (rate - dividend_yield) * maturity - d2 * sqrt_maturity_sigma)
        / (2.0 * maturity * sqrt_maturity_sigma)
    )

    return PricesAndGreeks(
        call_price=call_price,
        call_delta=dividend_discount * cdf_d1,
        call_gamma=gamma,
        call_theta=decay - rate * k_discount * cdf_d2 + dividend_yield * s_dividend * cdf_d1,
        call_vega=vega,
        call_rho=k_discount * maturity * cdf_d2,
        call_vanna=vanna,
        call_vomma=vomma,
        call_charm=dividend_yield * dividend_discount * cdf_d1 + charm_drift,
        put_price=call_price + k_discount - s_dividend,
        put_delta=dividend_discount * (cdf_d1 - 1.0),
        put_gamma=gamma,
        put_theta=(
            decay
            + rate * k_discount * (1.0 - cdf_d2)
            - dividend_yield * s_dividend * (1.0 - cdf_d1)
        ),
        put_vega=vega,
        put_rho=-k_discount * maturity * (1.0 - cdf_d2),
        put_vanna=vanna,
        put_vomma=vomma,
        put_charm=-dividend_yield * dividend_discount * (1.0 - cdf_d1) + charm_drift,
    )


def black76(f: float, k: float, rate: float, sigma: float, maturity: float) -> PricesAndGreeks:
    """
    Black (1976) prices and Greeks for options on a forward or future.

    Every output is the undiscounted Black value times D = e^(-rT).
    Sensitivities are taken with respect to the forward price; rho holds
    the forward fixed.

    Formulas:
        d1 = [ln(F/K) + σ²T/2] / (σ√T)
        C  = D·[F·N(d1) - K·N(d2)]
        P  = C + D·(K - F)
        Θ  = r·V - D·F·φ(d1)·σ/(2√T)
        ρ  = -T·V
        charm = r·Δ + D·φ(d1)·d2/(2T)
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    # Edge case: no variance left (T <= 0 or σ <= 0)
    if not sqrt_maturity_sigma > 0.0:
        return _intrinsic(f, k)

    # Shared scalars, each evaluated once
    sqrt_maturity = np.sqrt(maturity)

    d1 = _d1(f, k, 1.0, sqrt_maturity_sigma)
    d2 = d1 - sqrt_maturity_sigma
    cdf_d1 = cum_norm(d1)
    cdf_d2 = cum_norm(d2)
    pdf_d1 = inc_norm(d1)

    call_price = discount * (f * cdf_d1 - k * cdf_d2)
    put_price = call_price + discount * (k - f)
    call_delta = discount * cdf_d1
    put_delta = discount * (cdf_d1 - 1.0)
    gamma = discount * pdf_d1 / (f * sqrt_maturity_sigma)
    vega = discount * f * pdf_d1 * sqrt_maturity
    decay = -discount * f * pdf_d1 * sigma / (2.0 * sqrt_maturity)
    vanna = -discount * pdf_d1 * d2 / sigma
    vomma = vega * d1 * d2 / sigma
    charm_drift = discount * pdf_d1 * d2 / (2.0 * maturity)

    return PricesAndGreeks(
        call_price=call_price,
        call_delta=call_delta,
        call_gamma=gamma,
        call_theta=rate * call_price + decay,
        call_vega=vega,
        call_rho=-maturity * call_price,
        call_vanna=vanna,
        call_vomma=vomma,
        call_charm=rate * call_delta + charm_drift,
        put_price=put_price,
        put_delta=put_delta,
        put_gamma=gamma,
        put_theta=rate * put_price + decay,
        put_vega=vega,
        put_rho=-maturity * put_price,
        put_vanna=vanna,
        put_vomma=vomma,
        put_charm=rate * put_delta + charm_drift,
    )


def evaluate(inputs: MarketInputs) -> PricesAndGreeks:
    """Evaluate one MarketInputs record with the dividend-adjusted model."""
    return bsm_compute_all(
        inputs.spot,
        inputs.strike,
        inputs.sigma,
        inputs.rate,
        inputs.dividend_yield,
        inputs.maturity,
    )


def evaluate_many(
    inputs: Iterable[MarketInputs], max_workers: Optional[int] = None
) -> list[PricesAndGreeks]:
    """
    Evaluate many market inputs, distributing the work over a thread pool.

    Args:
        inputs: Market inputs, e.g. a strike/maturity grid
        max_workers: Thread pool size (executor default if None)

    Returns:
        One PricesAndGreeks per input, in input order
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(evaluate, inputs))


def strike_maturity_grid(
    spot: float,
    strikes: Sequence[float],
    maturities: Sequence[float],
    rate: float,
    sigma: float,
    dividend_yield: float = 0.0,
) -> list[MarketInputs]:
    """
    Build the MarketInputs for every (maturity, strike) pair.

    The grid is laid out row-major with one row per maturity, matching
    ``numpy.meshgrid(strikes, maturities)``.
    """
    strike_grid, maturity_grid = np.meshgrid(
        np.asarray(strikes, dtype=float), np.asarray(maturities, dtype=float)
    )
    return [
        MarketInputs(
            spot=spot,
            strike=float(strike),
            rate=rate,
            sigma=sigma,
            maturity=float(maturity),
            dividend_yield=dividend_yield,
        )
        for strike, maturity in zip(strike_grid.ravel(), maturity_grid.ravel())
    ]
