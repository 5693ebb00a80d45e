"""
Newton-Raphson method for implied volatility calculation.

This module implements the Newton-Raphson algorithm for solving
the Black-Scholes equation for volatility given a market price.
The method uses vega (∂V/∂σ) as the derivative for fast convergence.

Puts are never solved here directly: callers convert them to the
equivalent call price via put-call parity first.
"""

import logging
import math

from black_scholes.core.greeks import call_vega
from black_scholes.core.pricing import call
from black_scholes.utils.constants import IV_MAX_ITERATIONS, IV_MIN_VEGA, IV_PRICE_TOLERANCE
from black_scholes.utils.types import ImpliedVolResult

logger = logging.getLogger(__name__)


def _failure(iterations: int, residual: float, message: str) -> ImpliedVolResult:
    logger.debug("Newton-Raphson failed: %s", message)
    return ImpliedVolResult(
        volatility=math.nan,
        iterations=iterations,
        method="newton-raphson",
        success=False,
        message=message,
        residual=residual,
    )


def newton_raphson_iv(
    call_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    initial_guess: float,
    precision: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
    min_vega: float = IV_MIN_VEGA,
) -> ImpliedVolResult:
    """
    Solve for the implied volatility of a call using Newton-Raphson.

    The Newton-Raphson update is:
        σ_{n+1} = σ_n - (C(σ_n) - call_price) / vega(σ_n)

    Args:
        call_price: Target call price
        s, k, rate, maturity: Black-Scholes parameters
        initial_guess: Starting volatility estimate
        precision: Convergence tolerance on |C(σ) - call_price|
        max_iterations: Iteration budget
        min_vega: Smallest vega accepted as a Newton denominator

    Returns:
        ImpliedVolResult with volatility, iterations, method, success flag

    Notes:
        - Converges once |C(σ_n) - call_price| < precision; the reported
          volatility includes that last Newton correction
        - Returns success=False with the last residual if vega vanishes
          (or becomes NaN) or the iteration budget is exhausted
    """
    sigma = initial_guess
    residual = math.nan

    for iteration in range(1, max_iterations + 1):
        residual = call(s, k, rate, sigma, maturity) - call_price
        vega_value = call_vega(s, k, rate, sigma, maturity)
        vega_usable = abs(vega_value) >= min_vega

        if abs(residual) < precision:
            if vega_usable:
                sigma = sigma - residual / vega_value
            return ImpliedVolResult(
                volatility=float(sigma),
                iterations=iteration,
                method="newton-raphson",
                success=True,
                message=f"Converged in {iteration} iterations",
                residual=float(residual),
            )

        if not vega_usable:
            return _failure(
                iteration,
                float(residual),
                f"Vega too small ({vega_value:.2e}) at sigma={sigma:.6g}, iteration {iteration}",
            )

        sigma = sigma - residual / vega_value

    return _failure(
        max_iterations,
        float(residual),
        f"Max iterations ({max_iterations}) reached without convergence",
    )
