"""
Brent's method for implied volatility calculation.

Brent's method (a hybrid bisection/inverse quadratic interpolation
algorithm) is the bracketing fallback used when Newton-Raphson fails.
It is guaranteed to converge if a solution exists within the bracket,
though it is slower than Newton-Raphson.
"""

import logging
import math

from scipy.optimize import brentq

from black_scholes.core.pricing import call
from black_scholes.utils.constants import (
    BRENT_MAX_ITERATIONS,
    IV_MAX_VOL,
    IV_MIN_VOL,
    IV_VOL_TOLERANCE,
)
from black_scholes.utils.types import ImpliedVolResult

logger = logging.getLogger(__name__)


def brent_iv(
    call_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
    tolerance: float = IV_VOL_TOLERANCE,
    max_iterations: int = BRENT_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Solve for the implied volatility of a call using Brent's method.

    Args:
        call_price: Target call price
        s, k, rate, maturity: Black-Scholes parameters
        vol_lower: Lower end of the volatility bracket
        vol_upper: Upper end of the volatility bracket
        tolerance: Absolute tolerance on sigma
        max_iterations: Iteration budget

    Returns:
        ImpliedVolResult; success=False when the bracket does not contain
        a root or the iteration budget runs out
    """

    def objective(sigma: float) -> float:
        return call(s, k, rate, sigma, maturity) - call_price

    obj_lower = objective(vol_lower)
    obj_upper = objective(vol_upper)
    if not obj_lower * obj_upper < 0.0:
        message = (
            f"Brent method failed: objective function doesn't bracket a root. "
            f"obj({vol_lower:.4f}) = {obj_lower:.4g}, "
            f"obj({vol_upper:.4f}) = {obj_upper:.4g}. "
            f"Market price {call_price} may violate arbitrage bounds."
        )
        logger.debug(message)
        return ImpliedVolResult(
            volatility=math.nan,
            iterations=0,
            method="brent",
            success=False,
            message=message,
            residual=float(obj_lower if abs(obj_lower) < abs(obj_upper) else obj_upper),
        )

    implied_vol, info = brentq(
        objective,
        vol_lower,
        vol_upper,
        xtol=tolerance,
        maxiter=max_iterations,
        full_output=True,
        disp=False,
    )
    residual = float(objective(implied_vol))

    if not info.converged:
        message = f"Brent method did not converge: {info.flag}"
        logger.debug(message)
        return ImpliedVolResult(
            volatility=math.nan,
            iterations=info.iterations,
            method="brent",
            success=False,
            message=message,
            residual=residual,
        )

    return ImpliedVolResult(
        volatility=float(implied_vol),
        iterations=info.iterations,
        method="brent",
        success=True,
        message=f"Converged with price error {abs(residual):.2e}",
        residual=residual,
    )
