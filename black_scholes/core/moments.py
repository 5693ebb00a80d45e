"""
Standardized moment terms d1 and d2 of the Black-Scholes formula.

Both take the discount factor and the total volatility σ√T directly so
the spot, dividend-adjusted and forward models can share them:

    d1 = ln(S / (K·discount)) / (σ√T) + σ√T / 2
    d2 = d1 - σ√T

Callers only evaluate these on the diffusive branch (σ√T > 0). Inputs
with S / (K·discount) <= 0 are not guarded: the logarithm yields NaN or
-inf and that value propagates to every downstream result.
"""

import numpy as np


@np.errstate(divide="ignore", invalid="ignore")
def d1(s: float, k: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """
    Calculate d1.

    Args:
        s: Spot price (or forward / dividend-discounted spot)
        k: Strike price
        discount: Discount factor applied to the strike
        sqrt_maturity_sigma: Total volatility σ√T

    Returns:
        The d1 term, NaN/inf for non-positive moneyness
    """
    log_moneyness = np.log(np.divide(s, k * discount))
    return log_moneyness / sqrt_maturity_sigma + 0.5 * sqrt_maturity_sigma


def d2(s: float, k: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """Calculate d2 = d1 - σ√T."""
    return d1(s, k, discount, sqrt_maturity_sigma) - sqrt_maturity_sigma
