"""
Closed-form volatility approximation used to seed the implied volatility solver.
"""

import numpy as np

from black_scholes.utils.constants import SQRT_TWO_PI


def approximate_vol(price: float, s: float, k: float, rate: float, maturity: float) -> float:
    """
    Corrado-Miller approximation of the implied volatility of a call.

    Formula (X = K·e^(-rT)):
        σ ≈ √(2π)/(S + X) · [C - (S - X)/2 + √((C - (S - X)/2)² - (S - X)²/π)] / √T

    A negative discriminant is floored at zero. No other guarding is done:
    for prices that violate no-arbitrage bounds the result may be negative
    or implausible. It is only a starting point; the root-finder decides
    whether a solution exists.

    Args:
        price: Call option market price
        s: Spot price
        k: Strike price
        rate: Risk-free rate
        maturity: Time to expiration in years

    Returns:
        Initial volatility estimate

    Reference:
        Corrado, C. J., & Miller, T. W. (1996). A note on a simple, accurate
        formula to compute implied standard deviations. Journal of Banking &
        Finance, 20(3), 595-603.
    """
    x = k * np.exp(-rate * maturity)
    coef = SQRT_TWO_PI / (s + x)
    moneyness_gap = s - x
    c1 = price - 0.5 * moneyness_gap
    discriminant = max(c1 * c1 - moneyness_gap * moneyness_gap / np.pi, 0.0)
    with np.errstate(divide="ignore", invalid="ignore"):
        return coef * (c1 + np.sqrt(discriminant)) / np.sqrt(np.float64(maturity))
