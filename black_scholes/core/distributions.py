"""
Standard normal distribution functions.

The cumulative distribution function is expressed through the error
function so that Φ(x) + Φ(-x) = 1 holds to machine precision, and the
density is evaluated explicitly. Both functions are total on finite
doubles and propagate NaN.
"""

import numpy as np
from scipy.special import erf

from black_scholes.utils.constants import SQRT_TWO_PI

_SQRT_2 = np.sqrt(2.0)


def cum_norm(x: float) -> float:
    """
    Standard normal cumulative distribution function.

    Args:
        x: Value at which to evaluate the CDF

    Returns:
        Probability that a standard normal random variable is less than x

    Examples:
        >>> float(cum_norm(0.0))
        0.5
        >>> abs(cum_norm(1.96) - 0.975) < 1e-3
        True

    Notes:
        Φ(x) = 0.5·erf(x/√2) + 0.5
    """
    return 0.5 * erf(x / _SQRT_2) + 0.5


def inc_norm(x: float) -> float:
    """
    Standard normal probability density function.

    Args:
        x: Value at which to evaluate the PDF

    Returns:
        Probability density at x

    Examples:
        >>> abs(inc_norm(0.0) - 0.3989) < 0.001  # Peak at zero
        True

    Notes:
        φ(x) = exp(-x²/2) / √(2π)
    """
    return np.exp(-0.5 * x * x) / SQRT_TWO_PI
