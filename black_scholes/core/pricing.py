"""
Black-Scholes European option prices.

Two parameterizations are provided. The ``*_discount`` functions take the
discount factor and the total volatility σ√T directly and are the building
block reused elsewhere; ``call``/``put`` take a rate and a maturity and
delegate to them.

Every formula has two branches keyed on σ√T:
    - σ√T > 0: the diffusive Black-Scholes formula
    - otherwise (zero volatility, zero or negative maturity): the raw
      intrinsic value max(S - K, 0) / max(K - S, 0), discounting ignored

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import numpy as np

from black_scholes.core.distributions import cum_norm
from black_scholes.core.moments import d1 as _d1
from black_scholes.utils.types import OptionType


@np.errstate(invalid="ignore")
def discount_and_total_volatility(rate: float, sigma: float, maturity: float) -> tuple[float, float]:
    """
    Return (exp(-rate·maturity), σ·√maturity).

    A negative maturity yields a NaN total volatility, which selects the
    intrinsic-value branch of every formula.
    """
    return np.exp(-rate * maturity), np.sqrt(maturity) * sigma


def call_discount(s: float, k: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """
    Call price with discount factor and total volatility already computed.

    Args:
        s: Spot price
        k: Strike price
        discount: Discount factor exp(-r·T)
        sqrt_maturity_sigma: Total volatility σ√T

    Returns:
        Call option price

    Formula:
        C = S·N(d1) - K·D·N(d2)
    """
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return s * cum_norm(d1) - k * discount * cum_norm(d1 - sqrt_maturity_sigma)
    # Edge case: no variance, raw intrinsic value
    return s - k if s > k else 0.0


def put_discount(s: float, k: float, discount: float, sqrt_maturity_sigma: float) -> float:
    """
    Put price with discount factor and total volatility already computed.

    Formula:
        P = K·D·N(-d2) - S·N(-d1)
    """
    if sqrt_maturity_sigma > 0.0:
        d1 = _d1(s, k, discount, sqrt_maturity_sigma)
        return k * discount * cum_norm(sqrt_maturity_sigma - d1) - s * cum_norm(-d1)
    # Edge case: no variance, raw intrinsic value
    return k - s if k > s else 0.0


def call(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate European call option price.

    Args:
        s: Current spot price
        k: Strike price
        rate: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)
        maturity: Time to expiration in years

    Returns:
        Call option price

    Examples:
        >>> abs(call(5.0, 4.5, 0.05, 0.3, 1.0) - 0.9848721043419868) < 1e-12
        True
        >>> call(5.0, 4.5, 0.05, 0.3, 0.0)  # Expired: intrinsic value
        0.5
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    return call_discount(s, k, discount, sqrt_maturity_sigma)


def put(s: float, k: float, rate: float, sigma: float, maturity: float) -> float:
    """
    Calculate European put option price.

    Examples:
        >>> abs(put(5.0, 4.5, 0.05, 0.3, 1.0) - 0.2654045145951993) < 1e-12
        True
    """
    discount, sqrt_maturity_sigma = discount_and_total_volatility(rate, sigma, maturity)
    return put_discount(s, k, discount, sqrt_maturity_sigma)


def price(
    s: float,
    k: float,
    rate: float,
    sigma: float,
    maturity: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate European option price (call or put).

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    if option_type == "call":
        return call(s, k, rate, sigma, maturity)
    elif option_type == "put":
        return put(s, k, rate, sigma, maturity)
    else:
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")
