"""
Adapter for an external rational-approximation implied volatility routine.

Peter Jäckel's "Let's Be Rational" algorithm inverts the undiscounted
Black formula on forward terms. Any callable with the contract

    routine(adjusted_price, forward, strike, maturity, side_flag, max_iterations) -> volatility

where side_flag is +1 for calls and -1 for puts, can be plugged in. By
default the pure-Python ``py_lets_be_rational`` package (optional extra
``rational``) supplies it.
"""

import logging
import math
import sys
from typing import Optional, Protocol

import numpy as np

from black_scholes.core.pricing import price as model_price
from black_scholes.utils.constants import RATIONAL_MAX_ITERATIONS
from black_scholes.utils.types import ImpliedVolResult, OptionType

logger = logging.getLogger(__name__)


class RationalIVRoutine(Protocol):
    def __call__(
        self,
        adjusted_price: float,
        forward: float,
        strike: float,
        maturity: float,
        side_flag: float,
        max_iterations: int,
    ) -> float: ...


def load_rational_routine() -> RationalIVRoutine:
    """
    Return the ``py_lets_be_rational`` implementation of the routine.

    Raises:
        ImportError: If the optional ``py_lets_be_rational`` package is not installed
    """
    from py_lets_be_rational import (
        implied_volatility_from_a_transformed_rational_guess_with_limited_iterations,
    )

    return implied_volatility_from_a_transformed_rational_guess_with_limited_iterations


def _failure(residual: float, message: str) -> ImpliedVolResult:
    logger.debug("Rational approximation failed: %s", message)
    return ImpliedVolResult(
        volatility=math.nan,
        iterations=0,
        method="rational",
        success=False,
        message=message,
        residual=residual,
    )


def iv_from_rational(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    option_type: OptionType = "call",
    routine: Optional[RationalIVRoutine] = None,
    max_iterations: int = RATIONAL_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Solve for implied volatility with a rational-approximation routine.

    The discounted market price is moved to forward terms before calling
    the routine:
        D = e^(-rT), F = S/D, adjusted price = price/D

    Args:
        price: Observed option price
        s, k, rate, maturity: Black-Scholes parameters
        option_type: "call" or "put"
        routine: Implementation of the rational routine (py_lets_be_rational if None)
        max_iterations: Refinement iterations passed to the routine

    Returns:
        ImpliedVolResult; a non-positive maturity, a NaN, infinite, negative
        or saturated return value from the routine, or an arithmetic error
        raised by it, is reported as success=False with the reason in ``message``
    """
    if option_type == "call":
        side_flag = 1.0
    elif option_type == "put":
        side_flag = -1.0
    else:
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")

    if not maturity > 0.0:
        return _failure(math.nan, f"Maturity {maturity:.6g} is not positive: no implied volatility exists")

    if routine is None:
        routine = load_rational_routine()

    discount = np.exp(-rate * maturity)
    forward = float(s / discount)
    adjusted_price = float(price / discount)

    try:
        volatility = float(
            routine(adjusted_price, forward, k, maturity, side_flag, max_iterations)
        )
    except (ArithmeticError, ValueError) as e:
        return _failure(math.nan, f"Rational routine raised {type(e).__name__}: {e}")

    if math.isnan(volatility) or math.isinf(volatility):
        return _failure(math.nan, f"Rational routine returned a non-finite volatility ({volatility})")
    if volatility < 0.0:
        return _failure(math.nan, "Rational routine signalled a price below intrinsic value")
    if volatility >= sys.float_info.max:
        return _failure(math.nan, "Rational routine signalled a price above the maximum attainable value")

    return ImpliedVolResult(
        volatility=volatility,
        iterations=max_iterations,
        method="rational",
        success=True,
        message="Solved by rational approximation",
        residual=float(model_price(s, k, rate, volatility, maturity, option_type) - price),
    )
