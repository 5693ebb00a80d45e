"""
Implied volatility solvers.

The ``call_iv``/``put_iv`` family are Newton-Raphson solvers seeded either
by the caller (``*_guess``, useful for warm-starting sequential solves)
or by the Corrado-Miller approximation. Puts are converted to the
equivalent call price through put-call parity and solved on the call
side.

``implied_volatility`` is the high-level entry point with method
selection, including a Brent fallback and the external rational routine.

None of these raise for out-of-domain market data: a non-positive maturity,
a price outside the no-arbitrage bounds, a vanishing vega or an exhausted
iteration budget all come back as ``ImpliedVolResult(success=False, ...)``.
"""

import logging
import math
from typing import Optional

from black_scholes.diagnostics.arbitrage import (
    call_bound_violation,
    call_price_bounds,
    put_to_call_price,
)
from black_scholes.solvers.brent import brent_iv
from black_scholes.solvers.initial_guess import approximate_vol
from black_scholes.solvers.newton_raphson import newton_raphson_iv
from black_scholes.solvers.rational import RationalIVRoutine, iv_from_rational
from black_scholes.utils.constants import IV_INITIAL_GUESS, IV_MAX_ITERATIONS, IV_PRICE_TOLERANCE
from black_scholes.utils.types import ImpliedVolResult, OptionType, SolverMethod

logger = logging.getLogger(__name__)

METHODS = ("auto", "newton", "brent", "rational")


def _no_solution(
    call_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    method: SolverMethod = "newton-raphson",
) -> Optional[ImpliedVolResult]:
    """
    Return a failure result when no implied volatility can exist, else None.

    A non-positive (or NaN) maturity leaves no variance to solve for: the
    model price is the intrinsic value for every σ. Otherwise the call price
    must lie strictly inside its no-arbitrage bounds; the residual reported
    is the violated bound (the σ → 0 or σ → ∞ limit) minus the price.
    """
    if not maturity > 0.0:
        message = f"Maturity {maturity:.6g} is not positive: the price does not depend on volatility"
        logger.debug("No implied volatility for call price %s: %s", call_price, message)
        return ImpliedVolResult(
            volatility=math.nan,
            iterations=0,
            method=method,
            success=False,
            message=message,
        )

    violation = call_bound_violation(call_price, s, k, rate, maturity)
    if violation is None:
        return None

    logger.debug("No implied volatility for call price %s: %s", call_price, violation)
    lower_bound, upper_bound = call_price_bounds(s, k, rate, maturity)
    limit = lower_bound if not call_price > lower_bound else upper_bound
    return ImpliedVolResult(
        volatility=math.nan,
        iterations=0,
        method=method,
        success=False,
        message=f"Arbitrage violation detected: {violation}",
        residual=float(limit - call_price),
    )


def seed_volatility(call_price: float, s: float, k: float, rate: float, maturity: float) -> float:
    """
    Corrado-Miller seed, replaced by IV_INITIAL_GUESS when it is not a
    positive finite number.
    """
    guess = approximate_vol(call_price, s, k, rate, maturity)
    if not (math.isfinite(guess) and guess > 0.0):
        return IV_INITIAL_GUESS
    return float(guess)


def call_iv_guess(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    initial_guess: float,
    precision: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Implied volatility of a call from a caller-supplied starting volatility.

    Args:
        price: Observed call price
        s: Spot price
        k: Strike price
        rate: Risk-free rate
        maturity: Time to expiration in years
        initial_guess: Starting volatility

    Returns:
        ImpliedVolResult

    Examples:
        >>> result = call_iv_guess(0.9848721043419868, 5.0, 4.5, 0.05, 1.0, 0.5)
        >>> result.success and abs(result.volatility - 0.3) < 1e-8
        True
    """
    failure = _no_solution(price, s, k, rate, maturity)
    if failure is not None:
        return failure
    return newton_raphson_iv(
        price, s, k, rate, maturity, initial_guess, precision=precision, max_iterations=max_iterations
    )


def call_iv(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    precision: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """Implied volatility of a call, seeded by the Corrado-Miller approximation."""
    return call_iv_guess(
        price,
        s,
        k,
        rate,
        maturity,
        seed_volatility(price, s, k, rate, maturity),
        precision=precision,
        max_iterations=max_iterations,
    )


def put_iv_guess(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    initial_guess: float,
    precision: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Implied volatility of a put from a caller-supplied starting volatility.

    The put price is converted with C = P + S - K·e^(-rT); vega is the same
    for both sides so the solve happens on the call.
    """
    return call_iv_guess(
        put_to_call_price(price, s, k, rate, maturity),
        s,
        k,
        rate,
        maturity,
        initial_guess,
        precision=precision,
        max_iterations=max_iterations,
    )


def put_iv(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    precision: float = IV_PRICE_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """Implied volatility of a put, seeded by the Corrado-Miller approximation."""
    return call_iv(
        put_to_call_price(price, s, k, rate, maturity),
        s,
        k,
        rate,
        maturity,
        precision=precision,
        max_iterations=max_iterations,
    )


def call_iv_rational(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    routine: Optional[RationalIVRoutine] = None,
) -> ImpliedVolResult:
    """Implied volatility of a call from the rational-approximation routine."""
    return iv_from_rational(price, s, k, rate, maturity, "call", routine=routine)


def put_iv_rational(
    price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    routine: Optional[RationalIVRoutine] = None,
) -> ImpliedVolResult:
    """Implied volatility of a put from the rational-approximation routine."""
    return iv_from_rational(price, s, k, rate, maturity, "put", routine=routine)


def implied_volatility(
    market_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    option_type: OptionType = "call",
    method: str = "auto",
    initial_guess: Optional[float] = None,
    routine: Optional[RationalIVRoutine] = None,
) -> ImpliedVolResult:
    """
    Solve for implied volatility with method selection.

    This is the main entry point for implied volatility calculation.
    It:
    1. Converts puts to the equivalent call price
    2. Validates no-arbitrage bounds
    3. Tries Newton-Raphson (fast, quadratic convergence)
    4. Falls back to Brent if Newton-Raphson fails and method is "auto"

    Args:
        market_price: Observed market price
        s: Spot price
        k: Strike price
        rate: Risk-free rate (annualized, continuous)
        maturity: Time to expiration in years
        option_type: "call" or "put"
        method: "auto" (default), "newton", "brent" or "rational"
        initial_guess: Starting volatility for Newton-Raphson (Corrado-Miller if None)
        routine: Rational routine for method="rational" (py_lets_be_rational if None)

    Returns:
        ImpliedVolResult; success=False for prices without a solution

    Raises:
        ValueError: If option_type or method is not recognised

    Examples:
        >>> result = implied_volatility(10.4506, 100, 100, 0.05, 1.0)
        >>> round(result.volatility, 3), result.method
        (0.2, 'newton-raphson')
    """
    if option_type not in ("call", "put"):
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")
    if method not in METHODS:
        raise ValueError(f"method must be one of {METHODS}, got '{method}'")

    if method == "rational":
        return iv_from_rational(market_price, s, k, rate, maturity, option_type, routine=routine)

    if option_type == "put":
        call_price = put_to_call_price(market_price, s, k, rate, maturity)
    else:
        call_price = market_price

    solver = "brent" if method == "brent" else "newton-raphson"
    failure = _no_solution(call_price, s, k, rate, maturity, solver)
    if failure is not None:
        return failure

    if method in ("auto", "newton"):
        if initial_guess is None:
            initial_guess = seed_volatility(call_price, s, k, rate, maturity)
        nr_result = newton_raphson_iv(call_price, s, k, rate, maturity, initial_guess)

        if nr_result.success or method == "newton":
            return nr_result

        logger.debug("Newton-Raphson failed (%s), falling back to Brent", nr_result.message)

    return brent_iv(call_price, s, k, rate, maturity)


def implied_volatility_vectorized(
    market_prices: list[float],
    s: float,
    strikes: list[float],
    rate: float,
    maturity: float,
    option_type: OptionType = "call",
    method: str = "auto",
) -> list[ImpliedVolResult]:
    """
    Solve for implied volatilities for multiple strikes (volatility smile).

    Args:
        market_prices: List of observed option prices
        s: Current spot price (same for all)
        strikes: List of strike prices (must match length of market_prices)
        rate: Risk-free rate (same for all)
        maturity: Time to expiration (same for all)
        option_type: "call" or "put" (same for all)
        method: Solver method passed to implied_volatility

    Returns:
        List of ImpliedVolResult objects, one per strike

    Raises:
        ValueError: If market_prices and strikes have different lengths
    """
    if len(market_prices) != len(strikes):
        raise ValueError(
            f"market_prices ({len(market_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    return [
        implied_volatility(price, s, strike, rate, maturity, option_type, method=method)
        for price, strike in zip(market_prices, strikes)
    ]
