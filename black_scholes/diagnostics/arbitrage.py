"""
No-arbitrage diagnostics for option prices.

This module implements the static checks that an observed price must
pass before an implied volatility can exist:
- Price bounds validation
- Put-call parity
"""

import math
from typing import Optional

from black_scholes.utils.constants import ARBITRAGE_TOLERANCE, PARITY_TOLERANCE
from black_scholes.utils.types import ArbitrageCheck


def call_price_bounds(s: float, k: float, rate: float, maturity: float) -> tuple[float, float]:
    """
    Return the (lower, upper) no-arbitrage bounds of a European call.

    Lower bound: max(S - K·e^(-rT), 0)
    Upper bound: S
    """
    return max(s - k * math.exp(-rate * maturity), 0.0), s


def put_to_call_price(put_price: float, s: float, k: float, rate: float, maturity: float) -> float:
    """Convert a put price to the equivalent call price: C = P + S - K·e^(-rT)."""
    return put_price + s - k * math.exp(-rate * maturity)


def call_bound_violation(
    call_price: float, s: float, k: float, rate: float, maturity: float
) -> Optional[str]:
    """
    Check that a call price lies strictly inside its no-arbitrage bounds.

    A price at or below the lower bound, or at or above the spot, has no
    implied volatility: the model price approaches those values only in
    the limits σ → 0 and σ → ∞.

    Returns:
        None if valid, error message string otherwise
    """
    lower_bound, upper_bound = call_price_bounds(s, k, rate, maturity)

    if not call_price > lower_bound:
        return (
            f"Call price {call_price:.6g} at or below lower bound {lower_bound:.6g}. "
            f"Arbitrage: buy call, short stock, lend strike PV."
        )
    if not call_price < upper_bound:
        return (
            f"Call price {call_price:.6g} at or above upper bound {upper_bound:.6g}. "
            f"Arbitrage: sell call, cannot exceed stock value."
        )
    return None


def check_price_bounds(
    call_price: float,
    put_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate call and put prices against no-arbitrage bounds.

    Checks:
    1. Call lower bound: C >= max(S - K·e^(-rT), 0)
    2. Call upper bound: C <= S
    3. Put lower bound: P >= max(K·e^(-rT) - S, 0)
    4. Put upper bound: P <= K·e^(-rT)

    Args:
        call_price, put_price: Observed option prices
        s, k, rate, maturity: Black-Scholes parameters
        tolerance: Tolerance for floating point comparisons

    Returns:
        ArbitrageCheck with validation results
    """
    violations = []
    details = {}

    discount_strike = k * math.exp(-rate * maturity)

    call_lower, call_upper = call_price_bounds(s, k, rate, maturity)
    details["call_lower_bound"] = call_lower
    details["call_upper_bound"] = call_upper
    if call_price < call_lower - tolerance:
        violations.append(f"Call price {call_price:.4f} below lower bound {call_lower:.4f}")
    if call_price > call_upper + tolerance:
        violations.append(f"Call price {call_price:.4f} above upper bound {call_upper:.4f}")

    put_lower = max(discount_strike - s, 0.0)
    details["put_lower_bound"] = put_lower
    details["put_upper_bound"] = discount_strike
    if put_price < put_lower - tolerance:
        violations.append(f"Put price {put_price:.4f} below lower bound {put_lower:.4f}")
    if put_price > discount_strike + tolerance:
        violations.append(f"Put price {put_price:.4f} above upper bound {discount_strike:.4f}")

    return ArbitrageCheck(is_valid=not violations, violations=violations, details=details)


def check_put_call_parity(
    call_price: float,
    put_price: float,
    s: float,
    k: float,
    rate: float,
    maturity: float,
    tolerance: float = PARITY_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate put-call parity relationship.

    Put-call parity:
        C - P = S - K·e^(-rT)

    Returns:
        ArbitrageCheck with validation results
    """
    lhs = call_price - put_price
    rhs = s - k * math.exp(-rate * maturity)

    diff = abs(lhs - rhs)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Put-call parity violated: C - P = {lhs:.6f}, "
            f"S - K·e^(-rT) = {rhs:.6f}, diff = {diff:.6f}"
        )

    details = {"parity_lhs": lhs, "parity_rhs": rhs, "difference": diff}

    return ArbitrageCheck(is_valid=is_valid, violations=violations, details=details)
