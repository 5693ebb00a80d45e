"""
Data types and structures for option pricing.

This module defines the dataclasses shared across the toolkit: market
inputs, the single-pass prices-and-Greeks aggregate, and solver results.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Literal

OptionType = Literal["call", "put"]
SolverMethod = Literal["newton-raphson", "brent", "rational"]

GREEK_NAMES = ("price", "delta", "gamma", "theta", "vega", "rho", "vanna", "vomma", "charm")


@dataclass(frozen=True)
class MarketInputs:
    """
    Immutable container for one set of market inputs.

    No validation is performed: pricing is a pure function of these values
    and out-of-domain inputs propagate as NaN or infinite results.

    Attributes:
        spot: Current price of the underlying (or forward price for Black76)
        strike: Strike price
        rate: Risk-free interest rate (annualized, continuous compounding)
        sigma: Volatility (annualized standard deviation)
        maturity: Time to expiration in years
        dividend_yield: Continuous dividend yield (annualized)
    """
    spot: float
    strike: float
    rate: float
    sigma: float
    maturity: float
    dividend_yield: float = 0.0


@dataclass(frozen=True)
class OptionGreeks:
    """Price and Greeks of one side (call or put) of a PricesAndGreeks."""
    price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    vanna: float
    vomma: float
    charm: float


@dataclass(frozen=True)
class PricesAndGreeks:
    """
    Call and put prices with all Greeks, produced in a single evaluation.

    Attributes:
        *_price: Option value
        *_delta: ∂V/∂S
        *_gamma: ∂²V/∂S²
        *_theta: ∂V/∂t, annualized
        *_vega: ∂V/∂σ, per unit of volatility
        *_rho: ∂V/∂r, per unit of rate
        *_vanna: ∂²V/∂S∂σ
        *_vomma: ∂²V/∂σ²
        *_charm: ∂Δ/∂t, annualized
    """
    call_price: float
    call_delta: float
    call_gamma: float
    call_theta: float
    call_vega: float
    call_rho: float
    call_vanna: float
    call_vomma: float
    call_charm: float
    put_price: float
    put_delta: float
    put_gamma: float
    put_theta: float
    put_vega: float
    put_rho: float
    put_vanna: float
    put_vomma: float
    put_charm: float

    def side(self, option_type: OptionType) -> OptionGreeks:
        """Return the call or put half of the aggregate."""
        if option_type not in ("call", "put"):
            raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")
        return OptionGreeks(**{name: getattr(self, f"{option_type}_{name}") for name in GREEK_NAMES})

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass
class ImpliedVolResult:
    """
    Result from an implied volatility solver.

    Attributes:
        volatility: Solved implied volatility (annualized), NaN on failure
        iterations: Number of iterations used
        method: Method used ('newton-raphson', 'brent' or 'rational')
        success: Whether the solver converged successfully
        message: Additional information about convergence or the failure reason
        residual: Last model price minus target price seen by the solver
    """
    volatility: float
    iterations: int
    method: SolverMethod
    success: bool
    message: str = ""
    residual: float = field(default=math.nan)


@dataclass
class ArbitrageCheck:
    """
    Result from arbitrage validation.

    Attributes:
        is_valid: Whether the price satisfies no-arbitrage conditions
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, float]
