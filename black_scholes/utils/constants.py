"""
Numerical constants and tolerances for option pricing calculations.

This module defines the solver convergence criteria and the tolerances
used by the no-arbitrage diagnostics. Solver entry points accept keyword
overrides for every value defined here.
"""

import math

SQRT_TWO_PI = math.sqrt(2.0 * math.pi)

# Implied volatility solver parameters
IV_PRICE_TOLERANCE = 1e-6  # Newton-Raphson stops once |model - target| < this
IV_VOL_TOLERANCE = 1e-10  # Brent tolerance on sigma
IV_MAX_ITERATIONS = 10000  # Newton-Raphson iteration budget
IV_MIN_VEGA = 1e-12  # Below this the Newton step is treated as a division hazard
IV_INITIAL_GUESS = 0.25  # Seed used when the closed-form guess is unusable
IV_MIN_VOL = 1e-4  # Brent bracket, lower end
IV_MAX_VOL = 10.0  # Brent bracket, upper end (1000%)
BRENT_MAX_ITERATIONS = 200

# External rational-approximation routine
RATIONAL_MAX_ITERATIONS = 2  # Householder refinements after the rational guess

# Arbitrage diagnostics tolerances
ARBITRAGE_TOLERANCE = 1e-4  # $0.0001 tolerance for bounds checks
PARITY_TOLERANCE = 1e-6  # Put-call parity tolerance
