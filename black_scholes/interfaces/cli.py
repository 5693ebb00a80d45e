"""
Command-line interface for the Black-Scholes engine.

This CLI provides access to:
- Option pricing (Black-Scholes)
- Prices and Greeks in one pass (spot, dividend-adjusted, Black76)
- Implied volatility solving
"""

import logging
import sys

import click

from black_scholes.core.batch import black76 as black76_all
from black_scholes.core.batch import bsm_compute_all
from black_scholes.core.pricing import price as option_price
from black_scholes.solvers.implied_vol import METHODS, implied_volatility
from black_scholes.utils.types import PricesAndGreeks


def _echo_greeks(result: PricesAndGreeks, option_type: str) -> None:
    side = result.side(option_type)
    click.echo(f"\n{option_type.capitalize()} Option:")
    click.echo(f"  Price:  {side.price:>12.6f}")
    click.echo(f"  Delta:  {side.delta:>12.6f}")
    click.echo(f"  Gamma:  {side.gamma:>12.6f}")
    click.echo(f"  Theta:  {side.theta:>12.6f} (per year)")
    click.echo(f"  Vega:   {side.vega:>12.6f}")
    click.echo(f"  Rho:    {side.rho:>12.6f}")
    click.echo(f"  Vanna:  {side.vanna:>12.6f}")
    click.echo(f"  Vomma:  {side.vomma:>12.6f}")
    click.echo(f"  Charm:  {side.charm:>12.6f} (per year)")


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Black-Scholes pricing, Greeks and implied volatility."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s: %(message)s"
        )


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
def price(spot, strike, time, rate, vol, type):
    """Calculate option price using Black-Scholes."""
    price_value = option_price(spot, strike, rate, vol, time, type)
    click.echo(f"\n{type.capitalize()} Option Price: {price_value:.6f}")


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility")
@click.option("--div", "-q", type=float, default=0.0, help="Dividend yield")
@click.option("--type", "-t", type=click.Choice(["call", "put", "both"]), default="both")
def greeks(spot, strike, time, rate, vol, div, type):
    """Calculate price and all Greeks (dividend-adjusted model)."""
    result = bsm_compute_all(spot, strike, vol, rate, div, time)
    for option_type in ("call", "put"):
        if type in (option_type, "both"):
            _echo_greeks(result, option_type)


@cli.command()
@click.option("--forward", "-F", type=float, required=True, help="Forward price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility")
@click.option("--type", "-t", type=click.Choice(["call", "put", "both"]), default="both")
def black76(forward, strike, time, rate, vol, type):
    """Calculate price and all Greeks of an option on a forward (Black76)."""
    result = black76_all(forward, strike, rate, vol, time)
    for option_type in ("call", "put"):
        if type in (option_type, "both"):
            _echo_greeks(result, option_type)


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Market price")
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
@click.option("--method", "-m", type=click.Choice(METHODS), default="auto")
@click.option("--guess", "-g", type=float, default=None, help="Initial volatility guess")
def iv(market_price, spot, strike, time, rate, type, method, guess):
    """Solve for implied volatility."""
    try:
        result = implied_volatility(
            market_price, spot, strike, rate, time, type, method=method, initial_guess=guess
        )
    except ImportError as e:
        raise click.ClickException(f"Rational routine unavailable: {e}")

    if result.success:
        click.echo(f"\nImplied Volatility: {result.volatility:.6f} ({result.volatility*100:.2f}%)")
        click.echo(f"Method: {result.method}")
        click.echo(f"Iterations: {result.iterations}")
    else:
        click.echo(f"\nSolver failed: {result.message}", err=True)
        click.echo(f"Last residual: {result.residual:.6g}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
