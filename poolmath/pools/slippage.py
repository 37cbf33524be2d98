"""Slippage bounds.

Slippage is an 18-decimal fraction (5% == 5 * 10**16). Bounds always round
against the caller's counterparty: minimums round down, maximums round up.
"""

from poolmath.errors import InputOutOfBounds
from poolmath.math.fixed_point import Bfp


def _check(amount: int, slippage: int) -> None:
    if amount < 0:
        raise InputOutOfBounds(f"amount must be non-negative, got {amount}")
    if slippage < 0:
        raise InputOutOfBounds(f"slippage must be non-negative, got {slippage}")


def sub_slippage(amount: int, slippage: int) -> int:
    """Minimum acceptable amount: amount * (1 - slippage), rounded down.

    Slippage above 100% yields zero.
    """
    _check(amount, slippage)
    amount_bfp = Bfp(amount)
    return amount_bfp.sub(amount_bfp.mul_up(Bfp(slippage))).value


def add_slippage(amount: int, slippage: int) -> int:
    """Maximum acceptable amount: amount * (1 + slippage), rounded up."""
    _check(amount, slippage)
    amount_bfp = Bfp(amount)
    return amount_bfp.add(amount_bfp.mul_up(Bfp(slippage))).value
