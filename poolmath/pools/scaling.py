"""Scaling between native token units and the pools' 18-decimal unit.

Pool math runs on balances that have been (1) scaled to 18 decimals and
(2) multiplied by the token's price rate. normalize() applies both steps and
denormalize() undoes them, truncating toward zero at each division.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, localcontext

from poolmath.errors import InputOutOfBounds
from poolmath.math.fixed_point import AMP_PRECISION, ONE_18, Bfp
from poolmath.models.pool import PoolSnapshot
from poolmath.safe_int import S

DEFAULT_DECIMALS = 18

# Enough digits for any uint256 at 36 decimals
_DECIMAL_PRECISION = 120

_BASE_UNITS = re.compile(r"[0-9]+")


def scale_up(amount: int, decimals: int) -> int:
    """Scale a native amount to 18 decimals."""
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if decimals <= 18:
        return amount * 10 ** (18 - decimals)
    return (S(amount) // 10 ** (decimals - 18)).value


def scale_down(amount: int, decimals: int) -> int:
    """Scale an 18-decimal amount back to native units, rounding down."""
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if decimals <= 18:
        return (S(amount) // 10 ** (18 - decimals)).value
    return amount * 10 ** (decimals - 18)


def normalize(amount: int, decimals: int, price_rate: int = ONE_18) -> int:
    """Convert a native amount into rate-adjusted 18-decimal pool units.

    Args:
        amount: Amount in the token's native base units
        decimals: Token decimals
        price_rate: 18-decimal price rate (identity is 10^18)

    Returns:
        scale_up(amount) * price_rate // 10^18
    """
    return Bfp(scale_up(amount, decimals)).mul_down(Bfp(price_rate)).value


def denormalize(amount: int, decimals: int, price_rate: int = ONE_18) -> int:
    """Inverse of normalize(): divide by the price rate, then scale down.

    Raises:
        ZeroDivisionError: If price_rate is zero
    """
    return scale_down(Bfp(amount).div_down(Bfp(price_rate)).value, decimals)


def parse_fixed(value: str | int, decimals: int = 18) -> int:
    """Parse a human decimal string into an integer with `decimals` places.

    Extra fractional digits are truncated.
    """
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        return int(Decimal(str(value)).scaleb(decimals).to_integral_value(rounding=ROUND_DOWN))


def format_fixed(value: int, decimals: int = 18) -> str:
    """Format a scaled integer as a plain decimal string."""
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        formatted = format(Decimal(value).scaleb(-decimals), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted or "0"


def parse_amount(value: int | str, name: str) -> int:
    """Parse a caller-supplied base-unit amount.

    Raises:
        InputOutOfBounds: If the value is empty, not an integer or negative
    """
    if isinstance(value, bool):
        raise InputOutOfBounds(f"{name} must be an integer")
    if isinstance(value, str):
        if not value:
            raise InputOutOfBounds(f"{name} is empty")
        if not _BASE_UNITS.fullmatch(value):
            raise InputOutOfBounds(f"{name} is not a base-unit integer: '{value}'")
        value = int(value)
    elif not isinstance(value, int):
        raise InputOutOfBounds(f"{name} must be an integer")
    if value < 0:
        raise InputOutOfBounds(f"{name} is negative: {value}")
    return value


@dataclass(frozen=True)
class ParsedPoolInfo:
    """Integer view of a PoolSnapshot, in snapshot token order.

    Attributes:
        tokens: Token addresses
        balances: Native balances
        decimals: Token decimals (18 when absent)
        price_rates: 18-decimal price rates (10^18 when absent)
        weights: 18-decimal weights (0 when absent)
        amp: A * AMP_PRECISION, or None when the pool has no amp
        total_shares: BPT supply
        swap_fee: 18-decimal swap fee
    """

    tokens: tuple[str, ...]
    balances: tuple[int, ...]
    decimals: tuple[int, ...]
    price_rates: tuple[int, ...]
    weights: tuple[int, ...]
    amp: int | None
    total_shares: int
    swap_fee: int

    @property
    def normalized_balances(self) -> list[int]:
        return [
            normalize(balance, dec, rate)
            for balance, dec, rate in zip(self.balances, self.decimals, self.price_rates)
        ]


def parse_amp(amp: str) -> int:
    """Scale a raw amplification parameter by AMP_PRECISION."""
    scaled = (Decimal(amp) * AMP_PRECISION).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(scaled)


def parse_pool_info(pool: PoolSnapshot) -> ParsedPoolInfo:
    """Parse the string fields of a snapshot into integers."""
    return ParsedPoolInfo(
        tokens=tuple(t.address for t in pool.tokens),
        balances=tuple(int(t.balance) for t in pool.tokens),
        decimals=tuple(
            t.decimals if t.decimals is not None else DEFAULT_DECIMALS for t in pool.tokens
        ),
        price_rates=tuple(int(t.price_rate) if t.price_rate else ONE_18 for t in pool.tokens),
        weights=tuple(parse_fixed(t.weight) if t.weight else 0 for t in pool.tokens),
        amp=parse_amp(pool.amp) if pool.amp else None,
        total_shares=int(pool.total_shares),
        swap_fee=parse_fixed(pool.swap_fee),
    )
