"""18-decimal fixed-point arithmetic for Balancer pool math.

Every monetary quantity is an integer scaled by 10^18. The ``exp``/``pow_raw``
pair reproduces Balancer's LogExpMath.sol so that weighted-pool results match
the Vault to the wei:
https://github.com/balancer-labs/balancer-v2-monorepo/blob/master/pkg/solidity-utils/contracts/math/LogExpMath.sol
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import ClassVar

__all__ = [
    "Bfp",
    "LogExpMathError",
    "XOutOfBounds",
    "YOutOfBounds",
    "ProductOutOfBounds",
    "InvalidExponent",
    "pow_raw",
    "exp",
    "ONE_18",
    "ONE_20",
    "ONE_36",
    "AMP_PRECISION",
]

ONE_18 = 10**18
ONE_20 = 10**20
ONE_36 = 10**36

# Stable pools store A multiplied by this factor
AMP_PRECISION = 1000

MAX_NATURAL_EXPONENT = 130 * ONE_18
MIN_NATURAL_EXPONENT = -41 * ONE_18

# ln() switches to 36-decimal precision inside (0.9, 1.1)
LN_36_LOWER_BOUND = ONE_18 - 10**17
LN_36_UPPER_BOUND = ONE_18 + 10**17

MILD_EXPONENT_BOUND = (1 << 254) // ONE_20

# x_n = 2^(7-n), a_n = e^(x_n)
_X_18 = (128 * ONE_18, 64 * ONE_18)
_A_18 = (
    38877084059945950922200000000000000000000000000000000000,
    6235149080811616882910000000,
)

_X_20 = (
    3_200_000_000_000_000_000_000,
    1_600_000_000_000_000_000_000,
    800_000_000_000_000_000_000,
    400_000_000_000_000_000_000,
    200_000_000_000_000_000_000,
    100_000_000_000_000_000_000,
    50_000_000_000_000_000_000,
    25_000_000_000_000_000_000,
    12_500_000_000_000_000_000,
    6_250_000_000_000_000_000,
)
_A_20 = (
    7_896_296_018_268_069_516_100_000_000_000_000,
    888_611_052_050_787_263_676_000_000,
    298_095_798_704_172_827_474_000,
    5_459_815_003_314_423_907_810,
    738_905_609_893_065_022_723,
    271_828_182_845_904_523_536,
    164_872_127_070_012_814_685,
    128_402_541_668_774_148_407,
    113_314_845_306_682_631_683,
    106_449_445_891_785_942_956,
)


class LogExpMathError(ArithmeticError):
    """Base error for LogExpMath operations."""


class XOutOfBounds(LogExpMathError):
    """BAL#006: base does not fit in a signed 256-bit integer."""


class YOutOfBounds(LogExpMathError):
    """BAL#007: exponent exceeds MILD_EXPONENT_BOUND."""


class ProductOutOfBounds(LogExpMathError):
    """BAL#008: y * ln(x) is outside the range accepted by exp()."""


class InvalidExponent(LogExpMathError):
    """BAL#009: exponent outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]."""


def _div_trunc(a: int, b: int) -> int:
    """Divide truncating toward zero, as Solidity does.

    Python's ``//`` floors toward negative infinity, which differs from
    Solidity when exactly one operand is negative.
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in _div_trunc")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _ln(a: int) -> int:
    """Natural logarithm of a positive 18-decimal value."""
    if a < ONE_18:
        return -_ln((ONE_18 * ONE_18) // a)

    total = 0
    for x_n, a_n in zip(_X_18, _A_18):
        if a >= a_n * ONE_18:
            a //= a_n
            total += x_n

    total *= 100
    a *= 100

    for x_n, a_n in zip(_X_20, _A_20):
        if a >= a_n:
            a = (a * ONE_20) // a_n
            total += x_n

    # ln(a) = 2 * arctanh((a - 1) / (a + 1))
    z = ((a - ONE_20) * ONE_20) // (a + ONE_20)
    z_squared = (z * z) // ONE_20
    num = z
    series = num
    for i in range(3, 12, 2):
        num = (num * z_squared) // ONE_20
        series += num // i

    return (total + series * 2) // 100


def _ln_36(x: int) -> int:
    """Natural logarithm with 36 decimals, for inputs close to one."""
    x *= ONE_18
    z = _div_trunc((x - ONE_36) * ONE_36, x + ONE_36)
    z_squared = _div_trunc(z * z, ONE_36)
    num = z
    series = num
    for i in range(3, 16, 2):
        num = _div_trunc(num * z_squared, ONE_36)
        series += _div_trunc(num, i)
    return series * 2


def exp(x: int) -> int:
    """Compute e^x for an 18-decimal exponent.

    Raises:
        InvalidExponent: If x is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]
    """
    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise InvalidExponent(f"Exponent {x} outside valid range")

    if x < 0:
        return (ONE_18 * ONE_18) // exp(-x)

    if x >= _X_18[0]:
        x -= _X_18[0]
        first_an = _A_18[0]
    elif x >= _X_18[1]:
        x -= _X_18[1]
        first_an = _A_18[1]
    else:
        first_an = 1

    x *= 100

    product = ONE_20
    for x_n, a_n in zip(_X_20[:8], _A_20[:8]):
        if x >= x_n:
            x -= x_n
            product = (product * a_n) // ONE_20

    series = ONE_20 + x
    term = x
    for i in range(2, 13):
        term = ((term * x) // ONE_20) // i
        series += term

    return (((product * series) // ONE_20) * first_an) // 100


def pow_raw(x: int, y: int) -> int:
    """Compute x^y for non-negative 18-decimal operands.

    Raises:
        XOutOfBounds: If x is too large
        YOutOfBounds: If y exceeds MILD_EXPONENT_BOUND
        ProductOutOfBounds: If y * ln(x) is outside the range of exp()
    """
    if y == 0:
        return ONE_18
    if x == 0:
        return 0
    if x >= (1 << 255):
        raise XOutOfBounds(f"Base {x} too large")
    if y >= MILD_EXPONENT_BOUND:
        raise YOutOfBounds(f"Exponent {y} exceeds bound")

    if LN_36_LOWER_BOUND < x < LN_36_UPPER_BOUND:
        ln_36_x = _ln_36(x)
        quotient = _div_trunc(ln_36_x, ONE_18)
        remainder = ln_36_x - quotient * ONE_18
        logx_times_y = quotient * y + _div_trunc(remainder * y, ONE_18)
    else:
        logx_times_y = _ln(x) * y

    logx_times_y = _div_trunc(logx_times_y, ONE_18)

    if not (MIN_NATURAL_EXPONENT <= logx_times_y <= MAX_NATURAL_EXPONENT):
        raise ProductOutOfBounds(f"Product {logx_times_y} outside valid range")

    return exp(logx_times_y)


class Bfp:
    """18-decimal fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000.
    """

    ONE: ClassVar[int] = ONE_18
    MAX_POW_RELATIVE_ERROR: ClassVar[int] = 10000  # 10^-14

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self.value = value

    def to_decimal(self) -> Decimal:
        """Exact decimal value (no rounding to the default 28 digits)."""
        with localcontext() as ctx:
            ctx.prec = 120
            return Decimal(self.value) / Decimal(self.ONE)

    def mul_down(self, other: Bfp) -> Bfp:
        """(a * b) // 10^18"""
        return Bfp((self.value * other.value) // self.ONE)

    def mul_up(self, other: Bfp) -> Bfp:
        product = self.value * other.value
        if product == 0:
            return Bfp(0)
        return Bfp((product - 1) // self.ONE + 1)

    def div_down(self, other: Bfp) -> Bfp:
        """(a * 10^18) // b"""
        if other.value == 0:
            raise ZeroDivisionError("Bfp division by zero")
        return Bfp((self.value * self.ONE) // other.value)

    def div_up(self, other: Bfp) -> Bfp:
        if other.value == 0:
            raise ZeroDivisionError("Bfp division by zero")
        numerator = self.value * self.ONE
        if numerator == 0:
            return Bfp(0)
        return Bfp((numerator - 1) // other.value + 1)

    def complement(self) -> Bfp:
        """Return 1 - self, clamped at zero."""
        return Bfp(max(0, self.ONE - self.value))

    def add(self, other: Bfp) -> Bfp:
        return Bfp(self.value + other.value)

    def sub(self, other: Bfp) -> Bfp:
        """Subtract other from self, clamped at zero."""
        return Bfp(max(0, self.value - other.value))

    def pow_down(self, exponent: Bfp) -> Bfp:
        """self^exponent, rounded down by the LogExpMath error bound."""
        raw = pow_raw(self.value, exponent.value)
        max_error = Bfp(raw).mul_up(Bfp(self.MAX_POW_RELATIVE_ERROR)).value + 1
        if raw < max_error:
            return Bfp(0)
        return Bfp(raw - max_error)

    def pow_up(self, exponent: Bfp) -> Bfp:
        """self^exponent, rounded up by the LogExpMath error bound."""
        raw = pow_raw(self.value, exponent.value)
        max_error = Bfp(raw).mul_up(Bfp(self.MAX_POW_RELATIVE_ERROR)).value + 1
        return Bfp(raw + max_error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())
