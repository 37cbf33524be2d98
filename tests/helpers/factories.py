"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_token
    # or
    from tests.helpers.factories import make_pool, make_token

    pool = make_pool(
        PoolType.STABLE,
        [make_token(DAI, 1000 * ONE), make_token(USDC, 1000 * 10**6, decimals=6)],
        total_shares=2000 * ONE,
        amp="100",
    )
"""

from poolmath.models.pool import PoolSnapshot, PoolType, TokenBalance, TokenInfo, TokenPrice
from tests.helpers.constants import POOL_ID


def make_token(
    address: str,
    balance: int | str = 0,
    decimals: int | None = 18,
    price_rate: int | str | None = None,
    weight: str | None = None,
    usd: str | None = None,
) -> TokenInfo:
    """Create a pool token with sensible defaults.

    Args:
        address: Token address
        balance: Balance in native base units (default: 0)
        decimals: Token decimals, None to leave them missing (default: 18)
        price_rate: 18-decimal price rate, None for identity (default: None)
        weight: Normalized weight as a decimal string (default: None)
        usd: USD price as a decimal string (default: None)

    Returns:
        TokenInfo ready for use in a PoolSnapshot
    """
    return TokenInfo(
        address=address,
        balance=str(balance),
        decimals=decimals,
        price_rate=str(price_rate) if price_rate is not None else None,
        weight=weight,
        price=TokenPrice(usd=usd) if usd is not None else None,
    )


def make_pool(
    pool_type: PoolType | str,
    tokens: list[TokenInfo],
    total_shares: int | str,
    amp: str | None = None,
    swap_fee: str = "0",
    pool_id: str = POOL_ID,
    address: str | None = None,
) -> PoolSnapshot:
    """Create a pool snapshot.

    The address defaults to the first 20 bytes of the pool id.
    """
    return PoolSnapshot(
        id=pool_id,
        address=address if address is not None else pool_id[:42],
        pool_type=PoolType(pool_type),
        tokens=tokens,
        amp=amp,
        swap_fee=swap_fee,
        total_shares=str(total_shares),
    )


def make_token_balance(
    address: str,
    balance: str,
    usd: str | None = None,
    price_rate: int | None = None,
    weight: str | None = None,
) -> TokenBalance:
    """Create a token balance for liquidity valuation (human-decimal balance)."""
    return TokenBalance(
        token=make_token(address, price_rate=price_rate, weight=weight, usd=usd),
        balance=balance,
    )
