"""Test helpers module for shared test utilities.

- constants: Token addresses, pool ids and common amounts
- factories: Token and pool snapshot factory functions
"""

from tests.helpers.constants import (
    BAL,
    DAI,
    ETH,
    EXITER,
    ONE,
    ONE_PERCENT,
    OTHER_POOL_ID,
    PHANTOM_POOL_ADDRESS,
    PHANTOM_POOL_ID,
    POOL_ID,
    USDC,
    USDT,
    WETH,
    WSTETH,
)
from tests.helpers.factories import make_pool, make_token, make_token_balance

__all__ = [
    # Constants
    "BAL",
    "DAI",
    "ETH",
    "EXITER",
    "ONE",
    "ONE_PERCENT",
    "OTHER_POOL_ID",
    "PHANTOM_POOL_ADDRESS",
    "PHANTOM_POOL_ID",
    "POOL_ID",
    "USDC",
    "USDT",
    "WETH",
    "WSTETH",
    # Factories
    "make_pool",
    "make_token",
    "make_token_balance",
]
