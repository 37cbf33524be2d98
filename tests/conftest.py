"""Pytest configuration and fixtures."""

import pytest

from poolmath.models.pool import PoolSnapshot, PoolType
from tests.helpers import (
    BAL,
    DAI,
    ONE,
    PHANTOM_POOL_ADDRESS,
    PHANTOM_POOL_ID,
    USDC,
    WETH,
    WSTETH,
    make_pool,
    make_token,
)


@pytest.fixture
def stable_pool() -> PoolSnapshot:
    """Two-token stable pool, listed out of address order (WETH before DAI)."""
    return make_pool(
        PoolType.STABLE,
        [make_token(WETH, 2000 * ONE), make_token(DAI, 1000 * ONE)],
        total_shares=3000 * ONE,
        amp="100",
        swap_fee="0.0004",
    )


@pytest.fixture
def balanced_stable_pool() -> PoolSnapshot:
    """DAI/USDC stable pool with equal value on both sides and no fee."""
    return make_pool(
        PoolType.STABLE,
        [make_token(DAI, 1000 * ONE), make_token(USDC, 1000 * 10**6, decimals=6)],
        total_shares=2000 * ONE,
        amp="100",
        swap_fee="0",
    )


@pytest.fixture
def meta_stable_pool() -> PoolSnapshot:
    """wstETH/WETH pool where 1 wstETH is worth 1.1 WETH."""
    return make_pool(
        PoolType.META_STABLE,
        [
            make_token(WSTETH, 1000 * ONE, price_rate=11 * 10**17),
            make_token(WETH, 1100 * ONE, price_rate=ONE),
        ],
        total_shares=2200 * ONE,
        amp="50",
        swap_fee="0",
    )


@pytest.fixture
def weighted_pool() -> PoolSnapshot:
    """80/20 BAL/WETH pool where 1 WETH is priced at 4 BAL."""
    return make_pool(
        PoolType.WEIGHTED,
        [make_token(BAL, 1600 * ONE, weight="0.8"), make_token(WETH, 100 * ONE, weight="0.2")],
        total_shares=1000 * ONE,
        swap_fee="0",
    )


@pytest.fixture
def even_weighted_pool() -> PoolSnapshot:
    """50/50 DAI/WETH pool."""
    return make_pool(
        PoolType.WEIGHTED,
        [make_token(DAI, 1000 * ONE, weight="0.5"), make_token(WETH, 1000 * ONE, weight="0.5")],
        total_shares=2000 * ONE,
        swap_fee="0.003",
    )


@pytest.fixture
def phantom_stable_pool() -> PoolSnapshot:
    """Phantom stable pool holding its own BPT alongside DAI and USDC."""
    return make_pool(
        PoolType.STABLE_PHANTOM,
        [
            make_token(DAI, 1000 * ONE),
            make_token(PHANTOM_POOL_ADDRESS, 2**111),
            make_token(USDC, 1000 * 10**6, decimals=6),
        ],
        total_shares=2000 * ONE,
        amp="100",
        swap_fee="0",
        pool_id=PHANTOM_POOL_ID,
        address=PHANTOM_POOL_ADDRESS,
    )
