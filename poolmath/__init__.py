"""Balancer pool math: spot price, price impact, liquidity and exit calldata."""

from poolmath.config import DEFAULT_POOLS_CONFIG, PoolsConfig
from poolmath.pools.pool_types import Pools
from poolmath.pricing import Pricing

__version__ = "0.1.0"
__all__ = ["DEFAULT_POOLS_CONFIG", "Pools", "PoolsConfig", "Pricing", "__version__"]
