"""Per-pool-family calculators."""

from .base import ExitConcern, LiquidityConcern, PriceImpactConcern, SpotPriceConcern
from .exit import MetaStablePoolExit, StablePoolExit, WeightedPoolExit
from .liquidity import AveragePriceLiquidity, WeightedPoolLiquidity
from .price_impact import (
    PhantomStablePoolPriceImpact,
    StablePoolPriceImpact,
    WeightedPoolPriceImpact,
)
from .spot_price import PhantomStablePoolSpotPrice, StablePoolSpotPrice, WeightedPoolSpotPrice

__all__ = [
    "AveragePriceLiquidity",
    "ExitConcern",
    "LiquidityConcern",
    "MetaStablePoolExit",
    "PhantomStablePoolPriceImpact",
    "PhantomStablePoolSpotPrice",
    "PriceImpactConcern",
    "SpotPriceConcern",
    "StablePoolExit",
    "StablePoolPriceImpact",
    "StablePoolSpotPrice",
    "WeightedPoolExit",
    "WeightedPoolLiquidity",
    "WeightedPoolPriceImpact",
    "WeightedPoolSpotPrice",
]
