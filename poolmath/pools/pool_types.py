"""Dispatch from pool type to the calculators that support it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from poolmath.config import DEFAULT_POOLS_CONFIG, PoolsConfig
from poolmath.errors import UnsupportedPoolType
from poolmath.models.pool import PoolType

from .concerns import (
    AveragePriceLiquidity,
    ExitConcern,
    LiquidityConcern,
    MetaStablePoolExit,
    PhantomStablePoolPriceImpact,
    PhantomStablePoolSpotPrice,
    PriceImpactConcern,
    SpotPriceConcern,
    StablePoolExit,
    StablePoolPriceImpact,
    StablePoolSpotPrice,
    WeightedPoolExit,
    WeightedPoolLiquidity,
    WeightedPoolPriceImpact,
    WeightedPoolSpotPrice,
)

T = TypeVar("T")


@dataclass(frozen=True)
class PoolConcerns:
    """Calculators for one pool type; None where the type has no support."""

    pool_type: PoolType
    spot_price_calculator: SpotPriceConcern | None = None
    price_impact_calculator: PriceImpactConcern | None = None
    liquidity_calculator: LiquidityConcern | None = None
    exit: ExitConcern | None = None

    def _require(self, concern: T | None, name: str) -> T:
        if concern is None:
            raise UnsupportedPoolType(f"{self.pool_type.value} has no {name}")
        return concern

    @property
    def spot_price(self) -> SpotPriceConcern:
        return self._require(self.spot_price_calculator, "spot price")

    @property
    def price_impact(self) -> PriceImpactConcern:
        return self._require(self.price_impact_calculator, "price impact")

    @property
    def liquidity(self) -> LiquidityConcern:
        return self._require(self.liquidity_calculator, "liquidity")

    @property
    def exit_builder(self) -> ExitConcern:
        return self._require(self.exit, "exit")


class Pools:
    """Registry of pool concerns bound to one configuration."""

    def __init__(self, config: PoolsConfig = DEFAULT_POOLS_CONFIG) -> None:
        self.config = config
        self._registry = {
            PoolType.WEIGHTED: PoolConcerns(
                pool_type=PoolType.WEIGHTED,
                spot_price_calculator=WeightedPoolSpotPrice(),
                price_impact_calculator=WeightedPoolPriceImpact(),
                liquidity_calculator=WeightedPoolLiquidity(),
                exit=WeightedPoolExit(config),
            ),
            PoolType.STABLE: PoolConcerns(
                pool_type=PoolType.STABLE,
                spot_price_calculator=StablePoolSpotPrice(),
                price_impact_calculator=StablePoolPriceImpact(),
                liquidity_calculator=AveragePriceLiquidity(),
                exit=StablePoolExit(config),
            ),
            PoolType.META_STABLE: PoolConcerns(
                pool_type=PoolType.META_STABLE,
                spot_price_calculator=StablePoolSpotPrice(),
                price_impact_calculator=StablePoolPriceImpact(),
                liquidity_calculator=AveragePriceLiquidity(),
                exit=MetaStablePoolExit(config),
            ),
            PoolType.STABLE_PHANTOM: PoolConcerns(
                pool_type=PoolType.STABLE_PHANTOM,
                spot_price_calculator=PhantomStablePoolSpotPrice(),
                price_impact_calculator=PhantomStablePoolPriceImpact(),
                liquidity_calculator=AveragePriceLiquidity(),
            ),
            PoolType.LINEAR: PoolConcerns(
                pool_type=PoolType.LINEAR,
                liquidity_calculator=AveragePriceLiquidity(),
            ),
        }

    def from_type(self, pool_type: PoolType | str) -> PoolConcerns:
        """Concerns for a pool type, given as enum or subgraph string.

        Raises:
            UnsupportedPoolType: If the type is unknown
        """
        try:
            key = PoolType(pool_type)
        except ValueError as err:
            raise UnsupportedPoolType(str(pool_type)) from err
        return self._registry[key]
