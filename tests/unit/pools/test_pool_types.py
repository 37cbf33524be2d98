"""Tests for pool-type dispatch."""

import pytest

from poolmath.config import PoolsConfig
from poolmath.errors import UnsupportedPoolType
from poolmath.models.pool import PoolType
from poolmath.pools.concerns import (
    AveragePriceLiquidity,
    MetaStablePoolExit,
    PhantomStablePoolSpotPrice,
    StablePoolExit,
    WeightedPoolExit,
    WeightedPoolLiquidity,
    WeightedPoolSpotPrice,
)
from poolmath.pools.pool_types import Pools


@pytest.fixture
def pools() -> Pools:
    return Pools()


class TestFromType:
    def test_weighted(self, pools) -> None:
        concerns = pools.from_type(PoolType.WEIGHTED)
        assert isinstance(concerns.spot_price, WeightedPoolSpotPrice)
        assert isinstance(concerns.liquidity, WeightedPoolLiquidity)
        assert isinstance(concerns.exit_builder, WeightedPoolExit)

    def test_accepts_subgraph_strings(self, pools) -> None:
        assert pools.from_type("MetaStable").pool_type is PoolType.META_STABLE

    def test_stable_family_exits(self, pools) -> None:
        assert type(pools.from_type(PoolType.STABLE).exit_builder) is StablePoolExit
        assert type(pools.from_type(PoolType.META_STABLE).exit_builder) is MetaStablePoolExit

    def test_phantom_stable_has_no_exit(self, pools) -> None:
        concerns = pools.from_type(PoolType.STABLE_PHANTOM)
        assert isinstance(concerns.spot_price, PhantomStablePoolSpotPrice)
        assert concerns.exit is None
        with pytest.raises(UnsupportedPoolType):
            concerns.exit_builder

    def test_linear_only_values_liquidity(self, pools) -> None:
        concerns = pools.from_type(PoolType.LINEAR)
        assert isinstance(concerns.liquidity, AveragePriceLiquidity)
        with pytest.raises(UnsupportedPoolType):
            concerns.spot_price
        with pytest.raises(UnsupportedPoolType):
            concerns.price_impact

    def test_unknown_type_raises(self, pools) -> None:
        with pytest.raises(UnsupportedPoolType):
            pools.from_type("Gyro2")

    def test_config_reaches_exit_builders(self) -> None:
        config = PoolsConfig(vault_address="0x1111111111111111111111111111111111111111")
        exit_builder = Pools(config).from_type(PoolType.STABLE).exit_builder
        assert exit_builder.config is config
