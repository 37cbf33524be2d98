"""Spot price and price impact over a caller-supplied set of pool snapshots."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from poolmath.config import DEFAULT_POOLS_CONFIG, PoolsConfig
from poolmath.errors import NoPoolData, PoolDoesntExist, UnsupportedPair
from poolmath.models.pool import PoolSnapshot
from poolmath.pools.pool_types import Pools
from poolmath.pools.scaling import normalize, parse_pool_info

logger = structlog.get_logger()


def find_pool(pools: Sequence[PoolSnapshot], pool_id: str) -> PoolSnapshot | None:
    """Pool with the given id (case-insensitive), or None."""
    wanted = pool_id.lower()
    for pool in pools:
        if pool.id.lower() == wanted:
            return pool
    return None


class Pricing:
    """Entry point for pricing queries.

    Pool snapshots are passed with every call; nothing is cached between
    calls.
    """

    def __init__(self, config: PoolsConfig = DEFAULT_POOLS_CONFIG, pools: Pools | None = None) -> None:
        self.config = config
        self.pools = pools if pools is not None else Pools(config)

    def _deepest_pool(
        self, token_in: str, token_out: str, pools: Sequence[PoolSnapshot]
    ) -> PoolSnapshot:
        best: PoolSnapshot | None = None
        best_depth = -1
        for pool in pools:
            if self.pools.from_type(pool.pool_type).spot_price_calculator is None:
                continue
            index_out = pool.index_of(token_out)
            if pool.index_of(token_in) < 0 or index_out < 0:
                continue
            info = parse_pool_info(pool)
            depth = normalize(
                info.balances[index_out], info.decimals[index_out], info.price_rates[index_out]
            )
            if depth > best_depth:
                best, best_depth = pool, depth
        if best is None:
            raise UnsupportedPair(f"{token_in}/{token_out}")
        logger.debug("spot_price_pool_selected", pool_id=best.id, depth=best_depth)
        return best

    def get_spot_price(
        self,
        token_in: str,
        token_out: str,
        pools: Sequence[PoolSnapshot],
        pool_id: str = "",
    ) -> str:
        """Price of token_out in token_in, swap fee included.

        Without a pool id, the supported pool holding both tokens with the
        largest normalized token_out balance is used.

        Raises:
            PoolDoesntExist: If pool_id is given but not among the pools
            UnsupportedPair: If no pool holds both tokens
            UnsupportedPoolType: If the chosen pool type has no spot price
        """
        if pool_id:
            pool = find_pool(pools, pool_id)
            if pool is None:
                raise PoolDoesntExist(pool_id)
        else:
            pool = self._deepest_pool(token_in, token_out, pools)
        concerns = self.pools.from_type(pool.pool_type)
        return concerns.spot_price.calc_pool_spot_price(token_in, token_out, pool)

    def get_price_impact(
        self,
        token_amounts: Sequence[int | str],
        is_join: bool,
        pools: Sequence[PoolSnapshot],
        pool_id: str,
    ) -> str:
        """Price impact of joining or exiting pool_id with token_amounts.

        Raises:
            NoPoolData: If pool_id is not among the pools
        """
        pool = find_pool(pools, pool_id)
        if pool is None:
            raise NoPoolData(pool_id)
        concerns = self.pools.from_type(pool.pool_type)
        return concerns.price_impact.calc_price_impact(pool, token_amounts, is_join)
