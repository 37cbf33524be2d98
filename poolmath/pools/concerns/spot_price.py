"""Spot price calculators."""

from __future__ import annotations

from poolmath.errors import MissingAmp, MissingWeight, TokenMismatch
from poolmath.math.fixed_point import Bfp
from poolmath.models.pool import PoolSnapshot
from poolmath.models.types import normalize_address
from poolmath.pools import stable_math, weighted_math
from poolmath.pools.scaling import format_fixed, parse_pool_info

from .base import SpotPriceConcern


def _token_indices(pool: PoolSnapshot, token_in: str, token_out: str) -> tuple[int, int]:
    index_in = pool.index_of(token_in)
    index_out = pool.index_of(token_out)
    if index_in < 0 or index_out < 0:
        raise TokenMismatch(f"{token_in}/{token_out} not both in pool {pool.id}")
    return index_in, index_out


def _with_fee(price: Bfp, swap_fee: int) -> str:
    """Gross a fee-less price up by 1 / (1 - fee)."""
    return format_fixed(price.div_up(Bfp(swap_fee).complement()).value)


class WeightedPoolSpotPrice(SpotPriceConcern):
    def calc_pool_spot_price(self, token_in: str, token_out: str, pool: PoolSnapshot) -> str:
        index_in, index_out = _token_indices(pool, token_in, token_out)
        info = parse_pool_info(pool)
        if not info.weights[index_in] or not info.weights[index_out]:
            raise MissingWeight()
        balances = info.normalized_balances
        price = weighted_math.calc_spot_price(
            Bfp(balances[index_in]),
            Bfp(info.weights[index_in]),
            Bfp(balances[index_out]),
            Bfp(info.weights[index_out]),
        )
        return _with_fee(price, info.swap_fee)


class StablePoolSpotPrice(SpotPriceConcern):
    """Stable and MetaStable pools.

    The invariant is evaluated on rate-adjusted balances, so the resulting
    price is converted back to native units with rate_out / rate_in.
    """

    def calc_pool_spot_price(self, token_in: str, token_out: str, pool: PoolSnapshot) -> str:
        index_in, index_out = _token_indices(pool, token_in, token_out)
        info = parse_pool_info(pool)
        if info.amp is None:
            raise MissingAmp()
        balances = [Bfp(b) for b in info.normalized_balances]
        scaled_price = stable_math.calc_spot_price(info.amp, balances, index_in, index_out)
        price = scaled_price.mul_down(Bfp(info.price_rates[index_out])).div_down(
            Bfp(info.price_rates[index_in])
        )
        return _with_fee(price, info.swap_fee)


def without_pool_token(pool: PoolSnapshot) -> PoolSnapshot:
    """Copy of a phantom pool with its own BPT removed from the token list."""
    if pool.address is None:
        return pool
    bpt = normalize_address(pool.address)
    tokens = [t for t in pool.tokens if normalize_address(t.address) != bpt]
    return pool.model_copy(update={"tokens": tokens})


class PhantomStablePoolSpotPrice(StablePoolSpotPrice):
    """StablePhantom pools hold their own BPT, which the invariant excludes."""

    def calc_pool_spot_price(self, token_in: str, token_out: str, pool: PoolSnapshot) -> str:
        return super().calc_pool_spot_price(token_in, token_out, without_pool_token(pool))


__all__ = [
    "PhantomStablePoolSpotPrice",
    "StablePoolSpotPrice",
    "WeightedPoolSpotPrice",
    "without_pool_token",
]
