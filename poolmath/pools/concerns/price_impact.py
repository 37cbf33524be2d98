"""Price impact of joins and exits.

The reference is the BPT a trade would mint or burn at the current BPT spot
prices, i.e. with zero price impact:

    bpt_zero_pi = sum(normalized_amount_i * bpt_spot_price_i)

    join: 1 - bpt_out / bpt_zero_pi
    exit: bpt_in / bpt_zero_pi - 1
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from poolmath.errors import InputLengthMismatch, InputOutOfBounds, MissingAmp, MissingWeight
from poolmath.math.fixed_point import ONE_18, Bfp
from poolmath.models.pool import PoolSnapshot
from poolmath.pools import stable_math, weighted_math
from poolmath.pools.scaling import (
    ParsedPoolInfo,
    format_fixed,
    normalize,
    parse_amount,
    parse_pool_info,
)

from .base import PriceImpactConcern
from .spot_price import without_pool_token

logger = structlog.get_logger()

_ONE = Bfp(ONE_18)


class BasePriceImpact(PriceImpactConcern):
    """Shared price-impact computation; subclasses supply the pool math."""

    def _validate_pool(self, info: ParsedPoolInfo) -> None:
        pass

    def _bpt_spot_price(self, info: ParsedPoolInfo, balances: list[Bfp], index: int) -> Bfp:
        raise NotImplementedError

    def _bpt_out_given_exact_tokens_in(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        raise NotImplementedError

    def _bpt_in_given_exact_tokens_out(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        raise NotImplementedError

    def calc_price_impact(
        self,
        pool: PoolSnapshot,
        token_amounts: Sequence[int | str],
        is_join: bool,
    ) -> str:
        if len(token_amounts) != len(pool.tokens):
            raise InputLengthMismatch(
                f"{len(token_amounts)} amounts for {len(pool.tokens)} pool tokens"
            )
        native_amounts = [parse_amount(a, "token_amount") for a in token_amounts]
        info = parse_pool_info(pool)
        self._validate_pool(info)

        if not is_join:
            for amount, balance in zip(native_amounts, info.balances):
                if amount > 0 and amount >= balance:
                    raise InputOutOfBounds(f"amount out {amount} exceeds balance {balance}")

        balances = [Bfp(b) for b in info.normalized_balances]
        amounts = [
            Bfp(normalize(a, d, r))
            for a, d, r in zip(native_amounts, info.decimals, info.price_rates)
        ]
        bpt_zero_pi = Bfp(0)
        for i, amount in enumerate(amounts):
            if amount.value:
                bpt_zero_pi = bpt_zero_pi.add(amount.mul_down(self._bpt_spot_price(info, balances, i)))
        if bpt_zero_pi.value == 0:
            return "0"

        if is_join:
            bpt_out = self._bpt_out_given_exact_tokens_in(info, balances, amounts)
            impact = _ONE.sub(bpt_out.div_down(bpt_zero_pi))
        else:
            bpt_in = self._bpt_in_given_exact_tokens_out(info, balances, amounts)
            impact = bpt_in.div_down(bpt_zero_pi).sub(_ONE)

        logger.debug(
            "price_impact_calculated",
            pool_id=pool.id,
            is_join=is_join,
            bpt_zero_price_impact=bpt_zero_pi.value,
            price_impact=impact.value,
        )
        return format_fixed(impact.value)


class WeightedPoolPriceImpact(BasePriceImpact):
    def _validate_pool(self, info: ParsedPoolInfo) -> None:
        if any(w == 0 for w in info.weights):
            raise MissingWeight()

    def _bpt_spot_price(self, info: ParsedPoolInfo, balances: list[Bfp], index: int) -> Bfp:
        return weighted_math.calc_bpt_spot_price(
            balances[index], Bfp(info.weights[index]), Bfp(info.total_shares)
        )

    def _bpt_out_given_exact_tokens_in(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        return weighted_math.calc_bpt_out_given_exact_tokens_in(
            balances,
            [Bfp(w) for w in info.weights],
            amounts,
            Bfp(info.total_shares),
            Bfp(info.swap_fee),
        )

    def _bpt_in_given_exact_tokens_out(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        return weighted_math.calc_bpt_in_given_exact_tokens_out(
            balances,
            [Bfp(w) for w in info.weights],
            amounts,
            Bfp(info.total_shares),
            Bfp(info.swap_fee),
        )


class StablePoolPriceImpact(BasePriceImpact):
    """Stable and MetaStable pools; amounts are rate-adjusted before the math."""

    def _validate_pool(self, info: ParsedPoolInfo) -> None:
        if info.amp is None:
            raise MissingAmp()

    def _bpt_spot_price(self, info: ParsedPoolInfo, balances: list[Bfp], index: int) -> Bfp:
        return stable_math.calc_bpt_spot_price(
            info.amp, balances, Bfp(info.total_shares), index  # type: ignore[arg-type]
        )

    def _bpt_out_given_exact_tokens_in(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        return stable_math.calc_bpt_out_given_exact_tokens_in(
            info.amp,  # type: ignore[arg-type]
            balances,
            amounts,
            Bfp(info.total_shares),
            Bfp(info.swap_fee),
        )

    def _bpt_in_given_exact_tokens_out(
        self, info: ParsedPoolInfo, balances: list[Bfp], amounts: list[Bfp]
    ) -> Bfp:
        return stable_math.calc_bpt_in_given_exact_tokens_out(
            info.amp,  # type: ignore[arg-type]
            balances,
            amounts,
            Bfp(info.total_shares),
            Bfp(info.swap_fee),
        )


class PhantomStablePoolPriceImpact(StablePoolPriceImpact):
    """Amounts are given for the pool tokens other than the pool's own BPT."""

    def calc_price_impact(
        self,
        pool: PoolSnapshot,
        token_amounts: Sequence[int | str],
        is_join: bool,
    ) -> str:
        return super().calc_price_impact(without_pool_token(pool), token_amounts, is_join)
