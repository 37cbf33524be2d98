"""Exit transaction builders for weighted and stable-family pools.

Both entry points run the same pipeline:

    validate -> parse -> sort -> normalize -> solve -> denormalize
    -> slippage bound -> encode

Only the solver step differs between pool families.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from poolmath.config import DEFAULT_POOLS_CONFIG, PoolsConfig
from poolmath.constants import EXIT_POOL_FUNCTION_NAME
from poolmath.errors import (
    InputLengthMismatch,
    InputOutOfBounds,
    MissingAmp,
    MissingDecimals,
    MissingPriceRate,
    MissingWeight,
    TokenMismatch,
    ZeroBalanceError,
)
from poolmath.math.fixed_point import Bfp
from poolmath.models.exit import ExitPool, ExitPoolAttributes, ExitPoolRequest
from poolmath.models.pool import PoolSnapshot
from poolmath.models.types import normalize_address
from poolmath.pools import stable_math, weighted_math
from poolmath.pools.encoding import (
    encode_exit_pool,
    exit_bpt_in_for_exact_tokens_out,
    exit_exact_bpt_in_for_one_token_out,
    exit_exact_bpt_in_for_tokens_out,
)
from poolmath.pools.ordering import AssetHelpers
from poolmath.pools.scaling import denormalize, normalize, parse_amount, parse_pool_info
from poolmath.pools.slippage import add_slippage, sub_slippage

from .base import ExitConcern

logger = structlog.get_logger()


@dataclass(frozen=True)
class SortedPool:
    """Pool state in canonical asset order, ready for the solvers.

    Attributes:
        tokens: Asset addresses, ascending
        balances: Native balances
        decimals: Token decimals
        price_rates: 18-decimal price rates
        weights: Normalized weights (weighted pools)
        scaled_balances: Rate-adjusted 18-decimal balances
        amp: A * AMP_PRECISION (stable pools)
        total_shares: BPT supply
        swap_fee: 18-decimal swap fee
    """

    tokens: list[str]
    balances: list[int]
    decimals: list[int]
    price_rates: list[int]
    weights: list[Bfp]
    scaled_balances: list[Bfp]
    amp: int | None
    total_shares: Bfp
    swap_fee: Bfp

    def index_of(self, token: str) -> int:
        wanted = normalize_address(token)
        for i, address in enumerate(self.tokens):
            if normalize_address(address) == wanted:
                return i
        return -1


class BasePoolExit(ExitConcern):
    """Shared exit pipeline; subclasses provide validation and the solver."""

    def __init__(self, config: PoolsConfig = DEFAULT_POOLS_CONFIG) -> None:
        self.config = config
        self.asset_helpers = AssetHelpers(config.weth_address)

    # --- hooks -------------------------------------------------------------

    def _validate_pool(self, pool: PoolSnapshot) -> None:
        if any(token.decimals is None for token in pool.tokens):
            raise MissingDecimals()

    def _calc_token_out_given_exact_bpt_in(self, state: SortedPool, index: int, bpt_in: Bfp) -> Bfp:
        raise NotImplementedError

    def _calc_bpt_in_given_exact_tokens_out(self, state: SortedPool, amounts: list[Bfp]) -> Bfp:
        raise NotImplementedError

    # --- pipeline ----------------------------------------------------------

    def _sorted_pool(self, pool: PoolSnapshot) -> SortedPool:
        info = parse_pool_info(pool)
        if info.total_shares <= 0:
            raise InputOutOfBounds("pool has no shares outstanding")
        if any(rate <= 0 for rate in info.price_rates):
            raise InputOutOfBounds("price rate must be positive")
        tokens, balances, decimals, rates, weights = self.asset_helpers.sort_tokens(
            list(info.tokens),
            list(info.balances),
            list(info.decimals),
            list(info.price_rates),
            list(info.weights),
        )
        return SortedPool(
            tokens=tokens,
            balances=balances,
            decimals=decimals,
            price_rates=rates,
            weights=[Bfp(w) for w in weights],
            scaled_balances=[
                Bfp(normalize(b, d, r)) for b, d, r in zip(balances, decimals, rates)
            ],
            amp=info.amp,
            total_shares=Bfp(info.total_shares),
            swap_fee=Bfp(info.swap_fee),
        )

    def _build_attributes(
        self,
        exiter: str,
        pool: PoolSnapshot,
        assets: list[str],
        min_amounts_out: list[int],
        user_data: str,
        max_bpt_in: int,
    ) -> ExitPoolAttributes:
        min_amounts = tuple(str(a) for a in min_amounts_out)
        attributes = ExitPool(
            pool_id=pool.id,
            sender=exiter,
            recipient=exiter,
            exit_pool_request=ExitPoolRequest(
                assets=tuple(assets),
                min_amounts_out=min_amounts,
                user_data=user_data,
                to_internal_balance=False,
            ),
        )
        return ExitPoolAttributes(
            to=self.config.vault_address,
            function_name=EXIT_POOL_FUNCTION_NAME,
            attributes=attributes,
            data=encode_exit_pool(attributes),
            min_amounts_out=min_amounts,
            max_bpt_in=str(max_bpt_in),
        )

    def build_exit_exact_bpt_in(
        self,
        exiter: str,
        pool: PoolSnapshot,
        bpt_in: int | str,
        slippage: int | str,
        single_token_max_out: str | None = None,
    ) -> ExitPoolAttributes:
        bpt_amount = parse_amount(bpt_in, "bpt_in")
        slippage_value = parse_amount(slippage, "slippage")
        if single_token_max_out and pool.index_of(single_token_max_out) < 0:
            raise TokenMismatch(f"{single_token_max_out} is not in pool {pool.id}")
        self._validate_pool(pool)

        state = self._sorted_pool(pool)
        min_amounts_out = [0] * len(state.tokens)

        if single_token_max_out:
            index = state.index_of(single_token_max_out)
            if any(b.value == 0 for b in state.scaled_balances):
                raise ZeroBalanceError("single-token exit requires non-zero balances")
            scaled_amount_out = self._calc_token_out_given_exact_bpt_in(state, index, Bfp(bpt_amount))
            amount_out = denormalize(
                scaled_amount_out.value, state.decimals[index], state.price_rates[index]
            )
            min_amounts_out[index] = sub_slippage(amount_out, slippage_value)
            user_data = exit_exact_bpt_in_for_one_token_out(bpt_amount, index)
        else:
            scaled_amounts_out = stable_math.calc_tokens_out_given_exact_bpt_in(
                state.scaled_balances, Bfp(bpt_amount), state.total_shares
            )
            amounts_out = [
                denormalize(a.value, d, r)
                for a, d, r in zip(scaled_amounts_out, state.decimals, state.price_rates)
            ]
            min_amounts_out = [sub_slippage(a, slippage_value) for a in amounts_out]
            user_data = exit_exact_bpt_in_for_tokens_out(bpt_amount)

        logger.debug(
            "exit_exact_bpt_in_built",
            pool_id=pool.id,
            bpt_in=bpt_amount,
            single_token=single_token_max_out,
            min_amounts_out=min_amounts_out,
        )
        return self._build_attributes(
            exiter, pool, state.tokens, min_amounts_out, user_data, bpt_amount
        )

    def build_exit_exact_tokens_out(
        self,
        exiter: str,
        pool: PoolSnapshot,
        tokens_out: Sequence[str],
        amounts_out: Sequence[int | str],
        slippage: int | str,
    ) -> ExitPoolAttributes:
        if len(tokens_out) != len(amounts_out) or len(tokens_out) != len(pool.tokens):
            raise InputLengthMismatch(
                f"{len(tokens_out)} tokens, {len(amounts_out)} amounts, "
                f"{len(pool.tokens)} pool tokens"
            )
        amounts = [parse_amount(a, "amount_out") for a in amounts_out]
        slippage_value = parse_amount(slippage, "slippage")
        self._validate_pool(pool)

        state = self._sorted_pool(pool)
        sorted_tokens, sorted_amounts = self.asset_helpers.sort_tokens(list(tokens_out), amounts)
        if [normalize_address(t) for t in sorted_tokens] != [
            normalize_address(t) for t in state.tokens
        ]:
            raise TokenMismatch("tokens_out must match the pool tokens")

        for token, amount, balance in zip(sorted_tokens, sorted_amounts, state.balances):
            if amount > 0 and amount >= balance:
                raise InputOutOfBounds(f"amount out {amount} of {token} exceeds balance {balance}")

        scaled_amounts = [
            Bfp(normalize(a, d, r))
            for a, d, r in zip(sorted_amounts, state.decimals, state.price_rates)
        ]
        bpt_in = self._calc_bpt_in_given_exact_tokens_out(state, scaled_amounts)
        max_bpt_in = add_slippage(bpt_in.value, slippage_value)
        user_data = exit_bpt_in_for_exact_tokens_out(sorted_amounts, max_bpt_in)

        logger.debug(
            "exit_exact_tokens_out_built",
            pool_id=pool.id,
            bpt_in=bpt_in.value,
            max_bpt_in=max_bpt_in,
        )
        return self._build_attributes(
            exiter, pool, sorted_tokens, sorted_amounts, user_data, max_bpt_in
        )


class StablePoolExit(BasePoolExit):
    """Exits for Stable pools; price rates are optional (identity)."""

    requires_price_rate = False

    def _validate_pool(self, pool: PoolSnapshot) -> None:
        super()._validate_pool(pool)
        if not pool.amp:
            raise MissingAmp()
        if self.requires_price_rate and any(not token.price_rate for token in pool.tokens):
            raise MissingPriceRate()

    def _calc_token_out_given_exact_bpt_in(self, state: SortedPool, index: int, bpt_in: Bfp) -> Bfp:
        return stable_math.calc_token_out_given_exact_bpt_in(
            state.amp,  # type: ignore[arg-type]
            state.scaled_balances,
            index,
            bpt_in,
            state.total_shares,
            state.swap_fee,
        )

    def _calc_bpt_in_given_exact_tokens_out(self, state: SortedPool, amounts: list[Bfp]) -> Bfp:
        return stable_math.calc_bpt_in_given_exact_tokens_out(
            state.amp,  # type: ignore[arg-type]
            state.scaled_balances,
            amounts,
            state.total_shares,
            state.swap_fee,
        )


class MetaStablePoolExit(StablePoolExit):
    """Exits for MetaStable pools, whose tokens carry price rates."""

    requires_price_rate = True


class WeightedPoolExit(BasePoolExit):
    """Exits for Weighted pools."""

    def _validate_pool(self, pool: PoolSnapshot) -> None:
        super()._validate_pool(pool)
        if any(not token.weight for token in pool.tokens):
            raise MissingWeight()

    def _calc_token_out_given_exact_bpt_in(self, state: SortedPool, index: int, bpt_in: Bfp) -> Bfp:
        return weighted_math.calc_token_out_given_exact_bpt_in(
            state.scaled_balances[index],
            state.weights[index],
            bpt_in,
            state.total_shares,
            state.swap_fee,
        )

    def _calc_bpt_in_given_exact_tokens_out(self, state: SortedPool, amounts: list[Bfp]) -> Bfp:
        return weighted_math.calc_bpt_in_given_exact_tokens_out(
            state.scaled_balances,
            state.weights,
            amounts,
            state.total_shares,
            state.swap_fee,
        )
