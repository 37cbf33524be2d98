"""USD liquidity valuation.

Balances and prices are human decimal strings. Values are accumulated as
integers with 36 decimals (18 for the balance, 18 for the price).
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from poolmath.errors import MissingWeight
from poolmath.math.fixed_point import ONE_18
from poolmath.models.pool import TokenBalance
from poolmath.pools.scaling import format_fixed, parse_fixed

from .base import LiquidityConcern

logger = structlog.get_logger()


def _usd_price(token_balance: TokenBalance) -> int | None:
    price = token_balance.token.price
    if price is None or not price.usd:
        return None
    return parse_fixed(price.usd)


class AveragePriceLiquidity(LiquidityConcern):
    """Linear and stable-family pools.

    Tokens without a price are valued at the balance-weighted average price of
    the priced tokens, applied to their rate-adjusted balance.
    """

    def calc_total(self, token_balances: Sequence[TokenBalance]) -> str:
        sum_value = 0
        sum_balance = 0
        unpriced = []
        for token_balance in token_balances:
            price = _usd_price(token_balance)
            balance = parse_fixed(token_balance.balance)
            if price is None:
                unpriced.append(token_balance)
                continue
            sum_value += balance * price
            sum_balance += balance

        if sum_balance == 0:
            logger.debug("liquidity_without_prices", tokens=len(token_balances))
            return "0"

        average_price = sum_value // sum_balance
        for token_balance in unpriced:
            rate = int(token_balance.token.price_rate) if token_balance.token.price_rate else ONE_18
            balance = parse_fixed(token_balance.balance) * rate // ONE_18
            sum_value += balance * average_price

        logger.debug(
            "liquidity_calculated",
            priced=len(token_balances) - len(unpriced),
            imputed=len(unpriced),
        )
        return format_fixed(sum_value, 36)


class WeightedPoolLiquidity(LiquidityConcern):
    """Scales the value of the priced tokens up by the weight they cover."""

    def calc_total(self, token_balances: Sequence[TokenBalance]) -> str:
        sum_value = 0
        sum_weight = 0
        for token_balance in token_balances:
            price = _usd_price(token_balance)
            if price is None:
                continue
            if not token_balance.token.weight:
                raise MissingWeight(token_balance.token.address)
            sum_value += parse_fixed(token_balance.balance) * price
            sum_weight += parse_fixed(token_balance.token.weight)

        if sum_weight == 0:
            logger.debug("liquidity_without_prices", tokens=len(token_balances))
            return "0"

        total = sum_value * ONE_18 // sum_weight
        logger.debug("liquidity_calculated", priced_weight=sum_weight)
        return format_fixed(total, 36)
