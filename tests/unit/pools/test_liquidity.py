"""Tests for USD liquidity valuation."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from poolmath.errors import MissingWeight
from poolmath.pools.concerns.liquidity import AveragePriceLiquidity, WeightedPoolLiquidity
from tests.helpers import BAL, DAI, USDC, USDT, WETH, make_token_balance


class TestAveragePriceLiquidity:
    def test_all_priced(self) -> None:
        balances = [
            make_token_balance(DAI, "1000", usd="1"),
            make_token_balance(USDC, "500.5", usd="0.999"),
        ]
        total = AveragePriceLiquidity().calc_total(balances)
        assert Decimal(total) == Decimal("1000") + Decimal("500.5") * Decimal("0.999")

    def test_unpriced_token_takes_average_price(self) -> None:
        balances = [
            make_token_balance(DAI, "1000", usd="1"),
            make_token_balance(USDC, "1000", usd="1"),
            make_token_balance(USDT, "1000"),
        ]
        assert AveragePriceLiquidity().calc_total(balances) == "3000"

    def test_unpriced_token_balance_is_rate_adjusted(self) -> None:
        """A wrapped token worth 1.05 of the main token counts 1.05x."""
        balances = [
            make_token_balance(DAI, "100", usd="1"),
            make_token_balance(USDC, "100", price_rate=105 * 10**16),
        ]
        assert AveragePriceLiquidity().calc_total(balances) == "205"

    def test_no_prices_is_zero(self) -> None:
        balances = [make_token_balance(DAI, "1000"), make_token_balance(USDC, "1000")]
        with capture_logs() as logs:
            assert AveragePriceLiquidity().calc_total(balances) == "0"
        assert logs[0]["event"] == "liquidity_without_prices"

    def test_empty(self) -> None:
        assert AveragePriceLiquidity().calc_total([]) == "0"


class TestWeightedPoolLiquidity:
    def test_scales_by_known_weight(self) -> None:
        """1000 BAL at $5 covers 80% of the pool: 5000 / 0.8."""
        balances = [
            make_token_balance(BAL, "1000", usd="5", weight="0.8"),
            make_token_balance(WETH, "1", weight="0.2"),
        ]
        assert WeightedPoolLiquidity().calc_total(balances) == "6250"

    def test_all_priced(self) -> None:
        balances = [
            make_token_balance(BAL, "1000", usd="5", weight="0.5"),
            make_token_balance(WETH, "2", usd="2500", weight="0.5"),
        ]
        assert WeightedPoolLiquidity().calc_total(balances) == "10000"

    def test_no_prices_is_zero(self) -> None:
        balances = [make_token_balance(BAL, "1000", weight="0.8")]
        assert WeightedPoolLiquidity().calc_total(balances) == "0"

    def test_priced_token_without_weight_raises(self) -> None:
        with pytest.raises(MissingWeight):
            WeightedPoolLiquidity().calc_total([make_token_balance(BAL, "1", usd="5")])
