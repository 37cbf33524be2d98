"""Tests for join and exit price impact."""

from decimal import Decimal

import pytest

from poolmath.errors import InputLengthMismatch, InputOutOfBounds, MissingAmp
from poolmath.pools.concerns.price_impact import (
    PhantomStablePoolPriceImpact,
    StablePoolPriceImpact,
    WeightedPoolPriceImpact,
)
from tests.helpers import ONE

NEGLIGIBLE = Decimal("1e-9")


class TestWeightedPriceImpact:
    def test_proportional_join_is_negligible(self, even_weighted_pool) -> None:
        impact = WeightedPoolPriceImpact().calc_price_impact(
            even_weighted_pool, [10 * ONE, 10 * ONE], is_join=True
        )
        assert Decimal(impact) < NEGLIGIBLE

    def test_single_sided_join_has_impact(self, even_weighted_pool) -> None:
        impact = Decimal(
            WeightedPoolPriceImpact().calc_price_impact(
                even_weighted_pool, [100 * ONE, 0], is_join=True
            )
        )
        assert NEGLIGIBLE < impact < Decimal("0.1")

    def test_larger_trade_has_larger_impact(self, even_weighted_pool) -> None:
        calc = WeightedPoolPriceImpact()
        small = calc.calc_price_impact(even_weighted_pool, [10 * ONE, 0], is_join=True)
        large = calc.calc_price_impact(even_weighted_pool, [200 * ONE, 0], is_join=True)
        assert Decimal(large) > Decimal(small)

    def test_proportional_exit_is_negligible(self, even_weighted_pool) -> None:
        impact = WeightedPoolPriceImpact().calc_price_impact(
            even_weighted_pool, [10 * ONE, 10 * ONE], is_join=False
        )
        assert Decimal(impact) < NEGLIGIBLE

    def test_single_sided_exit_has_impact(self, even_weighted_pool) -> None:
        impact = WeightedPoolPriceImpact().calc_price_impact(
            even_weighted_pool, [0, 100 * ONE], is_join=False
        )
        assert Decimal(impact) > NEGLIGIBLE


class TestStablePriceImpact:
    def test_single_sided_join(self, balanced_stable_pool) -> None:
        pool = balanced_stable_pool.model_copy(update={"swap_fee": "0.001"})
        impact = Decimal(
            StablePoolPriceImpact().calc_price_impact(pool, [100 * ONE, 0], is_join=True)
        )
        assert 0 < impact < Decimal("0.01")

    def test_single_sided_exit(self, balanced_stable_pool) -> None:
        pool = balanced_stable_pool.model_copy(update={"swap_fee": "0.001"})
        impact = Decimal(
            StablePoolPriceImpact().calc_price_impact(pool, [0, 100 * 10**6], is_join=False)
        )
        assert 0 < impact < Decimal("0.01")

    def test_proportional_join_is_negligible(self, balanced_stable_pool) -> None:
        impact = StablePoolPriceImpact().calc_price_impact(
            balanced_stable_pool, [10 * ONE, 10 * 10**6], is_join=True
        )
        assert Decimal(impact) < NEGLIGIBLE

    def test_meta_stable(self, meta_stable_pool) -> None:
        impact = StablePoolPriceImpact().calc_price_impact(
            meta_stable_pool, [10 * ONE, 11 * ONE], is_join=True
        )
        assert Decimal(impact) < NEGLIGIBLE

    def test_zero_amounts(self, balanced_stable_pool) -> None:
        assert StablePoolPriceImpact().calc_price_impact(balanced_stable_pool, [0, 0], True) == "0"

    def test_missing_amp_raises(self, balanced_stable_pool) -> None:
        pool = balanced_stable_pool.model_copy(update={"amp": None})
        with pytest.raises(MissingAmp):
            StablePoolPriceImpact().calc_price_impact(pool, [ONE, 0], True)


class TestValidation:
    def test_length_mismatch_raises(self, balanced_stable_pool) -> None:
        with pytest.raises(InputLengthMismatch):
            StablePoolPriceImpact().calc_price_impact(balanced_stable_pool, [ONE], True)

    def test_exit_beyond_balance_raises(self, balanced_stable_pool) -> None:
        with pytest.raises(InputOutOfBounds):
            StablePoolPriceImpact().calc_price_impact(
                balanced_stable_pool, [1000 * ONE, 0], is_join=False
            )

    def test_exit_with_fee_beyond_balance_raises(self, balanced_stable_pool) -> None:
        """999 DAI is under the balance until the 1% fee on the imbalance is added."""
        pool = balanced_stable_pool.model_copy(update={"swap_fee": "0.01"})
        with pytest.raises(InputOutOfBounds):
            StablePoolPriceImpact().calc_price_impact(pool, [999 * ONE, 0], is_join=False)

    def test_negative_amount_raises(self, balanced_stable_pool) -> None:
        with pytest.raises(InputOutOfBounds):
            StablePoolPriceImpact().calc_price_impact(balanced_stable_pool, ["-1", "0"], True)


class TestPhantomStablePriceImpact:
    def test_amounts_exclude_pool_token(self, phantom_stable_pool) -> None:
        impact = PhantomStablePoolPriceImpact().calc_price_impact(
            phantom_stable_pool, [10 * ONE, 10 * 10**6], is_join=True
        )
        assert Decimal(impact) < NEGLIGIBLE
