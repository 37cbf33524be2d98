"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from poolmath.models.pool import PoolSnapshot, PoolType, TokenBalance, TokenInfo
from tests.helpers import DAI, POOL_ID, USDC, WETH


def _pool_data(**overrides) -> dict:
    data = {
        "id": POOL_ID,
        "address": POOL_ID[:42],
        "poolType": "Stable",
        "tokens": [
            {"address": DAI, "decimals": 18, "balance": "1000000000000000000000"},
            {
                "address": USDC,
                "decimals": 6,
                "balance": "1000000000",
                "priceRate": "1000000000000000000",
            },
        ],
        "amp": "100",
        "swapFee": "0.0004",
        "totalShares": "2000000000000000000000",
    }
    data.update(overrides)
    return data


class TestTokenInfo:
    """Tests for TokenInfo model."""

    def test_parse_minimal(self):
        """A token needs only an address."""
        token = TokenInfo.model_validate({"address": DAI})
        assert token.balance == "0"
        assert token.decimals is None
        assert token.price_rate is None

    def test_parse_camel_case(self):
        token = TokenInfo.model_validate(
            {"address": WETH, "priceRate": "1100000000000000000", "price": {"usd": "2500"}}
        )
        assert token.price_rate == "1100000000000000000"
        assert token.price is not None
        assert token.price.usd == "2500"

    def test_int_balance_is_normalized_to_string(self):
        assert TokenInfo(address=DAI, balance=42).balance == "42"

    def test_negative_balance_rejected(self):
        with pytest.raises(ValidationError):
            TokenInfo(address=DAI, balance="-1")

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            TokenInfo(address="0x1234")

    @pytest.mark.parametrize("weight", ["-0.1", "1.5", "heavy"])
    def test_invalid_weight_rejected(self, weight):
        with pytest.raises(ValidationError):
            TokenInfo(address=DAI, weight=weight)


class TestPoolSnapshot:
    """Tests for PoolSnapshot model."""

    def test_parse_subgraph_shape(self):
        pool = PoolSnapshot.model_validate(_pool_data())
        assert pool.pool_type is PoolType.STABLE
        assert pool.swap_fee == "0.0004"
        assert pool.total_shares == "2000000000000000000000"
        assert pool.tokens_list == [DAI, USDC]

    def test_snake_case_names_accepted(self):
        data = _pool_data()
        data["pool_type"] = data.pop("poolType")
        data["swap_fee"] = data.pop("swapFee")
        data["total_shares"] = data.pop("totalShares")
        assert PoolSnapshot.model_validate(data).pool_type is PoolType.STABLE

    def test_frozen(self):
        pool = PoolSnapshot.model_validate(_pool_data())
        with pytest.raises(ValidationError):
            pool.amp = "200"

    @pytest.mark.parametrize("swap_fee", ["1", "-0.01", "abc", "NaN"])
    def test_invalid_swap_fee_rejected(self, swap_fee):
        with pytest.raises(ValidationError):
            PoolSnapshot.model_validate(_pool_data(swapFee=swap_fee))

    @pytest.mark.parametrize("amp", ["0", "-5", "abc", "NaN", "5001"])
    def test_invalid_amp_rejected(self, amp):
        """Amp must be a decimal within the StablePool bounds."""
        with pytest.raises(ValidationError):
            PoolSnapshot.model_validate(_pool_data(amp=amp))

    def test_amp_is_optional(self):
        assert PoolSnapshot.model_validate(_pool_data(amp=None)).amp is None

    def test_invalid_pool_id_rejected(self):
        with pytest.raises(ValidationError):
            PoolSnapshot.model_validate(_pool_data(id="0x1234"))

    def test_unknown_pool_type_rejected(self):
        with pytest.raises(ValidationError):
            PoolSnapshot.model_validate(_pool_data(poolType="Element"))

    def test_token_lookup_is_case_insensitive(self):
        pool = PoolSnapshot.model_validate(_pool_data())
        upper = "0x" + USDC[2:].upper()
        assert pool.index_of(upper) == 1
        assert pool.get_token(upper) is pool.tokens[1]
        assert pool.index_of(WETH) == -1
        assert pool.get_token(WETH) is None


class TestTokenBalance:
    def test_parse(self):
        balance = TokenBalance.model_validate(
            {"token": {"address": DAI, "price": {"usd": "1"}}, "balance": "12.5"}
        )
        assert balance.balance == "12.5"
        assert balance.token.price.usd == "1"
