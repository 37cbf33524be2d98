"""Pydantic models for pool snapshots supplied by a pool-data provider.

Field names follow the Balancer subgraph (camelCase aliases are accepted),
but amounts are base-unit integer strings rather than human decimals:
- balance / totalShares: native token units
- priceRate: 18-decimal fixed point (1.0 == "1000000000000000000")
- swapFee / weight: decimal fractions ("0.001", "0.5")
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from poolmath.models.types import Address, PoolId, Uint256, normalize_address

# Amplification bounds enforced by StablePool
MIN_AMP = 1
MAX_AMP = 5000


class PoolType(str, Enum):
    """Balancer pool families, valued as the subgraph poolType strings."""

    WEIGHTED = "Weighted"
    STABLE = "Stable"
    META_STABLE = "MetaStable"
    STABLE_PHANTOM = "StablePhantom"
    LINEAR = "Linear"


def _validate_fraction(value: str | None, field: str, *, allow_one: bool) -> str | None:
    if value is None:
        return None
    try:
        parsed = Decimal(value)
    except (InvalidOperation, TypeError) as err:
        raise ValueError(f"{field} must be a decimal string: '{value}'") from err
    if not parsed.is_finite():
        raise ValueError(f"{field} must be finite: {value}")
    upper_ok = parsed <= 1 if allow_one else parsed < 1
    if parsed < 0 or not upper_ok:
        raise ValueError(f"{field} out of range: {value}")
    return value


def _validate_amp(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        parsed = Decimal(value)
    except (InvalidOperation, TypeError) as err:
        raise ValueError(f"amp must be a decimal string: '{value}'") from err
    if not parsed.is_finite() or not MIN_AMP <= parsed <= MAX_AMP:
        raise ValueError(f"amp out of range [{MIN_AMP}, {MAX_AMP}]: {value}")
    return value


class TokenPrice(BaseModel):
    """Token price quotes as human decimal strings."""

    usd: str | None = None

    model_config = {"frozen": True}


class TokenInfo(BaseModel):
    """One constituent token of a pool."""

    address: Address
    symbol: str | None = None
    decimals: int | None = Field(default=None, ge=0, le=77)
    balance: Uint256 = Field(default="0", description="Balance in native base units")
    price_rate: Uint256 | None = Field(
        default=None,
        alias="priceRate",
        description="18-decimal rate converting native units to pool units (default 1e18).",
    )
    weight: str | None = Field(default=None, description="Normalized weight, weighted pools")
    price: TokenPrice | None = None

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("weight")
    @classmethod
    def _check_weight(cls, value: str | None) -> str | None:
        return _validate_fraction(value, "weight", allow_one=True)


class PoolSnapshot(BaseModel):
    """Immutable state of a single pool at a point in time."""

    id: PoolId
    address: Address | None = None
    pool_type: PoolType = Field(alias="poolType")
    tokens: list[TokenInfo]
    amp: str | None = Field(default=None, description="Unscaled amplification parameter A")
    swap_fee: str = Field(alias="swapFee", description="Swap fee as decimal fraction")
    total_shares: Uint256 = Field(alias="totalShares", description="BPT supply in base units")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("swap_fee")
    @classmethod
    def _check_swap_fee(cls, value: str) -> str:
        return _validate_fraction(value, "swapFee", allow_one=False)  # type: ignore[return-value]

    @field_validator("amp")
    @classmethod
    def _check_amp(cls, value: str | None) -> str | None:
        return _validate_amp(value)

    @property
    def tokens_list(self) -> list[str]:
        """Token addresses in snapshot order."""
        return [t.address for t in self.tokens]

    def get_token(self, address: str) -> TokenInfo | None:
        """Find a token by address (case-insensitive)."""
        wanted = normalize_address(address)
        for token in self.tokens:
            if normalize_address(token.address) == wanted:
                return token
        return None

    def index_of(self, address: str) -> int:
        """Index of a token in snapshot order, or -1 when absent."""
        wanted = normalize_address(address)
        for i, token in enumerate(self.tokens):
            if normalize_address(token.address) == wanted:
                return i
        return -1


class TokenBalance(BaseModel):
    """A token and a human-decimal balance, used for liquidity valuation."""

    token: TokenInfo
    balance: str

    model_config = {"frozen": True}
