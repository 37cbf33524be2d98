"""Data models for pool snapshots and exit transactions."""

from poolmath.models.exit import ExitPool, ExitPoolAttributes, ExitPoolRequest
from poolmath.models.pool import PoolSnapshot, PoolType, TokenBalance, TokenInfo, TokenPrice
from poolmath.models.types import Address, PoolId, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "ExitPool",
    "ExitPoolAttributes",
    "ExitPoolRequest",
    "PoolId",
    "PoolSnapshot",
    "PoolType",
    "TokenBalance",
    "TokenInfo",
    "TokenPrice",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
