"""Pool math, ordering, encoding and per-pool-type calculators."""

from .ordering import AssetHelpers
from .pool_types import PoolConcerns, Pools
from .scaling import denormalize, normalize, parse_pool_info
from .slippage import add_slippage, sub_slippage

__all__ = [
    "AssetHelpers",
    "PoolConcerns",
    "Pools",
    "add_slippage",
    "denormalize",
    "normalize",
    "parse_pool_info",
    "sub_slippage",
]
