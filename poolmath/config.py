"""Deployment configuration for pool calculations."""

from dataclasses import dataclass

from poolmath.constants import BALANCER_VAULT, WETH


@dataclass(frozen=True)
class PoolsConfig:
    """Addresses injected into exit builders and Pricing.

    Attributes:
        vault_address: Target of exitPool calls (Balancer Vault)
        weth_address: Address native ETH is sorted as when ordering assets
    """

    vault_address: str = BALANCER_VAULT
    weth_address: str = WETH


DEFAULT_POOLS_CONFIG = PoolsConfig()
