"""Well-known addresses and protocol parameters.

These are defaults only; exit builders and Pricing read them through
PoolsConfig so other deployments can be targeted.
"""

from poolmath.models.types import is_valid_address

# Native ETH is passed to the Vault as the zero address
ETH_ADDRESS = "0x0000000000000000000000000000000000000000"


def _validate_address(name: str, address: str) -> str:
    """Validate a hard-coded address at import time.

    Raises:
        ValueError: If the address is not 0x + 40 hex chars
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Balancer V2 Vault (same address on every supported chain)
BALANCER_VAULT = _validate_address("Vault", "0xBA12222222228d8Ba445958a75a0704d566BF2C8")

# WETH on mainnet
WETH = _validate_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")

EXIT_POOL_FUNCTION_NAME = "exitPool"
