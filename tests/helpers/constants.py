"""Shared token and pool constants for tests.

All addresses are lowercase for consistency with normalize_address().
Ascending address order: DAI < WSTETH < USDC < BAL < WETH < USDT.

Usage:
    from tests.helpers import DAI, WETH
    # or
    from tests.helpers.constants import DAI, WETH
"""

# =============================================================================
# Mainnet tokens
# =============================================================================

DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Dai Stablecoin (18 decimals)
WSTETH = "0x7f39c581f595b53c5cb19bd0b3f8da6c935e2ca0"  # Wrapped stETH (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
BAL = "0xba100000625a3754423978a60c9317c58a424e3d"  # Balancer (18 decimals)
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"  # Tether USD (6 decimals)

ETH = "0x0000000000000000000000000000000000000000"

# =============================================================================
# Pools and accounts
# =============================================================================

POOL_ID = "0x06df3b2bbb68adc8b0e302443692037ed9f91b42000000000000000000000063"
OTHER_POOL_ID = "0x32296969ef14eb0c6d29669c550d4a0449130230000200000000000000000080"

# Phantom pools list their own BPT among the tokens
PHANTOM_POOL_ADDRESS = "0x7b50775383d3d6f0215a8f290f2c9e2eebbeceb2"
PHANTOM_POOL_ID = "0x7b50775383d3d6f0215a8f290f2c9e2eebbeceb20000000000000000000000fe"

EXITER = "0x9008d19f58aabd9ed0d60971565aa8510560ab41"

# 18-decimal amounts
ONE = 10**18
ONE_PERCENT = 10**16
