"""ABI encoding for Vault.exitPool calls.

Weighted and stable pools share the exit userData layouts:
- (EXACT_BPT_IN_FOR_ONE_TOKEN_OUT, bptAmountIn, exitTokenIndex)
- (EXACT_BPT_IN_FOR_TOKENS_OUT, bptAmountIn)
- (BPT_IN_FOR_EXACT_TOKENS_OUT, amountsOut[], maxBPTAmountIn)
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

from eth_abi import encode  # type: ignore[attr-defined]

from poolmath.models.exit import ExitPool
from poolmath.models.types import is_valid_address, normalize_address
from poolmath.safe_int import S

# exitPool(bytes32,address,address,(address[],uint256[],bytes,bool))
EXIT_POOL_SELECTOR = bytes.fromhex("8bdb3913")

EXIT_POOL_REQUEST_TYPE = "(address[],uint256[],bytes,bool)"


class ExitKind(IntEnum):
    """Exit kinds understood by weighted and stable pools."""

    EXACT_BPT_IN_FOR_ONE_TOKEN_OUT = 0
    EXACT_BPT_IN_FOR_TOKENS_OUT = 1
    BPT_IN_FOR_EXACT_TOKENS_OUT = 2


def _uint(value: int | str) -> int:
    return S(int(value)).to_uint256()


def _address_bytes(address: str) -> bytes:
    normalized = normalize_address(address)
    if not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return bytes.fromhex(normalized[2:])


def _hex_bytes(value: str, length: int | None = None) -> bytes:
    raw = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if length is not None and len(raw) != length:
        raise ValueError(f"Expected {length} bytes, got {len(raw)}")
    return raw


def exit_exact_bpt_in_for_one_token_out(bpt_amount_in: int | str, exit_token_index: int) -> str:
    """userData for burning exact BPT for a single token."""
    encoded = encode(
        ["uint256", "uint256", "uint256"],
        [
            int(ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT),
            _uint(bpt_amount_in),
            _uint(exit_token_index),
        ],
    )
    return "0x" + encoded.hex()


def exit_exact_bpt_in_for_tokens_out(bpt_amount_in: int | str) -> str:
    """userData for burning exact BPT for all tokens proportionally."""
    encoded = encode(
        ["uint256", "uint256"],
        [int(ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT), _uint(bpt_amount_in)],
    )
    return "0x" + encoded.hex()


def exit_bpt_in_for_exact_tokens_out(
    amounts_out: Sequence[int | str],
    max_bpt_amount_in: int | str,
) -> str:
    """userData for withdrawing exact token amounts, burning at most max BPT."""
    encoded = encode(
        ["uint256", "uint256[]", "uint256"],
        [
            int(ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT),
            [_uint(a) for a in amounts_out],
            _uint(max_bpt_amount_in),
        ],
    )
    return "0x" + encoded.hex()


def encode_exit_pool(exit_pool: ExitPool) -> str:
    """Encode Vault.exitPool calldata, selector included.

    Returns:
        0x-prefixed hex calldata

    Raises:
        ValueError: If the pool id is not 32 bytes or an address is malformed
    """
    request = exit_pool.exit_pool_request
    encoded_args = encode(
        ["bytes32", "address", "address", EXIT_POOL_REQUEST_TYPE],
        [
            _hex_bytes(exit_pool.pool_id, 32),
            _address_bytes(exit_pool.sender),
            _address_bytes(exit_pool.recipient),
            (
                [_address_bytes(a) for a in request.assets],
                [_uint(a) for a in request.min_amounts_out],
                _hex_bytes(request.user_data),
                request.to_internal_balance,
            ),
        ],
    )
    return "0x" + (EXIT_POOL_SELECTOR + encoded_args).hex()
