"""Canonical asset ordering.

The Vault rejects asset lists that are not sorted by ascending address, so
tokens and every list that runs parallel to them must be permuted together.
"""

from __future__ import annotations

from typing import Any

from poolmath.constants import ETH_ADDRESS, WETH
from poolmath.errors import InputLengthMismatch
from poolmath.models.types import normalize_address


class AssetHelpers:
    """Sorts assets the way the Vault expects.

    Native ETH (the zero address) is sorted as if it were WETH, because the
    Vault substitutes one for the other.
    """

    def __init__(self, weth: str = WETH) -> None:
        self.weth = normalize_address(weth)

    def _sort_key(self, address: str) -> int:
        addr = normalize_address(address)
        if addr == ETH_ADDRESS:
            addr = self.weth
        return int(addr, 16)

    def sort_tokens(self, tokens: list[str], *others: list[Any]) -> tuple[list[Any], ...]:
        """Sort tokens ascending and apply the same permutation to `others`.

        Returns:
            (sorted_tokens, *sorted_others)

        Raises:
            InputLengthMismatch: If any parallel list differs in length from tokens
        """
        for other in others:
            if len(other) != len(tokens):
                raise InputLengthMismatch(
                    f"expected {len(tokens)} entries, got {len(other)}"
                )
        order = sorted(range(len(tokens)), key=lambda i: self._sort_key(tokens[i]))
        sorted_tokens = [tokens[i] for i in order]
        return (sorted_tokens, *([other[i] for i in order] for other in others))

    def is_sorted(self, tokens: list[str]) -> bool:
        keys = [self._sort_key(t) for t in tokens]
        return all(a < b for a, b in zip(keys, keys[1:]))
