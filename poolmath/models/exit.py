"""Exit transaction attributes returned to the submission layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExitPoolRequest:
    """The request struct passed to Vault.exitPool.

    Attributes:
        assets: Token addresses in ascending address order
        min_amounts_out: Minimum amount per asset, same order as assets
        user_data: 0x-hex encoded exit kind and payload
        to_internal_balance: Route proceeds to Vault internal balance
    """

    assets: tuple[str, ...]
    min_amounts_out: tuple[str, ...]
    user_data: str
    to_internal_balance: bool = False


@dataclass(frozen=True)
class ExitPool:
    """Arguments of the exitPool call."""

    pool_id: str
    sender: str
    recipient: str
    exit_pool_request: ExitPoolRequest


@dataclass(frozen=True)
class ExitPoolAttributes:
    """Everything needed to submit an exit, plus the slippage bounds.

    Attributes:
        to: Contract the call is sent to (the Vault)
        function_name: Always "exitPool"
        attributes: Structured call arguments
        data: 0x-hex ABI-encoded calldata, selector included
        min_amounts_out: Minimum amounts out after slippage
        max_bpt_in: Maximum BPT burned (exact BPT in for exact-BPT exits)
    """

    to: str
    function_name: str
    attributes: ExitPool
    data: str
    min_amounts_out: tuple[str, ...]
    max_bpt_in: str
