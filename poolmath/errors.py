"""Balancer error classes.

Every error carries a BalancerErrorCode so callers can map failures to
user-facing messages without matching on exception text.
"""

from __future__ import annotations

from enum import Enum


class BalancerErrorCode(str, Enum):
    """Error codes shared with the Balancer SDK."""

    INPUT_OUT_OF_BOUNDS = "INPUT_OUT_OF_BOUNDS"
    INPUT_LENGTH_MISMATCH = "INPUT_LENGTH_MISMATCH"
    TOKEN_MISMATCH = "TOKEN_MISMATCH"
    MISSING_DECIMALS = "MISSING_DECIMALS"
    MISSING_AMP = "MISSING_AMP"
    MISSING_PRICE_RATE = "MISSING_PRICE_RATE"
    MISSING_WEIGHT = "MISSING_WEIGHT"
    UNSUPPORTED_POOL_TYPE = "UNSUPPORTED_POOL_TYPE"
    UNSUPPORTED_PAIR = "UNSUPPORTED_PAIR"
    POOL_DOESNT_EXIST = "POOL_DOESNT_EXIST"
    NO_POOL_DATA = "NO_POOL_DATA"
    ZERO_BALANCE = "ZERO_BALANCE"
    STABLE_INVARIANT_DID_NOT_CONVERGE = "STABLE_INVARIANT_DID_NOT_CONVERGE"
    STABLE_GET_BALANCE_DID_NOT_CONVERGE = "STABLE_GET_BALANCE_DID_NOT_CONVERGE"


_MESSAGES = {
    BalancerErrorCode.INPUT_OUT_OF_BOUNDS: "input out of bounds",
    BalancerErrorCode.INPUT_LENGTH_MISMATCH: "input length mismatch",
    BalancerErrorCode.TOKEN_MISMATCH: "token mismatch",
    BalancerErrorCode.MISSING_DECIMALS: "missing decimals",
    BalancerErrorCode.MISSING_AMP: "missing amp",
    BalancerErrorCode.MISSING_PRICE_RATE: "missing price rate",
    BalancerErrorCode.MISSING_WEIGHT: "missing weight",
    BalancerErrorCode.UNSUPPORTED_POOL_TYPE: "unsupported pool type",
    BalancerErrorCode.UNSUPPORTED_PAIR: "unsupported token pair",
    BalancerErrorCode.POOL_DOESNT_EXIST: "balancer pool does not exist",
    BalancerErrorCode.NO_POOL_DATA: "no pool data",
    BalancerErrorCode.ZERO_BALANCE: "token balance must be positive",
    BalancerErrorCode.STABLE_INVARIANT_DID_NOT_CONVERGE: "stable invariant did not converge",
    BalancerErrorCode.STABLE_GET_BALANCE_DID_NOT_CONVERGE: "stable get balance did not converge",
}


def get_message(code: BalancerErrorCode) -> str:
    """Human-readable message for an error code."""
    return _MESSAGES.get(code, "Unknown error")


class BalancerError(Exception):
    """Base error for pool calculations.

    Subclasses pin ``code``; the message defaults to the code's description
    and an optional detail is appended after a colon.
    """

    code: BalancerErrorCode = BalancerErrorCode.INPUT_OUT_OF_BOUNDS

    def __init__(self, detail: str | None = None) -> None:
        message = get_message(self.code)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail


class InputOutOfBounds(BalancerError):
    """An amount is empty, negative or otherwise outside its valid domain."""

    code = BalancerErrorCode.INPUT_OUT_OF_BOUNDS


class InputLengthMismatch(BalancerError):
    """Parallel list arguments differ in length or from the pool token count."""

    code = BalancerErrorCode.INPUT_LENGTH_MISMATCH


class TokenMismatch(BalancerError):
    """A token is not a member of the pool."""

    code = BalancerErrorCode.TOKEN_MISMATCH


class MissingDecimals(BalancerError):
    code = BalancerErrorCode.MISSING_DECIMALS


class MissingAmp(BalancerError):
    """Stable-family pool has no amplification parameter."""

    code = BalancerErrorCode.MISSING_AMP


MissingAmplificationParameter = MissingAmp


class MissingPriceRate(BalancerError):
    code = BalancerErrorCode.MISSING_PRICE_RATE


class MissingWeight(BalancerError):
    code = BalancerErrorCode.MISSING_WEIGHT


class UnsupportedPoolType(BalancerError):
    """The pool type has no implementation for the requested calculation."""

    code = BalancerErrorCode.UNSUPPORTED_POOL_TYPE


class UnsupportedPair(BalancerError):
    code = BalancerErrorCode.UNSUPPORTED_PAIR


class PoolDoesntExist(BalancerError):
    code = BalancerErrorCode.POOL_DOESNT_EXIST


class NoPoolData(BalancerError):
    code = BalancerErrorCode.NO_POOL_DATA


class ZeroBalanceError(BalancerError):
    """Token balance must be positive for invariant math."""

    code = BalancerErrorCode.ZERO_BALANCE


class StableInvariantDidNotConverge(BalancerError):
    """Newton-Raphson iteration for stable invariant D did not converge."""

    code = BalancerErrorCode.STABLE_INVARIANT_DID_NOT_CONVERGE


class StableGetBalanceDidNotConverge(BalancerError):
    """Newton-Raphson iteration for stable balance Y did not converge."""

    code = BalancerErrorCode.STABLE_GET_BALANCE_DID_NOT_CONVERGE
