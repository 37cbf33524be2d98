"""Balancer weighted pool math.

Join/exit formulas from WeightedMath.sol for the invariant prod(x_i^w_i).
Balances are 18-decimal values, weights are 18-decimal normalized weights.
"""

from __future__ import annotations

from poolmath.errors import InputOutOfBounds, MissingWeight, ZeroBalanceError
from poolmath.math.fixed_point import ONE_18, Bfp
from poolmath.safe_int import S

from .stable_math import calc_tokens_out_given_exact_bpt_in, check_amount_out

# Exits may not shrink the invariant below 70% in one call
MIN_INVARIANT_RATIO = Bfp(7 * 10**17)

_ONE = Bfp(ONE_18)

__all__ = [
    "MIN_INVARIANT_RATIO",
    "calc_bpt_in_given_exact_tokens_out",
    "calc_bpt_out_given_exact_tokens_in",
    "calc_bpt_spot_price",
    "calc_spot_price",
    "calc_token_out_given_exact_bpt_in",
    "calc_tokens_out_given_exact_bpt_in",
]


def _check(balances: list[Bfp], weights: list[Bfp]) -> None:
    for i, (balance, weight) in enumerate(zip(balances, weights)):
        if balance.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")
        if weight.value <= 0:
            raise MissingWeight(f"Weight at index {i} must be positive")


def calc_spot_price(balance_in: Bfp, weight_in: Bfp, balance_out: Bfp, weight_out: Bfp) -> Bfp:
    """Price of token_out in token_in before fees: (Bi / wi) / (Bo / wo)."""
    _check([balance_in, balance_out], [weight_in, weight_out])
    return balance_in.div_down(weight_in).div_down(balance_out.div_down(weight_out))


def calc_bpt_spot_price(balance: Bfp, weight: Bfp, bpt_total_supply: Bfp) -> Bfp:
    """BPT minted per unit of a token at the margin: supply * w / B."""
    _check([balance], [weight])
    return bpt_total_supply.mul_down(weight).div_down(balance)


def calc_token_out_given_exact_bpt_in(
    balance: Bfp,
    normalized_weight: Bfp,
    bpt_amount_in: Bfp,
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Single-token exit.

    amount_out = B * (1 - ((S - bpt_in) / S)^(1 / w)), with the share of the
    withdrawal beyond the token's weight charged the swap fee.

    Raises:
        InputOutOfBounds: If the exit would shrink the invariant below 70%
    """
    _check([balance], [normalized_weight])
    invariant_ratio = bpt_total_supply.sub(bpt_amount_in).div_up(bpt_total_supply)
    if invariant_ratio < MIN_INVARIANT_RATIO:
        raise InputOutOfBounds("bpt_in exceeds the maximum single-token exit")

    balance_ratio = invariant_ratio.pow_up(_ONE.div_down(normalized_weight))
    amount_out_without_fee = balance.mul_down(balance_ratio.complement())

    taxable_amount = amount_out_without_fee.mul_up(normalized_weight.complement())
    non_taxable_amount = amount_out_without_fee.sub(taxable_amount)
    return non_taxable_amount.add(taxable_amount.mul_down(swap_fee.complement()))


def calc_bpt_in_given_exact_tokens_out(
    balances: list[Bfp],
    normalized_weights: list[Bfp],
    amounts_out: list[Bfp],
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT burned to withdraw exactly `amounts_out`.

    Raises:
        InputOutOfBounds: If an amount out, with the swap fee added, reaches its balance
    """
    _check(balances, normalized_weights)

    balance_ratios_without_fee = []
    invariant_ratio_without_fees = Bfp(0)
    for balance, weight, amount_out in zip(balances, normalized_weights, amounts_out):
        check_amount_out(balance, amount_out)
        ratio = Bfp((S(balance.value) - amount_out.value).value).div_up(balance)
        balance_ratios_without_fee.append(ratio)
        invariant_ratio_without_fees = invariant_ratio_without_fees.add(ratio.mul_up(weight))

    invariant_ratio = _ONE
    for balance, weight, amount_out, ratio in zip(
        balances, normalized_weights, amounts_out, balance_ratios_without_fee
    ):
        if invariant_ratio_without_fees > ratio:
            non_taxable_amount = balance.mul_down(invariant_ratio_without_fees.complement())
            taxable_amount = amount_out.sub(non_taxable_amount)
            amount_out_with_fee = non_taxable_amount.add(taxable_amount.div_up(swap_fee.complement()))
        else:
            amount_out_with_fee = amount_out
        check_amount_out(balance, amount_out_with_fee)

        balance_ratio = Bfp((S(balance.value) - amount_out_with_fee.value).value).div_down(balance)
        invariant_ratio = invariant_ratio.mul_down(balance_ratio.pow_down(weight))

    return bpt_total_supply.mul_up(invariant_ratio.complement())


def calc_bpt_out_given_exact_tokens_in(
    balances: list[Bfp],
    normalized_weights: list[Bfp],
    amounts_in: list[Bfp],
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT minted for depositing exactly `amounts_in`."""
    _check(balances, normalized_weights)

    balance_ratios_with_fee = []
    invariant_ratio_with_fees = Bfp(0)
    for balance, weight, amount_in in zip(balances, normalized_weights, amounts_in):
        ratio = balance.add(amount_in).div_down(balance)
        balance_ratios_with_fee.append(ratio)
        invariant_ratio_with_fees = invariant_ratio_with_fees.add(ratio.mul_down(weight))

    invariant_ratio = _ONE
    for balance, weight, amount_in, ratio in zip(
        balances, normalized_weights, amounts_in, balance_ratios_with_fee
    ):
        if ratio > invariant_ratio_with_fees:
            non_taxable_amount = balance.mul_down(invariant_ratio_with_fees.sub(_ONE))
            taxable_amount = amount_in.sub(non_taxable_amount)
            amount_in_without_fee = non_taxable_amount.add(
                taxable_amount.mul_down(swap_fee.complement())
            )
        else:
            amount_in_without_fee = amount_in

        balance_ratio = balance.add(amount_in_without_fee).div_down(balance)
        invariant_ratio = invariant_ratio.mul_down(balance_ratio.pow_down(weight))

    if invariant_ratio > _ONE:
        return bpt_total_supply.mul_down(invariant_ratio.sub(_ONE))
    return Bfp(0)
