"""Balancer stable pool math.

StableSwap (Curve-style) invariant math as implemented by Balancer's
StableMath.sol. All balances are rate-adjusted 18-decimal values and `amp`
is already multiplied by AMP_PRECISION.

Invariant, with a = amp * n / AMP_PRECISION:

    a * sum(x) + D = a * D + D^(n+1) / (n^n * prod(x))
"""

from __future__ import annotations

from poolmath.errors import (
    InputOutOfBounds,
    StableGetBalanceDidNotConverge,
    StableInvariantDidNotConverge,
    ZeroBalanceError,
)
from poolmath.math.fixed_point import AMP_PRECISION, ONE_18, Bfp
from poolmath.safe_int import S, SafeInt

_STABLE_MAX_ITERATIONS = 255


def _check_balances(balances: list[Bfp]) -> None:
    for i, bal in enumerate(balances):
        if bal.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")


def check_amount_out(balance: Bfp, amount_out: Bfp) -> None:
    if amount_out >= balance:
        raise InputOutOfBounds(
            f"withdrawal of {amount_out.value} exhausts balance {balance.value}"
        )


def calculate_invariant(amp: int, balances: list[Bfp]) -> Bfp:
    """Calculate the StableSwap invariant D by Newton-Raphson iteration.

    Balancer parameterizes with A*n (not A*n^n); the n^n factor enters
    through the iterative d_p product.

    Args:
        amp: Amplification parameter (scaled by AMP_PRECISION=1000)
        balances: Rate-adjusted token balances (18 decimals)

    Returns:
        The invariant D

    Raises:
        StableInvariantDidNotConverge: If iteration doesn't converge in 255 rounds
        ZeroBalanceError: If any balance is zero
    """
    n_coins = len(balances)
    if n_coins == 0:
        return Bfp(0)
    _check_balances(balances)

    sum_balances = S(sum(b.value for b in balances))
    d_prev = sum_balances
    amp_times_n = S(amp) * n_coins

    for _ in range(_STABLE_MAX_ITERATIONS):
        # d_p = D^(n+1) / (n^n * prod(balances))
        d_p = d_prev
        for bal in balances:
            d_p = (d_p * d_prev) // (S(n_coins) * bal.value)

        numerator = ((amp_times_n * sum_balances) // AMP_PRECISION + d_p * n_coins) * d_prev
        denominator = ((amp_times_n - AMP_PRECISION) * d_prev) // AMP_PRECISION + S(
            n_coins + 1
        ) * d_p
        d_new = numerator // denominator

        if abs(d_new.value - d_prev.value) <= 1:
            return Bfp(d_new.value)
        d_prev = d_new

    raise StableInvariantDidNotConverge(f"no convergence after {_STABLE_MAX_ITERATIONS} iterations")


def get_token_balance_given_invariant_and_all_other_balances(
    amp: int,
    balances: list[Bfp],
    invariant: Bfp,
    token_index: int,
) -> Bfp:
    """Solve for balances[token_index] so that the invariant equals `invariant`.

    Matches StableMath._getTokenBalanceGivenInvariantAndAllOtherBalances: the
    current value at token_index is divided back out of P_D, so only the other
    balances matter.

    Raises:
        StableGetBalanceDidNotConverge: If iteration doesn't converge
        IndexError: If token_index is out of range
    """
    n_coins = len(balances)
    if token_index < 0 or token_index >= n_coins:
        raise IndexError(f"token_index {token_index} out of range for {n_coins} tokens")

    d = S(invariant.value)
    amp_times_total = S(amp) * n_coins

    sum_balances = S(balances[0].value)
    p_d = S(balances[0].value) * n_coins
    for j in range(1, n_coins):
        p_d = (p_d * balances[j].value * n_coins) // d
        sum_balances = sum_balances + balances[j].value

    sum_others = sum_balances - balances[token_index].value
    inv2 = d * d

    # c = inv2 / (ampTimesTotal * P_D) * AMP_PRECISION * balances[tokenIndex]
    c = inv2.ceiling_div(amp_times_total * p_d) * AMP_PRECISION * balances[token_index].value
    # b = sum + invariant / ampTimesTotal * AMP_PRECISION
    b = sum_others + (d // amp_times_total) * AMP_PRECISION

    token_balance = (inv2 + c).ceiling_div(d + b)

    for _ in range(_STABLE_MAX_ITERATIONS):
        prev_token_balance = token_balance
        denominator = token_balance * 2 + b
        if denominator <= d:
            raise StableGetBalanceDidNotConverge("Denominator became non-positive")
        token_balance = (token_balance * token_balance + c).ceiling_div(denominator - d)

        if abs(token_balance.value - prev_token_balance.value) <= 1:
            return Bfp(token_balance.value)

    raise StableGetBalanceDidNotConverge(
        f"no convergence after {_STABLE_MAX_ITERATIONS} iterations"
    )


def calc_tokens_out_given_exact_bpt_in(
    balances: list[Bfp],
    bpt_amount_in: Bfp,
    bpt_total_supply: Bfp,
) -> list[Bfp]:
    """Proportional exit: balance_i * bpt_in / total_supply for every token.

    No swap fee applies because the pool's composition does not change.

    Raises:
        InputOutOfBounds: If bpt_amount_in exceeds the supply
    """
    if bpt_amount_in.value > bpt_total_supply.value:
        raise InputOutOfBounds("bpt_in exceeds total supply")
    return [
        Bfp(((S(b.value) * bpt_amount_in.value) // bpt_total_supply.value).value)
        for b in balances
    ]


def calc_token_out_given_exact_bpt_in(
    amp: int,
    balances: list[Bfp],
    token_index: int,
    bpt_amount_in: Bfp,
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Single-token exit: amount of balances[token_index] paid for bpt_amount_in.

    The invariant shrinks by bpt_in / supply. The part of the withdrawal that
    a proportional exit would not have produced (1 - weight of the token) is
    an implicit swap and pays the swap fee.

    Raises:
        InputOutOfBounds: If bpt_amount_in is not below the supply
        ZeroBalanceError: If any balance is zero
    """
    if bpt_amount_in.value >= bpt_total_supply.value:
        raise InputOutOfBounds("single-token exit must burn less than the total supply")
    _check_balances(balances)

    current_invariant = calculate_invariant(amp, balances)
    new_invariant = (
        bpt_total_supply.sub(bpt_amount_in).div_up(bpt_total_supply).mul_up(current_invariant)
    )
    new_balance = get_token_balance_given_invariant_and_all_other_balances(
        amp, balances, new_invariant, token_index
    )
    amount_out_without_fee = balances[token_index].sub(new_balance)

    sum_balances = Bfp(sum(b.value for b in balances))
    current_weight = balances[token_index].div_down(sum_balances)
    taxable_percentage = current_weight.complement()

    taxable_amount = amount_out_without_fee.mul_up(taxable_percentage)
    non_taxable_amount = amount_out_without_fee.sub(taxable_amount)
    return non_taxable_amount.add(taxable_amount.mul_down(swap_fee.complement()))


def calc_bpt_in_given_exact_tokens_out(
    amp: int,
    balances: list[Bfp],
    amounts_out: list[Bfp],
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT that must be burned to withdraw exactly `amounts_out`.

    Withdrawals beyond the proportional share (the invariant ratio without
    fees) are grossed up by the swap fee before the new invariant is solved.

    Raises:
        ZeroBalanceError: If a balance is zero
        InputOutOfBounds: If an amount out, with the swap fee added, reaches its balance
    """
    _check_balances(balances)
    sum_balances = Bfp(sum(b.value for b in balances))

    balance_ratios_without_fee = []
    invariant_ratio_without_fees = Bfp(0)
    for balance, amount_out in zip(balances, amounts_out):
        current_weight = balance.div_down(sum_balances)
        check_amount_out(balance, amount_out)
        ratio = Bfp((S(balance.value) - amount_out.value).value).div_up(balance)
        balance_ratios_without_fee.append(ratio)
        invariant_ratio_without_fees = invariant_ratio_without_fees.add(ratio.mul_up(current_weight))

    new_balances = []
    for balance, amount_out, ratio in zip(balances, amounts_out, balance_ratios_without_fee):
        if invariant_ratio_without_fees > ratio:
            non_taxable_amount = balance.mul_down(invariant_ratio_without_fees.complement())
            taxable_amount = amount_out.sub(non_taxable_amount)
            amount_out_with_fee = non_taxable_amount.add(taxable_amount.div_up(swap_fee.complement()))
        else:
            amount_out_with_fee = amount_out
        check_amount_out(balance, amount_out_with_fee)
        new_balances.append(Bfp((S(balance.value) - amount_out_with_fee.value).value))

    current_invariant = calculate_invariant(amp, balances)
    new_invariant = calculate_invariant(amp, new_balances)
    invariant_ratio = new_invariant.div_down(current_invariant)
    return bpt_total_supply.mul_up(invariant_ratio.complement())


def calc_bpt_out_given_exact_tokens_in(
    amp: int,
    balances: list[Bfp],
    amounts_in: list[Bfp],
    bpt_total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT minted for depositing exactly `amounts_in`.

    Deposits beyond the proportional share pay the swap fee.
    """
    _check_balances(balances)
    sum_balances = Bfp(sum(b.value for b in balances))

    balance_ratios_with_fee = []
    invariant_ratio_with_fees = Bfp(0)
    for balance, amount_in in zip(balances, amounts_in):
        current_weight = balance.div_down(sum_balances)
        ratio = balance.add(amount_in).div_down(balance)
        balance_ratios_with_fee.append(ratio)
        invariant_ratio_with_fees = invariant_ratio_with_fees.add(ratio.mul_down(current_weight))

    new_balances = []
    for balance, amount_in, ratio in zip(balances, amounts_in, balance_ratios_with_fee):
        if ratio > invariant_ratio_with_fees:
            non_taxable_amount = balance.mul_down(invariant_ratio_with_fees.sub(Bfp(ONE_18)))
            taxable_amount = amount_in.sub(non_taxable_amount)
            amount_in_without_fee = non_taxable_amount.add(
                taxable_amount.mul_down(swap_fee.complement())
            )
        else:
            amount_in_without_fee = amount_in
        new_balances.append(balance.add(amount_in_without_fee))

    current_invariant = calculate_invariant(amp, balances)
    new_invariant = calculate_invariant(amp, new_balances)
    invariant_ratio = new_invariant.div_down(current_invariant)
    if invariant_ratio.value > ONE_18:
        return bpt_total_supply.mul_down(invariant_ratio.sub(Bfp(ONE_18)))
    return Bfp(0)


def _invariant_partials(amp: int, balances: list[Bfp]) -> tuple[SafeInt, SafeInt]:
    """Return (D, P) with P = D^(n+1) / (n^n * prod(balances))."""
    n_coins = len(balances)
    d = S(calculate_invariant(amp, balances).value)
    p = d
    for bal in balances:
        p = (p * d) // (S(n_coins) * bal.value)
    return d, p


def calc_spot_price(amp: int, balances: list[Bfp], index_in: int, index_out: int) -> Bfp:
    """Marginal price of token_out in units of token_in, before fees.

    From the implicit derivative of the invariant at constant D:

        price = (a + P/y) / (a + P/x),  x = balance_in, y = balance_out
    """
    n_coins = len(balances)
    _, p = _invariant_partials(amp, balances)
    x = balances[index_in].value
    y = balances[index_out].value
    amp_n = S(amp) * n_coins
    numerator = (amp_n * y + p * AMP_PRECISION) * x
    denominator = (amp_n * x + p * AMP_PRECISION) * y
    return Bfp(((numerator * ONE_18) // denominator).value)


def calc_bpt_spot_price(
    amp: int,
    balances: list[Bfp],
    bpt_total_supply: Bfp,
    token_index: int,
) -> Bfp:
    """BPT minted per unit of token_index at the margin, before fees.

    supply * (dD/dx_i) / D, where dD/dx_i comes from differentiating the
    invariant with respect to both x_i and D.
    """
    n_coins = len(balances)
    d, p = _invariant_partials(amp, balances)
    x = balances[token_index].value
    amp_n = S(amp) * n_coins
    numerator = (amp_n * x + p * AMP_PRECISION) * bpt_total_supply.value
    denominator = (amp_n * d + p * (AMP_PRECISION * (n_coins + 1)) - d * AMP_PRECISION) * x
    return Bfp(((numerator * ONE_18) // denominator).value)
