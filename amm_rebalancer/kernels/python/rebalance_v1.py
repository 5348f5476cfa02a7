"""
Constant-product rebalance kernel (v1 semantics).

Two pure functions share this kernel:

- `compute_rebalance` derives the pool's order from reserves `(r0, r1)` and a
  reference ratio `n : d` (n units of token0 are worth d units of token1).
- `received_amount_ok` is the invariant test applied to any candidate order.

Rebalance formula (pool sells token0 when `r1 * n < r0 * d`):

    sell = floor(r0 / 2) - ceil(r1 * n / (2 * d))
    buy  = ceil(sell * (r1 * n + d * sell) / (n * r0))

and the mirror image with (r0, n) and (r1, d) swapped when the pool sells
token1. The sell side rounds down and the buy side rounds up, so every
rounding step moves value toward the pool.

Why the output always passes `received_amount_ok`: for the token0 branch the
test is `(r0 - sell) * buy >= r1 * sell`. Dropping the ceiling on `buy`
(which only makes the left side smaller) it suffices that
`(r0 - sell) * (r1*n + d*sell) >= n * r0 * r1`, which simplifies to
`d * (r0 - sell) >= r1 * n`. Since `sell <= (r0*d - r1*n) / (2*d)` after the
floor/ceil, `d * (r0 - sell) >= (r0*d + r1*n) / 2 > r1 * n` whenever the
branch condition `r1*n < r0*d` holds. The token1 branch is symmetric; the tie
`r1*n == r0*d` always yields `sell <= 0`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .uint_math import (
    Rounding,
    ceil_div,
    checked_add,
    checked_mul,
    checked_sub,
    cross_mul_ge,
    mul_div,
)


@dataclass(frozen=True)
class RebalanceQuote:
    sells_token0: bool
    sell_amount: int
    buy_amount: int
    traded_token0: int


def _half_reserve_trade(
    *,
    sell_reserve: int,
    buy_reserve_scaled: int,
    sell_price_side: int,
    buy_price_side: int,
) -> Optional[tuple[int, int]]:
    # sell_reserve/2 rounded down, minus the ceiling of the scaled opposite reserve.
    half = mul_div(sell_reserve, 1, 2, Rounding.FLOOR)
    offset = ceil_div(buy_reserve_scaled, checked_mul(2, buy_price_side))
    if offset >= half:
        return None
    sell_amount = checked_sub(half, offset)

    numerator = checked_add(buy_reserve_scaled, checked_mul(buy_price_side, sell_amount))
    denominator = checked_mul(sell_price_side, sell_reserve)
    buy_amount = mul_div(sell_amount, numerator, denominator, Rounding.CEIL)
    return sell_amount, buy_amount


def compute_rebalance(
    *,
    reserve0: int,
    reserve1: int,
    price_numerator: int,
    price_denominator: int,
) -> Optional[RebalanceQuote]:
    """
    Rebalancing order from the pool's point of view.

    Returns None when the pool already sits at the reference price (up to
    rounding). Raises ValueError on a zero price side and ArithmeticOverflow
    when an intermediate leaves uint256.
    """
    if price_numerator == 0 or price_denominator == 0:
        raise ValueError("price numerator and denominator must be positive")

    r1_times_num = checked_mul(reserve1, price_numerator)
    r0_times_den = checked_mul(reserve0, price_denominator)

    if r1_times_num < r0_times_den:
        amounts = _half_reserve_trade(
            sell_reserve=reserve0,
            buy_reserve_scaled=r1_times_num,
            sell_price_side=price_numerator,
            buy_price_side=price_denominator,
        )
        if amounts is None:
            return None
        sell_amount, buy_amount = amounts
        return RebalanceQuote(
            sells_token0=True,
            sell_amount=sell_amount,
            buy_amount=buy_amount,
            traded_token0=sell_amount,
        )

    amounts = _half_reserve_trade(
        sell_reserve=reserve1,
        buy_reserve_scaled=r0_times_den,
        sell_price_side=price_denominator,
        buy_price_side=price_numerator,
    )
    if amounts is None:
        return None
    sell_amount, buy_amount = amounts
    return RebalanceQuote(
        sells_token0=False,
        sell_amount=sell_amount,
        buy_amount=buy_amount,
        traded_token0=buy_amount,
    )


def received_amount_ok(*, sell_reserve: int, buy_reserve: int, sell_amount: int, buy_amount: int) -> bool:
    """
    Constant-product test for an order the pool places.

    The pool gives `sell_amount` out of `sell_reserve` and takes `buy_amount`
    into `buy_reserve`. Accepts iff
    `(sell_reserve - sell_amount) * buy_amount >= buy_reserve * sell_amount`,
    i.e. the product of reserves cannot decrease. Requires
    `sell_amount <= sell_reserve`.
    """
    remaining = checked_sub(sell_reserve, sell_amount)
    return cross_mul_ge(remaining, buy_amount, buy_reserve, sell_amount)

