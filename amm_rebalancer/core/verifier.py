"""
Order verifier.

Checks an arbitrary candidate order against the pool snapshot and the
trading params, in a fixed order, failing on the first violated check with
`OrderNotValid(reason)`. The reason strings below are part of the public
contract; callers and tests branch on them.

The invariant check accepts exactly the orders with
`buy_amount >= ceil(buy_reserve * sell_amount / (sell_reserve - sell_amount))`,
so the ceiling-rounded bound itself passes and one unit less is rejected.
"""

from __future__ import annotations

from typing import Optional

from ..kernels.python.rebalance_v1 import received_amount_ok
from ..state.orders import ORDER_KIND_SELL, Order
from ..state.reserves import Reserves
from .errors import OrderNotValid
from .params import TradingParams
from .types import MAX_ORDER_DURATION, Asset, asset_of, orient

REASON_INVALID_TOKENS = "invalid tokens"
REASON_ZERO_AMOUNT = "zero amount"
REASON_RECEIVED_TOO_LOW = "received amount too low"
REASON_INSUFFICIENT_RESERVES = "insufficient reserves"
REASON_TRADE_TOO_SMALL = "trade too small"
REASON_APP_DATA_MISMATCH = "app data mismatch"
REASON_VALIDITY_TOO_LONG = "validity too far in the future"
REASON_NONZERO_FEE = "fee amount must be zero"
REASON_UNSUPPORTED_KIND = "unsupported order kind"


def verify(reserves: Reserves, params: TradingParams, order: Order, *, now: Optional[int] = None) -> None:
    """
    Raise `OrderNotValid` unless `order` is acceptable for this pool.

    `now`, when given, also bounds `order.valid_to` to `now + MAX_ORDER_DURATION`.
    """
    sell_asset = asset_of(reserves, order.sell_token)
    buy_asset = asset_of(reserves, order.buy_token)
    if sell_asset is None or buy_asset is None or sell_asset is buy_asset:
        raise OrderNotValid(REASON_INVALID_TOKENS)

    if order.sell_amount == 0 or order.buy_amount == 0:
        raise OrderNotValid(REASON_ZERO_AMOUNT)

    o = orient(reserves, sell_asset)
    # An order selling more than the pool holds has no post-trade state to test;
    # the reserve check below rejects it.
    if order.sell_amount <= o.sell_reserve:
        if not received_amount_ok(
            sell_reserve=o.sell_reserve,
            buy_reserve=o.buy_reserve,
            sell_amount=order.sell_amount,
            buy_amount=order.buy_amount,
        ):
            raise OrderNotValid(REASON_RECEIVED_TOO_LOW)

    if order.sell_amount > o.sell_reserve:
        raise OrderNotValid(REASON_INSUFFICIENT_RESERVES)

    traded_token0 = order.sell_amount if sell_asset is Asset.ASSET_ZERO else order.buy_amount
    if traded_token0 < params.min_traded_token0:
        raise OrderNotValid(REASON_TRADE_TOO_SMALL)

    if order.app_data != params.app_data:
        raise OrderNotValid(REASON_APP_DATA_MISMATCH)

    if now is not None and order.valid_to > now + MAX_ORDER_DURATION:
        raise OrderNotValid(REASON_VALIDITY_TOO_LONG)

    if order.fee_amount != 0:
        raise OrderNotValid(REASON_NONZERO_FEE)

    if order.kind != ORDER_KIND_SELL:
        raise OrderNotValid(REASON_UNSUPPORTED_KIND)


def is_valid(reserves: Reserves, params: TradingParams, order: Order, *, now: Optional[int] = None) -> bool:
    """Boolean form of `verify` for callers that prefer not to catch."""
    try:
        verify(reserves, params, order, now=now)
    except OrderNotValid:
        return False
    return True
