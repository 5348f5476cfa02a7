"""
Order generator.

Derives the pool's rebalancing order for one trading period:

    k = reserve0 * reserve1
    direction: pool sells token0 iff reserve1 * n < reserve0 * d
    amounts:   see `kernels/python/rebalance_v1.py`

Rounding is biased toward the pool on both legs (sell rounds down, buy
rounds up), which is what makes every generated order pass `verify`.
"""

from __future__ import annotations

import logging
from typing import Union

from ..kernels.python.rebalance_v1 import compute_rebalance
from ..state.orders import Order
from ..state.reserves import Reserves
from .errors import InvalidReferencePrice
from .params import TradingParams
from .types import (
    MAX_ORDER_DURATION,
    NO_TRADE_AT_REFERENCE,
    NO_TRADE_TOO_SMALL,
    Asset,
    NoTrade,
    ReferencePrice,
    token_of,
)

logger = logging.getLogger(__name__)

VALIDITY_BUCKET_SECONDS = MAX_ORDER_DURATION


def valid_to_bucket(now: int, bucket_seconds: int = VALIDITY_BUCKET_SECONDS) -> int:
    """
    End of the validity bucket containing `now`.

    Polling several times within one bucket yields the same `valid_to`, hence
    the same order hash. The result is never more than `bucket_seconds` past `now`.
    """
    if not isinstance(now, int) or isinstance(now, bool) or now < 0:
        raise ValueError(f"now must be a non-negative int: {now!r}")
    if not isinstance(bucket_seconds, int) or isinstance(bucket_seconds, bool) or bucket_seconds <= 0:
        raise ValueError("bucket_seconds must be a positive int")
    return (now // bucket_seconds + 1) * bucket_seconds


def generate(
    reserves: Reserves,
    reference_price: ReferencePrice,
    params: TradingParams,
    *,
    now: int,
) -> Union[Order, NoTrade]:
    """
    Compute the order that moves the pool toward `reference_price`.

    Returns `NoTrade` when the pool already matches the reference price or the
    token0 leg would fall below `params.min_traded_token0`.

    Raises:
        InvalidReferencePrice: either side of the ratio is zero.
        ArithmeticOverflow: an intermediate exceeds uint256.
    """
    if reference_price.numerator == 0 or reference_price.denominator == 0:
        raise InvalidReferencePrice(
            f"reference price must be strictly positive: {reference_price.numerator}:{reference_price.denominator}"
        )

    quote = compute_rebalance(
        reserve0=reserves.reserve0,
        reserve1=reserves.reserve1,
        price_numerator=reference_price.numerator,
        price_denominator=reference_price.denominator,
    )
    if quote is None:
        return NoTrade(reason=NO_TRADE_AT_REFERENCE)
    if quote.traded_token0 < params.min_traded_token0:
        logger.debug(
            "Rebalance below floor: traded_token0=%s < min_traded_token0=%s",
            quote.traded_token0,
            params.min_traded_token0,
        )
        return NoTrade(reason=NO_TRADE_TOO_SMALL)

    sell_asset = Asset.ASSET_ZERO if quote.sells_token0 else Asset.ASSET_ONE
    return Order(
        sell_token=token_of(reserves, sell_asset),
        buy_token=token_of(reserves, sell_asset.other),
        sell_amount=quote.sell_amount,
        buy_amount=quote.buy_amount,
        valid_to=valid_to_bucket(now),
        app_data=params.app_data,
    )
