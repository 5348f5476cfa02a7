"""
Rebalancing pool adapter for hosts.

This is an imperative-shell wrapper around the functional core:
- Snapshots reserves through the host's `ReserveReader`.
- Queries the reference price adapter once per generation.
- Runs the generator / verifier on that snapshot.
- Routes accepted orders through the `CommitmentGuard`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..core.commitment import CommitmentGuard
from ..core.errors import InvalidConfiguration, OrderNotValid
from ..core.generator import generate
from ..core.oracle import ReferencePriceAdapter
from ..core.params import TradingParams
from ..core.types import NoTrade
from ..core.verifier import verify
from ..state.orders import Order, order_hash
from ..state.reserves import ReserveReader, Reserves

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderCheckResult:
    ok: bool
    order_hash: Optional[str] = None
    reason: Optional[str] = None


class RebalancingPool:
    """One constant-product pair, its price source and its commitment guard."""

    def __init__(
        self,
        pool_id: str,
        *,
        reader: ReserveReader,
        oracle: ReferencePriceAdapter,
        guard: Optional[CommitmentGuard] = None,
    ) -> None:
        if not isinstance(pool_id, str) or not pool_id:
            raise InvalidConfiguration("pool_id must be a non-empty string")
        self.pool_id = pool_id
        self.reader = reader
        self.oracle = oracle
        self.guard = guard if guard is not None else CommitmentGuard(oracle=oracle)

    def reserves(self) -> Reserves:
        try:
            return self.reader.get_reserves(self.pool_id)
        except KeyError as exc:
            raise InvalidConfiguration(f"unknown pool: {self.pool_id}") from exc

    def get_tradeable_order(self, params: TradingParams, *, now: int) -> Union[Order, NoTrade]:
        """
        The order the pool would place right now, or `NoTrade`.

        Oracle failures (`OracleUnavailable`, `InvalidOracleData`) propagate
        unchanged; retrying is the caller's decision.
        """
        reserves = self.reserves()
        price = self.oracle.get_price(params.oracle_config)
        result = generate(reserves, price, params, now=now)
        if isinstance(result, NoTrade):
            logger.debug("Pool %s: no trade (%s)", self.pool_id, result.reason)
        else:
            logger.info(
                "Pool %s: tradeable order sells %s %s for %s %s",
                self.pool_id,
                result.sell_amount,
                result.sell_token,
                result.buy_amount,
                result.buy_token,
            )
        return result

    def verify(self, params: TradingParams, order: Order, *, now: Optional[int] = None) -> None:
        verify(self.reserves(), params, order, now=now)

    def validate_order(self, params: TradingParams, order: Order, *, period: int, now: Optional[int] = None) -> str:
        """
        Full acceptance path: params validated for the period, order verified,
        then committed. Returns the committed order hash.

        Verification has no side effects, so a rejected order never consumes
        the period's commitment.
        """
        if not self.guard.params_validated(period, params):
            self.guard.begin_period(period, params)
        try:
            self.verify(params, order, now=now)
        except OrderNotValid as exc:
            logger.warning("Pool %s period %s: order rejected: %s", self.pool_id, period, exc.reason)
            raise
        return self.guard.accept(period, order)

    def check_order(
        self, params: TradingParams, order: Order, *, period: int, now: Optional[int] = None
    ) -> OrderCheckResult:
        """`validate_order` as a result value; only rejections are folded in."""
        try:
            h = self.validate_order(params, order, period=period, now=now)
        except OrderNotValid as exc:
            return OrderCheckResult(ok=False, order_hash=order_hash(order), reason=exc.reason)
        return OrderCheckResult(ok=True, order_hash=h)

    def rollover(self, period: int) -> None:
        self.guard.rollover(period)
