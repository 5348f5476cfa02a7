"""
Commitment guard: at most one accepted order per trading period.

The guard owns the `CommitmentTable`; the generator and verifier never touch
it. Lifecycle per period:

    begin_period(period, params)   validate params once
    accept(period, order)          first order: compare-and-set EMPTY -> hash
                                   later orders: policy decides
    rollover(period)               external trigger clears the slot

`commit()` lets an authorized settlement host record an order hash ahead of
time; `accept()` then only lets that exact order through.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum, unique
from typing import Dict, Optional, Set

from ..agents.commitment_signer import verify_commitment_signature
from ..state.canonical import canonical_hex_fixed_allow_0x
from ..state.commitments import COMMITMENT_BYTES, EMPTY_COMMITMENT, CommitmentTable
from ..state.orders import Order, order_hash
from .errors import InvalidConfiguration, OrderNotValid
from .oracle import ReferencePriceAdapter
from .params import TradingParams, trading_params_hash, validate_trading_params

logger = logging.getLogger(__name__)

REASON_COMMITMENT_MISMATCH = "commitment mismatch"


@unique
class CommitmentPolicy(Enum):
    # A re-submission of the committed order is accepted again (idempotent).
    MATCH_COMMITMENT = "match_commitment"
    # Once a period is committed, every further acceptance attempt fails.
    SINGLE_ORDER = "single_order"


class CommitmentUnauthorized(InvalidConfiguration):
    """Raised when a pre-commitment lacks a valid committer signature."""


class CommitmentGuard:
    def __init__(
        self,
        table: Optional[CommitmentTable] = None,
        *,
        policy: CommitmentPolicy = CommitmentPolicy.MATCH_COMMITMENT,
        allow_zero_min_traded: bool = False,
        oracle: Optional[ReferencePriceAdapter] = None,
        committer_pubkey: Optional[str] = None,
    ) -> None:
        if not isinstance(policy, CommitmentPolicy):
            raise TypeError("policy must be a CommitmentPolicy")
        self.table = table if table is not None else CommitmentTable()
        self.policy = policy
        self.allow_zero_min_traded = allow_zero_min_traded
        self.oracle = oracle
        self.committer_pubkey = committer_pubkey
        self._params_hashes: Dict[int, str] = {}
        self._accepted: Set[int] = set()
        self._lock = threading.Lock()

    # -- params --------------------------------------------------------------

    def begin_period(self, period: int, params: TradingParams) -> str:
        """Validate `params` for `period`; returns their hash."""
        validate_trading_params(
            params,
            allow_zero_min_traded=self.allow_zero_min_traded,
            oracle=self.oracle,
        )
        h = trading_params_hash(params)
        with self._lock:
            previous = self._params_hashes.get(period)
            if previous is not None and previous != h:
                raise InvalidConfiguration(f"trading params changed within period {period}")
            self._params_hashes[period] = h
        return h

    def params_validated(self, period: int, params: TradingParams) -> bool:
        h = trading_params_hash(params)
        with self._lock:
            return self._params_hashes.get(period) == h

    # -- commitments ---------------------------------------------------------

    def current(self, period: int) -> Optional[str]:
        return self.table.get(period)

    def commit(self, period: int, committed_hash: str, signature: Optional[str] = None) -> None:
        """
        Pre-commit `committed_hash` for `period` (settlement host side).

        Raises CommitmentUnauthorized when a committer key is configured and
        the signature does not verify, OrderNotValid if the period already
        holds a different commitment.
        """
        h = canonical_hex_fixed_allow_0x(committed_hash, nbytes=COMMITMENT_BYTES, name="committed_hash")
        if self.committer_pubkey is not None:
            if signature is None or not verify_commitment_signature(period, h, signature, self.committer_pubkey):
                raise CommitmentUnauthorized(f"commitment for period {period} is not signed by the committer")
        if self.table.compare_and_set(period, EMPTY_COMMITMENT, h):
            logger.info("Period %s pre-committed to %s", period, h)
            return
        if self.table.get(period) != h:
            logger.warning("Period %s already committed; rejecting pre-commitment %s", period, h)
            raise OrderNotValid(REASON_COMMITMENT_MISMATCH)

    def accept(self, period: int, order: Order) -> str:
        """
        Record `order` as the period's single accepted order.

        Returns the order hash. Raises OrderNotValid("commitment mismatch").
        """
        h = order_hash(order)
        with self._lock:
            if self.table.compare_and_set(period, EMPTY_COMMITMENT, h):
                self._accepted.add(period)
                logger.info("Period %s committed to order %s", period, h)
                return h

            committed = self.table.get(period)
            if committed == h:
                # A pre-committed order is consumed by its first acceptance.
                first_use = period not in self._accepted
                self._accepted.add(period)
                if first_use or self.policy is CommitmentPolicy.MATCH_COMMITMENT:
                    return h
        logger.warning("Period %s: order %s rejected (committed %s)", period, h, committed)
        raise OrderNotValid(REASON_COMMITMENT_MISMATCH)

    def rollover(self, period: int) -> None:
        with self._lock:
            self.table.clear(period)
            self._params_hashes.pop(period, None)
            self._accepted.discard(period)
        logger.info("Period %s rolled over", period)
