"""
Pool reserve snapshots.

The core never fetches balances itself: the host hands it a `Reserves`
snapshot, usually through a `ReserveReader`. `ReserveBook` is the in-memory
reader used by tests and by the pair-reserves price oracle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Protocol

from ..kernels.python.uint_math import UINT256_MAX


# Type aliases
TokenId = str  # token identity, e.g. a 0x-prefixed address
Amount = int  # non-negative integer in the token's smallest unit


@dataclass(frozen=True)
class Reserves:
    """Atomic snapshot of a two-asset pool: token identities and balances."""

    token0: TokenId
    token1: TokenId
    reserve0: Amount
    reserve1: Amount

    def __post_init__(self) -> None:
        for name in ("token0", "token1"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v:
                raise ValueError(f"{name} must be a non-empty string")
        if self.token0 == self.token1:
            raise ValueError(f"pool tokens must differ: {self.token0}")
        for name in ("reserve0", "reserve1"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0 or v > UINT256_MAX:
                raise ValueError(f"{name} out of uint256 range: {v}")


class ReserveReader(Protocol):
    def get_reserves(self, pool_id: str) -> Reserves:
        """Snapshot the reserves of `pool_id`; raises KeyError for unknown pools."""
        ...


class ReserveBook:
    """
    Mutable in-memory mapping: pool_id -> Reserves.

    Snapshots are immutable, so handing one out never exposes later updates.
    """

    def __init__(self) -> None:
        self._pools: Dict[str, Reserves] = {}

    def set(self, pool_id: str, reserves: Reserves) -> None:
        if not isinstance(pool_id, str) or not pool_id:
            raise ValueError("pool_id must be a non-empty string")
        if not isinstance(reserves, Reserves):
            raise TypeError("reserves must be a Reserves snapshot")
        self._pools[pool_id] = reserves

    def set_balances(self, pool_id: str, reserve0: Amount, reserve1: Amount) -> None:
        """Update balances of a known pool, keeping its token identities."""
        current = self.get_reserves(pool_id)
        self._pools[pool_id] = Reserves(
            token0=current.token0,
            token1=current.token1,
            reserve0=reserve0,
            reserve1=reserve1,
        )

    def get_reserves(self, pool_id: str) -> Reserves:
        try:
            return self._pools[pool_id]
        except KeyError:
            raise KeyError(f"unknown pool: {pool_id}") from None
