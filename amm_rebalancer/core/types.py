"""Value types shared by the generator and the verifier.

Conventions:
- asset0/asset1 are the pool's tokens in `Reserves` order.
- Orders are oriented from the pool's side: the pool sells `sell_token`.
- `ReferencePrice(n, d)` means n units of token0 are worth d units of token1.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from ..state.reserves import Amount, Reserves, TokenId


@unique
class Asset(Enum):
    """Position of a token inside the pool."""
    ASSET_ZERO = 0
    ASSET_ONE = 1

    @property
    def other(self) -> "Asset":
        return Asset.ASSET_ONE if self is Asset.ASSET_ZERO else Asset.ASSET_ZERO


def token_of(reserves: Reserves, asset: Asset) -> TokenId:
    return reserves.token0 if asset is Asset.ASSET_ZERO else reserves.token1


def reserve_of(reserves: Reserves, asset: Asset) -> Amount:
    return reserves.reserve0 if asset is Asset.ASSET_ZERO else reserves.reserve1


def asset_of(reserves: Reserves, token: TokenId) -> Optional[Asset]:
    """Pool position of `token`, or None if the pool does not hold it."""
    if token == reserves.token0:
        return Asset.ASSET_ZERO
    if token == reserves.token1:
        return Asset.ASSET_ONE
    return None


@dataclass(frozen=True)
class Orientation:
    """Pool reserves seen from an order: the side the pool sells from and the side it buys into."""

    sell_reserve: Amount
    buy_reserve: Amount


def orient(reserves: Reserves, sell_asset: Asset) -> Orientation:
    """Map pool orientation (asset0/asset1) to order orientation (sell/buy)."""
    return Orientation(
        sell_reserve=reserve_of(reserves, sell_asset),
        buy_reserve=reserve_of(reserves, sell_asset.other),
    )


@dataclass(frozen=True)
class ReferencePrice:
    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        for name in ("numerator", "denominator"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")

    def as_tuple(self) -> tuple[int, int]:
        return self.numerator, self.denominator


# Orders expire at most this many seconds after they are generated/checked.
MAX_ORDER_DURATION = 5 * 60

NO_TRADE_AT_REFERENCE = "pool price matches reference price"
NO_TRADE_TOO_SMALL = "traded amount too small"


@dataclass(frozen=True)
class NoTrade:
    """Normal "nothing worth trading this period" result of generation."""

    reason: str
