"""
Order data model.

An `Order` is the order the pool itself places: it gives `sell_amount` of
`sell_token` and asks for `buy_amount` of `buy_token`. Generated orders and
orders submitted for verification share this one structure.

Construction only checks field types, uint256 ranges and the order kind;
economic validity (token identity, positivity, invariant, bounds) is the
verifier's job so that it can answer with a stable rejection reason instead
of a constructor error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..kernels.python.uint_math import UINT256_MAX
from .canonical import bytes_to_hex, hash_canonical, hex_to_bytes_fixed
from .reserves import Amount, TokenId


APP_DATA_BYTES = 32
ORDER_KIND_SELL = "sell"
ORDER_KIND_BUY = "buy"
ORDER_KINDS = (ORDER_KIND_SELL, ORDER_KIND_BUY)
ORDER_HASH_LABEL = "order"


@dataclass(frozen=True)
class Order:
    sell_token: TokenId
    buy_token: TokenId
    sell_amount: Amount
    buy_amount: Amount
    valid_to: int
    app_data: bytes
    fee_amount: Amount = 0
    kind: str = ORDER_KIND_SELL
    partially_fillable: bool = True

    def __post_init__(self) -> None:
        for name in ("sell_token", "buy_token"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v:
                raise ValueError(f"{name} must be a non-empty string")
        for name in ("sell_amount", "buy_amount", "valid_to", "fee_amount"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0 or v > UINT256_MAX:
                raise ValueError(f"{name} out of uint256 range: {v}")
        if not isinstance(self.app_data, (bytes, bytearray)) or len(self.app_data) != APP_DATA_BYTES:
            raise ValueError(f"app_data must be exactly {APP_DATA_BYTES} bytes")
        if not isinstance(self.partially_fillable, bool):
            raise TypeError("partially_fillable must be a bool")
        if self.kind not in ORDER_KINDS:
            raise ValueError(f"kind must be one of {ORDER_KINDS}: {self.kind!r}")


def order_to_dict(order: Order) -> Dict[str, Any]:
    return {
        "sell_token": order.sell_token,
        "buy_token": order.buy_token,
        "sell_amount": int(order.sell_amount),
        "buy_amount": int(order.buy_amount),
        "valid_to": int(order.valid_to),
        "app_data": bytes_to_hex(order.app_data),
        "fee_amount": int(order.fee_amount),
        "kind": order.kind,
        "partially_fillable": bool(order.partially_fillable),
    }


def order_from_dict(obj: Mapping[str, Any]) -> Order:
    if not isinstance(obj, Mapping):
        raise TypeError("order must be a mapping")
    try:
        return Order(
            sell_token=obj["sell_token"],
            buy_token=obj["buy_token"],
            sell_amount=obj["sell_amount"],
            buy_amount=obj["buy_amount"],
            valid_to=obj["valid_to"],
            app_data=hex_to_bytes_fixed(obj["app_data"], nbytes=APP_DATA_BYTES, name="app_data"),
            fee_amount=obj.get("fee_amount", 0),
            kind=obj.get("kind", ORDER_KIND_SELL),
            partially_fillable=obj.get("partially_fillable", True),
        )
    except KeyError as exc:
        raise ValueError(f"missing order field: {exc.args[0]}") from exc


def order_hash(order: Order) -> str:
    """Deterministic `0x`-prefixed order hash (used as the commitment value)."""
    return hash_canonical(ORDER_HASH_LABEL, order_to_dict(order))
