"""Tests for amm_rebalancer/state/orders.py — order model + deterministic hashing."""

from dataclasses import replace

import pytest

from amm_rebalancer.kernels.python.uint_math import UINT256_MAX
from amm_rebalancer.state.orders import ORDER_KIND_BUY, Order, order_from_dict, order_hash, order_to_dict

TOKEN0 = "0x" + "11" * 20
TOKEN1 = "0x" + "22" * 20


def _order(**kw) -> Order:
    base = dict(
        sell_token=TOKEN0,
        buy_token=TOKEN1,
        sell_amount=100,
        buy_amount=10,
        valid_to=300,
        app_data=b"\x07" * 32,
    )
    base.update(kw)
    return Order(**base)


class TestOrder:
    def test_defaults(self):
        o = _order()
        assert o.fee_amount == 0
        assert o.kind == "sell"
        assert o.partially_fillable is True

    def test_zero_amounts_are_constructible(self):
        # Zero amounts are a verification failure, not a construction error.
        assert _order(sell_amount=0, buy_amount=0).sell_amount == 0

    @pytest.mark.parametrize("field", ["sell_amount", "buy_amount", "valid_to", "fee_amount"])
    def test_negative_amount(self, field):
        with pytest.raises(ValueError):
            _order(**{field: -1})

    def test_bool_amount(self):
        with pytest.raises(TypeError):
            _order(sell_amount=True)

    def test_app_data_length(self):
        with pytest.raises(ValueError):
            _order(app_data=b"\x07" * 33)

    def test_empty_token(self):
        with pytest.raises(ValueError):
            _order(sell_token="")

    def test_amount_above_uint256(self):
        with pytest.raises(ValueError):
            _order(buy_amount=UINT256_MAX + 1)
        assert _order(buy_amount=UINT256_MAX).buy_amount == UINT256_MAX

    def test_kind(self):
        assert _order(kind=ORDER_KIND_BUY).kind == "buy"
        with pytest.raises(ValueError):
            _order(kind="garbage")


class TestDict:
    def test_to_dict(self):
        d = order_to_dict(_order())
        assert d["app_data"] == "0x" + "07" * 32
        assert d["sell_amount"] == 100
        assert d["partially_fillable"] is True

    def test_from_dict(self):
        assert order_from_dict(order_to_dict(_order())) == _order()

    def test_from_dict_optional_fields(self):
        d = order_to_dict(_order())
        for key in ("fee_amount", "kind", "partially_fillable"):
            del d[key]
        assert order_from_dict(d) == _order()

    def test_missing_field(self):
        d = order_to_dict(_order())
        del d["valid_to"]
        with pytest.raises(ValueError, match="valid_to"):
            order_from_dict(d)


class TestOrderHash:
    def test_format(self):
        h = order_hash(_order())
        assert h.startswith("0x")
        assert len(h) == 66

    def test_deterministic(self):
        assert order_hash(_order()) == order_hash(_order())

    def test_bytearray_app_data_hashes_like_bytes(self):
        assert order_hash(_order(app_data=bytearray(b"\x07" * 32))) == order_hash(_order())

    @pytest.mark.parametrize(
        "change",
        [
            {"sell_amount": 101},
            {"buy_amount": 11},
            {"valid_to": 600},
            {"app_data": b"\x00" * 32},
            {"fee_amount": 1},
            {"partially_fillable": False},
            {"sell_token": TOKEN1, "buy_token": TOKEN0},
        ],
    )
    def test_every_field_is_bound(self, change):
        assert order_hash(replace(_order(), **change)) != order_hash(_order())
