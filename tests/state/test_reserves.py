"""Tests for amm_rebalancer/state/reserves.py — snapshots and the in-memory book."""

import pytest

from amm_rebalancer.kernels.python.uint_math import UINT256_MAX
from amm_rebalancer.state.reserves import ReserveBook, Reserves

TOKEN0 = "0x" + "11" * 20
TOKEN1 = "0x" + "22" * 20


def test_reserves_validation() -> None:
    with pytest.raises(ValueError):
        Reserves(token0=TOKEN0, token1=TOKEN0, reserve0=1, reserve1=1)
    with pytest.raises(ValueError):
        Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=-1, reserve1=1)
    with pytest.raises(TypeError):
        Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=1, reserve1=False)
    with pytest.raises(ValueError):
        Reserves(token0="", token1=TOKEN1, reserve0=1, reserve1=1)
    with pytest.raises(ValueError):
        Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=UINT256_MAX + 1, reserve1=1)
    assert Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=UINT256_MAX, reserve1=1).reserve0 == UINT256_MAX


def test_book_get_and_update() -> None:
    book = ReserveBook()
    book.set("pool", Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=10, reserve1=20))
    snapshot = book.get_reserves("pool")

    book.set_balances("pool", 11, 19)
    assert book.get_reserves("pool") == Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=11, reserve1=19)
    # Earlier snapshots are unaffected.
    assert snapshot.reserve0 == 10


def test_book_unknown_pool() -> None:
    book = ReserveBook()
    with pytest.raises(KeyError):
        book.get_reserves("missing")
    with pytest.raises(KeyError):
        book.set_balances("missing", 1, 1)


def test_book_rejects_bad_input() -> None:
    book = ReserveBook()
    with pytest.raises(ValueError):
        book.set("", Reserves(token0=TOKEN0, token1=TOKEN1, reserve0=1, reserve1=1))
    with pytest.raises(TypeError):
        book.set("pool", (TOKEN0, TOKEN1, 1, 1))
