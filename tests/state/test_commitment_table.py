"""Tests for amm_rebalancer/state/commitments.py — compare-and-set commitment table."""

import threading

import pytest

from amm_rebalancer.state.commitments import EMPTY_COMMITMENT, CommitmentTable

H1 = "0x" + "01" * 32
H2 = "0x" + "02" * 32


def test_empty_by_default() -> None:
    table = CommitmentTable()
    assert table.get(0) is EMPTY_COMMITMENT
    assert table.get_all() == {}


def test_compare_and_set_from_empty() -> None:
    table = CommitmentTable()
    assert table.compare_and_set(1, EMPTY_COMMITMENT, H1) is True
    assert table.get(1) == H1
    assert table.compare_and_set(1, EMPTY_COMMITMENT, H2) is False
    assert table.get(1) == H1


def test_compare_and_set_with_expected_value() -> None:
    table = CommitmentTable()
    table.compare_and_set(1, EMPTY_COMMITMENT, H1)
    assert table.compare_and_set(1, H2, H2) is False
    assert table.compare_and_set(1, H1, H2) is True
    assert table.get(1) == H2


def test_values_are_canonicalized() -> None:
    table = CommitmentTable()
    table.compare_and_set(1, EMPTY_COMMITMENT, "AB" * 32)
    assert table.get(1) == "0x" + "ab" * 32
    assert table.compare_and_set(1, "0x" + "AB" * 32, H1) is True


def test_clear_returns_previous() -> None:
    table = CommitmentTable()
    table.compare_and_set(3, EMPTY_COMMITMENT, H1)
    assert table.clear(3) == H1
    assert table.clear(3) is EMPTY_COMMITMENT
    assert table.compare_and_set(3, EMPTY_COMMITMENT, H2) is True


def test_get_all_is_a_copy() -> None:
    table = CommitmentTable()
    table.compare_and_set(1, EMPTY_COMMITMENT, H1)
    snapshot = table.get_all()
    snapshot[2] = H2
    assert table.get(2) is EMPTY_COMMITMENT


@pytest.mark.parametrize("period", [-1, True, "1", 1.0])
def test_rejects_bad_period(period) -> None:
    with pytest.raises(TypeError):
        CommitmentTable().get(period)


@pytest.mark.parametrize("value", ["0x1234", "0x" + "zz" * 32, 1234])
def test_rejects_bad_hash(value) -> None:
    with pytest.raises((TypeError, ValueError)):
        CommitmentTable().compare_and_set(1, EMPTY_COMMITMENT, value)


def test_concurrent_compare_and_set() -> None:
    table = CommitmentTable()
    n_threads = 32
    barrier = threading.Barrier(n_threads)
    results = [False] * n_threads

    def worker(i: int) -> None:
        barrier.wait()
        results[i] = table.compare_and_set(9, EMPTY_COMMITMENT, "0x" + f"{i:064x}")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(results) == 1
    winner = results.index(True)
    assert table.get(9) == "0x" + f"{winner:064x}"
