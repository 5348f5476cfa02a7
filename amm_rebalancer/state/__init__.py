"""
State snapshots and tables for the rebalancer
"""

from .commitments import EMPTY_COMMITMENT, CommitmentTable
from .orders import Order, order_from_dict, order_hash, order_to_dict
from .reserves import ReserveBook, ReserveReader, Reserves

__all__ = [
    "EMPTY_COMMITMENT",
    "CommitmentTable",
    "Order",
    "order_from_dict",
    "order_hash",
    "order_to_dict",
    "ReserveBook",
    "ReserveReader",
    "Reserves",
]
