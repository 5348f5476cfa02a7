"""
amm_rebalancer: single-trade rebalancing for two-asset constant-product pools.

Generates the order that moves a pool toward a reference price and verifies
arbitrary candidate orders against the pool invariant, with integer-only,
pool-favouring rounding.
"""

from .core import (
    CommitmentGuard,
    CommitmentPolicy,
    NoTrade,
    OrderNotValid,
    ReferencePrice,
    TradingParams,
    generate,
    verify,
)
from .integration import RebalancingPool
from .state import Order, Reserves

__all__ = [
    "CommitmentGuard",
    "CommitmentPolicy",
    "NoTrade",
    "OrderNotValid",
    "ReferencePrice",
    "TradingParams",
    "generate",
    "verify",
    "RebalancingPool",
    "Order",
    "Reserves",
]
