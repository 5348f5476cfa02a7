"""
Host integration layer
"""

from .pool_engine import OrderCheckResult, RebalancingPool

__all__ = [
    "OrderCheckResult",
    "RebalancingPool",
]
