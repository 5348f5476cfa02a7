"""Exception types for the rebalancing core.

Every failure surfaces as one of these; the generator's "no trade needed"
outcome is a `NoTrade` value, not an exception.
"""

from __future__ import annotations


class RebalancerError(Exception):
    """Base class for all rebalancer failures."""


class InvalidConfiguration(RebalancerError):
    """Raised when trading parameters or oracle configuration are malformed."""


class ArithmeticOverflow(RebalancerError):
    """Raised when an intermediate value leaves the unsigned integer domain."""


class DivisionByZero(ArithmeticOverflow):
    """Raised on a zero divisor in checked arithmetic."""


class InvalidReferencePrice(RebalancerError):
    """Raised when a reference price has a zero numerator or denominator."""


class OrderNotValid(RebalancerError):
    """Raised when an order is rejected. `reason` is stable and meant for branching."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"order not valid: {reason}")


class OracleError(RebalancerError):
    """Base class for reference price adapter failures."""


class OracleUnavailable(OracleError):
    """Raised when the price source cannot be reached or has no data."""


class InvalidOracleData(OracleError):
    """Raised when the price source answers with unusable data."""
