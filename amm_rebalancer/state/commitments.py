"""
Commitment table for replay protection.

We track, per trading period, the hash of the single order accepted in that
period. Policy (match vs. reject-outright) is defined by the guard in
`core/commitment.py`; this table only stores values and provides the one
atomic primitive the guard needs: compare-and-set.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .canonical import canonical_hex_fixed_allow_0x


EMPTY_COMMITMENT: Optional[str] = None
COMMITMENT_BYTES = 32


def _period_key(period: int) -> int:
    if not isinstance(period, int) or isinstance(period, bool) or period < 0:
        raise TypeError("period must be a non-negative int")
    return int(period)


@dataclass
class CommitmentTable:
    """
    Mutable mapping: period -> committed order hash.

    Every mutation happens under `_lock`, so concurrent verifiers racing on the
    same period see exactly one successful `compare_and_set`.
    """

    _committed: Dict[int, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def get(self, period: int) -> Optional[str]:
        key = _period_key(period)
        with self._lock:
            return self._committed.get(key, EMPTY_COMMITMENT)

    def compare_and_set(self, period: int, expected: Optional[str], new: str) -> bool:
        """Store `new` iff the current value equals `expected`; report success."""
        key = _period_key(period)
        value = canonical_hex_fixed_allow_0x(new, nbytes=COMMITMENT_BYTES, name="commitment")
        if expected is not EMPTY_COMMITMENT:
            expected = canonical_hex_fixed_allow_0x(expected, nbytes=COMMITMENT_BYTES, name="expected")
        with self._lock:
            current = self._committed.get(key, EMPTY_COMMITMENT)
            if current != expected:
                return False
            self._committed[key] = value
            return True

    def clear(self, period: int) -> Optional[str]:
        """Drop the commitment for `period`; returns the previous value."""
        key = _period_key(period)
        with self._lock:
            return self._committed.pop(key, EMPTY_COMMITMENT)

    def get_all(self) -> Mapping[int, str]:
        # Return a shallow copy to avoid accidental mutation during iteration.
        with self._lock:
            return dict(self._committed)
