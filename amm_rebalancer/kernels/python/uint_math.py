"""
Checked unsigned integer arithmetic (fixed width, revert-on-overflow).

Python ints never wrap, so this module enforces the bounds explicitly:
every operand and every result must lie in `[0, 2**bits - 1]`, otherwise
`ArithmeticOverflow` is raised. Multiplication followed by division goes
through `mul_div`, which keeps the exact (2x width) intermediate and only
bounds the final quotient, the same contract as a 512-bit `mulDiv`.

All rebalance computations route through these helpers; raw `*`, `-`, `//`
on reserve-sized values are not used outside this file.
"""

from __future__ import annotations

from enum import Enum, unique

from ...core.errors import ArithmeticOverflow, DivisionByZero


UINT_BITS = 256
UINT256_MAX = (1 << UINT_BITS) - 1


@unique
class Rounding(Enum):
    FLOOR = "floor"
    CEIL = "ceil"


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _max_for(bits: int) -> int:
    if not isinstance(bits, int) or isinstance(bits, bool) or bits <= 0:
        raise ValueError("bits must be a positive int")
    return (1 << bits) - 1


def _require_uint(name: str, value: int, bits: int) -> None:
    _require_int(name, value)
    if value < 0:
        raise ArithmeticOverflow(f"{name} underflows uint{bits}: {value}")
    if value > _max_for(bits):
        raise ArithmeticOverflow(f"{name} overflows uint{bits}")


def checked_add(a: int, b: int, *, bits: int = UINT_BITS) -> int:
    _require_uint("a", a, bits)
    _require_uint("b", b, bits)
    out = a + b
    if out > _max_for(bits):
        raise ArithmeticOverflow(f"addition overflows uint{bits}")
    return out


def checked_sub(a: int, b: int, *, bits: int = UINT_BITS) -> int:
    """`a - b`, failing instead of going negative."""
    _require_uint("a", a, bits)
    _require_uint("b", b, bits)
    if b > a:
        raise ArithmeticOverflow(f"subtraction underflows uint{bits}: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int, *, bits: int = UINT_BITS) -> int:
    _require_uint("a", a, bits)
    _require_uint("b", b, bits)
    out = a * b
    if out > _max_for(bits):
        raise ArithmeticOverflow(f"multiplication overflows uint{bits}")
    return out


def ceil_div(a: int, b: int, *, bits: int = UINT_BITS) -> int:
    """
    `ceil(a / b)` for `b > 0`.

    Computed as `floor((a + b - 1) / b)`; the sum is formed in the widened
    domain so `a` close to the maximum does not spuriously overflow.
    """
    _require_uint("a", a, bits)
    _require_uint("b", b, bits)
    if b == 0:
        raise DivisionByZero("ceil_div by zero")
    return (a + b - 1) // b


def cross_mul_ge(a: int, b: int, c: int, d: int, *, bits: int = UINT_BITS) -> bool:
    """
    `a * b >= c * d`, compared at full (2x width) precision.

    Cross-multiplication keeps ratio comparisons division-free.
    """
    for name, v in (("a", a), ("b", b), ("c", c), ("d", d)):
        _require_uint(name, v, bits)
    return a * b >= c * d


def mul_div(a: int, b: int, c: int, rounding: Rounding = Rounding.FLOOR, *, bits: int = UINT_BITS) -> int:
    """
    Exact `a * b / c` rounded per `rounding`.

    The product is kept at full precision (it is bounded by `2**(2*bits)`
    because both factors are in range); only the quotient has to fit `bits`.
    """
    _require_uint("a", a, bits)
    _require_uint("b", b, bits)
    _require_uint("c", c, bits)
    if not isinstance(rounding, Rounding):
        raise TypeError("rounding must be a Rounding")
    if c == 0:
        raise DivisionByZero("mul_div by zero")

    product = a * b
    q, r = divmod(product, c)
    if rounding is Rounding.CEIL and r != 0:
        q += 1
    if q > _max_for(bits):
        raise ArithmeticOverflow(f"mul_div result overflows uint{bits}")
    return q
