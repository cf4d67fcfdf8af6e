"""Galois-field arithmetic GF(2^8).

All values are Python ints in [0, 255].  Addition is XOR; multiplication
is carry-less multiplication reduced by ``FIELD_POLYNOMIAL``, done through
log/antilog tables built once at import.
"""

from __future__ import annotations

from typing import Tuple

from gfshare.config import FIELD_GENERATOR, FIELD_ORDER, FIELD_POLYNOMIAL
from gfshare.errors import DivisionByZero

# Size of the multiplicative group.
_GROUP_ORDER = FIELD_ORDER - 1


def _mul_no_tables(a: int, b: int) -> int:
    """Shift-and-add multiplication (table construction and cross-checks)."""
    product = 0
    while b:
        if b & 1:
            product ^= a
        a <<= 1
        if a & FIELD_ORDER:
            a ^= FIELD_POLYNOMIAL
        b >>= 1
    return product


def _build_tables() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    exp = [0] * (2 * _GROUP_ORDER)
    log = [0] * FIELD_ORDER
    x = 1
    for i in range(_GROUP_ORDER):
        exp[i] = x
        log[x] = i
        x = _mul_no_tables(x, FIELD_GENERATOR)
    # Doubled so that LOG[a] + LOG[b] never needs a modulo.
    for i in range(_GROUP_ORDER, 2 * _GROUP_ORDER):
        exp[i] = exp[i - _GROUP_ORDER]
    return tuple(exp), tuple(log)


EXP, LOG = _build_tables()


def add(a: int, b: int) -> int:
    """Field addition."""
    return a ^ b


def sub(a: int, b: int) -> int:
    """Field subtraction (identical to addition in characteristic 2)."""
    return a ^ b


def mul(a: int, b: int) -> int:
    """Field multiplication."""
    if a == 0 or b == 0:
        return 0
    return EXP[LOG[a] + LOG[b]]


def inv(a: int) -> int:
    """Multiplicative inverse: a^-1 = g^(255 - log a)."""
    if a == 0:
        raise DivisionByZero("Cannot invert zero in GF(256)")
    return EXP[_GROUP_ORDER - LOG[a]]


def div(a: int, b: int) -> int:
    """Field division a / b."""
    return mul(a, inv(b))
