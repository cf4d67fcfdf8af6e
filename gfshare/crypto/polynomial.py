"""Polynomials over GF(256).

A polynomial is a list of field elements in increasing-degree order, so
``coeffs[0]`` is the constant term.
"""

from __future__ import annotations

from typing import List, Sequence

from gfshare.config import MAX_SHARE_X, MIN_SHARE_X
from gfshare.crypto import gf256
from gfshare.errors import InvalidShareIndex

Poly = List[int]


def check_share_index(x: int) -> None:
    """Raise ``InvalidShareIndex`` unless MIN_SHARE_X <= x <= MAX_SHARE_X."""
    if isinstance(x, bool) or not isinstance(x, int) or not MIN_SHARE_X <= x <= MAX_SHARE_X:
        raise InvalidShareIndex(
            f"share index must be in [{MIN_SHARE_X}, {MAX_SHARE_X}], not {x!r}"
        )


def evaluate(coeffs: Sequence[int], x: int) -> int:
    """Evaluate the polynomial at *x*, keeping a running power of x."""
    check_share_index(x)
    acc = 0
    x_i = 1
    for c in coeffs:
        acc = gf256.add(acc, gf256.mul(c, x_i))
        x_i = gf256.mul(x_i, x)
    return acc


def add(a: Sequence[int], b: Sequence[int]) -> Poly:
    """Sum of two polynomials; the shorter one is padded with zeros."""
    if len(a) < len(b):
        a, b = b, a
    result = list(a)
    for i, c in enumerate(b):
        result[i] = gf256.add(result[i], c)
    return result


def multiply(a: Sequence[int], b: Sequence[int]) -> Poly:
    """Product of two polynomials (convolution under field multiplication).

    ``len(result) == len(a) + len(b) - 1``; an empty operand gives ``[]``.
    """
    if not a or not b:
        return []
    result = [0] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        for j, bj in enumerate(b):
            result[i + j] = gf256.add(result[i + j], gf256.mul(ai, bj))
    return result


def degree(coeffs: Sequence[int]) -> int:
    """Index of the highest non-zero coefficient, -1 for the zero polynomial."""
    for i in range(len(coeffs) - 1, -1, -1):
        if coeffs[i]:
            return i
    return -1
