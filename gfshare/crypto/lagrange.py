"""Lagrange interpolation over GF(256).

Unlike a reconstruct-at-zero helper, ``interpolate`` returns every
coefficient of the interpolating polynomial.  Two things depend on that:

* the degree-consistency check: with more points than the threshold, a
  genuine degree ``threshold - 1`` polynomial forces all higher
  coefficients to zero, so a non-zero one means a bad share;
* a decoded session can keep issuing and validating shares, because it
  holds the full polynomial rather than just f(0).

With exactly ``threshold`` points there is no redundancy and any set of
values interpolates cleanly.  A tampered share then yields a wrong secret
without an error.
"""

from __future__ import annotations

from typing import List, Sequence

from gfshare.crypto import gf256, polynomial
from gfshare.errors import InconsistentShares

Poly = List[int]


def interpolate(xs: Sequence[int], fxs: Sequence[int]) -> Poly:
    """Coefficients of the minimal-degree polynomial through (xs[i], fxs[i]).

    The result has ``len(xs)`` coefficients.  For each point i the basis
    polynomial is the product over j != i of

        (x - x_j) / (x_i - x_j)  ==  [x_j / (x_i - x_j), 1 / (x_i - x_j)]

    (no sign handling: -x_j == x_j in characteristic 2), scaled by fxs[i].
    """
    if not xs:
        raise ValueError("Need at least one point")
    if len(xs) != len(fxs):
        raise ValueError(f"Got {len(xs)} x values but {len(fxs)} f(x) values")
    if len(set(xs)) != len(xs):
        raise ValueError("x values must be distinct")

    result: Poly = []
    for i, (xi, yi) in enumerate(zip(xs, fxs)):
        basis: Poly = [1]
        for j, xj in enumerate(xs):
            if i == j:
                continue
            denom = gf256.sub(xi, xj)
            factor = [gf256.div(xj, denom), gf256.div(1, denom)]
            basis = polynomial.multiply(basis, factor)
        result = polynomial.add(result, polynomial.multiply(basis, [yi]))
    return result


def check_degree(coeffs: Sequence[int], threshold: int) -> None:
    """Raise ``InconsistentShares`` if any coefficient at index >= threshold
    is non-zero.  A no-op when there are no redundant coefficients."""
    deg = polynomial.degree(coeffs)
    if deg >= threshold:
        raise InconsistentShares(
            f"Shares do not match: interpolated polynomial has degree {deg} "
            f"(threshold={threshold}, points={len(coeffs)}). Cannot decode."
        )


def interpolate_checked(xs: Sequence[int], fxs: Sequence[int], threshold: int) -> Poly:
    """``interpolate`` followed by ``check_degree``."""
    coeffs = interpolate(xs, fxs)
    check_degree(coeffs, threshold)
    return coeffs
