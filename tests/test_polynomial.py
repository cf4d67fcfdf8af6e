"""Tests for the GF(256) polynomial engine."""

import pytest

from gfshare.crypto import gf256, polynomial
from gfshare.errors import InvalidShareIndex


def test_evaluate_constant():
    assert polynomial.evaluate([42], 7) == 42


def test_evaluate_linear():
    # f(x) = 115 + 7x
    assert polynomial.evaluate([115, 7], 1) == 115 ^ 7
    assert polynomial.evaluate([115, 7], 2) == 115 ^ gf256.mul(7, 2)


def test_evaluate_matches_horner():
    coeffs = [0x12, 0x34, 0x56, 0x78]
    for x in (1, 2, 99, 254):
        expected = 0
        for c in reversed(coeffs):
            expected = gf256.add(gf256.mul(expected, x), c)
        assert polynomial.evaluate(coeffs, x) == expected


def test_evaluate_empty_is_zero():
    assert polynomial.evaluate([], 5) == 0


@pytest.mark.parametrize("x", [0, 255, 256, -1])
def test_evaluate_rejects_bad_index(x):
    with pytest.raises(InvalidShareIndex):
        polynomial.evaluate([1, 2, 3], x)


def test_evaluate_accepts_bounds():
    polynomial.evaluate([1, 2, 3], 1)
    polynomial.evaluate([1, 2, 3], 254)


def test_multiply_known():
    # (1 + 3x + 4x^2) * (4 + 5x) in GF(256)
    assert polynomial.multiply([1, 3, 4], [4, 5]) == [4, 9, 31, 20]


def test_multiply_length():
    assert len(polynomial.multiply([1, 2, 3], [4, 5, 6, 7])) == 6


def test_multiply_by_one():
    assert polynomial.multiply([9, 8, 7], [1]) == [9, 8, 7]


def test_multiply_by_scalar():
    assert polynomial.multiply([9, 8], [3]) == [gf256.mul(9, 3), gf256.mul(8, 3)]


def test_multiply_empty():
    assert polynomial.multiply([], [1, 2]) == []


def test_multiply_evaluates_as_product():
    a, b = [5, 6, 7], [8, 9]
    prod = polynomial.multiply(a, b)
    for x in (1, 3, 200):
        assert polynomial.evaluate(prod, x) == gf256.mul(
            polynomial.evaluate(a, x), polynomial.evaluate(b, x)
        )


def test_add_pads_shorter():
    assert polynomial.add([1, 2], [3, 4, 5]) == [1 ^ 3, 2 ^ 4, 5]
    assert polynomial.add([3, 4, 5], [1, 2]) == [1 ^ 3, 2 ^ 4, 5]


def test_add_empty():
    assert polynomial.add([], [7, 8]) == [7, 8]


def test_add_does_not_mutate():
    a = [1, 2, 3]
    polynomial.add(a, [4])
    assert a == [1, 2, 3]


def test_degree():
    assert polynomial.degree([1, 2, 0, 0]) == 1
    assert polynomial.degree([0, 0]) == -1
    assert polynomial.degree([]) == -1
    assert polynomial.degree([0, 0, 5]) == 2
