"""
Construction helpers for unnormalized expression trees.

The helpers only build nodes; nothing is simplified here. Pass the result to
`engine.simplify` (or `engine.expand`) to obtain the normal form.

    from expressions import add, int_, rational
    from engine import simplify

    simplify(add(rational(1, 6), rational(3, 4)))  # 11 / 12
"""
from __future__ import annotations
from typing import Iterable

from expression import (
    AbsoluteValue,
    Addition,
    DotProduct,
    Exponentiation,
    Expression,
    GcdExpr,
    Integer,
    LcmExpr,
    Matrix,
    MINUS_ONE,
    Multiplication,
    ONE,
    SimpleRational,
    Vector,
    ZERO,
)

zero = ZERO
one = ONE
minus_one = MINUS_ONE


def add(*components: Expression) -> Expression:
    return Addition(components)


def multiply(*components: Expression) -> Expression:
    return Multiplication(components)


def subtract(minuend: Expression, subtrahend: Expression) -> Expression:
    return add(minuend, negate(subtrahend))


def divide(dividend: Expression, divisor: Expression) -> Expression:
    return multiply(dividend, reciprocal(divisor))


def negate(a: Expression) -> Expression:
    return multiply(MINUS_ONE, a)


def reciprocal(a: Expression) -> Expression:
    return Exponentiation(a, MINUS_ONE)


def pow_(base: Expression, exponent: Expression) -> Expression:
    return Exponentiation(base, exponent)


def vector(rows: Iterable[Expression]) -> Vector:
    return Vector(tuple(rows))


def matrix(columns: Iterable[Vector]) -> Matrix:
    return Matrix(tuple(columns))


def int_(value: int) -> Integer:
    return Integer(value)


def rational(numerator: int, denominator: int) -> SimpleRational:
    """Unnormalized rational `numerator / denominator`; the engine reduces it."""
    if denominator == 0:
        raise ValueError("Denominator must not be zero")
    return SimpleRational(Integer(numerator), Integer(denominator))


def abs_(a: Expression) -> Expression:
    return AbsoluteValue(a)


def gcd(a: Expression, b: Expression) -> Expression:
    return GcdExpr(a, b)


def lcm(a: Expression, b: Expression) -> Expression:
    return LcmExpr(a, b)


def dot_product(a: Expression, b: Expression) -> Expression:
    return DotProduct(a, b)
