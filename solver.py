"""
Integer Solver Module

GCD and LCM of positive integer expressions. Callers in the engine only
reach these once both operands are known to be positive integers.
"""
from __future__ import annotations
import math

from expression import Expression, Integer


def _require_positive(value: Integer) -> None:
    if not isinstance(value, Integer) or not value.positive:
        raise ValueError(f"{value} is not a positive integer")


def gcd(a: Integer, b: Integer) -> Expression:
    _require_positive(a)
    _require_positive(b)
    return Integer(math.gcd(a.value, b.value))


def lcm(a: Integer, b: Integer) -> Expression:
    _require_positive(a)
    _require_positive(b)
    return Integer(a.value * b.value // math.gcd(a.value, b.value))
