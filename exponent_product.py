"""
Rational Exponentiation Product Normalizer

Reduces a product of `base^(p/q)` factors with real bases to its canonical
form. The list of factors is rewritten in passes until a pass leaves it
unchanged:

    1. explode rational bases and nested products / powers
    2. merge factors with the same base (add exponents)
    3. normalize exponents
    4. drop zero exponents
    5. evaluate integer bases, extracting exact roots through factorization
    6. merge integer bases sharing an exponent (multiply bases)
    7. use the absolute base under an even exponent numerator
    8. drop bases equal to 1

Example: the 12th root of 3645 = 3^6 * 5 normalizes to 3^(1/2) * 5^(1/12).
"""
from __future__ import annotations
import logging
from typing import Dict, List, Sequence

from config import DEFAULT_CONFIG, EngineConfig
from expression import (
    Integer,
    MINUS_ONE,
    ONE,
    RationalExponentiation,
    RationalExponentiationProduct,
    RationalExpression,
    RealNumberExpression,
    ZERO,
)
from primes import factorize
from rational import Rational

logger = logging.getLogger(__name__)


def _times(a: RationalExpression, b: RationalExpression) -> RationalExpression:
    return (Rational.of(a) * b).to_expression()


def _explode(component: RationalExponentiation) -> List[RationalExponentiation]:
    base, exponent = component.base, component.exponent
    if isinstance(base, RationalExpression):
        base = Rational.of(base).to_expression()
        if base.denominator == ONE:
            return [RationalExponentiation(base.numerator, exponent)]
        # (a/b)^e = a^e * b^-e
        return [
            RationalExponentiation(base.numerator, exponent),
            RationalExponentiation(base.denominator, exponent.negate),
        ]
    if isinstance(base, RationalExponentiationProduct):
        return [RationalExponentiation(c.base, _times(exponent, c.exponent)) for c in base.components]
    if isinstance(base, RationalExponentiation):
        return [RationalExponentiation(base.base, _times(exponent, base.exponent))]
    return [component]


def _is_annihilating(component: RationalExponentiation) -> bool:
    return component.base.is_zero and Rational.of(component.exponent) > Rational(0)


def simplify_constant_integer_exponentiation(
    base: Integer, exponent: RationalExpression, config: EngineConfig = DEFAULT_CONFIG
) -> List[RationalExponentiation]:
    """
    Evaluate `base^exponent` exactly where possible.

    Returns the factors the power splits into; a power that cannot be
    evaluated within the bit budget is returned unchanged.
    """
    # 0 with a positive exponent is caught before this point, 0^-n stays as is
    if base.is_zero:
        return [RationalExponentiation(base, exponent)]
    if base.value == 1:
        return []
    if exponent == ONE:
        return [RationalExponentiation(base, exponent)]

    numerator = exponent.numerator.value
    denominator = exponent.denominator.value
    inverted = numerator < 0
    numerator = -numerator if inverted else numerator

    if base.value.bit_length() + numerator > config.root_bit_budget:
        logger.debug("Skipping %s^%s: exceeds bit budget of %d", base, exponent, config.root_bit_budget)
        return [RationalExponentiation(base, exponent)]

    def power(num: int, den: int) -> RationalExpression:
        r = Rational(num, den)
        return (-r if inverted else r).to_expression()

    root_content = base.value ** numerator
    if denominator == 1:
        return [RationalExponentiation(Integer(root_content), power(1, 1))]
    # even root of a negative number has no real value, keep the radical
    if denominator % 2 == 0 and root_content < 0:
        return [RationalExponentiation(Integer(root_content), power(1, denominator))]

    exponentiations: List[RationalExponentiation] = []
    magnitude = abs(root_content)
    if magnitude != 1:
        factorization = factorize(magnitude, config.prime_sieve_limit)
        for prime, multiplicity in factorization.prime_factors.items():
            exponentiations.append(RationalExponentiation(Integer(prime), power(multiplicity, denominator)))
        if factorization.has_remainder():
            exponentiations.append(RationalExponentiation(Integer(factorization.remainder), power(1, denominator)))
    # apply sign
    if root_content < 0:
        exponentiations.append(RationalExponentiation(MINUS_ONE, ONE))
    return exponentiations


def _merge_same_base(components: List[RationalExponentiation]) -> List[RationalExponentiation]:
    groups: Dict[RealNumberExpression, List[RationalExponentiation]] = {}
    for component in components:
        groups.setdefault(component.base, []).append(component)
    merged = []
    for base, group in groups.items():
        if len(group) == 1:
            merged.append(group[0])
            continue
        exponent_sum = Rational(0)
        for component in group:
            exponent_sum = exponent_sum + component.exponent
        merged.append(RationalExponentiation(base, exponent_sum.to_expression()))
    return merged


def _merge_same_exponent(components: List[RationalExponentiation]) -> List[RationalExponentiation]:
    groups: Dict[RationalExpression, List[RationalExponentiation]] = {}
    for component in components:
        groups.setdefault(component.exponent, []).append(component)
    merged = []
    for exponent, group in groups.items():
        if len(group) == 1:
            merged.extend(group)
            continue
        base_product = Rational(1)
        non_combinable = []
        for component in group:
            if isinstance(component.base, Integer):
                base_product = base_product * component.base
            else:
                non_combinable.append(component)
        if base_product != 1:
            non_combinable.append(RationalExponentiation(base_product.to_expression(), exponent))
        merged.extend(non_combinable)
    return merged


def normalize_components(
    components: Sequence[RationalExponentiation], config: EngineConfig = DEFAULT_CONFIG
) -> List[RationalExponentiation]:
    old = list(components)
    for _ in range(config.max_normalization_passes):
        new: List[RationalExponentiation] = []
        for component in old:
            new.extend(_explode(component))

        if any(_is_annihilating(c) for c in new):
            return [RationalExponentiation(ZERO, ONE)]

        new = _merge_same_base(new)
        new = [RationalExponentiation(c.base, Rational.of(c.exponent).to_expression()) for c in new]
        new = [c for c in new if not c.exponent.is_zero]

        evaluated: List[RationalExponentiation] = []
        for component in new:
            if isinstance(component.base, Integer):
                evaluated.extend(simplify_constant_integer_exponentiation(component.base, component.exponent, config))
            else:
                evaluated.append(component)
        new = _merge_same_exponent(evaluated)

        new = [RationalExponentiation(c.base.abs, c.exponent) if c.exponent.numerator.even else c for c in new]
        new = [c for c in new if c.base != ONE]

        if new == old:
            return new
        old = new
    logger.warning(
        "Normalization of %d factors did not settle after %d passes",
        len(components),
        config.max_normalization_passes,
    )
    return old


def _collapses_to_rational(components: List[RationalExponentiation]) -> bool:
    for c in components:
        if not isinstance(c.base, Integer):
            return False
        if c.exponent != ONE and c.exponent != MINUS_ONE:
            return False
        if c.exponent == MINUS_ONE and c.base.is_zero:
            return False
    return True


def simplify_rational_exponentiation_product(
    components: Sequence[RationalExponentiation], config: EngineConfig = DEFAULT_CONFIG
) -> RealNumberExpression:
    normalized = normalize_components(components, config)
    # normalization removes every factor equal to 1
    if not normalized:
        return ONE
    # bases left are integers or irrational, never rationals
    if _collapses_to_rational(normalized):
        value = Rational(1)
        for c in normalized:
            value = value * c.base if c.exponent == ONE else value / c.base
        return value.to_expression()
    if len(normalized) == 1:
        if normalized[0].exponent == ONE:
            return normalized[0].base
        return normalized[0]
    return RationalExponentiationProduct(tuple(normalized))
