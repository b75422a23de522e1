"""
Simplification Engines

Two engines share the rewrite rules below:

    EvaluatingRealSimplificationEngine
        folds constants, merges like terms and normalizes powers but leaves
        products of sums alone.
    DistributiveSumSimplificationEngine
        additionally multiplies sums out, e.g. (x - 1)(x + 1) => x^2 - 1.

Both rewrite the tree bottom-up: every child is simplified before its parent
and each node kind has one local rule. Nodes without a rule are returned
unchanged, so `simplify` never fails on a well-formed tree.
"""
from __future__ import annotations
import logging
from typing import Sequence

from combiners import Adder, DistributiveMultiplier, Multiplier
from config import DEFAULT_CONFIG, EngineConfig
from exponent_product import simplify_rational_exponentiation_product
from expression import (
    AbsoluteValue,
    Addition,
    DotProduct,
    Exponentiation,
    Expression,
    GcdExpr,
    Integer,
    LcmExpr,
    MINUS_ONE,
    Multiplication,
    ONE,
    RationalExponentiation,
    RationalExponentiationProduct,
    RationalExpression,
    RealNumberExpression,
    Vector,
    visit,
)
from rational import Rational
import solver

logger = logging.getLogger(__name__)


class RealSimplificationEngine:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def simplify(self, expression: Expression) -> Expression:
        return visit(expression, self._visit_single_expression)

    def __call__(self, expression: Expression) -> Expression:
        return self.simplify(expression)

    def _visit_single_expression(self, expression: Expression) -> Expression:
        simplified = self._simplify_node(expression)
        if simplified is not expression and logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s -> %s", expression, simplified)
        return simplified

    def _simplify_node(self, expression: Expression) -> Expression:
        if isinstance(expression, (Exponentiation, RationalExponentiation)):
            return self.simplify_exponentiation(expression)
        if isinstance(expression, Addition):
            return self.simplify_addition(expression.components)
        if isinstance(expression, (Multiplication, RationalExponentiationProduct)):
            return self.simplify_multiplication(expression.components)
        if isinstance(expression, GcdExpr):
            return self.simplify_gcd(expression)
        if isinstance(expression, LcmExpr):
            return self.simplify_lcm(expression)
        if isinstance(expression, DotProduct):
            return self.simplify_dot_product(expression)
        if isinstance(expression, AbsoluteValue):
            return self.simplify_absolute_value(expression)
        if isinstance(expression, Integer):
            return expression
        if isinstance(expression, RationalExpression):
            return self.simplify_rational(expression)
        return expression

    # -----------------
    # Single node rules
    # -----------------
    def simplify_rational(self, expression: RationalExpression) -> Expression:
        return Rational.of(expression).normalize().to_expression()

    def simplify_dot_product(self, expression: DotProduct) -> Expression:
        left, right = expression.left, expression.right
        if (
            isinstance(left, Vector)
            and isinstance(right, Vector)
            and left.is_compatible_with(right)
            and left.dimension > 0
        ):
            return self.simplify_addition(
                [self.simplify_multiplication([lhs, right[i]]) for i, lhs in enumerate(left.rows)]
            )
        return expression

    def _positive_integers(self, left: Expression, right: Expression) -> bool:
        return isinstance(left, Integer) and left.positive and isinstance(right, Integer) and right.positive

    def simplify_gcd(self, expression: GcdExpr) -> Expression:
        if self._positive_integers(expression.left, expression.right):
            return solver.gcd(expression.left, expression.right)
        return expression

    def simplify_lcm(self, expression: LcmExpr) -> Expression:
        if self._positive_integers(expression.left, expression.right):
            return solver.lcm(expression.left, expression.right)
        return expression

    def simplify_absolute_value(self, expression: AbsoluteValue) -> Expression:
        if isinstance(expression.child, RealNumberExpression):
            return self.simplify_multiplication([expression.child.abs])
        return expression

    def simplify_exponentiation(self, expression: Expression) -> Expression:
        base = expression.base
        exponent = expression.exponent
        # (a/b)^-1 = b/a
        if exponent == MINUS_ONE and isinstance(base, RationalExpression) and not base.is_zero:
            return base.reciprocal
        # a^1 = a
        if exponent == ONE:
            return base
        if isinstance(base, RealNumberExpression) and isinstance(exponent, RationalExpression):
            return self.simplify_rational_exponentiation_product([RationalExponentiation(base, exponent)])
        return expression

    def simplify_int_exponentiation(self, base: Expression, exponent: int) -> Expression:
        if exponent == 1:
            return base
        if exponent == 0:
            return ONE
        if isinstance(base, (Exponentiation, RationalExponentiation)) and isinstance(base.exponent, RationalExpression):
            combined = (Rational.of(base.exponent) * exponent).to_expression()
            return self.simplify_exponentiation(Exponentiation(base.base, combined))
        return Exponentiation(base, Integer(exponent))

    # -----------------
    # Combiners
    # -----------------
    def make_adder(self) -> Adder:
        return Adder(self)

    def make_multiplier(self) -> Multiplier:
        return Multiplier(self)

    def simplify_addition(self, expressions: Sequence[Expression]) -> Expression:
        adder = self.make_adder()
        adder.push_all(expressions)
        return adder.to_expression()

    def simplify_multiplication(self, expressions: Sequence[Expression]) -> Expression:
        multiplier = self.make_multiplier()
        multiplier.push_all(expressions)
        return multiplier.to_expression()

    def simplify_rational_exponentiation_product(
        self, components: Sequence[RationalExponentiation]
    ) -> RealNumberExpression:
        return simplify_rational_exponentiation_product(components, self.config)


class EvaluatingRealSimplificationEngine(RealSimplificationEngine):
    """Computes constant values but does not multiply out sums."""


class DistributiveSumSimplificationEngine(RealSimplificationEngine):
    """Transforms expressions into a flat chain of additions: (x - 1)(x + 1) => x^2 - 1."""

    def make_multiplier(self) -> Multiplier:
        return DistributiveMultiplier(self)

    def simplify_exponentiation(self, expression: Expression) -> Expression:
        exponent = expression.exponent
        # real bases are handled exactly by the product normalizer
        if (
            isinstance(exponent, Integer)
            and exponent.positive
            and exponent.value <= self.config.max_expansion_exponent
            and not isinstance(expression.base, RealNumberExpression)
        ):
            multiplier = self.make_multiplier()
            for _ in range(exponent.value):
                multiplier.push(expression.base)
            return multiplier.to_expression()
        return super().simplify_exponentiation(expression)


EVALUATING_ENGINE = EvaluatingRealSimplificationEngine()
DISTRIBUTIVE_ENGINE = DistributiveSumSimplificationEngine()


def simplify(expression: Expression) -> Expression:
    return EVALUATING_ENGINE.simplify(expression)


def expand(expression: Expression) -> Expression:
    return DISTRIBUTIVE_ENGINE.simplify(expression)
