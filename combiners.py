"""
Term combiners used by the simplification engines.

An Adder collects the operands of a sum, a Multiplier the operands of a
product. Both flatten nested chains while collecting and build the combined
expression in `to_expression`.
"""
from __future__ import annotations
import itertools
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, TypeVar

from expression import (
    Addition,
    Exponentiation,
    Expression,
    Integer,
    MINUS_ONE,
    Multiplication,
    ONE,
    RationalExponentiation,
    RationalExponentiationProduct,
    RationalExpression,
    RealNumberExpression,
    Vector,
    ZERO,
)
import rational
from rational import Rational

if TYPE_CHECKING:
    from engine import RealSimplificationEngine

T = TypeVar("T")


def get_combinations(elements: Sequence[Sequence[T]]) -> List[List[T]]:
    """
    Get all distributive combinations of the input lists.

        input  = [[a, b], [c, d], [e]]                          # (a+b)(c+d)e
        output = [[a, c, e], [a, d, e], [b, c, e], [b, d, e]]  # ace+ade+bce+bde
    """
    if len(elements) == 0:
        return []
    return [list(combination) for combination in itertools.product(*elements)]


def _split_power(component: RationalExponentiation) -> Tuple[Rational, Optional[RationalExponentiation]]:
    """Split b^(p/q) with an integer b into b^k and b^(r/q) where 0 <= r < q."""
    base, exponent = component.base, component.exponent
    if not isinstance(base, Integer) or base.is_zero:
        return rational.ONE, component
    if exponent == ONE:
        return Rational.of(base), None
    if exponent == MINUS_ONE:
        return rational.ONE / base, None
    denominator = exponent.denominator.value
    if not base.positive or denominator == 1:
        return rational.ONE, component
    whole, remainder = divmod(exponent.numerator.value, denominator)
    if whole == 0:
        return rational.ONE, component
    fractional = RationalExponentiation(base, Rational(remainder, denominator).to_expression())
    return Rational(Fraction(base.value) ** whole), fractional


class Adder:
    """Helper used to add a set of expressions."""

    def __init__(self, engine: "RealSimplificationEngine") -> None:
        self.engine = engine
        self.rational_addend = rational.ZERO
        self.addends: List[Expression] = []

    def push_all(self, expressions: Sequence[Expression]) -> None:
        for expression in expressions:
            self.push(expression)

    def push(self, expression: Expression) -> None:
        if isinstance(expression, RationalExpression):
            self.push_rational(expression)
        elif isinstance(expression, Vector):
            self.push_vector(expression)
        elif isinstance(expression, (RationalExponentiationProduct, RationalExponentiation)):
            self.push_rational_exponentiation_product(expression)
        elif isinstance(expression, Addition):
            self.push_addition(expression)
        else:
            self.push_other(expression)

    def push_rational(self, value: RationalExpression) -> None:
        self.rational_addend = self.rational_addend + value

    def push_vector(self, vector: Vector) -> None:
        # (a,b)+(c,d) = (a+c,b+d)
        for i, addend in enumerate(self.addends):
            if isinstance(addend, Vector) and vector.is_compatible_with(addend):
                self.addends[i] = addend.map_indexed(
                    lambda j, row: self.engine.simplify_addition([row, vector[j]])
                )
                return
        self.addends.append(vector)

    def push_rational_exponentiation_product(self, expression: RealNumberExpression) -> None:
        if isinstance(expression, RationalExponentiationProduct):
            components = expression.components
        else:
            components = (expression,)
        simplified = self.engine.simplify_rational_exponentiation_product(components)
        if isinstance(simplified, (RationalExponentiationProduct, RationalExponentiation)):
            self.addends.append(simplified)
        else:
            # collapsed into a rational or a constant
            self.push(simplified)

    def push_addition(self, expression: Addition) -> None:
        self.push_all(expression.components)

    def push_other(self, expression: Expression) -> None:
        self.addends.append(expression)

    def flush_local(self) -> None:
        """Move the rational addend into the addends and reset it to 0."""
        if not self.rational_addend.is_zero():
            self.addends.append(self.rational_addend.to_expression())
            self.rational_addend = rational.ZERO

    def split_coefficient(self, addend: Expression) -> Tuple[Rational, Expression]:
        """
        Split an addend into its rational coefficient and the remaining symbolic factor.

        Whole powers of integer bases move into the coefficient, so 3^(3/2) and
        3 * 3^(1/2) share the key 3^(1/2).
        """
        if isinstance(addend, (Multiplication, RationalExponentiationProduct)):
            factors = addend.components
        elif isinstance(addend, RationalExponentiation):
            factors = (addend,)
        else:
            return rational.ONE, addend
        parts: List[Expression] = []
        for factor in factors:
            if isinstance(factor, RationalExponentiationProduct):
                parts.extend(factor.components)
            else:
                parts.append(factor)

        count = rational.ONE
        rest: List[Expression] = []
        for part in parts:
            if isinstance(part, RationalExpression):
                count = count * part
            elif isinstance(part, RationalExponentiation):
                coefficient, remaining = _split_power(part)
                count = count * coefficient
                if remaining is not None:
                    rest.append(remaining)
            else:
                rest.append(part)
        if not rest:
            return rational.ONE, addend
        return count, self.engine.simplify_multiplication(rest)

    def to_expression(self) -> Expression:
        """Build the sum of everything pushed so far, merging like terms (2x + 3x = 5x)."""
        addend_count: Dict[Expression, Rational] = {}
        for addend in self.addends:
            count, key = self.split_coefficient(addend)
            addend_count[key] = addend_count.get(key, rational.ZERO) + count
        self.addends = [
            self.engine.simplify_multiplication([count.to_expression(), key])
            for key, count in addend_count.items()
            if not count.is_zero()
        ]

        self.flush_local()

        if len(self.addends) == 0:
            return ZERO
        if len(self.addends) == 1:
            return self.addends[0]
        return Addition(tuple(self.addends))


class Multiplier:
    """Helper used to multiply a set of expressions."""

    def __init__(self, engine: "RealSimplificationEngine") -> None:
        self.engine = engine
        self.reals: List[RationalExponentiation] = []
        self.vectors: List[Vector] = []
        self.others: List[Expression] = []

    def push_all(self, expressions: Sequence[Expression]) -> None:
        for expression in expressions:
            self.push(expression)

    def push(self, expression: Expression) -> None:
        if isinstance(expression, RationalExponentiation):
            self.push_rational_exponentiation(expression)
        elif isinstance(expression, RealNumberExpression):
            self.push_real(expression)
        elif isinstance(expression, Vector):
            self.push_vector(expression)
        elif isinstance(expression, Multiplication):
            self.push_multiplication(expression)
        else:
            self.push_other(expression)

    def push_rational_exponentiation(self, expression: RationalExponentiation) -> None:
        self.reals.append(expression)

    def push_real(self, expression: RealNumberExpression) -> None:
        self.push_rational_exponentiation(RationalExponentiation(expression, ONE))

    def push_vector(self, expression: Vector) -> None:
        self.vectors.append(expression)

    def push_multiplication(self, expression: Multiplication) -> None:
        self.push_all(expression.components)

    def push_other(self, expression: Expression) -> None:
        self.others.append(expression)

    def to_expression(self) -> Expression:
        constant = self.engine.simplify_rational_exponentiation_product(self.reals)
        if constant.is_zero:
            return ZERO

        other_count: Dict[Expression, int] = {}
        for factor in self.others:
            # x^2 * x = x^3
            if isinstance(factor, Exponentiation) and isinstance(factor.exponent, Integer):
                base, count = factor.base, factor.exponent.value
            else:
                base, count = factor, 1
            other_count[base] = other_count.get(base, 0) + count
        factors: List[Expression] = [
            self.engine.simplify_int_exponentiation(base, count)
            for base, count in other_count.items()
            if count != 0
        ]

        if constant != ONE:
            if not self.vectors:
                factors.insert(0, constant)
            else:
                # scale every vector instead of keeping the constant as a separate factor
                factors.extend(
                    v.map(lambda row: self.engine.simplify_multiplication([row, constant])) for v in self.vectors
                )
        else:
            factors.extend(self.vectors)

        if len(factors) == 0:
            return ONE
        if len(factors) == 1:
            return factors[0]
        return Multiplication(tuple(factors))


class DistributiveMultiplier(Multiplier):
    """Multiplier that expands sums: (a+b)(c+d)e = ace + ade + bce + bde."""

    def __init__(self, engine: "RealSimplificationEngine") -> None:
        super().__init__(engine)
        self.additions: List[Addition] = []

    def push_other(self, expression: Expression) -> None:
        if isinstance(expression, Addition):
            self.additions.append(expression)
        else:
            super().push_other(expression)

    def to_expression(self) -> Expression:
        base_product = super().to_expression()
        if not self.additions:
            return base_product
        terms = [list(addition.components) for addition in self.additions] + [[base_product]]
        return self.engine.simplify_addition(
            [self.engine.simplify_multiplication(combination) for combination in get_combinations(terms)]
        )
