"""
Expression Model

Immutable expression tree used by the simplification engines. Every node kind
is a frozen dataclass that carries only its own fields; shared behaviour
(string rendering, child access, rebuilding and the post-order rewrite) lives
in the module-level functions below and dispatches on the node kind.
"""
from __future__ import annotations
import enum
import uuid
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from rational import Rational

DEFAULT_RADIX = 10


class Sign(enum.Enum):
    POSITIVE = 1
    NEGATIVE = -1
    ZERO = 0

    @property
    def inverse(self) -> "Sign":
        if self is Sign.POSITIVE:
            return Sign.NEGATIVE
        if self is Sign.NEGATIVE:
            return Sign.POSITIVE
        return Sign.ZERO

    def multiply(self, other: "Sign") -> "Sign":
        if self is Sign.ZERO:
            return Sign.ZERO
        if self is Sign.NEGATIVE:
            return other.inverse
        return other

    @staticmethod
    def of(value: int) -> "Sign":
        if value > 0:
            return Sign.POSITIVE
        if value < 0:
            return Sign.NEGATIVE
        return Sign.ZERO


class EntranceMode(enum.Enum):
    VISIT = "visit"
    SKIP = "skip"


class Expression:
    def to_string(self, radix: int = DEFAULT_RADIX) -> str:
        return to_string(self, radix)

    def __str__(self) -> str:
        return self.to_string(DEFAULT_RADIX)


class RealNumberExpression(Expression):
    """Expression known to denote a real number: integers, rationals, constants and products of powers."""

    @property
    def positive(self) -> bool:
        return self.sign is Sign.POSITIVE

    @property
    def negative(self) -> bool:
        return self.sign is Sign.NEGATIVE

    @property
    def is_zero(self) -> bool:
        return self.sign is Sign.ZERO


class RationalExpression(RealNumberExpression):
    """
    Rational capability shared by Integer and SimpleRational.

    Two rationals are equal when their reduced numerator/denominator pairs are
    equal, whichever node kind carries them.
    """

    def _fraction(self) -> Fraction:
        return Fraction(self.numerator.value, self.denominator.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RationalExpression):
            return NotImplemented
        return self._fraction() == other._fraction()

    def __hash__(self) -> int:
        return hash(self._fraction())

    @property
    def sign(self) -> Sign:
        return Sign.of(self.numerator.value).multiply(Sign.of(self.denominator.value))


@dataclass(frozen=True, eq=False)
class Integer(RationalExpression):
    value: int

    @property
    def numerator(self) -> "Integer":
        return self

    @property
    def denominator(self) -> "Integer":
        return ONE

    @property
    def sign(self) -> Sign:
        return Sign.of(self.value)

    @property
    def abs(self) -> "Integer":
        return Integer(-self.value) if self.value < 0 else self

    @property
    def negate(self) -> "Integer":
        return Integer(-self.value)

    @property
    def reciprocal(self) -> RationalExpression:
        return Rational(1, self.value).to_expression()

    @property
    def even(self) -> bool:
        return self.value % 2 == 0


@dataclass(frozen=True, eq=False)
class SimpleRational(RationalExpression):
    numerator: Integer
    denominator: Integer

    @property
    def abs(self) -> "SimpleRational":
        return SimpleRational(self.numerator.abs, self.denominator.abs)

    @property
    def negate(self) -> "SimpleRational":
        return SimpleRational(self.numerator.negate, self.denominator)

    @property
    def reciprocal(self) -> RationalExpression:
        return Rational(self.denominator.value, self.numerator.value).to_expression()


class IrrationalConstant(RealNumberExpression, enum.Enum):
    PI = "pi"
    E = "e"

    @property
    def sign(self) -> Sign:
        return Sign.POSITIVE

    @property
    def abs(self) -> "IrrationalConstant":
        return self

    @property
    def negate(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct((RationalExponentiation(MINUS_ONE, ONE), RationalExponentiation(self, ONE)))

    @property
    def reciprocal(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct((RationalExponentiation(self, MINUS_ONE),))


@dataclass(frozen=True)
class Exponentiation(Expression):
    base: Expression
    exponent: Expression


@dataclass(frozen=True)
class RationalExponentiation(RealNumberExpression):
    """A single `base^exponent` factor with a real base and a rational exponent."""

    base: RealNumberExpression
    exponent: RationalExpression

    @property
    def sign(self) -> Sign:
        base_sign = self.base.sign
        if base_sign is Sign.ZERO:
            # 0^-n has no value; only 0^n with n > 0 is zero
            return Sign.ZERO if self.exponent.positive else Sign.POSITIVE
        if base_sign is not Sign.NEGATIVE:
            return base_sign
        if self.exponent.denominator.abs == ONE:
            return Sign.POSITIVE if self.exponent.numerator.even else Sign.NEGATIVE
        # a real-valued root of a negative base only exists for odd roots; treat as positive
        return Sign.POSITIVE

    @property
    def abs(self) -> "RationalExponentiation":
        return RationalExponentiation(self.base.abs, self.exponent)

    @property
    def is_zero(self) -> bool:
        return self.base.is_zero and self.exponent.positive

    @property
    def negate(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct((RationalExponentiation(MINUS_ONE, ONE), self))

    @property
    def reciprocal(self) -> "RationalExponentiation":
        return RationalExponentiation(self.base, self.exponent.negate)


@dataclass(frozen=True)
class RationalExponentiationProduct(RealNumberExpression):
    """Product in the form of `3^2 * 5^(1/2)`."""

    components: Tuple[RationalExponentiation, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))

    @property
    def sign(self) -> Sign:
        sign = Sign.POSITIVE
        for component in self.components:
            sign = sign.multiply(component.sign)
        return sign

    @property
    def abs(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct(tuple(c.abs for c in self.components))

    @property
    def negate(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct((RationalExponentiation(MINUS_ONE, ONE),) + self.components)

    @property
    def reciprocal(self) -> "RationalExponentiationProduct":
        return RationalExponentiationProduct(tuple(c.reciprocal for c in self.components))


@dataclass(frozen=True)
class ChainExpression(Expression):
    components: Tuple[Expression, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))


@dataclass(frozen=True)
class Addition(ChainExpression):
    pass


@dataclass(frozen=True)
class Multiplication(ChainExpression):
    pass


@dataclass(frozen=True)
class NamedFunction(ChainExpression):
    """Undefined function with a name and parameters, e.g. `f(x, y)`."""

    name: str = "f"


@dataclass(frozen=True)
class BinaryExpression(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True)
class GcdExpr(BinaryExpression):
    pass


@dataclass(frozen=True)
class LcmExpr(BinaryExpression):
    pass


@dataclass(frozen=True)
class DotProduct(BinaryExpression):
    pass


@dataclass(frozen=True)
class UnaryExpression(Expression):
    child: Expression


@dataclass(frozen=True)
class AbsoluteValue(UnaryExpression):
    pass


@dataclass(frozen=True)
class Vector(Expression):
    rows: Tuple[Expression, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    @property
    def dimension(self) -> int:
        return len(self.rows)

    def __getitem__(self, i: int) -> Expression:
        return self.rows[i]

    def map(self, transform: Callable[[Expression], Expression]) -> "Vector":
        return Vector(tuple(transform(row) for row in self.rows))

    def map_indexed(self, transform: Callable[[int, Expression], Expression]) -> "Vector":
        return Vector(tuple(transform(i, row) for i, row in enumerate(self.rows)))

    def is_compatible_with(self, other: "Vector") -> bool:
        """True if both vectors can be added or multiplied component-wise."""
        return other.dimension == self.dimension


@dataclass(frozen=True)
class Matrix(Expression):
    """Matrix stored as a tuple of column vectors of equal dimension."""

    columns: Tuple[Vector, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        for column in self.columns:
            if not isinstance(column, Vector):
                raise ValueError(f"Illegal column {column}, expected a vector")
            if column.dimension != self.height:
                raise ValueError(f"Illegal dimension for column {column}, expected {self.height}")

    @property
    def height(self) -> int:
        return self.columns[0].dimension if self.columns else 0

    @property
    def width(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class NamedVariable(Expression):
    name: str


@dataclass(frozen=True)
class GeneratedVariable(Expression):
    """Opaque variable; two instances are only equal if they share the same id."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)


ZERO = Integer(0)
ONE = Integer(1)
MINUS_ONE = Integer(-1)


# -----------------
# Stringification
# -----------------
def _int_to_string(value: int, radix: int) -> str:
    if radix == 10:
        return str(value)
    return np.base_repr(value, base=radix).lower()


def _wrap(expression: Expression, radix: int) -> str:
    s = to_string(expression, radix)
    if isinstance(expression, (Addition, Multiplication, RationalExponentiationProduct, SimpleRational)):
        return f"({s})"
    return s


def to_string(expression: Expression, radix: int = DEFAULT_RADIX) -> str:
    if radix < 2 or radix > 36:
        raise ValueError(f"Unsupported radix {radix}")
    if isinstance(expression, Integer):
        return _int_to_string(expression.value, radix)
    if isinstance(expression, SimpleRational):
        return f"{_int_to_string(expression.numerator.value, radix)} / {_int_to_string(expression.denominator.value, radix)}"
    if isinstance(expression, IrrationalConstant):
        return expression.value
    if isinstance(expression, (Exponentiation, RationalExponentiation)):
        return f"({_wrap(expression.base, radix)}^{_wrap(expression.exponent, radix)})"
    if isinstance(expression, RationalExponentiationProduct):
        return " * ".join(to_string(c, radix) for c in expression.components)
    if isinstance(expression, Addition):
        return " + ".join(to_string(c, radix) for c in expression.components)
    if isinstance(expression, Multiplication):
        return " * ".join(
            f"({to_string(c, radix)})" if isinstance(c, Addition) else to_string(c, radix)
            for c in expression.components
        )
    if isinstance(expression, NamedFunction):
        args = ", ".join(to_string(c, radix) for c in expression.components)
        return f"{expression.name}({args})"
    if isinstance(expression, GcdExpr):
        return f"gcd({to_string(expression.left, radix)}, {to_string(expression.right, radix)})"
    if isinstance(expression, LcmExpr):
        return f"lcm({to_string(expression.left, radix)}, {to_string(expression.right, radix)})"
    if isinstance(expression, DotProduct):
        return f"<{to_string(expression.left, radix)}, {to_string(expression.right, radix)}>"
    if isinstance(expression, AbsoluteValue):
        return f"|{to_string(expression.child, radix)}|"
    if isinstance(expression, UnaryExpression):
        # algorithm wrappers render as `tag(child)`
        return f"{getattr(expression, 'tag', type(expression).__name__.lower())}({to_string(expression.child, radix)})"
    if isinstance(expression, Vector):
        rows = ", ".join(to_string(r, radix) for r in expression.rows)
        return f"({rows})^T"
    if isinstance(expression, Matrix):
        return "(" + ", ".join(to_string(c, radix) for c in expression.columns) + ")"
    if isinstance(expression, NamedVariable):
        return expression.name
    if isinstance(expression, GeneratedVariable):
        return f"v[{expression.id}]"
    return repr(expression)


# -----------------
# Tree rewriting
# -----------------
def children(expression: Expression) -> Tuple[Expression, ...]:
    if isinstance(expression, SimpleRational):
        return (expression.numerator, expression.denominator)
    if isinstance(expression, (Exponentiation, RationalExponentiation)):
        return (expression.base, expression.exponent)
    if isinstance(expression, RationalExponentiationProduct):
        return expression.components
    if isinstance(expression, ChainExpression):
        return expression.components
    if isinstance(expression, BinaryExpression):
        return (expression.left, expression.right)
    if isinstance(expression, UnaryExpression):
        return (expression.child,)
    if isinstance(expression, Vector):
        return expression.rows
    if isinstance(expression, Matrix):
        return expression.columns
    return ()


def with_children(expression: Expression, new_children: Sequence[Expression]) -> Expression:
    """
    Rebuild `expression` with the given children.

    Specialised real-valued nodes fall back to their general counterpart when
    the new children no longer fit their field types.
    """
    if isinstance(expression, SimpleRational):
        num, den = new_children
        if isinstance(num, Integer) and isinstance(den, Integer):
            return SimpleRational(num, den)
        return Multiplication((num, Exponentiation(den, MINUS_ONE)))
    if isinstance(expression, RationalExponentiation):
        base, exponent = new_children
        if isinstance(base, RealNumberExpression) and isinstance(exponent, RationalExpression):
            return RationalExponentiation(base, exponent)
        return Exponentiation(base, exponent)
    if isinstance(expression, Exponentiation):
        base, exponent = new_children
        return Exponentiation(base, exponent)
    if isinstance(expression, RationalExponentiationProduct):
        if all(isinstance(c, RationalExponentiation) for c in new_children):
            return RationalExponentiationProduct(tuple(new_children))
        return Multiplication(tuple(new_children))
    if isinstance(expression, ChainExpression):
        return replace(expression, components=tuple(new_children))
    if isinstance(expression, BinaryExpression):
        left, right = new_children
        return replace(expression, left=left, right=right)
    if isinstance(expression, UnaryExpression):
        (child,) = new_children
        return replace(expression, child=child)
    if isinstance(expression, Vector):
        return Vector(tuple(new_children))
    if isinstance(expression, Matrix):
        return Matrix(tuple(new_children))
    return expression


def visit(
    expression: Expression,
    transform: Callable[[Expression], Expression],
    enter: Optional[Callable[[Expression], EntranceMode]] = None,
) -> Expression:
    """
    Post-order rewrite of `expression`.

    Children are rewritten before `transform` sees their parent. A parent is
    only rebuilt when at least one child came back as a different object, so
    an untouched subtree is returned as the very same object. `enter` may
    return EntranceMode.SKIP to pass a node to `transform` without descending.
    """
    if enter is not None and enter(expression) is EntranceMode.SKIP:
        return transform(expression)
    kids = children(expression)
    if kids:
        new_kids: List[Expression] = [visit(k, transform, enter) for k in kids]
        if any(new is not old for new, old in zip(new_kids, kids)):
            expression = with_children(expression, new_kids)
    return transform(expression)
