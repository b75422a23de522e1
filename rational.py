from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
	from expression import RationalExpression

Operand = Union["Rational", int, "RationalExpression"]

class Rational:
	"""Exact numerator/denominator pair, always kept in lowest terms with a positive denominator."""
	__slots__ = ("_f",)
	def __init__(self, num: int | Fraction, den: int | None = None) -> None:
		if isinstance(num, Fraction):
			self._f = num
		else:
			self._f = Fraction(num, 1 if den is None else den)
	@staticmethod
	def of(expr: RationalExpression) -> Rational:
		return Rational(expr.numerator.value, expr.denominator.value)
	@staticmethod
	def _coerce(other: Operand) -> Fraction:
		if isinstance(other, Rational):
			return other._f
		if isinstance(other, int):
			return Fraction(other)
		# Integer / SimpleRational expressions
		return Fraction(other.numerator.value, other.denominator.value)
	@property
	def numerator(self) -> int:
		return self._f.numerator
	@property
	def denominator(self) -> int:
		return self._f.denominator
	def normalize(self) -> Rational:
		# Fraction already reduces on construction: 0 -> 0/1, sign on the numerator, gcd divided out
		return self
	def to_expression(self):
		from expression import Integer, SimpleRational
		if self._f.denominator == 1:
			return Integer(self._f.numerator)
		return SimpleRational(Integer(self._f.numerator), Integer(self._f.denominator))
	def __add__(self, other: Operand) -> Rational:
		return Rational(self._f + self._coerce(other))
	def __sub__(self, other: Operand) -> Rational:
		return Rational(self._f - self._coerce(other))
	def __mul__(self, other: Operand) -> Rational:
		return Rational(self._f * self._coerce(other))
	def __truediv__(self, other: Operand) -> Rational:
		f = self._coerce(other)
		if f == 0:
			raise ZeroDivisionError("division by zero")
		return Rational(self._f / f)
	__radd__ = __add__
	__rmul__ = __mul__
	def __neg__(self) -> Rational:
		return Rational(-self._f)
	def __eq__(self, other: object) -> bool:
		if isinstance(other, int):
			return self._f == other
		if not isinstance(other, Rational):
			return False
		return self._f == other._f
	def __hash__(self) -> int:
		return hash(self._f)
	def __gt__(self, other: Rational) -> bool:
		return self._f > other._f
	def is_zero(self) -> bool:
		return self._f == 0
	def __str__(self) -> str:
		return str(self._f)
	def __repr__(self) -> str:
		return f"Rational({self._f.numerator}, {self._f.denominator})"

ZERO = Rational(0, 1)
ONE = Rational(1, 1)
