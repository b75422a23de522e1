"""Tests for the Adder and Multiplier term combiners."""

from combiners import Adder, DistributiveMultiplier, Multiplier, get_combinations
from engine import DISTRIBUTIVE_ENGINE, EVALUATING_ENGINE
from expression import (
    Addition,
    Exponentiation,
    Integer,
    MINUS_ONE,
    Multiplication,
    NamedVariable,
    ONE,
    RationalExponentiation,
    RationalExponentiationProduct,
    ZERO,
)
from expressions import add, int_, multiply, rational, vector
from rational import Rational

x = NamedVariable("x")
y = NamedVariable("y")


class TestGetCombinations:
    """Tests for get_combinations."""

    def test_distributive_combinations(self):
        """(a+b)(c+d)e has four terms."""
        assert get_combinations([["a", "b"], ["c", "d"], ["e"]]) == [
            ["a", "c", "e"],
            ["a", "d", "e"],
            ["b", "c", "e"],
            ["b", "d", "e"],
        ]

    def test_empty_input(self):
        """No lists give no combinations."""
        assert get_combinations([]) == []

    def test_single_list(self):
        """A single list gives one singleton per element."""
        assert get_combinations([[1, 2]]) == [[1], [2]]


class TestAdder:
    """Tests for the Adder."""

    def test_rationals_accumulate(self):
        """Rational addends are summed exactly."""
        adder = Adder(EVALUATING_ENGINE)
        adder.push_all([rational(1, 6), rational(3, 4)])
        assert adder.rational_addend == Rational(11, 12)
        assert adder.to_expression() == rational(11, 12)

    def test_like_terms_merge(self):
        """1 + x + 2x = 3x + 1."""
        adder = Adder(EVALUATING_ENGINE)
        adder.push_all([int_(1), x, multiply(int_(2), x)])
        assert adder.to_expression() == Addition((Multiplication((Integer(3), x)), Integer(1)))

    def test_nested_sums_flatten(self):
        """Nested additions are pushed component-wise."""
        adder = Adder(EVALUATING_ENGINE)
        adder.push(add(x, add(y, int_(1))))
        assert adder.to_expression() == Addition((x, y, Integer(1)))

    def test_empty_sum(self):
        """The empty sum is 0."""
        assert Adder(EVALUATING_ENGINE).to_expression() == ZERO

    def test_split_coefficient(self):
        """3x splits into 3 and x."""
        count, key = Adder(EVALUATING_ENGINE).split_coefficient(multiply(int_(3), x))
        assert count == Rational(3)
        assert key == x

    def test_vectors_merge(self):
        """Compatible vectors are added row by row."""
        adder = Adder(EVALUATING_ENGINE)
        adder.push_all([vector([int_(1), x]), vector([int_(2), int_(3)])])
        assert adder.to_expression() == vector([int_(3), add(x, int_(3))])


class TestMultiplier:
    """Tests for the Multiplier."""

    def test_empty_product(self):
        """The empty product is 1."""
        assert Multiplier(EVALUATING_ENGINE).to_expression() == ONE

    def test_constant_first(self):
        """The constant leads the product."""
        multiplier = Multiplier(EVALUATING_ENGINE)
        multiplier.push_all([x, int_(2), y, int_(3)])
        assert multiplier.to_expression() == Multiplication((Integer(6), x, y))

    def test_zero_absorbs(self):
        """Any zero factor makes the product 0."""
        multiplier = Multiplier(EVALUATING_ENGINE)
        multiplier.push_all([x, int_(0), y])
        assert multiplier.to_expression() == ZERO

    def test_sums_kept(self):
        """The plain multiplier does not distribute."""
        multiplier = Multiplier(EVALUATING_ENGINE)
        multiplier.push_all([add(x, int_(1)), y])
        assert multiplier.to_expression() == Multiplication((add(x, int_(1)), y))


class TestDistributiveMultiplier:
    """Tests for the DistributiveMultiplier."""

    def test_distributes_over_sum(self):
        """2(x + y) = 2x + 2y."""
        multiplier = DistributiveMultiplier(DISTRIBUTIVE_ENGINE)
        multiplier.push_all([int_(2), add(x, y)])
        assert multiplier.to_expression() == Addition(
            (Multiplication((Integer(2), x)), Multiplication((Integer(2), y)))
        )

    def test_without_sums(self):
        """Without sums it behaves like the plain multiplier."""
        multiplier = DistributiveMultiplier(DISTRIBUTIVE_ENGINE)
        multiplier.push_all([int_(2), x])
        assert multiplier.to_expression() == Multiplication((Integer(2), x))


class TestSplitCoefficient:
    """Tests for moving whole powers of integer bases into the coefficient."""

    def test_whole_power_moves_out(self):
        """3^(3/2) = 3 * 3^(1/2)."""
        count, key = Adder(EVALUATING_ENGINE).split_coefficient(RationalExponentiation(Integer(3), rational(3, 2)))
        assert count == Rational(3)
        assert key == RationalExponentiation(Integer(3), rational(1, 2))

    def test_negative_exponent(self):
        """3^(-1/2) = 1/3 * 3^(1/2)."""
        count, key = Adder(EVALUATING_ENGINE).split_coefficient(RationalExponentiation(Integer(3), rational(-1, 2)))
        assert count == Rational(1, 3)
        assert key == RationalExponentiation(Integer(3), rational(1, 2))

    def test_product_with_surd(self):
        """2 * 3^(1/2) splits into 2 and 3^(1/2)."""
        product = RationalExponentiationProduct(
            (RationalExponentiation(Integer(2), ONE), RationalExponentiation(Integer(3), rational(1, 2)))
        )
        count, key = Adder(EVALUATING_ENGINE).split_coefficient(product)
        assert count == Rational(2)
        assert key == RationalExponentiation(Integer(3), rational(1, 2))

    def test_zero_denominator_untouched(self):
        """0^-1 keeps coefficient 1."""
        power = RationalExponentiation(ZERO, MINUS_ONE)
        count, key = Adder(EVALUATING_ENGINE).split_coefficient(power)
        assert count == Rational(1)
        assert key == power


class TestFactorCounting:
    """Tests for counting repeated factors in a product."""

    def test_power_and_factor_merge(self):
        """x^2 * x = x^3."""
        multiplier = Multiplier(EVALUATING_ENGINE)
        multiplier.push_all([Exponentiation(x, Integer(2)), x])
        assert multiplier.to_expression() == Exponentiation(x, Integer(3))

    def test_inverse_cancels(self):
        """x * x^-1 * y = y."""
        multiplier = Multiplier(EVALUATING_ENGINE)
        multiplier.push_all([x, Exponentiation(x, MINUS_ONE), y])
        assert multiplier.to_expression() == y
