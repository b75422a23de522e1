"""Tests for the prime sieve and bounded factorization."""

import pytest
from expression import Integer
from primes import calculate_primes, factorization_primes, factorize

PRIMES_TO_100 = [
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
]


class TestCalculatePrimes:
    """Tests for the sieve."""

    def test_primes_to_100(self):
        """All primes up to 100."""
        assert calculate_primes(100) == PRIMES_TO_100

    def test_limit_is_inclusive(self):
        """A prime limit is included."""
        assert calculate_primes(97) == PRIMES_TO_100

    def test_small_limits(self):
        """Edge limits."""
        assert calculate_primes(1) == []
        assert calculate_primes(2) == [2]
        assert calculate_primes(3) == [2, 3]

    def test_returns_python_ints(self):
        """Sieve output is made of plain ints."""
        assert all(type(p) is int for p in calculate_primes(30))

    def test_table_is_cached(self):
        """The same table object is reused per limit."""
        assert factorization_primes(50) is factorization_primes(50)


class TestFactorize:
    """Tests for factorize."""

    def test_large_number(self):
        """7426698625614 = 2 * 3 * 157 * 1367 * 5767351."""
        result = factorize(7426698625614)
        assert result.prime_factors == {2: 1, 3: 1, 157: 1, 1367: 1, 5767351: 1}
        assert not result.has_remainder()

    def test_multiplicity(self):
        """Repeated factors are counted."""
        assert factorize(Integer(12)).prime_factors == {2: 2, 3: 1}
        assert factorize(2 ** 40).prime_factors == {2: 40}

    def test_prime_input(self):
        """A tabled prime factors as itself."""
        result = factorize(13, limit=100)
        assert result.prime_factors == {13: 1}
        assert result.remainder == 1

    def test_prime_remainder(self):
        """A prime beyond the table stays in the remainder."""
        result = factorize(2 * 3 * 101, limit=10)
        assert result.prime_factors == {2: 1, 3: 1}
        assert result.remainder == 101
        assert result.has_remainder()

    def test_composite_remainder(self):
        """The remainder may be composite."""
        result = factorize(101 * 103, limit=10)
        assert result.prime_factors == {}
        assert result.remainder == 101 * 103

    @pytest.mark.parametrize("n", [1, 0, -5])
    def test_rejects_small_input(self, n):
        """Inputs <= 1 raise ValueError."""
        with pytest.raises(ValueError):
            factorize(n)
