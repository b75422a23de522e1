"""Tests for the CAS facade and the command line demo."""

import pytest
from algorithm import EvalAlgorithm
from cas import CAS
from config import EngineConfig
from expression import Addition, Exponentiation, Integer, NamedVariable
from expressions import add, int_, multiply, one, pow_, rational
from main import main

x = NamedVariable("x")


@pytest.fixture
def cas():
    return CAS(EngineConfig())


class TestCAS:
    """Tests for CAS."""

    def test_simplify(self, cas):
        """Results compare equal to expressions."""
        assert cas.simplify(add(int_(1), int_(2))) == int_(3)

    def test_result_rendering(self, cas):
        """Results render in any radix."""
        result = cas.simplify(add(int_(2), int_(3)))
        assert str(result) == "5"
        assert result.to_string(2) == "101"

    def test_expand(self, cas):
        """expand multiplies out sums."""
        result = cas.expand(pow_(add(x, one), int_(2)))
        assert result == Addition((Exponentiation(x, Integer(2)), multiply(int_(2), x), int_(1)))

    def test_chained_results(self, cas):
        """A result can be expanded and simplified again."""
        result = cas.wrap(multiply(add(x, one), add(x, one))).expand().simplify()
        assert result == cas.expand(pow_(add(x, one), int_(2)))

    def test_evaluate(self, cas):
        """Deferred nodes are run, then the whole tree is simplified."""
        assert cas.evaluate(add(EvalAlgorithm(add(int_(1), int_(2))), x)) == Addition((x, Integer(3)))

    def test_integer_helpers(self, cas):
        """factorize, gcd and lcm accept plain ints."""
        assert cas.factorize(12).prime_factors == {2: 2, 3: 1}
        assert cas.gcd(4, 6) == Integer(2)
        assert cas.lcm(Integer(4), 6) == Integer(12)

    def test_lcm_rejects_zero(self, cas):
        """Non-positive operands raise."""
        with pytest.raises(ValueError):
            cas.lcm(0, 6)

    def test_wrap_rejects_non_expressions(self, cas):
        """Only expressions can be wrapped."""
        with pytest.raises(TypeError):
            cas.wrap(42)

    def test_config_from_env(self, monkeypatch):
        """Without a config the environment is read."""
        monkeypatch.setenv("ALGEBRA_ROOT_BIT_BUDGET", "64")
        assert CAS().config.root_bit_budget == 64


class TestMain:
    """Tests for the command line demo."""

    def test_prints_examples(self, capsys):
        """Each sample is printed with its simplified form."""
        main([])
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 4
        assert out[0] == "1 / 6 + 3 / 4  =>  11 / 12"

    def test_radix(self, capsys):
        """--radix renders integers in that base."""
        main(["--radix", "16"])
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "1 / 6 + 3 / 4  =>  b / c"

    def test_expand(self, capsys):
        """--expand multiplies out the product of sums."""
        main(["--expand"])
        out = capsys.readouterr().out.splitlines()
        assert out[3].endswith("=>  (x^2) + -1")
