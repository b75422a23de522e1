from __future__ import annotations
from typing import Union

from algorithm import evaluate_all
from config import EngineConfig
from engine import DistributiveSumSimplificationEngine, EvaluatingRealSimplificationEngine
from expression import DEFAULT_RADIX, Expression, Integer
from primes import Factorization, factorize
import solver

IntegerLike = Union[int, Integer]


def _as_integer(value: IntegerLike) -> Integer:
    return value if isinstance(value, Integer) else Integer(value)


class CAS:
    """Entry point for collaborators: engines configured once, results wrapped for rendering."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config if config is not None else EngineConfig.from_env()
        self.evaluating = EvaluatingRealSimplificationEngine(self.config)
        self.distributive = DistributiveSumSimplificationEngine(self.config)

    def _wrap(self, obj: Expression) -> "CAS.ExprResult":
        if isinstance(obj, CAS.ExprResult):
            return obj
        if isinstance(obj, Expression):
            return CAS.ExprResult(self, obj)
        raise TypeError("Unsupported object for wrapping")

    def wrap(self, expr: Expression) -> "CAS.ExprResult":
        return self._wrap(expr)

    def simplify(self, expr: Expression) -> "CAS.ExprResult":
        return self._wrap(self.evaluating.simplify(expr))

    def expand(self, expr: Expression) -> "CAS.ExprResult":
        return self._wrap(self.distributive.simplify(expr))

    def evaluate(self, expr: Expression) -> "CAS.ExprResult":
        """Run deferred eval/expand nodes, then simplify what is left."""
        return self.simplify(evaluate_all(expr))

    def factorize(self, n: IntegerLike) -> Factorization:
        return factorize(n, self.config.prime_sieve_limit)

    def gcd(self, a: IntegerLike, b: IntegerLike) -> Expression:
        return solver.gcd(_as_integer(a), _as_integer(b))

    def lcm(self, a: IntegerLike, b: IntegerLike) -> Expression:
        return solver.lcm(_as_integer(a), _as_integer(b))

    class ExprResult:
        def __init__(self, cas: "CAS", expression: Expression) -> None:
            self._cas = cas
            self._expression = expression

        @property
        def expression(self) -> Expression:
            return self._expression

        def simplify(self) -> "CAS.ExprResult":
            return self._cas.simplify(self._expression)

        def expand(self) -> "CAS.ExprResult":
            return self._cas.expand(self._expression)

        def to_string(self, radix: int = DEFAULT_RADIX) -> str:
            return self._expression.to_string(radix)

        def __eq__(self, other: object) -> bool:
            if isinstance(other, CAS.ExprResult):
                return self._expression == other._expression
            if isinstance(other, Expression):
                return self._expression == other
            return False

        def __hash__(self) -> int:
            return hash(self._expression)

        def __str__(self) -> str:
            return self.to_string()

        def __repr__(self) -> str:
            return f"ExprResult({self._expression!r})"
