from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar

from engine import DISTRIBUTIVE_ENGINE, EVALUATING_ENGINE
from expression import Expression, UnaryExpression, visit


class AlgorithmExpression(Expression):
    """Node that defers a computation until `evaluate` is called."""

    def evaluate(self) -> Expression:
        raise NotImplementedError


@dataclass(frozen=True)
class EvalAlgorithm(UnaryExpression, AlgorithmExpression):
    tag: ClassVar[str] = "eval"

    def evaluate(self) -> Expression:
        return EVALUATING_ENGINE.simplify(self.child)


@dataclass(frozen=True)
class ExpandAlgorithm(UnaryExpression, AlgorithmExpression):
    tag: ClassVar[str] = "expand"

    def evaluate(self) -> Expression:
        return DISTRIBUTIVE_ENGINE.simplify(self.child)


def evaluate_all(expression: Expression) -> Expression:
    """Run every deferred computation in `expression`, innermost first."""
    return visit(expression, lambda e: e.evaluate() if isinstance(e, AlgorithmExpression) else e)
