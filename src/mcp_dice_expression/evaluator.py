"""Reduce expression trees to integers.

Each parenthesis level is reduced in tiers, every tier a full left-to-right
pass before the next begins: nested groups, then dice and choose chains,
then ``* / %``, then ``+ -``. So in ``1/0 + 1d0`` the bad die is reported
before the division, and all groups at a level are rolled before any dice
outside them.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .dice import roll_choose, roll_sum
from .errors import DiceError, InvariantError
from .models import Atom, DiceOp, Expression, Factor, Group, Number, StrayChoose, Sum
from .rng import DieSource, default_source

logger = logging.getLogger(__name__)


def _truncating_divide(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


# Results past this size could not be printed (int/str conversion limit).
MAX_BITS = 4096


def _bounded(value: int) -> int:
    if value.bit_length() > MAX_BITS:
        raise DiceError(f"[NUMBER_TOO_LARGE] Result does not fit in {MAX_BITS} bits.")
    return value


def _apply(operator: str, a: int, b: int) -> int:
    if operator == "multiply":
        return _bounded(a * b)
    if operator == "divide":
        if b == 0:
            raise DiceError("[DIVIDE_BY_ZERO] Cannot divide by zero.")
        return _truncating_divide(a, b)
    if operator == "modulo":
        if b == 0:
            raise DiceError("[MODULO_BY_ZERO] Cannot take a remainder by zero.")
        return a - b * _truncating_divide(a, b)
    if operator == "add":
        return _bounded(a + b)
    if operator == "subtract":
        return _bounded(a - b)
    raise InvariantError(f"[NOT_NUMBERS] {operator!r} is not a binary operation on integers.")


def _number(atom: Atom) -> int:
    if not isinstance(atom, Number):
        raise InvariantError("[NOT_NUMBERS] Operator arguments must be numbers.")
    return atom.value


class Evaluator:
    def __init__(self, source: DieSource | None = None) -> None:
        self.source = source if source is not None else default_source()

    def reduce(self, body: Sum) -> int:
        body = self._collapse_groups(body)

        rolled = [[self._roll(factor) for factor in term.factors] for term in body.terms]

        products = []
        for term, values in zip(body.terms, rolled):
            value = values[0]
            for operator, operand in zip(term.operators, values[1:]):
                value = _apply(operator, value, operand)
            products.append(value)

        total = products[0]
        for operator, operand in zip(body.operators, products[1:]):
            total = _apply(operator, total, operand)
        return total

    def _collapse(self, atom: Atom) -> Atom:
        if isinstance(atom, Group):
            return Number(self.reduce(atom.body))
        return atom

    def _collapse_groups(self, body: Sum) -> Sum:
        terms = []
        for term in body.terms:
            factors = []
            for factor in term.factors:
                base = self._collapse(factor.base)
                ops: list[DiceOp | StrayChoose] = []
                for op in factor.ops:
                    if isinstance(op, StrayChoose):
                        ops.append(StrayChoose(self._collapse(op.operand)))
                        continue
                    sides = self._collapse(op.sides)
                    keep = None if op.keep is None else self._collapse(op.keep)
                    ops.append(DiceOp(sides=sides, keep=keep))
                factors.append(Factor(base=base, ops=tuple(ops)))
            terms.append(replace(term, factors=tuple(factors)))
        return replace(body, terms=tuple(terms))

    def _roll(self, factor: Factor) -> int:
        value = _number(factor.base)
        for op in factor.ops:
            if isinstance(op, StrayChoose):
                raise DiceError(
                    "[CHOOSE_WITHOUT_DICE] ':' must follow a dice roll. Example: '4d6:3'."
                )
            sides = _number(op.sides)
            if op.keep is None:
                value = _bounded(roll_sum(value, sides, self.source))
            else:
                value = _bounded(roll_choose(value, sides, _number(op.keep), self.source))
        return value

    def run(self, expression: Expression) -> list[int]:
        try:
            repetitions = 1 if expression.repeat is None else self.reduce(expression.repeat)
            results = [self.reduce(expression.body) for _ in range(repetitions)]
        except DiceError as e:
            logger.debug("%r failed: %s", expression.input, e)
            raise
        logger.debug("%r -> %s", expression.input, results)
        return results


def reduce(body: Sum, source: DieSource | None = None) -> int:
    return Evaluator(source).reduce(body)


def evaluate(expression: Expression, source: DieSource | None = None) -> list[int]:
    """Evaluate ``expression`` once per repetition. A repetition count below 1 gives ``[]``."""
    return Evaluator(source).run(expression)
