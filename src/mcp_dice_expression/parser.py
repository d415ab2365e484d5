from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import DiceError, InvariantError
from .lexer import tokenize
from .models import (
    ADD_OPERATORS,
    MUL_OPERATORS,
    Atom,
    DiceOp,
    Expression,
    Factor,
    Group,
    Number,
    StrayChoose,
    Sum,
    Term,
    Token,
)
from .validator import validate

logger = logging.getLogger(__name__)


_SYMBOLS = {
    "repeat": " x ",
    "multiply": " * ",
    "divide": " / ",
    "modulo": " % ",
    "add": " + ",
    "subtract": " - ",
    "dice": "d",
    "choose": ":",
    "lparen": "(",
    "rparen": ")",
}


def normalize(tokens: Sequence[Token]) -> str:
    chunks: list[str] = []
    for tok in tokens:
        chunks.append(str(tok.value) if tok.kind == "number" else _SYMBOLS[tok.kind])
    return "".join(chunks)


class _TreeBuilder:
    """Recursive descent over an already validated token run.

    One method per precedence tier: ``+ -`` over ``* / %`` over dice chains
    over atoms (numbers and parenthesized groups).
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos].kind
        return None

    def build(self) -> Sum:
        if not self.tokens:
            raise DiceError("[REDUCTION_FAILED] Could not fully reduce an empty expression.")
        body = self._sum()
        if self.pos != len(self.tokens):
            raise DiceError(
                f"[REDUCTION_FAILED] Could not fully reduce expression at token {self.pos}."
            )
        return body

    def _sum(self) -> Sum:
        terms = [self._term()]
        operators = []
        while self._peek() in ADD_OPERATORS:
            operators.append(self.tokens[self.pos].kind)
            self.pos += 1
            terms.append(self._term())
        return Sum(terms=tuple(terms), operators=tuple(operators))

    def _term(self) -> Term:
        factors = [self._factor()]
        operators = []
        while self._peek() in MUL_OPERATORS:
            operators.append(self.tokens[self.pos].kind)
            self.pos += 1
            factors.append(self._factor())
        return Term(factors=tuple(factors), operators=tuple(operators))

    def _factor(self) -> Factor:
        base = self._atom()
        ops: list[DiceOp | StrayChoose] = []
        while True:
            kind = self._peek()
            if kind == "dice":
                self.pos += 1
                sides = self._atom()
                keep = None
                if self._peek() == "choose":
                    self.pos += 1
                    keep = self._atom()
                ops.append(DiceOp(sides=sides, keep=keep))
            elif kind == "choose":
                self.pos += 1
                ops.append(StrayChoose(operand=self._atom()))
            else:
                break
        return Factor(base=base, ops=tuple(ops))

    def _atom(self) -> Atom:
        if self.pos >= len(self.tokens):
            raise InvariantError("[NOT_NUMBERS] Operator arguments must be numbers.")
        tok = self.tokens[self.pos]
        self.pos += 1
        if tok.kind == "number":
            return Number(tok.value)
        if tok.kind == "lparen":
            body = self._sum()
            if self._peek() != "rparen":
                raise InvariantError("[UNBALANCED_PARENTHESES] Unbalanced parentheses.")
            self.pos += 1
            return Group(body)
        raise InvariantError("[NOT_NUMBERS] Operator arguments must be numbers.")


def build_tree(tokens: Sequence[Token]) -> Sum:
    return _TreeBuilder(tokens).build()


def parse(text: str) -> Expression:
    """Tokenize, validate and build the tree for one input. Raises DiceError for bad input."""

    tokens = tokenize(text)
    logger.debug("Tokens for %r: %s", text, tokens)

    if not validate(tokens):
        raise DiceError(
            f"[BAD_EXPRESSION] {text!r} is not a well-formed expression. Example: '3d6+2' or '2x(1d20+5)'."
        )

    repeat_at = next((i for i, tok in enumerate(tokens) if tok.kind == "repeat"), None)
    if repeat_at is None:
        repeat = None
        body = build_tree(tokens)
    else:
        repeat = build_tree(tokens[:repeat_at])
        body = build_tree(tokens[repeat_at + 1 :])

    return Expression(
        input=text,
        tokens=tuple(tokens),
        repeat=repeat,
        body=body,
        normalized_expression=normalize(tokens),
    )
