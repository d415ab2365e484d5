from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


TokenKind: TypeAlias = Literal[
    "number",
    "repeat",
    "multiply",
    "divide",
    "modulo",
    "add",
    "subtract",
    "dice",
    "lparen",
    "rparen",
    "choose",
]
MulOperator: TypeAlias = Literal["multiply", "divide", "modulo"]
AddOperator: TypeAlias = Literal["add", "subtract"]

MUL_OPERATORS: frozenset[str] = frozenset({"multiply", "divide", "modulo"})
ADD_OPERATORS: frozenset[str] = frozenset({"add", "subtract"})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: int = 0


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Group:
    body: Sum


Atom: TypeAlias = Number | Group


@dataclass(frozen=True)
class DiceOp:
    sides: Atom
    keep: Atom | None = None


@dataclass(frozen=True)
class StrayChoose:
    """A ':' that does not follow the sides of a dice group."""

    operand: Atom


@dataclass(frozen=True)
class Factor:
    base: Atom
    ops: tuple[DiceOp | StrayChoose, ...] = ()


@dataclass(frozen=True)
class Term:
    factors: tuple[Factor, ...]
    operators: tuple[MulOperator, ...] = ()


@dataclass(frozen=True)
class Sum:
    terms: tuple[Term, ...]
    operators: tuple[AddOperator, ...] = ()


@dataclass(frozen=True)
class Expression:
    input: str
    tokens: tuple[Token, ...]
    repeat: Sum | None
    body: Sum
    normalized_expression: str
