from __future__ import annotations

from .errors import DiceError
from .models import Token, TokenKind


_DIGITS = frozenset("0123456789")

# Well under the interpreter's int/str conversion limit.
MAX_DIGITS = 1000

_OPERATORS: dict[str, TokenKind] = {
    "*": "multiply",
    "/": "divide",
    "%": "modulo",
    "+": "add",
    "-": "subtract",
    "d": "dice",
    ":": "choose",
    "x": "repeat",
    "(": "lparen",
    ")": "rparen",
}


def char_to_kind(char: str) -> TokenKind:
    try:
        return _OPERATORS[char]
    except KeyError:
        raise DiceError(
            f"[INVALID_CHARACTER] {char!r} is not a valid operation. Example: '2x(1d20+5)'."
        ) from None


def _number(digits: str) -> Token:
    if len(digits) > MAX_DIGITS:
        raise DiceError(
            f"[NUMBER_TOO_LARGE] Numbers may have at most {MAX_DIGITS} digits, got {len(digits)}."
        )
    return Token("number", int(digits))


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens.

    A space only ends a digit run, so ``"1 2"`` gives two adjacent number
    tokens and is left for the validator to reject. Other whitespace (tabs,
    newlines) is an invalid character. A ``d`` with no count in front of it
    (start of input, or after anything but a number or ``)``) gets an
    implicit ``1``.
    """
    tokens: list[Token] = []
    digits = ""

    for char in text:
        if char in _DIGITS:
            digits += char
            continue

        if digits:
            tokens.append(_number(digits))
            digits = ""

        if char == " ":
            continue

        kind = char_to_kind(char)
        if kind == "dice" and (not tokens or tokens[-1].kind not in ("number", "rparen")):
            tokens.append(Token("number", 1))
        tokens.append(Token(kind))

    if digits:
        tokens.append(_number(digits))

    return tokens
