from __future__ import annotations

from collections.abc import Sequence

from .models import Token


def balanced(tokens: Sequence[Token]) -> bool:
    """Parentheses never close below depth 0 and end at 0; at most one ``x``, at depth 0."""
    depth = 0
    seen_repeat = False
    for tok in tokens:
        if tok.kind == "lparen":
            depth += 1
        elif tok.kind == "rparen":
            depth -= 1
            if depth < 0:
                return False
        elif tok.kind == "repeat":
            if seen_repeat or depth != 0:
                return False
            seen_repeat = True
    return depth == 0


def alternates(tokens: Sequence[Token]) -> bool:
    """Values and operators alternate, and the sequence does not end on an operator."""
    expecting_value = True
    for tok in tokens:
        if expecting_value:
            if tok.kind == "number":
                expecting_value = False
            elif tok.kind != "lparen":
                return False
        else:
            if tok.kind in ("number", "lparen"):
                return False
            if tok.kind != "rparen":
                expecting_value = True
    return not expecting_value


def validate(tokens: Sequence[Token]) -> bool:
    return balanced(tokens) and alternates(tokens)
