from __future__ import annotations


class DiceError(ValueError):
    """User-facing errors for one expression (report it, move on to the next input)."""


class InvariantError(RuntimeError):
    """Internal grammar invariant broken (validator and tree builder disagree)."""
