from .errors import DiceError, InvariantError
from .evaluator import evaluate
from .parser import parse

__all__ = ["DiceError", "InvariantError", "evaluate", "parse"]
