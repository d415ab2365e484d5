"""Command-line driver: evaluate each argument and print its results."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import settings
from .errors import DiceError
from .evaluator import evaluate
from .parser import parse
from .rng import default_source

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dice-expr",
        description="Roll dice expressions such as 3d6+2, 4d6:3 or 2x(1d20+5).",
    )
    parser.add_argument("expressions", nargs="*", metavar="EXPR")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stderr)

    source = default_source()
    for text in args.expressions:
        print(f"{text}:")
        try:
            lines = [f"    {result}" for result in evaluate(parse(text), source)]
        except DiceError as e:
            logger.info("Skipping %r: %s", text, e)
            print(f"    error: {e}")
            continue
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
