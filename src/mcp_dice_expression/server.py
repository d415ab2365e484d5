from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .audit import roll_from_text
from .errors import DiceError

logger = logging.getLogger(__name__)

mcp = FastMCP("mcp-dice-expression")


@mcp.tool()
def roll_expression(text: str):
    """Evaluate a dice expression such as '3d6+2', '4d6:3' or '2x(1d20+5)'.

    Input: text (string)
    Output: structured JSON with one result per repetition, every die drawn,
    and an explanation

    Raises a hard error (exception) on invalid input.
    """

    try:
        return roll_from_text(text)
    except DiceError as e:
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(str(e)) from None


def run() -> None:
    logger.info("Starting mcp-dice-expression over stdio")
    mcp.run()


if __name__ == "__main__":
    run()
