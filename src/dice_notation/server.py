from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .config import configure_logging
from .dice import dice_from_text, roll_from_text
from .errors import DiceError


logger = logging.getLogger(__name__)

mcp = FastMCP("dice-notation")


@mcp.tool()
def roll_dice(text: str):
    """Roll a dice notation expression such as '3d6+2' or '1d20-1d4*2'.

    Input: text (string)
    Output: structured JSON with every die rolled, the total and an explanation

    Raises a hard error (exception) on invalid input.
    """

    try:
        return roll_from_text(text)
    except DiceError as e:
        logger.info("Rejected roll %r: %s", text, e)
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(str(e)) from None


@mcp.tool()
def list_dice(text: str):
    """List the dice terms in an expression without rolling them.

    Subtracted terms are reported with a negative quantity.
    """

    try:
        return dice_from_text(text)
    except DiceError as e:
        logger.info("Rejected expression %r: %s", text, e)
        raise ValueError(str(e)) from None


def run() -> None:
    configure_logging()
    # Default transport is stdio.
    mcp.run()


if __name__ == "__main__":
    run()
