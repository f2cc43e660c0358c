"""The ``dice`` tool — rolls an N-sided die."""

from __future__ import annotations

import random

from pydantic import BaseModel, Field

from taskagent.tools.local import FunctionTool


class DiceArgs(BaseModel):
    dice: int = Field(default=6, ge=1, description="Number of faces on the die.")


def dice_tool(rng: random.Random | None = None) -> FunctionTool:
    """Build the dice tool. Pass *rng* for reproducible rolls."""
    source = rng or random.Random()

    def roll(dice: int = 6) -> int:
        return source.randint(1, dice)

    return FunctionTool(
        name="dice",
        description="Roll a die with the given number of faces and return the result.",
        args_model=DiceArgs,
        func=roll,
    )
