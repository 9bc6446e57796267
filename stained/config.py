"""
Rule constants and per-match configuration.

The constants describe the physical game box (board size, dice supply,
player limits). GameConfig holds the knobs that may vary between matches.
"""

from __future__ import annotations
from dataclasses import dataclass


BOARD_ROWS = 4
BOARD_COLS = 5

MIN_PLAYERS = 2
MAX_PLAYERS = 4

NUM_ROUNDS = 10
NUM_TOOLS = 3
NUM_OBJECTIVES = 3

NUM_COLORS = 5
DICE_PER_COLOR = (2 * MAX_PLAYERS + 1) * NUM_ROUNDS // NUM_COLORS
TOTAL_DICE = DICE_PER_COLOR * NUM_COLORS

# Tool costs before and after the first use in a match
TOOL_BASE_COST = 1
TOOL_USED_COST = 2


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable match parameters.

    The dice supply is sized for NUM_ROUNDS rounds at MAX_PLAYERS,
    so num_rounds can be lowered (short games, tests) but not raised.
    """
    num_rounds: int = NUM_ROUNDS
    num_tools: int = NUM_TOOLS
    num_objectives: int = NUM_OBJECTIVES

    def __post_init__(self):
        if not 1 <= self.num_rounds <= NUM_ROUNDS:
            raise ValueError(f"num_rounds must be between 1 and {NUM_ROUNDS}")
        if self.num_tools < 0:
            raise ValueError("num_tools must be >= 0")
        if self.num_objectives < 0:
            raise ValueError("num_objectives must be >= 0")

    def pool_size(self, num_players: int) -> int:
        """Dice drawn into the draft pool at the start of each round."""
        return 2 * num_players + 1
