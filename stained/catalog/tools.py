"""
Tools - shared single-use abilities paid for with favor tokens.

Three tools are dealt per match from the implemented types. Every
type stays representable so unimplemented ones can be reported
explicitly instead of silently ignored.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..config import TOOL_BASE_COST, TOOL_USED_COST


class ToolType(Enum):
    # Modify the draft pool
    BUMP_DRAFTED_DIE = "bump_drafted_die"
    FLIP_DRAFTED_DIE = "flip_drafted_die"
    REROLL_DRAFTED_DIE = "reroll_drafted_die"
    SWAP_DRAFTED_DIE_WITH_ROUND_TRACK = "swap_drafted_die_with_round_track"
    SWAP_DRAFTED_DIE_WITH_BAG = "swap_drafted_die_with_bag"
    REROLL_ALL_DICE_IN_POOL = "reroll_all_dice_in_pool"
    # Move dice already on the board
    MOVE_DIE_IGNORING_COLOR = "move_die_ignoring_color"
    MOVE_DIE_IGNORING_VALUE = "move_die_ignoring_value"
    MOVE_EXACTLY_TWO_DICE = "move_exactly_two_dice"
    MOVE_UP_TO_TWO_DICE_MATCHING_COLOR = "move_up_to_two_dice_matching_color"
    # Break a drafting or placement rule
    DRAFT_TWO_DICE = "draft_two_dice"
    PLACE_IGNORING_ADJACENCY = "place_ignoring_adjacency"


ALL_TOOL_TYPES: tuple[ToolType, ...] = tuple(ToolType)

IMPLEMENTED_TOOL_TYPES: frozenset[ToolType] = frozenset({
    ToolType.BUMP_DRAFTED_DIE,
    ToolType.FLIP_DRAFTED_DIE,
    ToolType.REROLL_DRAFTED_DIE,
    ToolType.SWAP_DRAFTED_DIE_WITH_ROUND_TRACK,
    ToolType.REROLL_ALL_DICE_IN_POOL,
    ToolType.PLACE_IGNORING_ADJACENCY,
})


def is_implemented(tool_type: ToolType) -> bool:
    return tool_type in IMPLEMENTED_TOOL_TYPES


@dataclass
class Tool:
    """A tool in play. Cost rises once anybody has used it."""
    tool_type: ToolType
    cost: int = TOOL_BASE_COST

    @property
    def used(self) -> bool:
        return self.cost > TOOL_BASE_COST

    def mark_used(self) -> None:
        self.cost = TOOL_USED_COST

    def __str__(self) -> str:
        return f"{self.tool_type.value}({self.cost})"
