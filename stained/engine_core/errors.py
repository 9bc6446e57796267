"""
Rule Errors - the engine's exception taxonomy.

Every error carries a machine-readable ErrorCode. Most are recoverable:
the reducer reports them in an ActionResult and the state is untouched,
so the caller can resubmit. GameAlreadyOver and InvalidPlayerCount
propagate to the caller.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    INVALID_PLAYER_COUNT = "INVALID_PLAYER_COUNT"
    WRONG_PHASE_ACTION = "WRONG_PHASE_ACTION"
    INVALID_INDEX = "INVALID_INDEX"
    ILLEGAL_PLACEMENT = "ILLEGAL_PLACEMENT"
    INSUFFICIENT_TOKENS = "INSUFFICIENT_TOKENS"
    TOOL_PHASE_ILLEGAL = "TOOL_PHASE_ILLEGAL"
    TOOL_UNIMPLEMENTED = "TOOL_UNIMPLEMENTED"
    GAME_ALREADY_OVER = "GAME_ALREADY_OVER"


class PlacementReason(str, Enum):
    """Why a die may not go where it was asked to."""
    OUT_OF_BOUNDS = "out_of_bounds"
    CELL_OCCUPIED = "cell_occupied"
    COLOR_MISMATCH = "color_mismatch"
    FACE_MISMATCH = "face_mismatch"
    NEIGHBOR_COLOR_MATCH = "neighbor_color_match"
    NEIGHBOR_FACE_MATCH = "neighbor_face_match"
    NOT_ADJACENT = "not_adjacent"
    FIRST_DIE_NOT_ON_EDGE = "first_die_not_on_edge"
    LEGAL_PLACEMENT_EXISTS = "legal_placement_exists"


_PLACEMENT_MESSAGES = {
    PlacementReason.OUT_OF_BOUNDS: "Coordinates are outside the board",
    PlacementReason.CELL_OCCUPIED: "Cell is already occupied",
    PlacementReason.COLOR_MISMATCH: "Die color does not match slot",
    PlacementReason.FACE_MISMATCH: "Die face does not match slot",
    PlacementReason.NEIGHBOR_COLOR_MATCH: "Die color matches orthogonally adjacent die",
    PlacementReason.NEIGHBOR_FACE_MATCH: "Die face matches orthogonally adjacent die",
    PlacementReason.NOT_ADJACENT: "Die must be placed adjacent to another die",
    PlacementReason.FIRST_DIE_NOT_ON_EDGE: "First die must be placed on the edge",
    PlacementReason.LEGAL_PLACEMENT_EXISTS: "A legal placement exists; the die must be placed",
}


class GameRuleError(Exception):
    """Base class for all rule violations."""
    code: ErrorCode

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidPlayerCount(GameRuleError):
    code = ErrorCode.INVALID_PLAYER_COUNT

    def __init__(self, num_players: int, min_players: int, max_players: int):
        self.num_players = num_players
        super().__init__(
            f"Invalid number of players: {num_players} (must be {min_players}-{max_players})"
        )


class WrongPhaseAction(GameRuleError):
    code = ErrorCode.WRONG_PHASE_ACTION


class InvalidIndex(GameRuleError):
    code = ErrorCode.INVALID_INDEX

    def __init__(self, what: str, index: int | None, size: int | None = None):
        self.what = what
        self.index = index
        if index is None:
            message = f"Missing {what} index"
        elif size is None:
            message = f"Invalid {what} index: {index}"
        else:
            message = f"Invalid {what} index: {index} (have {size})"
        super().__init__(message)


class IllegalPlacement(GameRuleError):
    code = ErrorCode.ILLEGAL_PLACEMENT

    def __init__(self, reason: PlacementReason, coords: tuple[int, int] | None = None):
        self.reason = reason
        self.coords = coords
        message = _PLACEMENT_MESSAGES[reason]
        if coords is not None:
            message = f"{message} at {coords}"
        super().__init__(message)


class InsufficientTokens(GameRuleError):
    code = ErrorCode.INSUFFICIENT_TOKENS

    def __init__(self, have: int, cost: int):
        self.have = have
        self.cost = cost
        super().__init__(f"Tool costs {cost} token(s), player has {have}")


class ToolPhaseIllegal(GameRuleError):
    code = ErrorCode.TOOL_PHASE_ILLEGAL


class ToolUnimplemented(GameRuleError):
    code = ErrorCode.TOOL_UNIMPLEMENTED


class GameAlreadyOver(GameRuleError):
    code = ErrorCode.GAME_ALREADY_OVER

    def __init__(self):
        super().__init__("Game is over")
