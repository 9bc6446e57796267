"""
Engine Core - the game state machine.

The engine:
1. Sets up a match (init_game)
2. Owns the GameState aggregate
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves tool effects and scores boards
"""

from .errors import (
    ErrorCode,
    PlacementReason,
    GameRuleError,
    InvalidPlayerCount,
    WrongPhaseAction,
    InvalidIndex,
    IllegalPlacement,
    InsufficientTokens,
    ToolPhaseIllegal,
    ToolUnimplemented,
    GameAlreadyOver,
)
from .action import Action, ActionType, ActionResult, ToolPayload
from .player import PlayerState, BoardCell, ToolModifier
from .scoring import ScoreBreakdown
from .state import GameState, TurnPhase
from .setup import init_game
from .tool_resolver import ToolResolver
from .reducer import Reducer, take_turn
from .action_generator import ActionGenerator, legal_actions, is_legal

__all__ = [
    "ErrorCode",
    "PlacementReason",
    "GameRuleError",
    "InvalidPlayerCount",
    "WrongPhaseAction",
    "InvalidIndex",
    "IllegalPlacement",
    "InsufficientTokens",
    "ToolPhaseIllegal",
    "ToolUnimplemented",
    "GameAlreadyOver",
    "Action",
    "ActionType",
    "ActionResult",
    "ToolPayload",
    "PlayerState",
    "BoardCell",
    "ToolModifier",
    "ScoreBreakdown",
    "GameState",
    "TurnPhase",
    "init_game",
    "ToolResolver",
    "Reducer",
    "take_turn",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
]
