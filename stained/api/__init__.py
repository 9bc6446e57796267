"""
API module - structured wire contract for clients.

Contains:
- schemas: Pydantic models for action requests and game views
- views: builders projecting a GameState onto those models
"""

from .schemas import (
    ActionKind,
    ActionRequest,
    ToolPayloadModel,
    DieInfo,
    CellInfo,
    PlayerInfo,
    PlayerView,
    FinalState,
    ScoreInfo,
    ErrorResponse,
)
from .views import build_player_view, build_final_state

__all__ = [
    "ActionKind",
    "ActionRequest",
    "ToolPayloadModel",
    "DieInfo",
    "CellInfo",
    "PlayerInfo",
    "PlayerView",
    "FinalState",
    "ScoreInfo",
    "ErrorResponse",
    "build_player_view",
    "build_final_state",
]
