"""
Pydantic Schemas - structured wire shapes for actions and views.

These models define the contract between the engine and whatever
carries it to clients (sessions, network adapters, logs).

Action requests use the tagged form:
    {"idx": {"SelectTemplate": 0}}
    {"idx": {"DraftDie": 2}, "coords": [0, 4]}
    {"idx": {"UseTool": 1}, "payload": {"die_idx": 0, "increase": false}}

Error Codes: see engine_core.errors.ErrorCode.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..engine_core.action import Action, ToolPayload


# =============================================================================
# Enums
# =============================================================================

class ActionKind(str, Enum):
    """Tags accepted in ActionRequest.idx."""
    SELECT_TEMPLATE = "SelectTemplate"
    DRAFT_DIE = "DraftDie"
    USE_TOOL = "UseTool"


# =============================================================================
# Request Models
# =============================================================================

class ToolPayloadModel(BaseModel):
    """Parameters for a tool; unused fields may be omitted."""
    die_idx: Optional[int] = Field(None, description="Draft pool index")
    round_idx: Optional[int] = Field(None, description="Round track entry")
    round_die_idx: Optional[int] = Field(None, description="Die within the round track entry")
    increase: bool = Field(True, description="Bump direction")

    def to_payload(self) -> ToolPayload:
        return ToolPayload(
            die_idx=self.die_idx,
            round_idx=self.round_idx,
            round_die_idx=self.round_die_idx,
            increase=self.increase,
        )


class ActionRequest(BaseModel):
    """An action as submitted by a client."""
    idx: dict[ActionKind, int] = Field(..., description="Exactly one action tag and its index")
    coords: Optional[tuple[int, int]] = Field(None, description="(row, col) for DraftDie")
    payload: Optional[ToolPayloadModel] = None

    @field_validator("idx")
    @classmethod
    def _exactly_one_tag(cls, value: dict[ActionKind, int]) -> dict[ActionKind, int]:
        if len(value) != 1:
            raise ValueError("idx must hold exactly one of SelectTemplate, DraftDie, UseTool")
        return value

    @property
    def kind(self) -> ActionKind:
        return next(iter(self.idx))

    def to_action(self) -> Action:
        kind, index = next(iter(self.idx.items()))
        if kind == ActionKind.SELECT_TEMPLATE:
            return Action.select_template(index)
        if kind == ActionKind.DRAFT_DIE:
            return Action.draft_die(index, self.coords)
        payload = self.payload.to_payload() if self.payload else None
        return Action.use_tool(index, payload)


# =============================================================================
# View Models
# =============================================================================

class DieInfo(BaseModel):
    color: str = Field(description="R, Y, G, B or P")
    face: int = Field(ge=1, le=6)


class CellInfo(BaseModel):
    slot: str = Field(description="__ any, R_ color, _3 face")
    die: Optional[DieInfo] = None


class TemplateInfo(BaseModel):
    name: str
    value: int
    rows: list[list[str]] = Field(default_factory=list)


class ToolInfo(BaseModel):
    tool_type: str
    cost: int


class ObjectiveInfo(BaseModel):
    objective_type: str
    multiplier: int


class ScoreInfo(BaseModel):
    secret_color: int = 0
    empty_slots: int = 0
    tokens: int = 0
    objectives: list[int] = Field(default_factory=list)
    total: int = 0


class PlayerInfo(BaseModel):
    """One seat as shown to a viewer. secret is null when hidden."""
    seat: int
    player_id: Optional[str] = None
    tokens: int = 0
    secret: Optional[str] = None
    selected_template: Optional[str] = None
    templates: list[TemplateInfo] = Field(default_factory=list)
    board: list[list[CellInfo]] = Field(default_factory=list)
    active_tool: Optional[str] = None
    is_current_turn: bool = False


class PlayerView(BaseModel):
    """Complete game state for one viewer."""
    viewer: Optional[int] = Field(None, description="Seat the view was built for; null if unredacted")
    phase: str
    round: int
    num_rounds: int
    start_player: int
    current_player: int
    draft_pool: list[DieInfo] = Field(default_factory=list)
    round_track: list[list[DieInfo]] = Field(default_factory=list)
    dice_in_bag: int = 0
    tools: list[ToolInfo] = Field(default_factory=list)
    objectives: list[ObjectiveInfo] = Field(default_factory=list)
    players: list[PlayerInfo] = Field(default_factory=list)
    winners: Optional[list[int]] = None


class FinalState(BaseModel):
    """Unredacted record of a finished game."""
    game: PlayerView
    scores: list[int] = Field(default_factory=list)
    breakdowns: list[ScoreInfo] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    reason: Optional[str] = Field(None, description="Placement sub-reason")
