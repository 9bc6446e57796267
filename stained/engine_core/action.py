"""
Action System - Actions, payloads, and results.

A player's turn is made of:
1. SelectTemplate (once per match, during setup)
2. Zero or more UseTool actions
3. Exactly one DraftDie action, which ends the turn

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .errors import GameRuleError

Coords = tuple[int, int]


class ActionType(Enum):
    """Types of player actions."""
    SELECT_TEMPLATE = "select_template"
    DRAFT_DIE = "draft_die"
    USE_TOOL = "use_tool"


@dataclass
class ToolPayload:
    """
    Parameters for a tool effect.

    Different tools read different fields; validation happens in
    the tool resolver.
    """
    # Index into the draft pool
    die_idx: int | None = None

    # Round track entry to swap with
    round_idx: int | None = None
    round_die_idx: int | None = None

    # Direction for the bump tool
    increase: bool = True


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    idx is the template, pool or tool index depending on action_type.
    """
    action_type: ActionType
    idx: int
    coords: Coords | None = None
    payload: ToolPayload | None = None

    @classmethod
    def select_template(cls, idx: int) -> Action:
        """Factory for template selection."""
        return cls(action_type=ActionType.SELECT_TEMPLATE, idx=idx)

    @classmethod
    def draft_die(cls, idx: int, coords: Coords | None = None) -> Action:
        """Factory for drafting a pool die, optionally placing it."""
        return cls(action_type=ActionType.DRAFT_DIE, idx=idx, coords=coords)

    @classmethod
    def pass_turn(cls) -> Action:
        """Draft the first pool die without placing it."""
        return cls.draft_die(0)

    @classmethod
    def use_tool(cls, idx: int, payload: ToolPayload | None = None) -> Action:
        """Factory for tool usage."""
        return cls(action_type=ActionType.USE_TOOL, idx=idx, payload=payload)

    def __str__(self) -> str:
        if self.action_type == ActionType.DRAFT_DIE:
            where = f" -> {self.coords}" if self.coords is not None else " (discard)"
            return f"DraftDie({self.idx}){where}"
        if self.action_type == ActionType.USE_TOOL:
            return f"UseTool({self.idx})"
        return f"SelectTemplate({self.idx})"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - Whether the game ended with it
    - Errors (if failed)
    - Human-readable changes (for logs and notifications)
    """
    success: bool
    game_over: bool = False
    error: str | None = None
    error_code: str | None = None
    exception: GameRuleError | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, exc: GameRuleError) -> ActionResult:
        """Create a failure result from a rule error."""
        return cls(
            success=False,
            error=exc.message,
            error_code=exc.code.value,
            exception=exc,
        )

    @classmethod
    def succeeded(cls, game_over: bool, changes: list[str] | None = None) -> ActionResult:
        return cls(success=True, game_over=game_over, state_changes=changes or [])

    @property
    def reason(self):
        """Placement sub-reason, if the failure was an illegal placement."""
        return getattr(self.exception, "reason", None)
