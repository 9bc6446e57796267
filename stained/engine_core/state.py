"""
Game State - the single owned aggregate for one match.

Design principles:
- One GameState per match, mutated only through the reducer
- Randomness comes from the rng held here, so a seed replays a match
- Observable: scores and views are read without mutation
"""

from __future__ import annotations
import random
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..catalog.dice import Color, Die
from ..catalog.objectives import Objective
from ..catalog.tools import Tool, ToolType
from ..config import GameConfig
from .player import PlayerState
from .scoring import ScoreBreakdown, winners


class TurnPhase(Enum):
    """Turn phases, in play order."""
    SELECT_TEMPLATE = "select_template"
    FIRST_DRAFT = "first_draft"
    SECOND_DRAFT = "second_draft"
    GAME_OVER = "game_over"

    @property
    def is_draft(self) -> bool:
        return self in (TurnPhase.FIRST_DRAFT, TurnPhase.SECOND_DRAFT)

    def allows_tool(self, tool_type: ToolType) -> bool:
        """Tools are only usable while drafting, minus per-phase exclusions."""
        if not self.is_draft:
            return False
        return tool_type not in _TOOL_EXCLUSIONS[self]


# Tool types that may not be used in a given draft phase
_TOOL_EXCLUSIONS: dict[TurnPhase, frozenset[ToolType]] = {
    TurnPhase.FIRST_DRAFT: frozenset({ToolType.REROLL_ALL_DICE_IN_POOL}),
    TurnPhase.SECOND_DRAFT: frozenset({ToolType.DRAFT_TWO_DICE}),
}


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    dice_bag holds the colors of dice not yet rolled; the last
    entries are drawn first. round_track holds one list of leftover
    dice per completed round.
    """
    players: list[PlayerState]
    start_player_idx: int = 0
    curr_player_idx: int = 0
    phase: TurnPhase = TurnPhase.SELECT_TEMPLATE

    # Shared dice
    dice_bag: list[Color] = field(default_factory=list)
    draft_pool: list[Die] = field(default_factory=list)
    round_track: list[list[Die]] = field(default_factory=list)
    discarded: list[Die] = field(default_factory=list)

    # Public components
    tools: list[Tool] = field(default_factory=list)
    objectives: list[Objective] = field(default_factory=list)

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    # History (for replay and logging)
    action_history: list[Any] = field(default_factory=list)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.curr_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def rounds_completed(self) -> int:
        return len(self.round_track)

    @property
    def current_round(self) -> int:
        """1-based number of the round being played."""
        return min(self.rounds_completed + 1, self.config.num_rounds)

    def next_idx(self, idx: int) -> int:
        return (idx + 1) % self.num_players

    def prev_idx(self, idx: int) -> int:
        return (idx + self.num_players - 1) % self.num_players

    def is_finished(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    def dice_in_play(self) -> int:
        """
        Count every die in the match wherever it is.

        Always equals the number of dice manufactured at setup.
        """
        placed = sum(len(p.placed_dice()) for p in self.players)
        on_track = sum(len(entry) for entry in self.round_track)
        return (
            len(self.dice_bag)
            + len(self.draft_pool)
            + on_track
            + len(self.discarded)
            + placed
        )

    # -- scores ----------------------------------------------------------

    def score_breakdowns(self) -> list[ScoreBreakdown]:
        return [p.score_breakdown(self.objectives) for p in self.players]

    def player_scores(self) -> list[int]:
        return [b.total for b in self.score_breakdowns()]

    def winners(self) -> list[int]:
        """Seat indices sharing the top score."""
        return winners(self.player_scores())

    # -- copies ----------------------------------------------------------

    def clone(self) -> GameState:
        """Deep copy the state, rng included."""
        return deepcopy(self)

    def redacted(self, viewer_idx: int) -> GameState:
        """
        Copy of the state as seen from one seat.

        Other players' secret colors are the only hidden information.
        """
        view = self.clone()
        for idx, player in enumerate(view.players):
            if idx != viewer_idx:
                player.secret = None
        return view
