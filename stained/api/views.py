"""
View builders - project a GameState onto the pydantic view models.

Views are pure projections; nothing here mutates the state.
"""

from __future__ import annotations

from ..catalog.dice import Die
from ..catalog.templates import BoardTemplate
from ..engine_core.player import PlayerState
from ..engine_core.scoring import ScoreBreakdown
from ..engine_core.state import GameState
from .schemas import (
    CellInfo,
    DieInfo,
    FinalState,
    ObjectiveInfo,
    PlayerInfo,
    PlayerView,
    ScoreInfo,
    TemplateInfo,
    ToolInfo,
)


def die_info(die: Die) -> DieInfo:
    return DieInfo(color=die.color.value, face=die.face)


def template_info(template: BoardTemplate) -> TemplateInfo:
    return TemplateInfo(
        name=template.name,
        value=template.value,
        rows=[[str(slot) for slot in row] for row in template.slots],
    )


def player_info(
    player: PlayerState,
    seat: int,
    is_current_turn: bool,
    player_id: str | None = None,
) -> PlayerInfo:
    return PlayerInfo(
        seat=seat,
        player_id=player_id,
        tokens=player.tokens,
        secret=player.secret.value if player.secret is not None else None,
        selected_template=player.selected_template.name if player.selected_template else None,
        templates=[template_info(t) for t in player.templates],
        board=[
            [
                CellInfo(
                    slot=str(cell.slot),
                    die=die_info(cell.die) if cell.die is not None else None,
                )
                for cell in row
            ]
            for row in player.board
        ],
        active_tool=player.active_tool.value if player.active_tool else None,
        is_current_turn=is_current_turn,
    )


def score_info(breakdown: ScoreBreakdown) -> ScoreInfo:
    return ScoreInfo(
        secret_color=breakdown.secret_color,
        empty_slots=breakdown.empty_slots,
        tokens=breakdown.tokens,
        objectives=list(breakdown.objectives),
        total=breakdown.total,
    )


def _build_view(
    state: GameState,
    viewer: int | None,
    player_ids: list[str] | None,
) -> PlayerView:
    finished = state.is_finished()
    return PlayerView(
        viewer=viewer,
        phase=state.phase.value,
        round=state.current_round,
        num_rounds=state.config.num_rounds,
        start_player=state.start_player_idx,
        current_player=state.curr_player_idx,
        draft_pool=[die_info(d) for d in state.draft_pool],
        round_track=[[die_info(d) for d in entry] for entry in state.round_track],
        dice_in_bag=len(state.dice_bag),
        tools=[ToolInfo(tool_type=t.tool_type.value, cost=t.cost) for t in state.tools],
        objectives=[
            ObjectiveInfo(objective_type=o.objective_type.value, multiplier=o.multiplier)
            for o in state.objectives
        ],
        players=[
            player_info(
                p,
                seat,
                is_current_turn=not finished and seat == state.curr_player_idx,
                player_id=player_ids[seat] if player_ids else None,
            )
            for seat, p in enumerate(state.players)
        ],
        winners=state.winners() if finished else None,
    )


def build_player_view(
    state: GameState,
    viewer_idx: int,
    player_ids: list[str] | None = None,
) -> PlayerView:
    """
    View of the game for one seat.

    Other players' secret colors are hidden until the game is over.
    """
    source = state if state.is_finished() else state.redacted(viewer_idx)
    return _build_view(source, viewer_idx, player_ids)


def build_final_state(state: GameState, player_ids: list[str] | None = None) -> FinalState:
    """Unredacted view plus score breakdowns, for finished games."""
    if not state.is_finished():
        raise ValueError("Game is not finished")
    return FinalState(
        game=_build_view(state, None, player_ids),
        scores=state.player_scores(),
        breakdowns=[score_info(b) for b in state.score_breakdowns()],
    )
