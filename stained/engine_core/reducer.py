"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation and the only code
that moves the turn pointer or changes phase.

Design principles:
- Validates before applying; a rejected action changes nothing
- Rule violations come back as a failed ActionResult
- A finished game raises GameAlreadyOver
- Delegates placement to PlayerState and tools to ToolResolver

Turn order within a round (start player S, players 0..n-1):
    FirstDraft:  S, S+1, ..., S-1
    SecondDraft: S-1, S-2, ..., S
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from ..catalog.dice import Die
from .action import Action, ActionResult, ActionType
from .errors import (
    GameAlreadyOver,
    GameRuleError,
    IllegalPlacement,
    InvalidIndex,
    PlacementReason,
    WrongPhaseAction,
)
from .state import GameState, TurnPhase
from .tool_resolver import ToolResolver

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, Action], list[str]]


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """
    tool_resolver: ToolResolver = field(default_factory=ToolResolver)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action for the current player.

        Returns ActionResult with game_over set once the final round
        is scored. Raises GameAlreadyOver if the game had already ended.
        """
        if state.phase == TurnPhase.GAME_OVER:
            raise GameAlreadyOver()

        handler = self._get_handler(state.phase)
        try:
            changes = handler(state, action)
        except GameRuleError as e:
            logger.debug("Rejected %s for player %d: %s", action, state.curr_player_idx, e)
            return ActionResult.failure(e)

        state.action_history.append(action)
        return ActionResult.succeeded(state.is_finished(), changes)

    def _get_handler(self, phase: TurnPhase) -> Handler:
        """Get the handler function for a phase."""
        handlers = {
            TurnPhase.SELECT_TEMPLATE: self._handle_select_template,
            TurnPhase.FIRST_DRAFT: self._handle_first_draft,
            TurnPhase.SECOND_DRAFT: self._handle_second_draft,
        }
        return handlers[phase]

    # -- phases ----------------------------------------------------------

    def _handle_select_template(self, state: GameState, action: Action) -> list[str]:
        """Each player picks a template; the first round starts after the last pick."""
        if action.action_type != ActionType.SELECT_TEMPLATE:
            raise WrongPhaseAction("Invalid action: must select a template")

        player_idx = state.curr_player_idx
        template = state.current_player.select_template(action.idx)
        changes = [f"Player {player_idx} selected {template.name} ({template.value} tokens)"]

        state.curr_player_idx = state.next_idx(player_idx)
        if state.curr_player_idx == state.start_player_idx:
            changes.extend(self._start_round(state))
        return changes

    def _handle_first_draft(self, state: GameState, action: Action) -> list[str]:
        changes = self._handle_draft_turn(state, action)
        if action.action_type == ActionType.USE_TOOL:
            return changes

        state.curr_player_idx = state.next_idx(state.curr_player_idx)
        if state.curr_player_idx == state.start_player_idx:
            # Last player drafts again; order reverses
            state.curr_player_idx = state.prev_idx(state.curr_player_idx)
            state.phase = TurnPhase.SECOND_DRAFT
        return changes

    def _handle_second_draft(self, state: GameState, action: Action) -> list[str]:
        changes = self._handle_draft_turn(state, action)
        if action.action_type == ActionType.USE_TOOL:
            return changes

        if state.curr_player_idx != state.start_player_idx:
            state.curr_player_idx = state.prev_idx(state.curr_player_idx)
            return changes

        changes.extend(self._finish_round(state))
        if state.rounds_completed >= state.config.num_rounds:
            state.phase = TurnPhase.GAME_OVER
            scores = state.player_scores()
            logger.info("Game over: scores %s, winners %s", scores, state.winners())
            changes.append(f"Game over. Scores: {scores}")
        else:
            changes.extend(self._start_round(state))
        return changes

    # -- actions ---------------------------------------------------------

    def _handle_draft_turn(self, state: GameState, action: Action) -> list[str]:
        """Dispatch an action taken during either draft pass."""
        if action.action_type == ActionType.SELECT_TEMPLATE:
            raise WrongPhaseAction("Invalid action: templates have already been selected")
        if action.action_type == ActionType.USE_TOOL:
            description = self.tool_resolver.resolve(state, action.idx, action.payload)
            return [f"Player {state.curr_player_idx} {description}"]
        return self._draft_die(state, action)

    def _draft_die(self, state: GameState, action: Action) -> list[str]:
        """
        Take a die from the pool and place it, or discard it.

        A die may only be discarded when no pool die has a legal
        placement on the player's board.
        """
        if not 0 <= action.idx < len(state.draft_pool):
            raise InvalidIndex("draft pool", action.idx, len(state.draft_pool))

        player_idx = state.curr_player_idx
        player = state.current_player
        die: Die = state.draft_pool[action.idx]

        if action.coords is not None:
            coords = (action.coords[0], action.coords[1])
            player.place_die(coords, die)
            state.draft_pool.pop(action.idx)
            change = f"Player {player_idx} placed {die} at {coords}"
        else:
            if player.has_legal_placement(state.draft_pool):
                raise IllegalPlacement(PlacementReason.LEGAL_PLACEMENT_EXISTS)
            state.draft_pool.pop(action.idx)
            state.discarded.append(die)
            change = f"Player {player_idx} discarded {die}"

        player.active_tool = None
        logger.debug(change)
        return [change]

    # -- rounds ----------------------------------------------------------

    def _start_round(self, state: GameState) -> list[str]:
        """Roll a fresh draft pool from the bag."""
        num_dice = state.config.pool_size(state.num_players)
        colors = state.dice_bag[-num_dice:]
        del state.dice_bag[-num_dice:]
        state.draft_pool = [Die.roll(color, state.rng) for color in colors]
        state.phase = TurnPhase.FIRST_DRAFT
        state.curr_player_idx = state.start_player_idx

        pool = " ".join(str(d) for d in state.draft_pool)
        logger.info(
            "Round %d started by player %d, pool: %s",
            state.current_round, state.start_player_idx, pool,
        )
        return [f"Round {state.current_round} started. Pool: {pool}"]

    def _finish_round(self, state: GameState) -> list[str]:
        """Leftover dice go to the round track; the next player starts."""
        leftovers = state.draft_pool
        state.round_track.append(leftovers)
        state.draft_pool = []
        state.start_player_idx = state.next_idx(state.start_player_idx)
        state.curr_player_idx = state.start_player_idx

        logger.info(
            "Round %d finished, %d die(s) to the round track",
            state.rounds_completed, len(leftovers),
        )
        return [f"Round {state.rounds_completed} finished"]


def take_turn(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
