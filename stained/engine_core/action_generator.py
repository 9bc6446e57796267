"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. Sessions to tell a human seat what it may do
3. The discard rule (a die may be discarded only if nothing is placeable)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..catalog.tools import ToolType, is_implemented
from .action import Action, ActionType, ToolPayload
from .state import GameState, TurnPhase


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current player.

    Tool actions are only generated when include_tools is set, and
    never for tools the player cannot afford.
    """
    include_tools: bool = False

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state.phase == TurnPhase.GAME_OVER:
            return []

        if state.phase == TurnPhase.SELECT_TEMPLATE:
            return self._generate_template_actions(state)

        actions = self._generate_draft_actions(state)
        if self.include_tools:
            actions.extend(self._generate_tool_actions(state))
        return actions

    def _generate_template_actions(self, state: GameState) -> list[Action]:
        player = state.current_player
        return [Action.select_template(idx) for idx in range(len(player.templates))]

    def _generate_draft_actions(self, state: GameState) -> list[Action]:
        """One action per (pool die, legal cell); a single discard if none."""
        player = state.current_player
        actions = [
            Action.draft_die(idx, coords)
            for idx, die in enumerate(state.draft_pool)
            for coords in player.legal_placements(die)
        ]
        if not actions and state.draft_pool:
            actions.append(Action.pass_turn())
        return actions

    def _generate_tool_actions(self, state: GameState) -> list[Action]:
        player = state.current_player
        actions = []
        for tool_idx, tool in enumerate(state.tools):
            if not is_implemented(tool.tool_type):
                continue
            if not state.phase.allows_tool(tool.tool_type):
                continue
            if player.tokens < tool.cost:
                continue
            for payload in self._payloads_for(state, tool.tool_type):
                actions.append(Action.use_tool(tool_idx, payload))
        return actions

    def _payloads_for(self, state: GameState, tool_type: ToolType) -> list[ToolPayload | None]:
        pool = range(len(state.draft_pool))
        if tool_type == ToolType.BUMP_DRAFTED_DIE:
            return [
                ToolPayload(die_idx=idx, increase=increase)
                for idx in pool
                for increase in (True, False)
            ]
        if tool_type in (ToolType.FLIP_DRAFTED_DIE, ToolType.REROLL_DRAFTED_DIE):
            return [ToolPayload(die_idx=idx) for idx in pool]
        if tool_type == ToolType.SWAP_DRAFTED_DIE_WITH_ROUND_TRACK:
            return [
                ToolPayload(die_idx=idx, round_idx=round_idx, round_die_idx=track_idx)
                for idx in pool
                for round_idx, entry in enumerate(state.round_track)
                for track_idx in range(len(entry))
            ]
        if tool_type == ToolType.PLACE_IGNORING_ADJACENCY:
            # Pointless twice in one turn
            if state.current_player.active_tool is not None:
                return []
            return [None]
        return [None]


def legal_actions(state: GameState, include_tools: bool = False) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator(include_tools=include_tools)
    return generator.generate(state)


def is_legal(state: GameState, action: Action) -> bool:
    """
    Check if a specific action is legal.

    Tool actions are matched on the tool index only; payloads are
    checked by the tool resolver.
    """
    if action.action_type == ActionType.USE_TOOL:
        return any(
            a.action_type == action.action_type and a.idx == action.idx
            for a in legal_actions(state, include_tools=True)
        )
    for a in legal_actions(state):
        if (
            a.action_type == action.action_type
            and a.idx == action.idx
            and a.coords == action.coords
        ):
            return True
    return False
