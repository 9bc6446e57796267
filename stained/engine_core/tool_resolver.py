"""
Tool Resolver - validates and applies tool effects.

Every check runs before anything is mutated, so a rejected tool
leaves tokens, pool, round track and board exactly as they were.
Order of checks:
1. Tool index exists
2. Tool is legal in the current phase
3. Tool type is implemented
4. Player can afford the current cost
5. Payload indices are valid for the chosen tool

Using a tool never ends the turn.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable

from ..catalog.tools import Tool, ToolType, is_implemented
from .action import ToolPayload
from .errors import InsufficientTokens, InvalidIndex, ToolPhaseIllegal, ToolUnimplemented
from .player import ToolModifier
from .state import GameState

logger = logging.getLogger(__name__)

# A validated effect: applies the mutation and describes it
Effect = Callable[[], str]


@dataclass
class ToolResolver:
    """
    Resolves tool usage for the current player.

    Stateless - all state is in GameState.
    """

    def resolve(self, state: GameState, tool_idx: int, payload: ToolPayload | None) -> str:
        """
        Use a tool on behalf of the current player.

        Returns a human-readable description of the effect.
        Raises a GameRuleError subclass without mutating on failure.
        """
        tool = self._validate(state, tool_idx)
        payload = payload or ToolPayload()

        builders: dict[ToolType, Callable[[GameState, ToolPayload], Effect]] = {
            ToolType.BUMP_DRAFTED_DIE: self._bump,
            ToolType.FLIP_DRAFTED_DIE: self._flip,
            ToolType.REROLL_DRAFTED_DIE: self._reroll,
            ToolType.SWAP_DRAFTED_DIE_WITH_ROUND_TRACK: self._swap_with_round_track,
            ToolType.REROLL_ALL_DICE_IN_POOL: self._reroll_pool,
            ToolType.PLACE_IGNORING_ADJACENCY: self._ignore_adjacency,
        }
        builder = builders.get(tool.tool_type)
        if builder is None:
            raise ToolUnimplemented(f"Tool {tool.tool_type.value} is not implemented")

        effect = builder(state, payload)

        # Validation passed - commit
        description = effect()
        player = state.current_player
        player.tokens -= tool.cost
        first_use = not tool.used
        tool.mark_used()
        logger.debug(
            "Player %d used %s (%s)%s",
            state.curr_player_idx,
            tool.tool_type.value,
            description,
            ", cost now raised" if first_use else "",
        )
        return description

    def _validate(self, state: GameState, tool_idx: int) -> Tool:
        if not 0 <= tool_idx < len(state.tools):
            raise InvalidIndex("tool", tool_idx, len(state.tools))
        tool = state.tools[tool_idx]
        if not state.phase.allows_tool(tool.tool_type):
            raise ToolPhaseIllegal(
                f"Tool {tool.tool_type.value} cannot be used during {state.phase.value}"
            )
        if not is_implemented(tool.tool_type):
            raise ToolUnimplemented(f"Tool {tool.tool_type.value} is not implemented")
        player = state.current_player
        if player.tokens < tool.cost:
            raise InsufficientTokens(player.tokens, tool.cost)
        return tool

    def _pool_index(self, state: GameState, payload: ToolPayload) -> int:
        idx = payload.die_idx
        if idx is None or not 0 <= idx < len(state.draft_pool):
            raise InvalidIndex("draft pool", idx, len(state.draft_pool))
        return idx

    # -- effects ---------------------------------------------------------

    def _bump(self, state: GameState, payload: ToolPayload) -> Effect:
        die = state.draft_pool[self._pool_index(state, payload)]

        def apply() -> str:
            before = str(die)
            if payload.increase:
                die.increment()
            else:
                die.decrement()
            return f"bumped {before} to {die}"
        return apply

    def _flip(self, state: GameState, payload: ToolPayload) -> Effect:
        die = state.draft_pool[self._pool_index(state, payload)]

        def apply() -> str:
            before = str(die)
            die.flip()
            return f"flipped {before} to {die}"
        return apply

    def _reroll(self, state: GameState, payload: ToolPayload) -> Effect:
        die = state.draft_pool[self._pool_index(state, payload)]

        def apply() -> str:
            before = str(die)
            die.reroll(state.rng)
            return f"rerolled {before} to {die}"
        return apply

    def _swap_with_round_track(self, state: GameState, payload: ToolPayload) -> Effect:
        pool_idx = self._pool_index(state, payload)
        round_idx = payload.round_idx
        if round_idx is None or not 0 <= round_idx < len(state.round_track):
            raise InvalidIndex("round track", round_idx, len(state.round_track))
        entry = state.round_track[round_idx]
        track_idx = payload.round_die_idx
        if track_idx is None or not 0 <= track_idx < len(entry):
            raise InvalidIndex("round track die", track_idx, len(entry))

        def apply() -> str:
            pool_die = state.draft_pool[pool_idx]
            track_die = entry[track_idx]
            state.draft_pool[pool_idx] = track_die
            entry[track_idx] = pool_die
            return f"swapped {pool_die} with {track_die} from round {round_idx + 1}"
        return apply

    def _reroll_pool(self, state: GameState, payload: ToolPayload) -> Effect:
        def apply() -> str:
            for die in state.draft_pool:
                die.reroll(state.rng)
            return "rerolled the draft pool: " + " ".join(str(d) for d in state.draft_pool)
        return apply

    def _ignore_adjacency(self, state: GameState, payload: ToolPayload) -> Effect:
        player = state.current_player

        def apply() -> str:
            player.active_tool = ToolModifier.IGNORE_ADJACENCY
            return "next placement ignores adjacency"
        return apply
