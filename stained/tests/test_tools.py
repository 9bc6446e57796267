"""
Tests for tool effects (ToolResolver through the reducer).

Tests:
- Cost escalation and token checks
- Each implemented effect
- Phase and implementation checks
- Rejected tools change nothing
"""

import pytest

from ..catalog.dice import Color, Die
from ..catalog.tools import ALL_TOOL_TYPES, ToolType
from ..config import TOOL_USED_COST
from ..engine_core.action import Action, ToolPayload
from ..engine_core.errors import ErrorCode
from ..engine_core.reducer import take_turn
from ..engine_core.state import TurnPhase


def _use(state, tool_idx, **payload):
    return take_turn(state, Action.use_tool(tool_idx, ToolPayload(**payload)))


class TestToolCosts:
    """Tests for paying for tools."""

    def test_cost_escalates_after_first_use(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.FLIP_DRAFTED_DIE], tokens=3)

        assert _use(state, 0, die_idx=0).success
        assert state.players[0].tokens == 2
        assert state.tools[0].cost == TOOL_USED_COST

        assert _use(state, 0, die_idx=0).success
        assert state.players[0].tokens == 0

    def test_escalated_cost_applies_to_other_players(self, make_state):
        state = make_state(
            [Die(Color.RED, 3), Die(Color.BLUE, 4)],
            tools=[ToolType.FLIP_DRAFTED_DIE],
            tokens=1,
        )
        assert _use(state, 0, die_idx=0).success
        assert take_turn(state, Action.draft_die(0, (0, 0))).success

        result = _use(state, 0, die_idx=0)
        assert not result.success
        assert result.error_code == ErrorCode.INSUFFICIENT_TOKENS.value
        assert state.players[1].tokens == 1

    def test_insufficient_tokens(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.FLIP_DRAFTED_DIE], tokens=0)
        result = _use(state, 0, die_idx=0)
        assert not result.success
        assert result.error_code == ErrorCode.INSUFFICIENT_TOKENS.value
        assert state.draft_pool == [Die(Color.RED, 3)]
        assert state.tools[0].cost == 1

    def test_tool_does_not_end_turn(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.FLIP_DRAFTED_DIE])
        assert _use(state, 0, die_idx=0).success
        assert state.curr_player_idx == 0
        assert state.phase == TurnPhase.FIRST_DRAFT


class TestToolValidation:
    """Tests for rejected tool requests."""

    def test_out_of_range_tool_index(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.FLIP_DRAFTED_DIE])
        before = state.clone()
        result = _use(state, 3, die_idx=0)
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX.value
        assert state.players == before.players
        assert state.draft_pool == before.draft_pool
        assert state.tools == before.tools

    def test_missing_die_index(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.BUMP_DRAFTED_DIE])
        result = take_turn(state, Action.use_tool(0))
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX.value
        assert "Missing" in result.error
        assert state.players[0].tokens == 3
        assert state.tools[0].cost == 1

    def test_pool_index_out_of_range(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.REROLL_DRAFTED_DIE])
        result = _use(state, 0, die_idx=1)
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX.value

    def test_reroll_pool_illegal_in_first_draft(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.REROLL_ALL_DICE_IN_POOL])
        result = take_turn(state, Action.use_tool(0))
        assert not result.success
        assert result.error_code == ErrorCode.TOOL_PHASE_ILLEGAL.value

    def test_unimplemented_tool(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.DRAFT_TWO_DICE])
        result = take_turn(state, Action.use_tool(0))
        assert not result.success
        assert result.error_code == ErrorCode.TOOL_UNIMPLEMENTED.value
        assert state.players[0].tokens == 3

    def test_phase_checked_before_implementation(self, make_state):
        state = make_state(
            [Die(Color.RED, 3)],
            tools=[ToolType.DRAFT_TWO_DICE],
            phase=TurnPhase.SECOND_DRAFT,
        )
        result = take_turn(state, Action.use_tool(0))
        assert result.error_code == ErrorCode.TOOL_PHASE_ILLEGAL.value


class TestToolEffects:
    """Tests for each implemented effect."""

    @pytest.mark.parametrize("face,increase,expected", [
        (3, True, 4),
        (3, False, 2),
        (6, True, 6),
        (1, False, 1),
    ])
    def test_bump(self, make_state, face, increase, expected):
        state = make_state([Die(Color.RED, face)], tools=[ToolType.BUMP_DRAFTED_DIE])
        assert _use(state, 0, die_idx=0, increase=increase).success
        assert state.draft_pool[0] == Die(Color.RED, expected)

    def test_flip(self, make_state):
        state = make_state([Die(Color.RED, 2), Die(Color.BLUE, 6)], tools=[ToolType.FLIP_DRAFTED_DIE])
        assert _use(state, 0, die_idx=1).success
        assert state.draft_pool == [Die(Color.RED, 2), Die(Color.BLUE, 1)]

    def test_reroll_is_seeded(self, make_state):
        first = make_state([Die(Color.RED, 2)], tools=[ToolType.REROLL_DRAFTED_DIE], seed=42)
        second = make_state([Die(Color.RED, 2)], tools=[ToolType.REROLL_DRAFTED_DIE], seed=42)
        assert _use(first, 0, die_idx=0).success
        assert _use(second, 0, die_idx=0).success
        assert first.draft_pool == second.draft_pool
        assert first.draft_pool[0].color == Color.RED

    def test_swap_with_round_track(self, make_state):
        state = make_state(
            [Die(Color.RED, 2), Die(Color.BLUE, 4)],
            tools=[ToolType.SWAP_DRAFTED_DIE_WITH_ROUND_TRACK],
            round_track=[[Die(Color.GREEN, 5), Die(Color.YELLOW, 1)]],
        )
        dice_before = state.dice_in_play()
        assert _use(state, 0, die_idx=1, round_idx=0, round_die_idx=1).success
        assert state.dice_in_play() == dice_before
        assert state.draft_pool == [Die(Color.RED, 2), Die(Color.YELLOW, 1)]
        assert state.round_track == [[Die(Color.GREEN, 5), Die(Color.BLUE, 4)]]

    def test_swap_with_empty_round_track(self, make_state):
        state = make_state([Die(Color.RED, 2)], tools=[ToolType.SWAP_DRAFTED_DIE_WITH_ROUND_TRACK])
        result = _use(state, 0, die_idx=0, round_idx=0, round_die_idx=0)
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX.value
        assert state.players[0].tokens == 3

    def test_reroll_pool_in_second_draft(self, make_state):
        pool = [Die(Color.RED, 2), Die(Color.BLUE, 4), Die(Color.GREEN, 6)]
        state = make_state(pool, tools=[ToolType.REROLL_ALL_DICE_IN_POOL], phase=TurnPhase.SECOND_DRAFT)
        dice_before = state.dice_in_play()
        assert take_turn(state, Action.use_tool(0)).success
        assert state.dice_in_play() == dice_before
        assert [d.color for d in state.draft_pool] == [Color.RED, Color.BLUE, Color.GREEN]
        assert state.players[0].tokens == 2


class TestToolPhases:
    """Tests for which tools each turn phase allows."""

    @pytest.mark.parametrize("phase", [TurnPhase.SELECT_TEMPLATE, TurnPhase.GAME_OVER])
    def test_no_tools_outside_drafting(self, phase):
        assert not any(phase.allows_tool(tool_type) for tool_type in ALL_TOOL_TYPES)

    @pytest.mark.parametrize("tool_type,first,second", [
        (ToolType.REROLL_ALL_DICE_IN_POOL, False, True),
        (ToolType.DRAFT_TWO_DICE, True, False),
        (ToolType.BUMP_DRAFTED_DIE, True, True),
        (ToolType.PLACE_IGNORING_ADJACENCY, True, True),
    ])
    def test_draft_phase_exclusions(self, tool_type, first, second):
        assert TurnPhase.FIRST_DRAFT.allows_tool(tool_type) is first
        assert TurnPhase.SECOND_DRAFT.allows_tool(tool_type) is second

    def test_every_draft_phase_has_exclusions(self):
        for phase in TurnPhase:
            allowed = {t for t in ALL_TOOL_TYPES if phase.allows_tool(t)}
            if phase.is_draft:
                assert len(allowed) == len(ALL_TOOL_TYPES) - 1
            else:
                assert allowed == set()
