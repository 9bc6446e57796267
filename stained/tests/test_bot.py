"""
Tests for legal action generation and bot policies.

Tests:
- Generated actions are accepted by the reducer
- Self-play always terminates
- Seeded bots replay identically
"""

import pytest

from ..bots import FirstLegalPolicy, RandomPolicy, create_policy
from ..catalog.dice import Color, Die
from ..catalog.tools import ToolType
from ..config import TOTAL_DICE
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.player import ToolModifier
from ..engine_core.reducer import Reducer
from ..engine_core.setup import init_game


class ToolFirstPolicy(RandomPolicy):
    """Picks a random tool action whenever one is affordable."""

    def __init__(self, seed=None):
        super().__init__(seed=seed, uses_tools=True)

    def select_action(self, state, legal_actions):
        tools = [a for a in legal_actions if a.action_type == ActionType.USE_TOOL]
        return super().select_action(state, tools or legal_actions)


def _self_play(num_players, seed, policies, config=None):
    state = init_game(num_players, seed=seed, config=config)
    reducer = Reducer()
    actions = 0
    while not state.is_finished():
        action = policies[state.curr_player_idx].choose_action(state)
        result = reducer.apply(state, action)
        assert result.success, f"{action}: {result.error}"
        assert state.dice_in_play() == TOTAL_DICE
        actions += 1
    return state, actions


class TestActionGenerator:
    """Tests for legal action generation."""

    def test_template_actions(self, new_game):
        actions = legal_actions(new_game)
        assert actions == [Action.select_template(0), Action.select_template(1)]

    def test_every_draft_action_applies(self, drafting_game):
        reducer = Reducer()
        for action in legal_actions(drafting_game):
            trial = drafting_game.clone()
            assert reducer.apply(trial, action).success

    def test_single_discard_when_nothing_fits(self, make_state):
        state = make_state([Die(Color.RED, 3), Die(Color.GREEN, 2)])
        for row in state.players[0].board:
            for cell in row:
                cell.die = Die(Color.BLUE, 6)
        assert legal_actions(state) == [Action.pass_turn()]

    def test_tools_only_when_requested(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.FLIP_DRAFTED_DIE])
        assert all(a.action_type == ActionType.DRAFT_DIE for a in legal_actions(state))
        tool_actions = [
            a for a in legal_actions(state, include_tools=True)
            if a.action_type == ActionType.USE_TOOL
        ]
        assert len(tool_actions) == 1

    def test_unaffordable_and_phase_illegal_tools_skipped(self, make_state):
        state = make_state(
            [Die(Color.RED, 3)],
            tools=[ToolType.FLIP_DRAFTED_DIE, ToolType.REROLL_ALL_DICE_IN_POOL],
            tokens=0,
        )
        actions = legal_actions(state, include_tools=True)
        assert all(a.action_type == ActionType.DRAFT_DIE for a in actions)

        state.players[0].tokens = 5
        tool_idxs = {
            a.idx for a in legal_actions(state, include_tools=True)
            if a.action_type == ActionType.USE_TOOL
        }
        assert tool_idxs == {0}

    def test_ignore_adjacency_offered_once(self, make_state):
        state = make_state([Die(Color.RED, 3)], tools=[ToolType.PLACE_IGNORING_ADJACENCY])
        assert len(legal_actions(state, include_tools=True)) > len(legal_actions(state))
        state.players[0].active_tool = ToolModifier.IGNORE_ADJACENCY
        assert len(legal_actions(state, include_tools=True)) == len(legal_actions(state))

    def test_is_legal(self, make_state):
        state = make_state([Die(Color.RED, 3)])
        assert is_legal(state, Action.draft_die(0, (0, 0)))
        assert not is_legal(state, Action.draft_die(0, (1, 1)))
        assert not is_legal(state, Action.pass_turn())

    def test_no_actions_after_game_over(self, short_config):
        state, _ = _self_play(2, 1, [FirstLegalPolicy(), FirstLegalPolicy()], short_config)
        assert legal_actions(state) == []


class TestSelfPlay:
    """Tests for bot-only matches."""

    @pytest.mark.parametrize("num_players", [2, 3, 4])
    def test_random_bots_finish_full_game(self, num_players):
        policies = [RandomPolicy(seed=i) for i in range(num_players)]
        state, actions = _self_play(num_players, 100 + num_players, policies)
        assert state.is_finished()
        assert actions == num_players + 2 * num_players * state.config.num_rounds

    @pytest.mark.parametrize("seed", [8, 9, 10, 11, 12])
    def test_tool_using_bots_conserve_dice(self, seed):
        """Tool effects move dice between pool and round track without losing any."""
        policies = [create_policy(2, seed=seed * 10 + i) for i in range(3)]
        state, actions = _self_play(3, seed, policies)
        assert state.is_finished()
        assert state.dice_in_play() == TOTAL_DICE
        tool_uses = [a for a in state.action_history if a.action_type == ActionType.USE_TOOL]
        assert actions == 3 + 2 * 3 * state.config.num_rounds + len(tool_uses)

    @pytest.mark.parametrize("seed", [3, 4, 5])
    def test_eager_tool_users_conserve_dice(self, seed):
        """Bots spend every token they can on tools."""
        policies = [ToolFirstPolicy(seed=seed * 10 + i) for i in range(2)]
        state, _ = _self_play(2, seed, policies)
        assert state.is_finished()
        used = {
            state.tools[a.idx].tool_type
            for a in state.action_history
            if a.action_type == ActionType.USE_TOOL
        }
        assert used
        assert all(tool.used for tool in state.tools if tool.tool_type in used)

    def test_seeded_replay(self):
        first, _ = _self_play(2, 5, [RandomPolicy(seed=1), RandomPolicy(seed=2)])
        second, _ = _self_play(2, 5, [RandomPolicy(seed=1), RandomPolicy(seed=2)])
        assert first.player_scores() == second.player_scores()
        assert [p.render() for p in first.players] == [p.render() for p in second.players]
        assert first.action_history == second.action_history


class TestBotDecision:
    """Tests for decisions reported by policies."""

    def test_decision_describes_choice(self, drafting_game):
        decision = RandomPolicy(seed=1).decide(drafting_game)
        legal = legal_actions(drafting_game)
        assert decision.action in legal
        assert decision.evaluated_actions == len(legal)
        assert decision.confidence == pytest.approx(1 / len(legal))
        assert str(decision.action) in decision.describe()

    def test_first_legal_decision(self, new_game):
        decision = FirstLegalPolicy().decide(new_game)
        assert decision.action == Action.select_template(0)
        assert decision.confidence == 1.0
        assert "first legal" in decision.describe()


class TestCreatePolicy:
    """Tests for the policy factory."""

    def test_levels(self):
        assert isinstance(create_policy(0), FirstLegalPolicy)
        assert isinstance(create_policy(1), RandomPolicy)
        assert not create_policy(1).uses_tools
        assert create_policy(2).uses_tools
