"""
Pytest fixtures for Stained tests.
"""

import random

import pytest

from ..catalog.dice import Color, Die
from ..catalog.tools import Tool, ToolType
from ..config import GameConfig
from ..engine_core.action import Action
from ..engine_core.player import PlayerState
from ..engine_core.reducer import take_turn
from ..engine_core.setup import init_game
from ..engine_core.state import GameState, TurnPhase


@pytest.fixture
def new_game() -> GameState:
    """Seeded 2-player game in the SelectTemplate phase."""
    return init_game(2, seed=7)


@pytest.fixture
def drafting_game(new_game: GameState) -> GameState:
    """Seeded 2-player game after both players picked their front side."""
    for _ in range(new_game.num_players):
        result = take_turn(new_game, Action.select_template(0))
        assert result.success
    assert new_game.phase == TurnPhase.FIRST_DRAFT
    return new_game


@pytest.fixture
def short_config() -> GameConfig:
    """Two-round matches for fast end-to-end tests."""
    return GameConfig(num_rounds=2)


@pytest.fixture
def blank_player() -> PlayerState:
    """A player whose board has only Any slots."""
    return PlayerState(secret=Color.RED, tokens=3)


@pytest.fixture
def make_state():
    """
    Factory for hand-built draft states.

    Player 0 starts and is to act. Boards are blank (Any slots), every
    player holds `tokens` tokens and the bag is empty.
    """
    def _make(
        pool: list[Die],
        tools: list[ToolType] | None = None,
        tokens: int = 3,
        num_players: int = 2,
        phase: TurnPhase = TurnPhase.FIRST_DRAFT,
        round_track: list[list[Die]] | None = None,
        seed: int = 1,
    ) -> GameState:
        players = [
            PlayerState(secret=color, tokens=tokens)
            for color in list(Color)[:num_players]
        ]
        return GameState(
            players=players,
            start_player_idx=0,
            curr_player_idx=0,
            phase=phase,
            draft_pool=list(pool),
            round_track=round_track if round_track is not None else [],
            tools=[Tool(tool_type=t) for t in (tools or [])],
            rng=random.Random(seed),
        )
    return _make
