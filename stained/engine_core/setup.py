"""
Game Setup - Creates initial game state.

This module handles:
- Filling and shuffling the dice bag
- Dealing a template card and a secret color to each player
- Drawing the tools and public objectives for the match
- Picking the first player

All randomness comes from one random.Random so a seed reproduces
the whole match.
"""

from __future__ import annotations
import logging
import random

from ..catalog.dice import ALL_COLORS
from ..catalog.objectives import ALL_OBJECTIVES
from ..catalog.templates import ALL_TEMPLATE_CARDS
from ..catalog.tools import ALL_TOOL_TYPES, Tool, is_implemented
from ..config import DICE_PER_COLOR, MAX_PLAYERS, MIN_PLAYERS, GameConfig
from .errors import InvalidPlayerCount
from .player import PlayerState
from .state import GameState, TurnPhase

logger = logging.getLogger(__name__)


def init_game(
    num_players: int,
    seed: int | None = None,
    rng: random.Random | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """
    Set up a new match.

    Args:
        num_players: Number of players (2-4)
        seed: Seed for a fresh generator, ignored when rng is given
        rng: Generator to use for every random draw in the match
        config: Match parameters (defaults to the standard rules)

    Returns:
        GameState in the SelectTemplate phase
    """
    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        raise InvalidPlayerCount(num_players, MIN_PLAYERS, MAX_PLAYERS)

    rng = rng or random.Random(seed)
    config = config or GameConfig()

    dice_bag = [color for _ in range(DICE_PER_COLOR) for color in ALL_COLORS]
    rng.shuffle(dice_bag)

    start_player_idx = rng.randrange(num_players)
    players = _deal_players(num_players, rng)
    tools = _deal_tools(config.num_tools, rng)
    objectives = rng.sample(list(ALL_OBJECTIVES), min(config.num_objectives, len(ALL_OBJECTIVES)))

    state = GameState(
        players=players,
        start_player_idx=start_player_idx,
        curr_player_idx=start_player_idx,
        phase=TurnPhase.SELECT_TEMPLATE,
        dice_bag=dice_bag,
        tools=tools,
        objectives=objectives,
        config=config,
        rng=rng,
    )
    logger.info(
        "New %d-player game: start player %d, tools [%s], objectives [%s]",
        num_players,
        start_player_idx,
        ", ".join(str(t) for t in tools),
        ", ".join(str(o) for o in objectives),
    )
    return state


def _deal_players(num_players: int, rng: random.Random) -> list[PlayerState]:
    """One template card (both sides) and one distinct secret color each."""
    cards = rng.sample(list(ALL_TEMPLATE_CARDS), num_players)
    secrets = rng.sample(list(ALL_COLORS), num_players)
    return [
        PlayerState(secret=secret, templates=card.sides)
        for secret, card in zip(secrets, cards)
    ]


def _deal_tools(num_tools: int, rng: random.Random) -> list[Tool]:
    """Only tools the engine can resolve are dealt."""
    candidates = [t for t in ALL_TOOL_TYPES if is_implemented(t)]
    return [Tool(tool_type=t) for t in rng.sample(candidates, min(num_tools, len(candidates)))]
