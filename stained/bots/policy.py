"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and returns a decision. Bots only ever
pick from the legal actions the engine generates, so a bot action is
never rejected.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions as generate_legal_actions
from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation and confidence (logged by sessions)
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0
    evaluated_actions: int = 0

    def describe(self) -> str:
        return (
            f"{self.action} ({self.explanation}, "
            f"{self.evaluated_actions} evaluated, confidence {self.confidence:.2f})"
        )


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    uses_tools controls whether tool actions are offered to it.
    """
    uses_tools: bool = False

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def decide(self, state: GameState) -> BotDecision:
        """Generate the legal actions and pick one."""
        legal = generate_legal_actions(state, include_tools=self.uses_tools)
        return self.select_action(state, legal)

    def choose_action(self, state: GameState) -> Action:
        return self.decide(state).action

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Self-play and statistics runs
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None, uses_tools: bool = False):
        self.rng = random.Random(seed)
        self.uses_tools = uses_tools

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


def create_policy(level: int, seed: int | None = None) -> BotPolicy:
    """
    Build a bot for a difficulty level.

    0: first legal action
    1: random placements
    2: random placements and tools
    """
    if level <= 0:
        return FirstLegalPolicy()
    return RandomPolicy(seed=seed, uses_tools=level >= 2)
