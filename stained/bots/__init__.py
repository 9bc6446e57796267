"""
Bots module - automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy, FirstLegalPolicy: baseline policies
- create_policy: policy for a difficulty level
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, create_policy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "create_policy",
]
