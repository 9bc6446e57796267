"""
Stained - Dice drafting board game rules engine

A deterministic rules engine for a stained-glass dice drafting game.
It provides:
- Match setup from a seed
- Turn and round state machine with placement rules
- Legal action generation and tool effects
- Scoring and winners
- Bot policies and in-memory match sessions
"""

__version__ = "0.1.0"
