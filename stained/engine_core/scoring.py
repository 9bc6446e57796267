"""
Scoring - final score of a board and winner determination.

score = +1 per die of the secret color
        -1 per empty cell
        +1 per unspent token
        + each public objective's score
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..catalog.dice import Color
from ..catalog.objectives import DieGrid, Objective


@dataclass
class ScoreBreakdown:
    secret_color: int = 0
    empty_slots: int = 0  # zero or negative
    tokens: int = 0
    objectives: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.secret_color + self.empty_slots + self.tokens + sum(self.objectives)


def score_board(
    grid: DieGrid,
    secret: Color | None,
    tokens: int,
    objectives: list[Objective],
) -> ScoreBreakdown:
    """Score a board. A redacted (None) secret scores no color bonus."""
    breakdown = ScoreBreakdown(tokens=tokens)
    for row in grid:
        for die in row:
            if die is None:
                breakdown.empty_slots -= 1
            elif secret is not None and die.color == secret:
                breakdown.secret_color += 1
    breakdown.objectives = [objective.score(grid) for objective in objectives]
    return breakdown


def winners(totals: list[int]) -> list[int]:
    """
    Indices of every player holding the top score.

    Ties are shared victories; callers that need a single seat take
    the first entry.
    """
    if not totals:
        return []
    best = max(totals)
    return [idx for idx, total in enumerate(totals) if total == best]
