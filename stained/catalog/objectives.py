"""
Public Objectives - pattern-scoring rules applied to every finished board.

Objectives are pure functions of a grid of dice (None for an empty
cell). Each catalog entry carries a multiplier; score() returns
multiplier * matches.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .dice import ALL_COLORS, ALL_FACES, Die

DieGrid = list[list[Die | None]]


class ObjectiveType(Enum):
    COLUMN_NUMBERS = "column_numbers"
    ROW_NUMBERS = "row_numbers"
    NUMBERS = "numbers"
    COLUMN_COLORS = "column_colors"
    ROW_COLORS = "row_colors"
    COLORS = "colors"
    PAIR_12 = "pair_12"
    PAIR_34 = "pair_34"
    PAIR_56 = "pair_56"
    COLOR_DIAGONALS = "color_diagonals"


def _columns(grid: DieGrid) -> list[list[Die | None]]:
    return [list(col) for col in zip(*grid)]


def _distinct(line: Iterable[Die | None], key) -> bool:
    """True if every cell is occupied and no two dice share key(die)."""
    seen = set()
    for die in line:
        if die is None:
            return False
        value = key(die)
        if value in seen:
            return False
        seen.add(value)
    return True


def _face_counts(grid: DieGrid) -> Counter:
    return Counter(die.face for row in grid for die in row if die is not None)


def _color_counts(grid: DieGrid) -> Counter:
    return Counter(die.color for row in grid for die in row if die is not None)


def count_distinct_face_lines(lines: list[list[Die | None]]) -> int:
    return sum(1 for line in lines if _distinct(line, lambda d: d.face))


def count_distinct_color_lines(lines: list[list[Die | None]]) -> int:
    return sum(1 for line in lines if _distinct(line, lambda d: d.color))


def count_face_sets(grid: DieGrid, faces: Iterable[int] = ALL_FACES) -> int:
    """Number of complete sets of the given faces on the board."""
    counts = _face_counts(grid)
    return min(counts[face] for face in faces)


def count_color_sets(grid: DieGrid) -> int:
    counts = _color_counts(grid)
    return min(counts[color] for color in ALL_COLORS)


def count_color_diagonals(grid: DieGrid) -> int:
    """
    Count occupied cells with at least one same-colored diagonal neighbor.

    Each qualifying cell counts once, however many diagonal matches it has.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    total = 0
    for r in range(rows):
        for c in range(cols):
            die = grid[r][c]
            if die is None:
                continue
            for dr, dc in ((-1, -1), (-1, 1), (1, -1), (1, 1)):
                nr, nc = r + dr, c + dc
                if 0 <= nr < rows and 0 <= nc < cols:
                    other = grid[nr][nc]
                    if other is not None and other.color == die.color:
                        total += 1
                        break
    return total


@dataclass(frozen=True)
class Objective:
    """A public objective with its point multiplier."""
    objective_type: ObjectiveType
    multiplier: int

    def matches(self, grid: DieGrid) -> int:
        """Number of times the pattern is satisfied on the board."""
        t = self.objective_type
        if t == ObjectiveType.COLUMN_NUMBERS:
            return count_distinct_face_lines(_columns(grid))
        if t == ObjectiveType.ROW_NUMBERS:
            return count_distinct_face_lines(grid)
        if t == ObjectiveType.NUMBERS:
            return count_face_sets(grid)
        if t == ObjectiveType.COLUMN_COLORS:
            return count_distinct_color_lines(_columns(grid))
        if t == ObjectiveType.ROW_COLORS:
            return count_distinct_color_lines(grid)
        if t == ObjectiveType.COLORS:
            return count_color_sets(grid)
        if t == ObjectiveType.PAIR_12:
            return count_face_sets(grid, (1, 2))
        if t == ObjectiveType.PAIR_34:
            return count_face_sets(grid, (3, 4))
        if t == ObjectiveType.PAIR_56:
            return count_face_sets(grid, (5, 6))
        if t == ObjectiveType.COLOR_DIAGONALS:
            return count_color_diagonals(grid)
        raise ValueError(f"Unknown objective type: {t}")

    def score(self, grid: DieGrid) -> int:
        return self.multiplier * self.matches(grid)

    def __str__(self) -> str:
        return f"{self.objective_type.value}x{self.multiplier}"


ALL_OBJECTIVES: tuple[Objective, ...] = (
    Objective(ObjectiveType.COLUMN_NUMBERS, 4),
    Objective(ObjectiveType.ROW_NUMBERS, 5),
    Objective(ObjectiveType.NUMBERS, 5),
    Objective(ObjectiveType.COLUMN_COLORS, 5),
    Objective(ObjectiveType.ROW_COLORS, 6),
    Objective(ObjectiveType.COLORS, 4),
    Objective(ObjectiveType.PAIR_12, 2),
    Objective(ObjectiveType.PAIR_34, 2),
    Objective(ObjectiveType.PAIR_56, 2),
    Objective(ObjectiveType.COLOR_DIAGONALS, 1),
)
