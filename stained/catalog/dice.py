"""
Dice and Colors - value types for the five-color palette and six-sided dice.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Die colors. Also used as a player's secret scoring color."""
    RED = "R"
    YELLOW = "Y"
    GREEN = "G"
    BLUE = "B"
    PURPLE = "P"

    @classmethod
    def from_letter(cls, letter: str) -> Color:
        return cls(letter.upper())

    def __str__(self) -> str:
        return self.value


ALL_COLORS: tuple[Color, ...] = tuple(Color)

MIN_FACE = 1
MAX_FACE = 6
ALL_FACES: tuple[int, ...] = tuple(range(MIN_FACE, MAX_FACE + 1))


@dataclass
class Die:
    """A colored six-sided die showing one face."""
    color: Color
    face: int

    def __post_init__(self):
        if not MIN_FACE <= self.face <= MAX_FACE:
            raise ValueError(f"Die face must be in [{MIN_FACE}, {MAX_FACE}], got {self.face}")

    @classmethod
    def roll(cls, color: Color, rng: random.Random) -> Die:
        """Create a die of the given color showing a random face."""
        return cls(color=color, face=rng.randint(MIN_FACE, MAX_FACE))

    def reroll(self, rng: random.Random) -> None:
        self.face = rng.randint(MIN_FACE, MAX_FACE)

    def flip(self) -> None:
        """Turn the die over: 1 <-> 6, 2 <-> 5, 3 <-> 4."""
        self.face = MAX_FACE + MIN_FACE - self.face

    def increment(self) -> None:
        self.face = min(self.face + 1, MAX_FACE)

    def decrement(self) -> None:
        self.face = max(self.face - 1, MIN_FACE)

    def __str__(self) -> str:
        return f"{self.color}{self.face}"
