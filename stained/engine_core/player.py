"""
Player State - one participant's board, tokens and secret color.

The player owns the placement rules for its own board and the
computation of its score. Legality checks are read-only; place_die
re-checks before it writes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from ..catalog.dice import Color, Die
from ..catalog.objectives import DieGrid, Objective
from ..catalog.templates import BoardTemplate, Slot
from ..config import BOARD_COLS, BOARD_ROWS
from .action import Coords
from .errors import IllegalPlacement, InvalidIndex, PlacementReason, WrongPhaseAction
from .scoring import ScoreBreakdown, score_board

_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class ToolModifier(Enum):
    """One-shot rule modifiers a tool can leave on a player."""
    IGNORE_ADJACENCY = "ignore_adjacency"


@dataclass
class BoardCell:
    slot: Slot = field(default_factory=Slot.any)
    die: Die | None = None

    @property
    def is_empty(self) -> bool:
        return self.die is None

    def __str__(self) -> str:
        return str(self.die) if self.die is not None else str(self.slot)


def empty_board() -> list[list[BoardCell]]:
    return [[BoardCell() for _ in range(BOARD_COLS)] for _ in range(BOARD_ROWS)]


def in_bounds(coords: Coords) -> bool:
    row, col = coords
    return 0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS


def is_edge(coords: Coords) -> bool:
    row, col = coords
    return row in (0, BOARD_ROWS - 1) or col in (0, BOARD_COLS - 1)


def _neighbors(coords: Coords, offsets) -> Iterator[Coords]:
    row, col = coords
    for dr, dc in offsets:
        nbr = (row + dr, col + dc)
        if in_bounds(nbr):
            yield nbr


def all_coords() -> Iterator[Coords]:
    for row in range(BOARD_ROWS):
        for col in range(BOARD_COLS):
            yield (row, col)


@dataclass
class PlayerState:
    """
    State for a single player.

    templates holds the candidates dealt at setup. The board starts
    with Any slots and receives the chosen template's slots once.
    secret is None only in views redacted for another player.
    """
    secret: Color | None
    templates: list[BoardTemplate] = field(default_factory=list)
    tokens: int = 0
    board: list[list[BoardCell]] = field(default_factory=empty_board)
    selected_template: BoardTemplate | None = None
    active_tool: ToolModifier | None = None

    @property
    def has_selected_template(self) -> bool:
        return self.selected_template is not None

    def select_template(self, idx: int) -> BoardTemplate:
        """Adopt one of the dealt templates for the rest of the match."""
        if self.has_selected_template:
            raise WrongPhaseAction("Template has already been selected")
        if not 0 <= idx < len(self.templates):
            raise InvalidIndex("template", idx, len(self.templates))
        template = self.templates[idx]
        self.tokens = template.value
        for row, col in all_coords():
            self.board[row][col].slot = template.slot_at(row, col)
        self.selected_template = template
        return template

    # -- board queries ---------------------------------------------------

    def cell(self, coords: Coords) -> BoardCell:
        row, col = coords
        return self.board[row][col]

    def die_grid(self) -> DieGrid:
        return [[cell.die for cell in row] for row in self.board]

    def placed_dice(self) -> list[Die]:
        return [cell.die for row in self.board for cell in row if cell.die is not None]

    @property
    def is_board_empty(self) -> bool:
        return all(cell.is_empty for row in self.board for cell in row)

    @property
    def empty_cell_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell.is_empty)

    # -- placement rules -------------------------------------------------

    def placement_violation(
        self,
        coords: Coords,
        die: Die,
        ignore_adjacency: bool | None = None,
    ) -> PlacementReason | None:
        """
        Check whether die may be placed at coords.

        Returns None when the placement is legal, otherwise the first
        rule it breaks. ignore_adjacency defaults to whether the player
        has the matching tool modifier active.
        """
        if ignore_adjacency is None:
            ignore_adjacency = self.active_tool == ToolModifier.IGNORE_ADJACENCY

        if not in_bounds(coords):
            return PlacementReason.OUT_OF_BOUNDS
        cell = self.cell(coords)
        if not cell.is_empty:
            return PlacementReason.CELL_OCCUPIED

        if not cell.slot.accepts(die):
            if cell.slot.color is not None:
                return PlacementReason.COLOR_MISMATCH
            return PlacementReason.FACE_MISMATCH

        # No orthogonal neighbor may share color or face
        orthogonal = [
            self.cell(nbr).die for nbr in _neighbors(coords, _ORTHOGONAL)
            if not self.cell(nbr).is_empty
        ]
        for other in orthogonal:
            if other.color == die.color:
                return PlacementReason.NEIGHBOR_COLOR_MATCH
            if other.face == die.face:
                return PlacementReason.NEIGHBOR_FACE_MATCH

        if orthogonal:
            return None

        if self.is_board_empty:
            if not is_edge(coords):
                return PlacementReason.FIRST_DIE_NOT_ON_EDGE
            return None

        if ignore_adjacency:
            return None
        if any(not self.cell(nbr).is_empty for nbr in _neighbors(coords, _DIAGONAL)):
            return None
        return PlacementReason.NOT_ADJACENT

    def can_place_die(self, coords: Coords, die: Die) -> bool:
        return self.placement_violation(coords, die) is None

    def legal_placements(self, die: Die) -> list[Coords]:
        return [coords for coords in all_coords() if self.can_place_die(coords, die)]

    def has_legal_placement(self, dice: list[Die]) -> bool:
        return any(self.legal_placements(die) for die in dice)

    def place_die(self, coords: Coords, die: Die) -> None:
        reason = self.placement_violation(coords, die)
        if reason is not None:
            raise IllegalPlacement(reason, coords)
        self.cell(coords).die = die

    # -- scoring ---------------------------------------------------------

    def score_breakdown(self, objectives: list[Objective]) -> ScoreBreakdown:
        return score_board(self.die_grid(), self.secret, self.tokens, objectives)

    def score(self, objectives: list[Objective]) -> int:
        return self.score_breakdown(objectives).total

    def render(self) -> str:
        """Plain-text grid, one row per line."""
        return "\n".join(" ".join(str(cell) for cell in row) for row in self.board)
