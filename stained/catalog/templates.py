"""
Board Templates - the printed window patterns players build on.

Each template card is two-sided; a player is dealt one card and keeps
one of its sides for the whole match. A side is a 4x5 grid of slots
plus the number of favor tokens the player starts with.

Grid rows are written as five-character strings:
- "." any die
- "R", "Y", "G", "B", "P" a die of that color
- "1".."6" a die showing that face
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..config import BOARD_COLS, BOARD_ROWS
from .dice import Color, Die


class SlotKind(Enum):
    ANY = "any"
    COLOR = "color"
    FACE = "face"


@dataclass(frozen=True)
class Slot:
    """A placement constraint printed on one board cell."""
    kind: SlotKind = SlotKind.ANY
    color: Color | None = None
    face: int | None = None

    @classmethod
    def any(cls) -> Slot:
        return cls()

    @classmethod
    def require_color(cls, color: Color) -> Slot:
        return cls(kind=SlotKind.COLOR, color=color)

    @classmethod
    def require_face(cls, face: int) -> Slot:
        return cls(kind=SlotKind.FACE, face=face)

    @classmethod
    def parse(cls, code: str) -> Slot:
        if code == ".":
            return cls.any()
        if code.isdigit():
            return cls.require_face(int(code))
        return cls.require_color(Color.from_letter(code))

    def accepts(self, die: Die) -> bool:
        if self.kind == SlotKind.COLOR:
            return die.color == self.color
        if self.kind == SlotKind.FACE:
            return die.face == self.face
        return True

    def __str__(self) -> str:
        if self.kind == SlotKind.COLOR:
            return f"{self.color}_"
        if self.kind == SlotKind.FACE:
            return f"_{self.face}"
        return "__"


@dataclass(frozen=True)
class BoardTemplate:
    """One side of a template card."""
    name: str
    slots: tuple[tuple[Slot, ...], ...]
    value: int

    @classmethod
    def from_rows(cls, name: str, value: int, rows: list[str]) -> BoardTemplate:
        if len(rows) != BOARD_ROWS or any(len(row) != BOARD_COLS for row in rows):
            raise ValueError(f"Template {name} must be {BOARD_ROWS}x{BOARD_COLS}")
        slots = tuple(tuple(Slot.parse(code) for code in row) for row in rows)
        return cls(name=name, slots=slots, value=value)

    def slot_at(self, row: int, col: int) -> Slot:
        return self.slots[row][col]


@dataclass(frozen=True)
class TemplateCard:
    front: BoardTemplate
    back: BoardTemplate

    @property
    def sides(self) -> list[BoardTemplate]:
        return [self.front, self.back]


def _card(front: BoardTemplate, back: BoardTemplate) -> TemplateCard:
    return TemplateCard(front=front, back=back)


_T = BoardTemplate.from_rows

ALL_TEMPLATE_CARDS: tuple[TemplateCard, ...] = (
    _card(
        _T("Bellesguard", 3, ["B6..Y", ".3B..", ".562.", ".4.1G"]),
        _T("Batllo", 5, ["..6..", ".5B4.", "3GYP2", "14R53"]),
    ),
    _card(
        _T("Fractal Drops", 3, [".4.Y6", "R.2..", "..RP1", "BY..."]),
        _T("Ripples of Light", 5, ["...R5", "..P4B", ".B3Y6", "Y2G1R"]),
    ),
    _card(
        _T("Luz Celestial", 3, ["..R5.", "P4.G3", "6..B.", ".Y2.."]),
        _T("Fulgor del Cielo", 5, [".BR..", ".45.B", "B2.R5", "6R31."]),
    ),
    _card(
        _T("Sun Catcher", 3, [".B2.Y", ".4.R.", "..5Y.", "G3..P"]),
        _T("Shadow Thief", 5, ["6P..5", "5.P..", "R6.P.", "YR543"]),
    ),
    _card(
        _T("Symphony of Light", 6, ["2.5.1", "Y6P2R", ".B4G.", ".3.5."]),
        _T("Virtus", 5, ["4.25G", "..6G2", ".3G4.", "5G1.."]),
    ),
    _card(
        _T("Aurorae Magnificus", 5, ["5GBP2", "P...Y", "Y.6.P", "1..G4"]),
        _T("Aurora Sagradis", 4, ["R.B.Y", "4P3G2", ".1.5.", "..6.."]),
    ),
    _card(
        _T("Industria", 5, ["1R3.6", "54R2.", "..5R1", "...3R"]),
        _T("Via Lux", 4, ["Y.6..", ".15.2", "3YRP.", "..43R"]),
    ),
    _card(
        _T("Sun's Glory", 6, ["1PY.4", "PY..6", "Y..53", ".5421"]),
        _T("Firelight", 5, ["3415.", ".62.Y", "...YR", "5.YR6"]),
    ),
    _card(
        _T("Lux Mundi", 6, ["..1..", "1G3B2", "B546G", ".B5G."]),
        _T("Lux Astram", 5, [".1GP4", "6P25G", "1G53P", "....."]),
    ),
    _card(
        _T("Water of Life", 6, ["6B..1", ".5B..", "4R2B.", "G6Y3P"]),
        _T("Gravitas", 5, ["1.3B.", ".2B..", "6B.4.", "B52.1"]),
    ),
    _card(
        _T("Firmitas", 5, ["P6..3", "5P3..", ".2P1.", ".15P4"]),
        _T("Kaleidoscopic Dream", 4, ["YB..1", "G.5.4", "3.R.G", "2..BY"]),
    ),
    _card(
        _T("Chromatic Splendor", 4, ["..G..", "2Y5B1", ".R3P.", "1.6.4"]),
        _T("Comitas", 5, ["Y.2.6", ".4.5Y", "...Y5", "12Y3."]),
    ),
)


def get_template_by_name(name: str) -> BoardTemplate | None:
    for card in ALL_TEMPLATE_CARDS:
        for side in card.sides:
            if side.name == name:
                return side
    return None
