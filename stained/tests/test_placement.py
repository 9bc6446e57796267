"""
Tests for board placement rules.

Tests:
- Bounds and occupancy
- Slot constraints
- Orthogonal color and face conflicts
- Edge rule for the first die
- Adjacency, with and without the tool modifier
"""

import pytest

from ..catalog.dice import Color, Die
from ..catalog.templates import Slot, get_template_by_name
from ..engine_core.errors import IllegalPlacement, InvalidIndex, PlacementReason, WrongPhaseAction
from ..engine_core.player import PlayerState, ToolModifier, all_coords, is_edge


def _seed_corner(player: PlayerState) -> None:
    """Place R1 in the top-left corner."""
    player.place_die((0, 0), Die(Color.RED, 1))


class TestFirstDie:
    """Tests for the first placement on an empty board."""

    def test_first_die_must_touch_edge(self, blank_player):
        assert blank_player.placement_violation((1, 1), Die(Color.RED, 1)) == (
            PlacementReason.FIRST_DIE_NOT_ON_EDGE
        )
        assert blank_player.placement_violation((2, 3), Die(Color.RED, 1)) == (
            PlacementReason.FIRST_DIE_NOT_ON_EDGE
        )

    def test_any_edge_cell_is_legal(self, blank_player):
        die = Die(Color.RED, 1)
        for coords in [(0, 0), (0, 2), (3, 4), (2, 0), (1, 4)]:
            assert blank_player.can_place_die(coords, die)

    def test_fourteen_edge_cells(self, blank_player):
        assert len(blank_player.legal_placements(Die(Color.BLUE, 4))) == 14

    def test_edge_rule_holds_with_modifier(self, blank_player):
        """Ignoring adjacency does not lift the first-die edge rule."""
        blank_player.active_tool = ToolModifier.IGNORE_ADJACENCY
        assert blank_player.placement_violation((1, 2), Die(Color.RED, 1)) == (
            PlacementReason.FIRST_DIE_NOT_ON_EDGE
        )
        assert blank_player.legal_placements(Die(Color.RED, 1)) == [
            coords for coords in all_coords() if is_edge(coords)
        ]


class TestBoundsAndOccupancy:
    """Tests for out-of-range and occupied cells."""

    @pytest.mark.parametrize("coords", [(-1, 0), (0, -1), (4, 0), (0, 5), (9, 9)])
    def test_out_of_bounds(self, blank_player, coords):
        assert blank_player.placement_violation(coords, Die(Color.RED, 1)) == (
            PlacementReason.OUT_OF_BOUNDS
        )

    def test_occupied(self, blank_player):
        _seed_corner(blank_player)
        assert blank_player.placement_violation((0, 0), Die(Color.BLUE, 4)) == (
            PlacementReason.CELL_OCCUPIED
        )


class TestSlots:
    """Tests for template slot constraints."""

    def test_color_slot(self, blank_player):
        blank_player.board[0][0].slot = Slot.require_color(Color.BLUE)
        assert blank_player.placement_violation((0, 0), Die(Color.RED, 1)) == (
            PlacementReason.COLOR_MISMATCH
        )
        assert blank_player.can_place_die((0, 0), Die(Color.BLUE, 1))

    def test_face_slot(self, blank_player):
        blank_player.board[0][0].slot = Slot.require_face(5)
        assert blank_player.placement_violation((0, 0), Die(Color.RED, 1)) == (
            PlacementReason.FACE_MISMATCH
        )
        assert blank_player.can_place_die((0, 0), Die(Color.RED, 5))


class TestNeighbors:
    """Tests for orthogonal conflicts and adjacency."""

    def test_orthogonal_same_color_forbidden(self, blank_player):
        _seed_corner(blank_player)
        assert blank_player.placement_violation((0, 1), Die(Color.RED, 4)) == (
            PlacementReason.NEIGHBOR_COLOR_MATCH
        )
        assert blank_player.placement_violation((1, 0), Die(Color.RED, 4)) == (
            PlacementReason.NEIGHBOR_COLOR_MATCH
        )

    def test_orthogonal_same_face_forbidden(self, blank_player):
        _seed_corner(blank_player)
        assert blank_player.placement_violation((0, 1), Die(Color.GREEN, 1)) == (
            PlacementReason.NEIGHBOR_FACE_MATCH
        )

    def test_orthogonal_distinct_die_allowed(self, blank_player):
        _seed_corner(blank_player)
        assert blank_player.can_place_die((0, 1), Die(Color.GREEN, 2))

    def test_diagonal_match_allowed(self, blank_player):
        """Only orthogonal neighbors must differ."""
        _seed_corner(blank_player)
        assert blank_player.can_place_die((1, 1), Die(Color.RED, 1))

    def test_isolated_die_forbidden(self, blank_player):
        _seed_corner(blank_player)
        assert blank_player.placement_violation((2, 2), Die(Color.GREEN, 2)) == (
            PlacementReason.NOT_ADJACENT
        )
        assert blank_player.placement_violation((0, 4), Die(Color.GREEN, 2)) == (
            PlacementReason.NOT_ADJACENT
        )

    def test_modifier_lifts_adjacency(self, blank_player):
        _seed_corner(blank_player)
        blank_player.active_tool = ToolModifier.IGNORE_ADJACENCY
        assert blank_player.can_place_die((2, 2), Die(Color.GREEN, 2))

    def test_modifier_keeps_orthogonal_conflicts(self, blank_player):
        _seed_corner(blank_player)
        blank_player.active_tool = ToolModifier.IGNORE_ADJACENCY
        assert not blank_player.can_place_die((0, 1), Die(Color.RED, 5))


class TestPlaceDie:
    """Tests for committing placements."""

    def test_check_is_read_only(self, blank_player):
        """Asking twice gives the same answer and leaves the board alone."""
        die = Die(Color.GREEN, 3)
        first = blank_player.placement_violation((1, 1), die)
        second = blank_player.placement_violation((1, 1), die)
        assert first == second
        assert blank_player.is_board_empty

    def test_place_die_writes_cell(self, blank_player):
        die = Die(Color.GREEN, 3)
        blank_player.place_die((3, 2), die)
        assert blank_player.cell((3, 2)).die == die
        assert blank_player.empty_cell_count == 19

    def test_illegal_place_raises_with_reason(self, blank_player):
        with pytest.raises(IllegalPlacement) as exc_info:
            blank_player.place_die((1, 1), Die(Color.GREEN, 3))
        assert exc_info.value.reason == PlacementReason.FIRST_DIE_NOT_ON_EDGE
        assert blank_player.is_board_empty


class TestSelectTemplate:
    """Tests for adopting a template."""

    def test_select_copies_slots_and_tokens(self):
        virtus = get_template_by_name("Virtus")
        player = PlayerState(secret=Color.GREEN, templates=[virtus])
        player.select_template(0)
        assert player.tokens == 5
        assert player.selected_template == virtus
        assert player.cell((0, 0)).slot == Slot.require_face(4)
        assert str(player.cell((0, 1))) == "__"

    def test_select_twice_fails(self):
        virtus = get_template_by_name("Virtus")
        player = PlayerState(secret=Color.GREEN, templates=[virtus])
        player.select_template(0)
        with pytest.raises(WrongPhaseAction):
            player.select_template(0)

    def test_select_out_of_range(self):
        player = PlayerState(secret=Color.GREEN, templates=[get_template_by_name("Virtus")])
        with pytest.raises(InvalidIndex):
            player.select_template(1)
        assert player.selected_template is None
