"""Tests for the per-cell evolution rule and cell state accessors.

Covers the decision table for every cell type, the Highlander reprieve
budget, threshold handling and mood/type validation.
"""

import pytest

from extgol.core.board import Board
from extgol.core.cell import Cell
from extgol.core.coord import Coord
from extgol.core.errors import InconsistentBoard, InvalidMoodOrType
from extgol.core.generation import Generation
from extgol.core.rules import (
    CellType,
    Mood,
    REPRIEVE_EXHAUSTED,
    next_state,
    rule_table,
    thresholds_for,
)


def make_cell(alive=True, cell_type=CellType.BASIC):
    return Cell(Coord(0, 0), alive=alive, cell_type=cell_type)


class TestBasicRules:
    """Classic Conway behaviour for BASIC cells."""

    @pytest.mark.parametrize("neighbors", range(9))
    def test_live_cell(self, neighbors):
        """Live cell survives with 2-3 neighbours, dies otherwise."""
        assert make_cell(alive=True).evolve(neighbors) is (neighbors in (2, 3))

    @pytest.mark.parametrize("neighbors", range(9))
    def test_dead_cell(self, neighbors):
        """Dead cell is born with exactly 3 neighbours."""
        assert make_cell(alive=False).evolve(neighbors) is (neighbors == 3)

    def test_evolve_does_not_write_alive_flag(self):
        """The engine commits the alive flag, not evolve()."""
        cell = make_cell(alive=True)
        assert cell.evolve(0) is False
        assert cell.alive is True

    @pytest.mark.parametrize("neighbors", [-1, 9])
    def test_impossible_neighbor_count(self, neighbors):
        with pytest.raises(ValueError, match="between 0 and 8"):
            make_cell().evolve(neighbors)


class TestLonerAndSocial:
    """Threshold changes of LONER and SOCIAL cells."""

    def test_loner_survives_with_one_neighbor(self):
        """Would die under BASIC rules."""
        cell = make_cell(cell_type=CellType.LONER)
        assert cell.min_threshold == 1
        assert cell.evolve(1) is True
        assert cell.evolve(0) is False
        assert cell.evolve(4) is False

    @pytest.mark.parametrize("neighbors", range(2, 9))
    def test_social_survives_up_to_eight(self, neighbors):
        cell = make_cell(cell_type=CellType.SOCIAL)
        assert cell.max_threshold == 8
        assert cell.evolve(neighbors) is True

    def test_social_still_dies_alone(self):
        assert make_cell(cell_type=CellType.SOCIAL).evolve(1) is False

    @pytest.mark.parametrize("cell_type", list(CellType))
    def test_birth_is_type_invariant(self, cell_type):
        """Dead cell with exactly 3 neighbours is born whatever its type."""
        assert make_cell(alive=False, cell_type=cell_type).evolve(3) is True

    def test_custom_max_blocks_birth(self):
        """Out-of-range counts are checked before birth."""
        assert next_state(False, 3, CellType.BASIC, 0, 2).alive is False
        assert next_state(False, 3, CellType.BASIC, 0, 3).alive is True


class TestHighlander:
    """Reprieve budget of HIGHLANDER cells."""

    def test_three_reprieves_then_death(self):
        """skippedGen goes 0 -> 1 -> 2 -> 3, the 4th time the cell dies."""
        cell = make_cell(cell_type=CellType.HIGHLANDER)

        for expected in (1, 2, 3):
            assert cell.evolve(0) is True
            assert cell.skipped_gen == expected

        assert cell.evolve(0) is False
        assert cell.skipped_gen == REPRIEVE_EXHAUSTED

    def test_overpopulation_also_reprieved(self):
        cell = make_cell(cell_type=CellType.HIGHLANDER)
        assert cell.evolve(6) is True
        assert cell.skipped_gen == 1

    def test_normal_range_keeps_counter(self):
        cell = make_cell(cell_type=CellType.HIGHLANDER)
        cell.evolve(0)
        assert cell.evolve(2) is True
        assert cell.skipped_gen == 1

    def test_exhausted_immunity_is_permanent(self):
        """Once at -1, no reprieve is ever granted again."""
        cell = make_cell(cell_type=CellType.HIGHLANDER)
        for _ in range(4):
            cell.evolve(7)
        assert cell.skipped_gen == REPRIEVE_EXHAUSTED

        assert cell.evolve(3) is True
        assert cell.skipped_gen == REPRIEVE_EXHAUSTED
        assert cell.evolve(0) is False
        assert cell.skipped_gen == REPRIEVE_EXHAUSTED

    def test_dead_highlander_reprieve_revives_it(self):
        """Reprieve applies to dead Highlanders too."""
        cell = make_cell(alive=False, cell_type=CellType.HIGHLANDER)
        assert cell.evolve(0) is True
        assert cell.skipped_gen == 1

    def test_dead_highlander_in_range_stays_dead(self):
        cell = make_cell(alive=False, cell_type=CellType.HIGHLANDER)
        assert cell.evolve(2) is False
        assert cell.skipped_gen == 0

    def test_exhausted_dead_highlander_stays_dead(self):
        outcome = next_state(False, 0, CellType.HIGHLANDER, skipped_gen=3)
        assert outcome == (False, REPRIEVE_EXHAUSTED)

    def test_reassigning_highlander_resets_counter(self):
        cell = make_cell(cell_type=CellType.HIGHLANDER)
        cell.evolve(0)
        cell.evolve(0)
        cell.cell_type = CellType.HIGHLANDER
        assert cell.skipped_gen == 0

    def test_other_types_ignore_counter(self):
        cell = make_cell(cell_type=CellType.BASIC)
        cell.skipped_gen = 2
        assert cell.evolve(0) is False
        assert cell.skipped_gen == 2

    def test_decide_leaves_cell_untouched(self):
        cell = make_cell(cell_type=CellType.HIGHLANDER)
        outcome = cell.decide(0)
        assert outcome.alive is True
        assert outcome.skipped_gen == 1
        assert cell.skipped_gen == 0


class TestRuleTable:
    """Test rule table generation per type."""

    def test_basic_table(self):
        rules = rule_table(CellType.BASIC)

        # 2 states x 9 neighbour counts
        assert len(rules) == 18
        assert rules[(True, 2)] is True
        assert rules[(True, 3)] is True
        assert rules[(True, 1)] is False
        assert rules[(True, 4)] is False
        assert rules[(False, 3)] is True
        assert rules[(False, 2)] is False

    def test_type_specific_entries(self):
        assert rule_table(CellType.LONER)[(True, 1)] is True
        assert rule_table(CellType.SOCIAL)[(True, 8)] is True
        assert rule_table(CellType.HIGHLANDER)[(True, 0)] is True
        assert rule_table(CellType.HIGHLANDER)[(False, 0)] is True
        assert rule_table(CellType.HIGHLANDER)[(False, 2)] is False
        assert rule_table("basic")[(True, 0)] is False


class TestThresholds:
    """Threshold assignment and invariants."""

    @pytest.mark.parametrize("cell_type,expected", [
        (CellType.BASIC, (2, 3)),
        (CellType.HIGHLANDER, (2, 3)),
        (CellType.LONER, (1, 3)),
        (CellType.SOCIAL, (2, 8)),
    ])
    def test_type_thresholds(self, cell_type, expected):
        cell = make_cell(cell_type=cell_type)
        assert (cell.min_threshold, cell.max_threshold) == expected
        assert thresholds_for(cell_type) == expected

    def test_retyping_resets_thresholds(self):
        cell = make_cell(cell_type=CellType.SOCIAL)
        cell.cell_type = CellType.LONER
        assert (cell.min_threshold, cell.max_threshold) == (1, 3)

    def test_min_cannot_exceed_max(self):
        cell = make_cell()
        with pytest.raises(ValueError):
            cell.min_threshold = 4
        with pytest.raises(ValueError):
            cell.set_thresholds(3, 2)
        assert (cell.min_threshold, cell.max_threshold) == (2, 3)

    def test_custom_thresholds(self):
        cell = make_cell()
        cell.max_threshold = 5
        assert cell.evolve(5) is True

    def test_skipped_gen_lower_bound(self):
        with pytest.raises(ValueError):
            make_cell().skipped_gen = -2


class TestMoodAndType:
    """Setter validation for moods and types."""

    def test_defaults(self):
        cell = Cell(Coord(1, 2))
        assert cell.alive is False
        assert cell.life_points == 0
        assert cell.mood is Mood.NAIVE
        assert cell.cell_type is CellType.BASIC
        assert cell.skipped_gen == 0
        assert cell.generations == ()
        assert (cell.x, cell.y) == (1, 2)

    def test_names_accepted(self):
        cell = make_cell()
        cell.mood = "vampire"
        cell.cell_type = "Loner"
        assert cell.mood is Mood.VAMPIRE
        assert cell.cell_type is CellType.LONER

    @pytest.mark.parametrize("value", ["WIZARD", 3, None])
    def test_unknown_mood_rejected(self, value):
        cell = make_cell()
        with pytest.raises(InvalidMoodOrType):
            cell.mood = value
        assert cell.mood is Mood.NAIVE

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidMoodOrType):
            Cell(Coord(0, 0), cell_type="ZOMBIE")

    def test_invalid_mood_is_value_error(self):
        with pytest.raises(ValueError):
            make_cell().mood = "GRUMPY"


class TestNeighborCounting:
    """Counting live neighbours through the board."""

    def test_counts_only_live_cells(self):
        board = Board(3, 3)
        board.populate()
        for coord in [Coord(0, 0), Coord(2, 0), Coord(1, 2)]:
            board.cell_at(coord).alive = True

        center = board.cell_at(Coord(1, 1))
        assert center.count_alive_neighbors() == 3
        assert len(center.neighbors()) == 8

    def test_empty_tiles_count_zero(self):
        board = Board(3, 3)
        board.place_cell(Cell(Coord(1, 1)))
        board.place_cell(Cell(Coord(0, 0), alive=True))

        assert board.cell_at(Coord(1, 1)).count_alive_neighbors() == 1

    def test_center_not_counted(self):
        board = Board(3, 3)
        board.populate()
        center = board.cell_at(Coord(1, 1))
        center.alive = True
        assert center.count_alive_neighbors() == 0

    def test_detached_cell_has_no_tile(self):
        with pytest.raises(InconsistentBoard, match="not placed"):
            make_cell().count_alive_neighbors()


class TestHistory:
    """Generation history bookkeeping on a cell."""

    def test_history_is_append_only(self):
        cell = make_cell()
        cell.add_generation(Generation(1, (cell,)))
        cell.add_generation(Generation(2, (cell,)))

        with pytest.raises(ValueError, match="does not follow"):
            cell.add_generation(Generation(2, (cell,)))

        assert [g.index for g in cell.generations] == [1, 2]
        assert isinstance(cell.generations, tuple)
