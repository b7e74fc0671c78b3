"""Tests for placing cells into the grid."""

import pytest

from mflow.core.cells import parse_cell
from mflow.core.columns import ColumnRegistry
from mflow.core.constants import CellKind
from mflow.core.errors import BuilderStateError, SelfTransitionError, UnknownColumnError
from mflow.core.grid import GridBuilder, build_grid
from mflow.core.models import Cell

HEADER = "[A] ab [B] bc [C]"

SAMPLE_BODY = [
    "[Browser]",
    "visit page",
    "fill in form",
    "#click submit",
    "[JS]POST (http://example.com/Api/?[form data])",
    "post form data",
    "[PHP]",
    "save form data",
    "reply message (message: posted)",
    "[JS]JSON",
    "extract message from JSON",
    "show in HTML",
    "[Browser]",
    "close message",
    "finish",
]


@pytest.fixture
def registry():
    return ColumnRegistry.from_header(HEADER)


@pytest.fixture
def sample_registry():
    return ColumnRegistry.from_header("[Browser] input [JS] request [PHP]")


def texts(row):
    return [cell.text if cell else None for cell in row]


class TestWorkPlacement:
    """Tests for work step placement."""

    def test_first_work_creates_row(self, registry):
        grid = build_grid(registry, ["x1"])
        assert len(grid) == 1
        assert texts(grid[0]) == ["1, x1", None, None, None, None]

    def test_consecutive_work_stacks_rows(self, registry):
        grid = build_grid(registry, ["a1", "a2", "a3"])
        assert len(grid) == 3
        assert [row[0].label for row in grid] == ["a1", "a2", "a3"]

    def test_sequence_numbers_increase_by_one(self, registry):
        lines = ["a", "[B]", "b", "b2", "[C]go", "c", "[A]", "a2"]
        grid = build_grid(registry, lines)
        numbers = sorted(cell.sequence_number for cell in grid.work_cells())
        assert numbers == list(range(1, 6))

    def test_prefix_shows_sequence_number(self, registry):
        builder = GridBuilder(registry)
        first = builder.feed_line("one")
        second = builder.feed_line("two")
        assert first.prefix == "1, "
        assert second.text == "2, two"
        assert builder.work_counter == 2

    def test_leading_arrow_to_first_lane_keeps_one_row(self, registry):
        grid = build_grid(registry, ["[A]", "a1"])
        assert len(grid) == 1
        assert grid[0][0].label == "a1"


class TestArrowPlacement:
    """Tests for arrow placement."""

    def test_fixture_fills_single_row(self):
        registry = ColumnRegistry.from_header("[A] • [B] • [C]")
        grid = build_grid(registry, ["x1", "[B]", "y1", "[C]go", "z1"])

        assert len(grid) == 1
        assert texts(grid[0]) == ["1, x1", "⇒", "2, y1", "⇒[go]⇒", "3, z1"]

    def test_arrow_lands_on_midpoint(self, registry):
        builder = GridBuilder(registry)
        builder.feed_line("a")
        arrow = builder.feed_line("[C]jump")

        row = builder.active_row
        assert row[2] is arrow
        assert arrow.kind is CellKind.ARROW
        assert arrow.text == "⇒[jump]⇒"

    def test_skipped_lanes_get_fillers(self, registry):
        grid = build_grid(registry, ["a", "[C]"])
        row = grid[0]
        assert row[1].kind is CellKind.DUMMY_ARROW
        assert row[3].kind is CellKind.DUMMY_ARROW
        assert row[1].label == "⇒"
        assert row[2].kind is CellKind.ARROW
        assert row[2].text == "⇒"

    def test_arrow_moves_current_lane(self, registry):
        builder = GridBuilder(registry)
        assert builder.current_column == "A"
        builder.feed_line("[B]")
        assert builder.current_column == "B"
        assert builder.continuation_open is True

    def test_leftward_arrow_uses_left_glyph(self, registry):
        grid = build_grid(registry, ["a", "[C]", "c", "[A]back", "a2"])
        last = grid[-1]

        assert texts(last) == ["3, a2", "⇐", "⇐[back]⇐", "⇐", "2, c"]

    def test_every_row_has_full_width(self, registry):
        grid = build_grid(registry, ["a", "[C]", "c", "[A]back", "a2", "[B]", "b"])
        assert all(len(row) == len(registry) for row in grid)


class TestCollisionAvoidance:
    """Tests for row insertion when an arrow lane is taken."""

    def test_collision_moves_source_cell_down(self, registry):
        grid = build_grid(registry, ["a", "[C]", "c", "[A]back"])

        assert len(grid) == 3
        moved = grid[2][4]
        assert moved.kind is CellKind.WORK
        assert moved.label == "c"
        assert grid[0][4].kind is CellKind.DUMMY_WORK
        assert grid[1][4].kind is CellKind.DUMMY_WORK
        assert grid[0][4].label == "↓"

    def test_moved_cell_appears_once(self, registry):
        grid = build_grid(registry, ["a", "[C]", "c", "[A]back"])
        found = [cell for row in grid for cell in row if cell is not None and cell.label == "c"]
        assert len(found) == 1

    def test_spacer_between_vertically_adjacent_arrows(self, sample_registry):
        grid = build_grid(sample_registry, SAMPLE_BODY)

        # "[JS]JSON" shares lane 3 with "[PHP]" two rows up, separated by a marker row
        assert grid[2][3].text == "⇒"
        assert grid[3][3] is None
        assert grid[3][4].kind is CellKind.DUMMY_WORK
        assert grid[4][3].text == "⇐[JSON]⇐"
        assert grid[4][4].label == "reply message"

    def test_occupied_lane_adds_at_most_two_rows(self, registry):
        builder = GridBuilder(registry)
        for line in ["a", "[C]", "c"]:
            builder.feed_line(line)

        before = len(builder.grid)
        assert builder.active_row.is_occupied(2)
        builder.feed_line("[A]")
        added = len(builder.grid) - before
        assert 1 <= added <= 2

    def test_free_lane_adds_no_rows(self, registry):
        builder = GridBuilder(registry)
        builder.feed_line("a")
        before = len(builder.grid)
        builder.feed_line("[B]")
        assert len(builder.grid) == before

    def test_sample_document_layout(self, sample_registry):
        grid = build_grid(sample_registry, SAMPLE_BODY)

        assert len(grid) == 7
        assert grid[2][0].highlighted is True
        assert grid[2][1].text == "⇒[POST]⇒"
        assert grid[2][1].detail == "http://example.com/Api/?[form data]"
        assert grid[5][1].text == "⇐"
        assert grid[6][0].text == "10, finish"


class TestSelfTransition:
    """Tests for arrows to the current lane."""

    def test_self_transition_places_nothing(self, registry):
        builder = GridBuilder(registry)
        builder.feed_line("a")
        builder.feed_line("[A]")

        assert list(builder.grid.arrow_cells()) == []
        assert builder.current_column == "A"
        assert builder.continuation_open is False

    def test_work_after_self_transition_gets_new_row(self, registry):
        grid = build_grid(registry, ["a", "[A]", "b"])
        assert grid[-1][0].label == "b"
        assert [cell.label for cell in grid.work_cells()] == ["a", "b"]

    def test_strict_mode_raises(self, registry):
        builder = GridBuilder(registry, strict_self_transitions=True)
        builder.feed_line("a")
        with pytest.raises(SelfTransitionError) as exc_info:
            builder.feed_line("[A]again", 2)
        assert exc_info.value.line_number == 2
        assert exc_info.value.raw_line == "[A]again"


class TestUnknownColumn:
    """Tests for arrows to undefined lanes."""

    def test_error_carries_context(self, registry):
        with pytest.raises(UnknownColumnError) as exc_info:
            build_grid(registry, ["a", "", "[Nope]go"], first_line_number=2)

        error = exc_info.value
        assert error.tag == "Nope"
        assert error.line_number == 4
        assert error.raw_line == "[Nope]go"

    def test_builder_stops_after_error(self, registry):
        builder = GridBuilder(registry)
        builder.feed_line("a", 1)
        with pytest.raises(UnknownColumnError):
            builder.feed_line("[Nope]", 2)

        with pytest.raises(BuilderStateError):
            builder.feed_line("b", 3)
        with pytest.raises(BuilderStateError):
            builder.finish()
        assert builder.work_counter == 1


class TestIndependentFlows:
    """Tests for builder isolation."""

    def test_builders_do_not_share_state(self, registry):
        first = GridBuilder(registry)
        second = GridBuilder(registry)
        first.feed_line("a")
        first.feed_line("[B]")

        cell = parse_cell("x")
        second.feed(cell)

        assert cell.sequence_number == 1
        assert second.current_column == "A"
        assert len(second.grid) == 1
        assert len(first.grid) == 1

    def test_feeding_filler_kind_is_rejected(self, registry):
        builder = GridBuilder(registry)
        with pytest.raises(ValueError):
            builder.feed(Cell(kind=CellKind.DUMMY_ARROW))
