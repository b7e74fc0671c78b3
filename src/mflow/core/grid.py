"""Grid builder: places parsed cells into rows and lanes.

Cells are consumed strictly in document order. Work steps stay in the lane
most recently entered; arrows move the active lane and are drawn in the
connector lane halfway between source and destination. When an arrow would
land on an occupied slot, a row is inserted and the source lane's last cell
is moved down into it, leaving a continuation marker behind.
"""

import logging
from collections.abc import Iterable

from mflow.core.cells import parse_cell
from mflow.core.columns import ColumnRegistry
from mflow.core.constants import CellKind, Direction, Glyph
from mflow.core.errors import BuilderStateError, SelfTransitionError, UnknownColumnError
from mflow.core.models import Cell, Grid, Row

logger = logging.getLogger(__name__)


def _continuation_marker() -> Cell:
    return Cell(kind=CellKind.DUMMY_WORK, label=Glyph.CONTINUATION.value)


def _arrow_filler(direction: Direction) -> Cell:
    return Cell(kind=CellKind.DUMMY_ARROW, label=direction.glyph.value)


def decorate_arrow(cell: Cell, direction: Direction) -> None:
    """Set the directional decorations of an arrow cell.

    Args:
        cell: The arrow to decorate.
        direction: Direction of the transition.
    """
    glyph = direction.glyph
    if cell.label:
        cell.prefix = f"{glyph}["
        cell.suffix = f"]{glyph}"
    else:
        cell.prefix = ""
        cell.suffix = ""
        cell.label = glyph.value


class GridBuilder:
    """Builds the grid of a single flow.

    One builder is created per flow; its counters and cursors are never
    shared with other flows.
    """

    def __init__(
        self,
        registry: ColumnRegistry,
        *,
        strict_self_transitions: bool = False,
    ) -> None:
        """Initialize the grid builder.

        Args:
            registry: Lanes of the flow.
            strict_self_transitions: Raise on arrows pointing at the current
                lane instead of ignoring them.
        """
        self.registry = registry
        self.strict_self_transitions = strict_self_transitions
        self.grid = Grid(columns=registry.columns)
        self.current_row: int | None = None
        self.current_index = 0
        self.continuation_open = True
        self.work_counter = 0
        self._failed = False

    @property
    def current_column(self) -> str:
        """Title of the lane most recently entered."""
        return self.registry[self.current_index].title

    @property
    def active_row(self) -> Row | None:
        """The row new cells are placed into."""
        if self.current_row is None:
            return None
        return self.grid[self.current_row]

    def feed_line(self, line: str, line_number: int | None = None) -> Cell:
        """Parse a body line and place the resulting cell.

        Args:
            line: A non-empty body line.
            line_number: 1-based position of the line in the document.

        Returns:
            The placed cell.
        """
        cell = parse_cell(line)
        self.feed(cell, line_number)
        return cell

    def feed(self, cell: Cell, line_number: int | None = None) -> None:
        """Place one cell.

        Args:
            cell: A work or arrow cell from the cell parser.
            line_number: 1-based position of the source line, for errors.

        Raises:
            UnknownColumnError: If an arrow points at an undefined lane.
            SelfTransitionError: In strict mode, if an arrow points at the
                current lane.
            BuilderStateError: If the builder has already failed.
        """
        if self._failed:
            raise BuilderStateError("Grid builder cannot continue after an error")

        try:
            if cell.kind is CellKind.WORK:
                self._place_work(cell)
            elif cell.kind is CellKind.ARROW:
                self._place_arrow(cell, line_number)
            else:
                raise ValueError(f"Cannot feed a {cell.kind} cell")
        except Exception:
            self._failed = True
            raise

    def feed_all(self, lines: Iterable[tuple[int, str]]) -> None:
        """Feed numbered lines in order.

        Args:
            lines: Pairs of (1-based line number, line text).
        """
        for line_number, line in lines:
            self.feed_line(line, line_number)

    def finish(self) -> Grid:
        """Get the completed grid.

        Raises:
            BuilderStateError: If building failed part way through.
        """
        if self._failed:
            raise BuilderStateError("Grid is incomplete, building failed")
        return self.grid

    def _new_active_row(self) -> Row:
        row = self.grid.append_row()
        self.current_row = len(self.grid) - 1
        return row

    def _place_work(self, cell: Cell) -> None:
        if not self.continuation_open or self.current_row is None:
            self._new_active_row()

        self.work_counter += 1
        cell.sequence_number = self.work_counter
        cell.prefix = f"{self.work_counter}, "
        self.active_row[self.current_index] = cell
        self.continuation_open = False

    def _insert_row(self) -> None:
        """Append a row and move the current lane's cell down into it."""
        previous = self.active_row
        row = self._new_active_row()
        if previous is None:
            row[self.current_index] = _continuation_marker()
            return
        row[self.current_index] = previous.take(self.current_index)
        previous[self.current_index] = _continuation_marker()
        logger.debug("Inserted row %d below lane %r", self.current_row, self.current_column)

    def _place_arrow(self, cell: Cell, line_number: int | None) -> None:
        destination = self.registry.index_of(cell.destination_tag)
        if destination is None:
            raise UnknownColumnError(cell.destination_tag, line_number, cell.origin)

        source = self.current_index
        left, right = min(source, destination), max(source, destination)
        lane = (left + right) // 2
        direction = Direction.RIGHT if source <= destination else Direction.LEFT

        if left == right and self.strict_self_transitions:
            raise SelfTransitionError(cell.destination_tag, line_number, cell.origin)

        decorate_arrow(cell, direction)

        if self.active_row is None or self.active_row.is_occupied(lane):
            self._insert_row()
        if self.current_row >= 1 and self.grid[self.current_row - 1].is_occupied(lane):
            # keep arrows in the same lane from touching vertically
            self._insert_row()

        if left == right:
            return

        row = self.active_row
        for index in range(left + 1, right):
            if index != lane:
                row[index] = _arrow_filler(direction)
        row[lane] = cell

        self.current_index = destination
        self.continuation_open = True


def build_grid(
    registry: ColumnRegistry,
    lines: Iterable[str],
    *,
    first_line_number: int = 1,
    strict_self_transitions: bool = False,
) -> Grid:
    """Build the grid for a sequence of body lines.

    Blank lines are skipped but still counted for line numbers.

    Args:
        registry: Lanes of the flow.
        lines: Body lines in document order.
        first_line_number: Line number of the first body line.
        strict_self_transitions: Raise on arrows to the current lane.

    Returns:
        The completed Grid.
    """
    builder = GridBuilder(registry, strict_self_transitions=strict_self_transitions)
    numbered = (
        (number, line)
        for number, line in enumerate(lines, start=first_line_number)
        if line.strip()
    )
    builder.feed_all(numbered)
    return builder.finish()
