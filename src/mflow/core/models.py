"""Domain models for lane-based flow tables."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from mflow.core.constants import CellKind, ColumnKind


@dataclass(frozen=True, slots=True)
class Column:
    """Represents a lane in a flow header.

    Attributes:
        index: Position of the lane, left to right.
        kind: Whether the lane holds work steps or connectors.
        title: Lane name as written in the header.
    """

    index: int
    kind: ColumnKind
    title: str

    @property
    def is_work(self) -> bool:
        """Check if this lane holds work steps."""
        return self.kind is ColumnKind.WORK


@dataclass(slots=True)
class Cell:
    """Represents a single entry of the grid.

    Attributes:
        kind: Work step, arrow, or one of the filler kinds.
        label: Text shown in the cell, without decorations.
        origin: The raw source line the cell was parsed from.
        destination_tag: Lane an arrow points to (arrows only).
        detail: Optional tooltip text.
        highlighted: Whether the cell was marked with ``#``.
        sequence_number: Order number of a work step (work only).
        prefix: Decoration shown before the label.
        suffix: Decoration shown after the label.
    """

    kind: CellKind
    label: str = ""
    origin: str = ""
    destination_tag: str = ""
    detail: str | None = None
    highlighted: bool = False
    sequence_number: int | None = None
    prefix: str = ""
    suffix: str = ""

    @property
    def text(self) -> str:
        """Get the displayed text including decorations."""
        return f"{self.prefix}{self.label}{self.suffix}"

    @property
    def is_work(self) -> bool:
        """Check if this cell renders in the work style."""
        return self.kind in (CellKind.WORK, CellKind.DUMMY_WORK)

    @property
    def is_arrow(self) -> bool:
        """Check if this cell renders in the arrow style."""
        return self.kind in (CellKind.ARROW, CellKind.DUMMY_ARROW)


class Row:
    """A fixed-width slice of the grid with one optional cell per lane."""

    __slots__ = ("_slots",)

    def __init__(self, width: int) -> None:
        self._slots: list[Cell | None] = [None] * width

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Cell | None]:
        return iter(self._slots)

    def __getitem__(self, index: int) -> Cell | None:
        return self._slots[index]

    def __setitem__(self, index: int, cell: Cell | None) -> None:
        self._slots[index] = cell

    def __repr__(self) -> str:
        texts = [cell.text if cell else "_" for cell in self._slots]
        return f"Row({texts!r})"

    def is_occupied(self, index: int) -> bool:
        """Check whether a lane of this row already holds a cell."""
        return self._slots[index] is not None

    def take(self, index: int) -> Cell | None:
        """Move a cell out of the row, leaving the slot empty.

        Args:
            index: Lane to empty.

        Returns:
            The cell that was in the slot, or None.
        """
        cell = self._slots[index]
        self._slots[index] = None
        return cell


@dataclass(slots=True)
class Grid:
    """Ordered, append-only sequence of rows for one flow.

    Attributes:
        columns: Lanes of the flow, in header order.
        rows: Rows built so far.
        title: Optional flow title shown above the table.
    """

    columns: list[Column]
    rows: list[Row] = field(default_factory=list)
    title: str = ""

    @property
    def width(self) -> int:
        """Number of lanes in every row."""
        return len(self.columns)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def append_row(self) -> Row:
        """Append an empty row and return it."""
        row = Row(self.width)
        self.rows.append(row)
        return row

    def work_cells(self) -> Iterator[Cell]:
        """Yield work cells in row-major order."""
        for row in self.rows:
            for cell in row:
                if cell is not None and cell.kind is CellKind.WORK:
                    yield cell

    def arrow_cells(self) -> Iterator[Cell]:
        """Yield arrow cells in row-major order."""
        for row in self.rows:
            for cell in row:
                if cell is not None and cell.kind is CellKind.ARROW:
                    yield cell
