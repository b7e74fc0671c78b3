"""Core domain models and layout logic."""

from mflow.core.cells import parse_cell
from mflow.core.columns import ColumnRegistry, detect_dialect
from mflow.core.constants import CellKind, ColumnKind, Direction, Glyph, HeaderDialect
from mflow.core.errors import (
    BuilderStateError,
    DocumentLoadError,
    MalformedHeaderError,
    MflowError,
    SelfTransitionError,
    UnknownColumnError,
)
from mflow.core.grid import GridBuilder, build_grid
from mflow.core.models import Cell, Column, Grid, Row

__all__ = [
    "parse_cell",
    "ColumnRegistry",
    "detect_dialect",
    "CellKind",
    "ColumnKind",
    "Direction",
    "Glyph",
    "HeaderDialect",
    "BuilderStateError",
    "DocumentLoadError",
    "MalformedHeaderError",
    "MflowError",
    "SelfTransitionError",
    "UnknownColumnError",
    "GridBuilder",
    "build_grid",
    "Cell",
    "Column",
    "Grid",
    "Row",
]
