"""Constants and enumerations for the mflow application."""

from enum import StrEnum


class ColumnKind(StrEnum):
    """Kinds of lanes in a flow header."""

    WORK = "work"
    CONNECTOR = "connector"


class CellKind(StrEnum):
    """Kinds of cells placed in the grid."""

    WORK = "work"
    ARROW = "arrow"
    DUMMY_WORK = "dummy_work"
    DUMMY_ARROW = "dummy_arrow"


class HeaderDialect(StrEnum):
    """Accepted header syntaxes."""

    AUTO = "auto"
    BRACKET_WORK = "work-brackets"
    BRACKET_CONNECTOR = "connector-brackets"
    DELIMITED = "delimited"


class Glyph(StrEnum):
    """Glyphs used to decorate arrows and continuation markers."""

    RIGHT = "⇒"
    LEFT = "⇐"
    CONTINUATION = "↓"


class Direction(StrEnum):
    """Direction of a transition between two lanes."""

    RIGHT = "right"
    LEFT = "left"

    @property
    def glyph(self) -> Glyph:
        """Filler glyph drawn for this direction."""
        return Glyph.RIGHT if self is Direction.RIGHT else Glyph.LEFT


# Characters trimmed from labels and titles (includes the full-width space)
WHITESPACE = " 　\t\r\n"

# Ends the body of a document; everything after it is free text
BODY_DELIMITER = "---"

# Starts a new flow in a multi-flow document
FLOW_SEPARATOR = "==="

DEFAULT_DELIMITER = "|"

MFW_EXTENSION = ".mfw"

# Background applied to highlighted (``#``-prefixed) work cells
HIGHLIGHT_COLOR = "yellow"
