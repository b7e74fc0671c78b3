"""Cell parser: classifies body lines into work and arrow cells."""

import re

from mflow.core.constants import WHITESPACE, CellKind
from mflow.core.models import Cell

_TAG = re.compile(r"^\[[^\]]+\]")
_DETAIL = re.compile(r"\([^()]+\)\s*$")

HIGHLIGHT_MARKER = "#"


def split_tag(text: str) -> tuple[str | None, str]:
    """Split a leading ``[lane]`` tag from a line.

    Args:
        text: The raw line.

    Returns:
        Tuple of (tag or None, remaining text).
    """
    match = _TAG.match(text)
    if match is None:
        return None, text
    tag = match.group(0)[1:-1].strip(WHITESPACE)
    return tag, text[match.end() :]


def split_detail(text: str) -> tuple[str, str | None]:
    """Split a trailing parenthesised group from a label.

    Args:
        text: Label text, possibly ending with ``(detail)``.

    Returns:
        Tuple of (remaining text, detail or None).
    """
    match = _DETAIL.search(text)
    if match is None:
        return text, None
    detail = match.group(0).strip(WHITESPACE + "()")
    return text[: match.start()], detail


def parse_cell(line: str) -> Cell:
    """Parse one body line into a cell.

    A line starting with ``[lane]`` is an arrow to that lane; anything else
    is a work step. A trailing ``(text)`` becomes the tooltip detail and a
    leading ``#`` highlights the cell.

    Args:
        line: A non-empty body line.

    Returns:
        The parsed Cell. Decorations and sequence numbers are left for the
        grid builder to assign.
    """
    tag, text = split_tag(line)
    kind = CellKind.WORK if tag is None else CellKind.ARROW

    text, detail = split_detail(text)

    highlighted = text.startswith(HIGHLIGHT_MARKER)
    if highlighted:
        text = text[len(HIGHLIGHT_MARKER) :]

    return Cell(
        kind=kind,
        label=text.strip(WHITESPACE),
        origin=line,
        destination_tag=tag or "",
        detail=detail,
        highlighted=highlighted,
    )
