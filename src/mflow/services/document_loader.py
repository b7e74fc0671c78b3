"""Loader for ``.mfw`` flow documents.

A document holds one or more flows. Each flow has a header line naming its
lanes followed by body lines (arrows and work steps). A line reading ``---``
ends the body; everything after it is free text appended below the tables.
A line starting with ``===`` begins a new flow whose title is the rest of
that line.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mflow.core.columns import detect_dialect
from mflow.core.constants import (
    BODY_DELIMITER,
    DEFAULT_DELIMITER,
    FLOW_SEPARATOR,
    WHITESPACE,
    HeaderDialect,
)
from mflow.core.errors import DocumentLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceLine:
    """A non-blank body line and its 1-based position in the document."""

    number: int
    text: str


@dataclass(slots=True)
class FlowSource:
    """Raw text of one flow.

    Attributes:
        title: Flow title (document name for single-flow documents).
        header: The header line naming the lanes.
        header_line_number: 1-based position of the header line.
        dialect: Header dialect to parse the header with.
        body: Non-blank body lines in document order.
    """

    title: str
    header: str = ""
    header_line_number: int = 0
    dialect: HeaderDialect = HeaderDialect.BRACKET_WORK
    body: list[SourceLine] = field(default_factory=list)


@dataclass(slots=True)
class Document:
    """A segmented flow document.

    Attributes:
        name: Document name, usually the file stem.
        flows: Flows in document order.
        trailing_text: Free text following the body delimiter, verbatim.
    """

    name: str
    flows: list[FlowSource] = field(default_factory=list)
    trailing_text: str = ""


def _flow_title(line: str) -> str:
    return line[len(FLOW_SEPARATOR) :].strip(WHITESPACE + "=")


def parse_document(
    text: str,
    name: str = "",
    *,
    dialect: HeaderDialect = HeaderDialect.AUTO,
    delimiter: str = DEFAULT_DELIMITER,
) -> Document:
    """Split document text into flows and trailing text.

    Args:
        text: Full document text.
        name: Document name used as the title of an untitled flow.
        dialect: Header dialect for every flow, or AUTO to detect per flow.
        delimiter: Lane separator for the delimited dialect.

    Returns:
        The segmented Document.

    Raises:
        DocumentLoadError: If the document has no header line.
    """
    lines = text.removeprefix("\ufeff").splitlines()
    document = Document(name=name)
    current: FlowSource | None = None

    for index, line in enumerate(lines):
        number = index + 1
        stripped = line.strip(WHITESPACE)

        if stripped == BODY_DELIMITER:
            document.trailing_text = "\n".join(lines[index + 1 :])
            break

        if stripped.startswith(FLOW_SEPARATOR):
            current = FlowSource(title=_flow_title(stripped) or f"{name} ({len(document.flows) + 1})")
            document.flows.append(current)
            continue

        if not stripped:
            continue

        if current is None:
            current = FlowSource(title=name)
            document.flows.append(current)

        if not current.header:
            current.header = stripped
            current.header_line_number = number
        else:
            current.body.append(SourceLine(number=number, text=line))

    if not document.flows:
        raise DocumentLoadError(f"Document {name!r} has no header line")

    for flow in document.flows:
        if not flow.header:
            raise DocumentLoadError(f"Flow {flow.title!r} has no header line")
        flow.dialect = (
            detect_dialect(flow.header, delimiter) if dialect is HeaderDialect.AUTO else dialect
        )

    logger.debug(
        "Loaded document %r: %d flow(s), %d body line(s)",
        name,
        len(document.flows),
        sum(len(flow.body) for flow in document.flows),
    )
    return document


def load_document(
    path: Path | str,
    *,
    dialect: HeaderDialect = HeaderDialect.AUTO,
    delimiter: str = DEFAULT_DELIMITER,
) -> Document:
    """Read and segment a flow document.

    Args:
        path: Path to the document.
        dialect: Header dialect for every flow, or AUTO to detect per flow.
        delimiter: Lane separator for the delimited dialect.

    Returns:
        The segmented Document, named after the file stem.

    Raises:
        DocumentLoadError: If the file cannot be read or has no header.
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Flow document not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Failed to read {path}: {e}") from e

    return parse_document(text, path.stem, dialect=dialect, delimiter=delimiter)
