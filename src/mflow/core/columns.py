"""Column registry: parses flow headers into ordered lanes."""

import logging
import re
from collections.abc import Iterator

from mflow.core.constants import DEFAULT_DELIMITER, WHITESPACE, ColumnKind, HeaderDialect
from mflow.core.errors import MalformedHeaderError
from mflow.core.models import Column

logger = logging.getLogger(__name__)

_BRACKET_WORK_TOKENS = re.compile(r"\[[^\]]+\]|[^\[]+")
_BRACKET_CONNECTOR_TOKENS = re.compile(r"\[[^\]]+\]|\([^)]+\)|[^\[(]+")


def detect_dialect(header: str, delimiter: str = DEFAULT_DELIMITER) -> HeaderDialect:
    """Guess the dialect of a header line.

    Args:
        header: The header text.
        delimiter: Separator used by the delimited dialect.

    Returns:
        The detected dialect (never AUTO).
    """
    if delimiter and delimiter in header:
        return HeaderDialect.DELIMITED
    if "[" in header:
        return HeaderDialect.BRACKET_WORK
    return HeaderDialect.BRACKET_CONNECTOR


def _is_enclosed(token: str) -> bool:
    return (token.startswith("[") and token.endswith("]")) or (
        token.startswith("(") and token.endswith(")")
    )


def _clean_title(token: str) -> str:
    return token.strip(WHITESPACE + "[]()")


def _split_bracket_work(header: str) -> list[tuple[ColumnKind, str]]:
    lanes = []
    for token in _BRACKET_WORK_TOKENS.findall(header):
        kind = ColumnKind.WORK if token.startswith("[") else ColumnKind.CONNECTOR
        lanes.append((kind, token.strip(WHITESPACE + "[]")))
    return lanes


def _split_bracket_connector(header: str) -> list[tuple[ColumnKind, str]]:
    lanes = []
    for token in _BRACKET_CONNECTOR_TOKENS.findall(header):
        kind = ColumnKind.CONNECTOR if _is_enclosed(token) else ColumnKind.WORK
        lanes.append((kind, _clean_title(token)))
    return lanes


def _split_delimited(header: str, delimiter: str) -> list[tuple[ColumnKind, str]]:
    lanes = []
    for n, token in enumerate(header.split(delimiter)):
        kind = ColumnKind.WORK if n % 2 == 0 else ColumnKind.CONNECTOR
        lanes.append((kind, _clean_title(token)))
    return lanes


class ColumnRegistry:
    """Ordered lanes of one flow with lookup by name.

    The registry is built once per flow and never changes afterwards. Lane
    index order encodes the topology used to compute arrow direction and
    placement.
    """

    def __init__(self, columns: list[Column]) -> None:
        """Initialize the registry.

        Args:
            columns: Lanes in header order.

        Raises:
            MalformedHeaderError: If no lanes are given.
        """
        if not columns:
            raise MalformedHeaderError("", "no lanes found")

        self._columns = list(columns)
        self._by_name: dict[str, int] = {}
        for column in self._columns:
            if not column.title:
                continue
            if column.title in self._by_name:
                logger.warning(
                    "Duplicate lane title %r, arrows will resolve to lane %d",
                    column.title,
                    column.index,
                )
            self._by_name[column.title] = column.index

    @classmethod
    def from_header(
        cls,
        header: str,
        dialect: HeaderDialect = HeaderDialect.BRACKET_WORK,
        *,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> "ColumnRegistry":
        """Parse a header line into a registry.

        Args:
            header: The header text.
            dialect: Header syntax to apply. AUTO detects it from the text.
            delimiter: Separator for the delimited dialect.

        Returns:
            A new ColumnRegistry.

        Raises:
            MalformedHeaderError: If no lanes can be parsed.
        """
        text = header.strip(WHITESPACE)
        if not text:
            raise MalformedHeaderError(header, "header is empty")

        if dialect is HeaderDialect.AUTO:
            dialect = detect_dialect(text, delimiter)

        if dialect is HeaderDialect.BRACKET_WORK:
            lanes = _split_bracket_work(text)
        elif dialect is HeaderDialect.BRACKET_CONNECTOR:
            lanes = _split_bracket_connector(text)
        elif dialect is HeaderDialect.DELIMITED:
            if not delimiter:
                raise MalformedHeaderError(header, "delimiter is empty")
            lanes = _split_delimited(text, delimiter)
        else:
            raise MalformedHeaderError(header, f"unknown dialect {dialect!r}")

        if not any(title for _, title in lanes):
            raise MalformedHeaderError(header)

        columns = [Column(index=n, kind=kind, title=title) for n, (kind, title) in enumerate(lanes)]
        logger.debug(
            "Parsed %d lanes (%s): %s",
            len(columns),
            dialect,
            ", ".join(column.title for column in columns),
        )
        return cls(columns)

    @property
    def columns(self) -> list[Column]:
        """Get the lanes in header order."""
        return list(self._columns)

    @property
    def work_columns(self) -> list[Column]:
        """Get the lanes that hold work steps."""
        return [column for column in self._columns if column.is_work]

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, index: int) -> Column:
        return self._columns[index]

    def index_of(self, name: str) -> int | None:
        """Find the index of a lane by its title.

        Args:
            name: The lane title to search for.

        Returns:
            The lane index if found, None otherwise.
        """
        return self._by_name.get(name)

    def get(self, name: str) -> Column | None:
        """Find a lane by its title.

        Args:
            name: The lane title to search for.

        Returns:
            The Column if found, None otherwise.
        """
        index = self._by_name.get(name)
        return None if index is None else self._columns[index]
