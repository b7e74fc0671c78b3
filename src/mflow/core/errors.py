"""Exceptions raised while converting flow documents."""


class MflowError(Exception):
    """Base class for all mflow errors."""


class MalformedHeaderError(MflowError):
    """Raised when no lanes can be parsed from a header line."""

    def __init__(self, header: str, reason: str = "no lanes found") -> None:
        self.header = header
        self.reason = reason
        super().__init__(f"Malformed header ({reason}): {header!r}")


class UnknownColumnError(MflowError):
    """Raised when an arrow points at a lane the header does not define."""

    def __init__(self, tag: str, line_number: int | None, raw_line: str) -> None:
        self.tag = tag
        self.line_number = line_number
        self.raw_line = raw_line
        location = f"line {line_number}" if line_number is not None else "unknown line"
        super().__init__(f"Column not found: {tag!r} ({location}: {raw_line!r})")


class SelfTransitionError(MflowError):
    """Raised in strict mode when an arrow points at the lane it starts from."""

    def __init__(self, tag: str, line_number: int | None, raw_line: str) -> None:
        self.tag = tag
        self.line_number = line_number
        self.raw_line = raw_line
        location = f"line {line_number}" if line_number is not None else "unknown line"
        super().__init__(f"Arrow to current column {tag!r} ({location}: {raw_line!r})")


class BuilderStateError(MflowError):
    """Raised when a grid builder is used after it has failed."""


class DocumentLoadError(MflowError):
    """Raised when a flow document cannot be read or segmented."""
