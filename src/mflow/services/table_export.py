"""Tabular export of flow grids using pandas."""

import logging
import re
from pathlib import Path

import pandas as pd

from mflow.core.models import Column, Grid

logger = logging.getLogger(__name__)

EMPTY_CELL = ""

_SEQUENCE_PREFIX = re.compile(r"^(\d+), ")


def _unique_titles(columns: list[Column]) -> list[str]:
    """Make lane titles usable as DataFrame column names.

    Args:
        columns: Lanes in header order.

    Returns:
        Titles with ``.N`` suffixes on repeats and ``col-N`` for blanks.
    """
    seen: dict[str, int] = {}
    titles: list[str] = []
    for column in columns:
        title = column.title or f"col-{column.index}"
        count = seen.get(title, 0)
        seen[title] = count + 1
        titles.append(f"{title}.{count}" if count else title)
    return titles


def grid_to_dataframe(grid: Grid) -> pd.DataFrame:
    """Convert a grid into a DataFrame of displayed cell texts.

    Args:
        grid: The grid to convert.

    Returns:
        DataFrame with one column per lane and one row per grid row.
    """
    records = [[cell.text if cell else EMPTY_CELL for cell in row] for row in grid]
    return pd.DataFrame(records, columns=_unique_titles(grid.columns), dtype=str)


def grid_to_csv(grid: Grid) -> str:
    """Convert a grid into CSV text.

    Args:
        grid: The grid to convert.

    Returns:
        CSV text with a header row of lane titles.
    """
    return grid_to_dataframe(grid).to_csv(index=False)


def save_csv(grid: Grid, output_path: Path | str) -> None:
    """Save a grid as a CSV file.

    Args:
        grid: The grid to save.
        output_path: Path to save the file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    grid_to_dataframe(grid).to_csv(output_path, index=False, encoding="utf-8")
    logger.info("Saved CSV table to: %s", output_path)


def recover_work_labels(frame: pd.DataFrame) -> list[str]:
    """Read work step labels back out of an exported table.

    Work steps are recognised by their ``"<n>, "`` sequence prefix and
    returned in that order; arrows and markers are skipped. A step moved
    down by an inserted row can sit left of an earlier step in the same
    row, so reading order alone is not enough.

    Args:
        frame: Table produced by grid_to_dataframe.

    Returns:
        Work labels in reading order, without sequence prefixes.
    """
    steps: list[tuple[int, str]] = []
    for values in frame.fillna(EMPTY_CELL).itertuples(index=False):
        for text in values:
            match = _SEQUENCE_PREFIX.match(text)
            if match:
                steps.append((int(match.group(1)), text[match.end() :]))
    return [label for _, label in sorted(steps, key=lambda step: step[0])]
