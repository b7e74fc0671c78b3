"""HTML table rendering service.

Renders flow grids as a standalone HTML page:
- One table per flow with the lane titles as header cells
- Work steps as bordered white cells, highlighted steps in yellow
- Arrows as centered, borderless cells (boxed when crossing a work lane)
- Tooltips for cells carrying detail text
- Leading empty cells shaded gray so each row starts at its first step
"""

import html
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from mflow.core.constants import HIGHLIGHT_COLOR
from mflow.core.models import Cell, Grid

logger = logging.getLogger(__name__)

STYLESHEET = """\
body {
	background-color: #EEEEEE;
	font-size: 18px;
}
table {
	border-spacing: 0;
	margin: 16px;
	border-collapse: collapse;
}
th {
	background-color: white !important;
	padding: 8px;
	border: 1px solid black;
}
th, td {
	margin: 0;
	vertical-align: top;
}
.work {
	border-right: 1px solid black;
	border-left: 1px solid black;
	background-color: white;
}
.arrow {
	background-color: rgba(0,0,0,0);
	text-align: center;
	font-size: 80%;
}
.left.work {
	background-color: #CCC;
}
.left.arrow {
	background-color: #AAA;
}
#tip {
	display: none;
	position: absolute;
	background-color: #DEF;
	border: 1px solid black;
	padding: 8px;
	pointer-events: none;
}
"""

SCRIPT = """\
function showTip(e, text){
	tip.textContent = text
	tip.style.left = (e.clientX+1) + 'px'
	tip.style.top = (e.clientY+1) + 'px'
	tip.style.display = 'block'
}
function hideTip(){
	tip.style.display = 'none'
}
"""

ARROW_BOX_STYLE = "border-top:1px solid black; border-bottom:1px solid black;"


def _tip_events(detail: str) -> str:
    """Build the tooltip event attributes for a cell.

    Args:
        detail: The tooltip text.

    Returns:
        Attribute string, starting with a space.
    """
    call = html.escape(f"showTip(event, {json.dumps(detail, ensure_ascii=False)})")
    return f' onmouseover="{call}" onmouseout="hideTip()"'


class HtmlRenderer:
    """Renders flow grids as HTML tables.

    Each call renders independently; the renderer keeps no state between
    documents.
    """

    def __init__(self, *, highlight_color: str = HIGHLIGHT_COLOR) -> None:
        """Initialize the HTML renderer.

        Args:
            highlight_color: Background of ``#``-marked work cells.
        """
        self.highlight_color = highlight_color

    def render(
        self,
        title: str,
        grids: Sequence[Grid],
        trailing_text: str = "",
    ) -> str:
        """Render a full HTML page.

        Args:
            title: Page title, usually the document name.
            grids: Flow grids in document order.
            trailing_text: Free text appended verbatim after the tables.

        Returns:
            HTML page source.
        """
        escaped_title = html.escape(title)
        parts = [
            "<!DOCTYPE html>",
            f"<title>{escaped_title}</title>",
            '<meta charset="utf-8">',
            f"<style>\n{STYLESHEET}</style>",
            f"<script>\n{SCRIPT}</script>",
            '<div id="tip"></div>',
            f"<h1>{escaped_title}</h1>",
        ]

        for grid in grids:
            if len(grids) > 1 and grid.title:
                parts.append(f"<h2>{html.escape(grid.title)}</h2>")
            parts.append(self.render_table(grid))

        page = "\n".join(parts)
        if trailing_text:
            page += trailing_text
        return page

    def render_table(self, grid: Grid) -> str:
        """Render one grid as an HTML table.

        Args:
            grid: The grid to render.

        Returns:
            HTML table source.
        """
        lines = ["<table>", "<tr>"]
        for column in grid.columns:
            lines.append(f'\t<th class="col-{column.index}">{html.escape(column.title)}</th>')
        lines.append("</tr>")

        for row_index, row in enumerate(grid):
            lines.append("<tr>")
            leading = True
            for col_index, cell in enumerate(row):
                if cell is None:
                    lines.append(self._format_empty(grid, row_index, col_index, leading=leading))
                else:
                    leading = False
                    lines.append(self._format_cell(grid, cell, row_index, col_index))
            lines.append("</tr>")

        lines.append("</table>")
        return "\n".join(lines) + "\n"

    def _format_cell(self, grid: Grid, cell: Cell, row_index: int, col_index: int) -> str:
        """Format a filled cell as a table data element.

        Args:
            grid: The grid being rendered.
            cell: The cell to format.
            row_index: Row position of the cell.
            col_index: Lane position of the cell.

        Returns:
            HTML ``td`` element.
        """
        style = ""
        if cell.is_work:
            css_class = "work"
            if cell.highlighted:
                style = f"background-color:{self.highlight_color};"
        else:
            css_class = "arrow"
            if grid.columns[col_index].is_work:
                style = ARROW_BOX_STYLE

        events = _tip_events(cell.detail) if cell.detail else ""
        content = html.escape(cell.text)
        if cell.detail:
            content = f'<a href="#"{events}>{content}</a>'

        return (
            f'\t<td class="{css_class} col-{col_index} row-{row_index}" '
            f'style="{style}"{events}>{content}</td>'
        )

    def _format_empty(
        self,
        grid: Grid,
        row_index: int,
        col_index: int,
        *,
        leading: bool,
    ) -> str:
        """Format an empty slot.

        Args:
            grid: The grid being rendered.
            row_index: Row position of the slot.
            col_index: Lane position of the slot.
            leading: Whether no filled cell precedes the slot in its row.

        Returns:
            HTML ``td`` element.
        """
        classes = ["empty", "work" if grid.columns[col_index].is_work else "arrow"]
        if leading:
            classes.append("left")
        classes.extend([f"col-{col_index}", f"row-{row_index}"])
        return f'\t<td class="{" ".join(classes)}"></td>'


def render_html(title: str, grids: Sequence[Grid], trailing_text: str = "") -> str:
    """Render flow grids as an HTML page.

    This is a convenience function that creates an HtmlRenderer instance.

    Args:
        title: Page title.
        grids: Flow grids in document order.
        trailing_text: Free text appended after the tables.

    Returns:
        HTML page source.
    """
    return HtmlRenderer().render(title, grids, trailing_text)


def save_html(page: str, output_path: Path | str) -> None:
    """Save an HTML page to a file.

    Args:
        page: The HTML source.
        output_path: Path to save the file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(page, encoding="utf-8")
    logger.info("Saved HTML table to: %s", output_path)
