"""Flow conversion service: document text to rendered tables."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mflow.config import Settings, get_settings
from mflow.core.columns import ColumnRegistry
from mflow.core.constants import HeaderDialect
from mflow.core.errors import MalformedHeaderError
from mflow.core.grid import GridBuilder
from mflow.core.models import Grid
from mflow.services.document_loader import Document, FlowSource, load_document, parse_document
from mflow.services.html_renderer import HtmlRenderer, save_html
from mflow.services.table_export import save_csv

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionResult:
    """Grids built from one document.

    Attributes:
        document: The segmented source document.
        grids: One grid per flow, in document order.
    """

    document: Document
    grids: list[Grid] = field(default_factory=list)

    @property
    def title(self) -> str:
        """Page title for the rendered output."""
        return self.document.name


class FlowConverter:
    """Converts flow documents into grids and writes rendered output.

    Every flow gets its own column registry and grid builder, so flows in
    one document never share lanes, counters or cursors.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        dialect: HeaderDialect | None = None,
        strict_self_transitions: bool | None = None,
    ) -> None:
        """Initialize the flow converter.

        Args:
            settings: Application settings.
            dialect: Header dialect override. Defaults to settings value.
            strict_self_transitions: Self-transition override. Defaults to
                settings value.
        """
        self._settings = settings or get_settings()
        self.dialect = dialect or self._settings.header_dialect
        self.strict_self_transitions = (
            self._settings.strict_self_transitions
            if strict_self_transitions is None
            else strict_self_transitions
        )
        self._renderer = HtmlRenderer()

    def build_flow(self, flow: FlowSource) -> Grid:
        """Build the grid of one flow.

        Args:
            flow: Raw flow text from the loader.

        Returns:
            The completed Grid, titled after the flow.

        Raises:
            MalformedHeaderError: If the flow header has no lanes.
            UnknownColumnError: If an arrow names an undefined lane.
            SelfTransitionError: In strict mode, on an arrow to the current lane.
        """
        try:
            registry = ColumnRegistry.from_header(
                flow.header,
                flow.dialect,
                delimiter=self._settings.delimiter,
            )
        except MalformedHeaderError:
            logger.error("Flow %r: bad header on line %d", flow.title, flow.header_line_number)
            raise

        builder = GridBuilder(registry, strict_self_transitions=self.strict_self_transitions)
        builder.feed_all((line.number, line.text) for line in flow.body)
        grid = builder.finish()
        grid.title = flow.title

        logger.info(
            "Built flow %r: %d lanes, %d rows, %d steps",
            flow.title,
            len(registry),
            len(grid),
            builder.work_counter,
        )
        return grid

    def convert_document(self, document: Document) -> ConversionResult:
        """Build the grids of every flow in a document.

        Args:
            document: The segmented document.

        Returns:
            ConversionResult holding one grid per flow.
        """
        grids = [self.build_flow(flow) for flow in document.flows]
        return ConversionResult(document=document, grids=grids)

    def convert_text(self, text: str, name: str = "") -> ConversionResult:
        """Build grids from document text.

        Args:
            text: Full document text.
            name: Document name.

        Returns:
            ConversionResult holding one grid per flow.
        """
        document = parse_document(
            text,
            name,
            dialect=self.dialect,
            delimiter=self._settings.delimiter,
        )
        return self.convert_document(document)

    def convert_file(self, input_path: Path | str) -> ConversionResult:
        """Build grids from a document file.

        Args:
            input_path: Path to the document.

        Returns:
            ConversionResult holding one grid per flow.
        """
        logger.info("Reading flow document: %s", input_path)
        document = load_document(
            input_path,
            dialect=self.dialect,
            delimiter=self._settings.delimiter,
        )
        return self.convert_document(document)

    def render_html(self, result: ConversionResult) -> str:
        """Render a conversion result as an HTML page."""
        return self._renderer.render(result.title, result.grids, result.document.trailing_text)

    def write_html(self, result: ConversionResult, output_path: Path | str) -> Path:
        """Render and save a conversion result as HTML.

        Args:
            result: The conversion result.
            output_path: Path of the HTML file.

        Returns:
            The written path.
        """
        output_path = Path(output_path)
        save_html(self.render_html(result), output_path)
        return output_path

    def write_csv(self, result: ConversionResult, output_dir: Path | str) -> list[Path]:
        """Save every flow of a conversion result as a CSV file.

        Files are named after the document; when a document has several
        flows each file gets the 1-based flow number as a suffix.

        Args:
            result: The conversion result.
            output_dir: Directory for the CSV files.

        Returns:
            Paths of the written files.
        """
        output_dir = Path(output_dir)
        paths: list[Path] = []
        for number, grid in enumerate(result.grids, start=1):
            suffix = f"_{number}" if len(result.grids) > 1 else ""
            path = output_dir / f"{result.title}{suffix}.csv"
            save_csv(grid, path)
            paths.append(path)
        return paths


def convert_file(
    input_path: Path | str,
    output_path: Path | str | None = None,
    settings: Settings | None = None,
) -> Path:
    """Convert a flow document to an HTML page.

    This is a convenience function that creates a FlowConverter instance.

    Args:
        input_path: Path to the ``.mfw`` document.
        output_path: Path of the HTML file. Defaults to the input path with
            an ``.html`` extension.
        settings: Application settings.

    Returns:
        The written path.
    """
    input_path = Path(input_path)
    converter = FlowConverter(settings)
    result = converter.convert_file(input_path)
    if output_path is None:
        output_path = input_path.with_suffix(".html")
    return converter.write_html(result, output_path)
