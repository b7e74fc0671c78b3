"""Services for document loading, flow conversion, and table rendering."""

from mflow.services.document_loader import (
    Document,
    FlowSource,
    SourceLine,
    load_document,
    parse_document,
)
from mflow.services.flow_converter import ConversionResult, FlowConverter, convert_file
from mflow.services.html_renderer import HtmlRenderer, render_html, save_html
from mflow.services.table_export import (
    grid_to_csv,
    grid_to_dataframe,
    recover_work_labels,
    save_csv,
)

__all__ = [
    "Document",
    "FlowSource",
    "SourceLine",
    "load_document",
    "parse_document",
    "ConversionResult",
    "FlowConverter",
    "convert_file",
    "HtmlRenderer",
    "render_html",
    "save_html",
    "grid_to_csv",
    "grid_to_dataframe",
    "recover_work_labels",
    "save_csv",
]
