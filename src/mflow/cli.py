"""Command-line interface for mflow."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from mflow import __version__
from mflow.config import get_settings
from mflow.core.constants import HeaderDialect
from mflow.core.errors import (
    DocumentLoadError,
    MalformedHeaderError,
    SelfTransitionError,
    UnknownColumnError,
)
from mflow.services.flow_converter import FlowConverter
from mflow.utils.logging import get_logger, setup_logging

logger = get_logger("cli")

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_MALFORMED_HEADER = 2
EXIT_BAD_TRANSITION = 3
EXIT_UNEXPECTED = 4


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="mflow",
        description="Convert .mfw flow descriptions to HTML tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Document format:
  [Browser] input [JS] request [PHP]     first line: lanes
  [Browser]                              [lane] moves to a lane
  visit page                             other lines are work steps
  #click submit                          # highlights a step
  [JS]POST (http://example.com/api)      (text) becomes a tooltip
  ---                                    free text follows

Examples:
  mflow flow.mfw
  mflow flow.mfw -o ./tables --format csv
  mflow flow.mfw --dialect delimited
        """,
    )

    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to the .mfw document to convert",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: next to the input file)",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["html", "csv"],
        default=None,
        help="Output format (default: html)",
    )

    parser.add_argument(
        "--dialect",
        choices=[dialect.value for dialect in HeaderDialect],
        default=None,
        help="Header syntax (default: auto)",
    )

    parser.add_argument(
        "--strict-self-transitions",
        action="store_true",
        default=None,
        help="Treat arrows to the current lane as errors",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def convert_flow_file(
    input_file: Path,
    output_dir: Path,
    *,
    output_format: str = "html",
    dialect: HeaderDialect | None = None,
    strict_self_transitions: bool | None = None,
) -> int:
    """Convert a flow document and write the rendered tables.

    Nothing is written unless every flow in the document builds.

    Args:
        input_file: Path to the .mfw document.
        output_dir: Directory for output files.
        output_format: ``html`` or ``csv``.
        dialect: Header dialect override.
        strict_self_transitions: Self-transition override.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    converter = FlowConverter(
        dialect=dialect,
        strict_self_transitions=strict_self_transitions,
    )

    try:
        result = converter.convert_file(input_file)

        if output_format == "csv":
            paths = converter.write_csv(result, output_dir)
        else:
            paths = [converter.write_html(result, output_dir / f"{input_file.stem}.html")]

        for path in paths:
            logger.info("Generated: %s", path)
        return EXIT_OK

    except DocumentLoadError as e:
        logger.error("Could not load document: %s", e)
        return EXIT_BAD_INPUT
    except MalformedHeaderError as e:
        logger.error("Header error: %s", e)
        return EXIT_MALFORMED_HEADER
    except UnknownColumnError as e:
        logger.error(
            "Error: line %s, %s\nColumn not found: %s",
            e.line_number,
            e.raw_line,
            e.tag,
        )
        return EXIT_BAD_TRANSITION
    except SelfTransitionError as e:
        logger.error(
            "Error: line %s, %s\nArrow points at its own column: %s",
            e.line_number,
            e.raw_line,
            e.tag,
        )
        return EXIT_BAD_TRANSITION
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return EXIT_UNEXPECTED


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    log_level = "DEBUG" if args.verbose else settings.log_level
    setup_logging(level=log_level, log_file=settings.log_file)

    input_file: Path = args.input_file
    if input_file.suffix.lower() != settings.file_extension.lower():
        logger.error("Invalid file type. Expected a %s file", settings.file_extension)
        return EXIT_BAD_INPUT

    if not input_file.exists():
        logger.error("Input file not found: %s", input_file)
        return EXIT_BAD_INPUT

    output_dir = args.output or settings.output_dir or input_file.resolve().parent
    output_dir = Path(output_dir).resolve()

    return convert_flow_file(
        input_file=input_file.resolve(),
        output_dir=output_dir,
        output_format=args.format or settings.output_format,
        dialect=HeaderDialect(args.dialect) if args.dialect else None,
        strict_self_transitions=args.strict_self_transitions,
    )


if __name__ == "__main__":
    sys.exit(main())
