"""
CLI command for converting a Datadog dashboard export to Terraform HCL.

Reads JSON from a file or stdin and writes HCL to stdout or a file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dashhcl.cli.ux import error, info, status_console, success, warning
from dashhcl.config.loader import load_registry
from dashhcl.config.settings import get_settings
from dashhcl.converter import Converter
from dashhcl.core.errors import ConfigurationError, ExitCode, main_with_error_handling
from dashhcl.validation import HCLValidator

DEFAULT_OUTPUT_FILENAME = "datadog-dashboard.tf"
STDIN = "-"


def read_input(input_path: str, max_bytes: int | None = None) -> str:
    """Read a text input, ``-`` meaning stdin.

    Raises:
        ConfigurationError: If the file is missing or larger than ``max_bytes``
    """
    max_bytes = max_bytes if max_bytes is not None else get_settings().max_input_bytes

    if input_path == STDIN:
        text = sys.stdin.read()
        size = len(text.encode("utf-8"))
    else:
        path = Path(input_path)
        if not path.is_file():
            raise ConfigurationError(f"Input file not found: {input_path}")
        size = path.stat().st_size
        text = None

    if size > max_bytes:
        raise ConfigurationError(
            f"Input is too large ({size} bytes, limit {max_bytes} bytes)",
            details={"path": input_path},
        )
    return text if text is not None else path.read_text(encoding="utf-8")


def resolve_output_path(output: str) -> Path:
    """Directories get the default file name."""
    path = Path(output)
    if path.is_dir():
        return path / DEFAULT_OUTPUT_FILENAME
    return path


@main_with_error_handling()
def convert_command(
    input_path: str,
    output: str | None = None,
    widget_config: str | None = None,
    validate: bool = False,
    preserve_case: bool = False,
) -> int:
    """
    Convert a dashboard JSON export to HCL.

    Args:
        input_path: Dashboard JSON file, or "-" for stdin
        output: Output file or directory (stdout when omitted)
        widget_config: Widget mapping document overriding the search order
        validate: Lint the generated HCL and report findings
        preserve_case: Keep letter case in the derived resource name

    Returns:
        Exit code (0 success, 1 when validation found errors)
    """
    source = load_registry(widget_config)
    result = Converter(source, preserve_case=preserve_case).convert_text(read_input(input_path))

    for message in result.warnings:
        warning(message)

    if output:
        path = resolve_output_path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.hcl, encoding="utf-8")
        success(f"Wrote {result.resource_name} to {path}")
    else:
        sys.stdout.write(result.hcl)
        sys.stdout.flush()

    if not validate:
        return ExitCode.SUCCESS

    info("Validating generated HCL")
    report = HCLValidator.default(
        registry=source.registry,
        max_line_length=get_settings().max_line_length,
    ).validate(result.hcl)
    for finding in report.findings:
        where = f" [muted]({finding.location})[/muted]" if finding.location else ""
        status_console.print(f"  {finding.severity.value}: {finding.title}{where}", soft_wrap=True)

    if report.is_valid:
        success(report.summary)
        return ExitCode.SUCCESS
    error(report.summary)
    return ExitCode.WARNING


def register_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the convert subcommand."""
    parser = subparsers.add_parser(
        "convert",
        help="Convert a Datadog dashboard JSON export to Terraform HCL",
    )
    parser.add_argument("input_path", help='Dashboard JSON file, or "-" for stdin')
    parser.add_argument(
        "-o",
        "--output",
        help=f"Output file or directory (default file name: {DEFAULT_OUTPUT_FILENAME})",
    )
    parser.add_argument(
        "--widget-config",
        help="Widget mapping document (YAML or JSON)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the generated HCL",
    )
    parser.add_argument(
        "--preserve-case",
        action="store_true",
        help="Keep letter case in the resource name",
    )


def handle_convert_command(args: argparse.Namespace) -> int:
    """Handle the convert subcommand."""
    return convert_command(
        input_path=args.input_path,
        output=getattr(args, "output", None),
        widget_config=getattr(args, "widget_config", None),
        validate=getattr(args, "validate", False),
        preserve_case=getattr(args, "preserve_case", False),
    )
