"""
CLI command for validating Terraform HCL for a Datadog dashboard.

Runs the syntax, structure, provider and style passes and prints findings
grouped as errors, warnings and suggestions.
"""

from __future__ import annotations

import argparse
import json

from dashhcl.cli.convert import read_input
from dashhcl.cli.ux import console, error, header, success, warning
from dashhcl.config.loader import load_registry
from dashhcl.config.settings import get_settings
from dashhcl.core.errors import ExitCode, main_with_error_handling
from dashhcl.validation import Finding, HCLValidator, ValidationReport

GROUPS = (
    ("Errors", "error", "✗"),
    ("Warnings", "warning", "⚠"),
    ("Suggestions", "info", "ℹ"),
)


@main_with_error_handling()
def validate_command(
    input_path: str,
    output_format: str = "text",
    widget_config: str | None = None,
) -> int:
    """
    Validate an HCL file.

    Args:
        input_path: HCL file, or "-" for stdin
        output_format: "text" or "json"
        widget_config: Widget mapping document supplying the known widget kinds

    Returns:
        Exit code (0 when valid, 12 when errors were found)
    """
    source = load_registry(widget_config)
    text = read_input(input_path)

    report = HCLValidator.default(
        registry=source.registry,
        max_line_length=get_settings().max_line_length,
    ).validate(text)

    if output_format == "json":
        console.print_json(json.dumps(report.to_dict()))
    else:
        if source.is_degraded:
            warning(f"Using built-in widget mappings: {source.reason}")
        _print_report(report)

    return ExitCode.SUCCESS if report.is_valid else ExitCode.VALIDATION_ERROR


def _print_report(report: ValidationReport) -> None:
    header("HCL Validation")

    by_style = {
        "error": report.errors,
        "warning": report.warnings,
        "info": report.infos,
    }
    for title, style, icon in GROUPS:
        findings = by_style[style]
        if not findings:
            continue
        console.print(f"\n[bold]{title} ({len(findings)})[/bold]")
        for finding in findings:
            _print_finding(finding, style, icon)

    console.print()
    console.print(
        f"[muted]Errors:[/muted] {report.error_count}  "
        f"[muted]Warnings:[/muted] {report.warning_count}  "
        f"[muted]Suggestions:[/muted] {report.info_count}  "
        f"[muted]Score:[/muted] {report.score}"
    )

    if report.is_valid:
        success(report.summary)
    else:
        error(report.summary)


def _print_finding(finding: Finding, style: str, icon: str) -> None:
    console.print(f"  [{style}]{icon}[/{style}] {finding.title}")
    console.print(f"      {finding.description}", soft_wrap=True)
    console.print(f"      [muted]→ {finding.location}[/muted]")


def register_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the validate subcommand."""
    parser = subparsers.add_parser(
        "validate",
        help="Validate Terraform HCL for a Datadog dashboard",
    )
    parser.add_argument("input_path", help='HCL file, or "-" for stdin')
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--widget-config",
        help="Widget mapping document (YAML or JSON)",
    )


def handle_validate_command(args: argparse.Namespace) -> int:
    """Handle the validate subcommand."""
    return validate_command(
        input_path=args.input_path,
        output_format=getattr(args, "output_format", "text"),
        widget_config=getattr(args, "widget_config", None),
    )
