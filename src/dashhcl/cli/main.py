"""
dashhcl command line.

Usage:
    dashhcl convert dashboard.json [-o main.tf] [--validate]
    dashhcl validate main.tf [--format json]
    dashhcl widgets
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from dashhcl import __version__
from dashhcl.cli.convert import handle_convert_command, register_convert_parser
from dashhcl.cli.validate import handle_validate_command, register_validate_parser
from dashhcl.cli.widgets import handle_widgets_command, register_widgets_parser
from dashhcl.config.settings import get_settings
from dashhcl.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashhcl",
        description="Convert Datadog dashboard JSON exports to Terraform HCL",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        help="Log level for structured logs on stderr (default: DASHHCL_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command")

    register_convert_parser(subparsers)
    register_validate_parser(subparsers)
    register_widgets_parser(subparsers)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    if args.command == "convert":
        sys.exit(handle_convert_command(args))

    if args.command == "validate":
        sys.exit(handle_validate_command(args))

    if args.command == "widgets":
        sys.exit(handle_widgets_command(args))

    parser.print_help()


if __name__ == "__main__":
    main()
