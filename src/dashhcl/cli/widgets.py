"""CLI command listing the widget kinds the active registry maps."""

from __future__ import annotations

import argparse

from dashhcl.cli.ux import print_key_value, print_table, warning
from dashhcl.config.loader import load_registry
from dashhcl.core.errors import ExitCode, main_with_error_handling
from dashhcl.registry import Capabilities

CAPABILITY_LABELS = {
    "supports_yaxis": "yaxis",
    "supports_events": "events",
    "supports_style": "style",
    "supports_view": "view",
    "supports_sort": "sort",
    "has_nested_widgets": "nested",
}


def capability_summary(capabilities: Capabilities) -> str:
    enabled = [label for name, label in CAPABILITY_LABELS.items() if getattr(capabilities, name)]
    return ", ".join(enabled) or "-"


@main_with_error_handling()
def widgets_command(widget_config: str | None = None) -> int:
    """List registry entries. Returns 1 when the fallback registry is in use."""
    source = load_registry(widget_config)
    registry = source.registry

    print_key_value(
        {
            "Mode": source.mode.value,
            "Source": str(source.origin) if source.origin else "built-in",
            "Version": registry.version or "-",
            "Widget kinds": str(len(registry)),
        },
        title="Widget registry",
    )

    rows = [
        [
            spec.kind,
            spec.block_name,
            spec.request_structure.value,
            capability_summary(spec.capabilities),
        ]
        for spec in sorted(registry, key=lambda s: s.kind)
    ]
    print_table("Widget mappings", ["Kind", "Block", "Requests", "Capabilities"], rows)

    if source.is_degraded:
        warning(f"Using built-in widget mappings: {source.reason}")
        return ExitCode.WARNING
    return ExitCode.SUCCESS


def register_widgets_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the widgets subcommand."""
    parser = subparsers.add_parser(
        "widgets",
        help="List the widget kinds the converter can map",
    )
    parser.add_argument(
        "--widget-config",
        help="Widget mapping document (YAML or JSON)",
    )


def handle_widgets_command(args: argparse.Namespace) -> int:
    """Handle the widgets subcommand."""
    return widgets_command(widget_config=getattr(args, "widget_config", None))
