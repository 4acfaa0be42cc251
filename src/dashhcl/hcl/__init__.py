"""HCL emission for Datadog dashboards."""

from dashhcl.hcl.dashboard import generate_hcl, resource_name
from dashhcl.hcl.formatter import escape_string, format_list, format_scalar, format_value
from dashhcl.hcl.requests import emit_query, emit_request, emit_requests, legacy_expression
from dashhcl.hcl.widgets import emit_unmapped_definition, emit_widget
from dashhcl.hcl.writer import HCLWriter

__all__ = [
    "HCLWriter",
    "emit_query",
    "emit_request",
    "emit_requests",
    "emit_unmapped_definition",
    "emit_widget",
    "escape_string",
    "format_list",
    "format_scalar",
    "format_value",
    "generate_hcl",
    "legacy_expression",
    "resource_name",
]
