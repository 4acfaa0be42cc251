"""Whole-dashboard emission: one ``resource "datadog_dashboard"`` block."""

from __future__ import annotations

import re

import structlog

from dashhcl.document.models import Dashboard, TemplateVariable
from dashhcl.hcl.formatter import escape_string, format_list, format_value
from dashhcl.hcl.widgets import emit_widget
from dashhcl.hcl.writer import HCLWriter
from dashhcl.registry.models import WidgetRegistry

logger = structlog.get_logger()

RESOURCE_TYPE = "datadog_dashboard"
DEFAULT_RESOURCE_NAME = "imported_dashboard"
DEFAULT_RESOURCE_NAME_PRESERVED = "Imported_Dashboard"
MAX_RESOURCE_NAME_LENGTH = 50

WIDGETS_MARKER = "long queue"
NO_WIDGETS_COMMENT = "No widgets found - add your widget configurations here"


def resource_name(title: str | None, preserve_case: bool = False) -> str:
    """
    Derive a Terraform resource name from a dashboard title.

    Examples:
        >>> resource_name("Sample Application Dashboard")
        'sample_application_dashboard'
        >>> resource_name("")
        'imported_dashboard'
        >>> resource_name("API Latency", preserve_case=True)
        'API_Latency'
    """
    text = title or ""
    if preserve_case:
        name = re.sub(r"[^a-zA-Z0-9_]", "_", text)
        fallback = DEFAULT_RESOURCE_NAME_PRESERVED
    else:
        name = re.sub(r"[^a-z0-9_]", "_", text.lower())
        fallback = DEFAULT_RESOURCE_NAME
    name = re.sub(r"_+", "_", name).strip("_")
    return name[:MAX_RESOURCE_NAME_LENGTH] or fallback


def generate_hcl(
    dashboard: Dashboard,
    registry: WidgetRegistry,
    name: str | None = None,
) -> str:
    """Render ``dashboard`` as HCL text.

    Args:
        dashboard: Parsed dashboard document
        registry: Widget schema registry
        name: Resource name override (derived from the title by default)

    Returns:
        Newline-terminated HCL. Identical input always gives identical text.
    """
    name = name or resource_name(dashboard.title)
    writer = HCLWriter()

    with writer.block("resource", RESOURCE_TYPE, name):
        _emit_attributes(writer, dashboard)

        if dashboard.template_variables:
            writer.blank()
            for variable in dashboard.template_variables:
                _emit_template_variable(writer, variable)

        writer.blank()
        if dashboard.widgets:
            writer.comment(WIDGETS_MARKER)
            for widget in dashboard.widgets:
                writer.blank()
                emit_widget(writer, widget, registry)
        else:
            writer.comment(NO_WIDGETS_COMMENT)

    logger.debug(
        "dashboard_emitted",
        resource=name,
        widgets=len(dashboard.widgets),
        template_variables=len(dashboard.template_variables),
    )
    return writer.render()


def _emit_attributes(writer: HCLWriter, dashboard: Dashboard) -> None:
    writer.attribute("title", escape_string(dashboard.display_title))

    if dashboard.description:
        writer.attribute("description", escape_string(str(dashboard.description)))
    elif dashboard.has("description"):
        writer.attribute("description", '""')

    if dashboard.reflow_type:
        writer.attribute("reflow_type", escape_string(str(dashboard.reflow_type)))

    writer.attribute("layout_type", escape_string(str(dashboard.layout_type)))

    if dashboard.has("notify_list"):
        writer.attribute("notify_list", format_list(dashboard.notify_list))

    if dashboard.is_read_only is not None:
        writer.attribute("is_read_only", format_value(dashboard.is_read_only))

    if dashboard.url:
        writer.attribute("url", escape_string(str(dashboard.url)))

    if dashboard.tags:
        writer.attribute("tags", format_list(dashboard.tags))


def _emit_template_variable(writer: HCLWriter, variable: TemplateVariable) -> None:
    with writer.block("template_variable"):
        writer.attribute("available_values", format_list(variable.available_values))
        writer.attribute("defaults", format_list(variable.resolved_defaults()))
        writer.attribute("name", escape_string("" if variable.name is None else str(variable.name)))
        if variable.prefix:
            writer.attribute("prefix", escape_string(str(variable.prefix)))
