"""Dashboard document models and input checks."""

from dashhcl.document.models import (
    DEFAULT_LAYOUT_TYPE,
    DEFAULT_TITLE,
    Dashboard,
    Request,
    TemplateVariable,
    Widget,
    WidgetDefinition,
    WidgetLayout,
)
from dashhcl.document.parser import (
    check_dashboard_document,
    load_dashboard,
    parse_dashboard_json,
)

__all__ = [
    "DEFAULT_LAYOUT_TYPE",
    "DEFAULT_TITLE",
    "Dashboard",
    "Request",
    "TemplateVariable",
    "Widget",
    "WidgetDefinition",
    "WidgetLayout",
    "check_dashboard_document",
    "load_dashboard",
    "parse_dashboard_json",
]
