"""Input checks for dashboard documents.

Rejects malformed input before anything is emitted and collects advisory
warnings for fields that will be defaulted.
"""

from __future__ import annotations

import json
from typing import Any

import structlog

from dashhcl.core.errors import InvalidDashboardError, MalformedInputError
from dashhcl.document.models import Dashboard

logger = structlog.get_logger()


def parse_dashboard_json(text: str) -> Any:
    """Decode dashboard JSON text.

    Raises:
        MalformedInputError: With line and column of the first decode error
    """
    if not text or not text.strip():
        raise MalformedInputError("Input is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            details={"line": e.lineno, "column": e.colno},
        ) from e


def check_dashboard_document(data: Any) -> list[str]:
    """Validate the top-level shape of a decoded dashboard.

    Returns:
        Advisory warnings for fields that will be defaulted

    Raises:
        MalformedInputError: If the document is not a JSON object
        InvalidDashboardError: If it has neither a title nor an id, or the
            title is not a string
    """
    if not isinstance(data, dict):
        raise MalformedInputError(
            f"Expected a JSON object, got {type(data).__name__}",
        )

    if not data.get("title") and not data.get("id"):
        raise InvalidDashboardError("Dashboard must have either a title or id field")

    title = data.get("title")
    if title is not None and not isinstance(title, str):
        raise InvalidDashboardError(
            f"Dashboard title must be a string, got {type(title).__name__}",
            details={"field": "title"},
        )

    warnings: list[str] = []
    if not data.get("id"):
        warnings.append("Missing dashboard ID - using placeholder")
    if not data.get("title"):
        warnings.append("Missing title - using default")
    if not data.get("layout_type"):
        warnings.append('Missing layout_type - using "ordered"')

    if warnings:
        logger.info("dashboard_input_warnings", warnings=warnings)
    return warnings


def load_dashboard(data: Any) -> tuple[Dashboard, list[str]]:
    """Check a decoded document and wrap it in the typed model."""
    warnings = check_dashboard_document(data)
    return Dashboard.from_dict(data), warnings
