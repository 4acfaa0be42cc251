"""Widget block emission driven by the widget schema registry."""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping

import structlog

from dashhcl.document.models import Widget, WidgetDefinition
from dashhcl.hcl.formatter import escape_string, format_scalar, format_value
from dashhcl.hcl.requests import emit_requests
from dashhcl.hcl.writer import HCLWriter
from dashhcl.registry.models import WidgetRegistry, WidgetSpec

logger = structlog.get_logger()

TIME_SPAN_FIELD = "live_span"
BACKGROUND_FIELD = "timeseries_background"


def emit_widget(writer: HCLWriter, widget: Widget, registry: WidgetRegistry) -> None:
    """Emit one ``widget`` block.

    Unmapped kinds become a commented placeholder, so this never fails for a
    single widget.
    """
    with writer.block("widget"):
        if widget.id:
            writer.attribute("id", escape_string(str(widget.id)))

        if widget.layout is not None:
            layout = widget.layout
            with writer.block("widget_layout"):
                writer.attribute("height", format_value(layout.height))
                writer.attribute("is_column_break", "false")
                writer.attribute("width", format_value(layout.width))
                writer.attribute("x", format_value(layout.x))
                writer.attribute("y", format_value(layout.y))
            writer.blank()

        spec = registry.get(widget.kind)
        if spec is None:
            logger.info("unmapped_widget_kind", kind=widget.kind)
            emit_unmapped_definition(writer, widget.definition)
        else:
            _emit_definition(writer, spec, widget.definition, registry)


def emit_unmapped_definition(writer: HCLWriter, definition: WidgetDefinition) -> None:
    """Describe a widget kind the registry does not know as comments."""
    kind = definition.kind
    writer.comment(f"{kind} widget - configuration not yet supported")
    writer.comment(f"Please add configuration for {kind} to widget mappings")
    if definition.title:
        writer.comment(f"Title: {definition.title}")
    requests = definition.get("requests")
    if isinstance(requests, list) and requests:
        writer.comment(f"Has {len(requests)} request(s)")
    dump = json.dumps(definition.fields, indent=4, ensure_ascii=False, default=str)
    writer.comment(f"Widget definition: {dump}")


def _emit_definition(
    writer: HCLWriter,
    spec: WidgetSpec,
    definition: WidgetDefinition,
    registry: WidgetRegistry,
) -> None:
    fields = definition.fields
    with writer.block(spec.block_name):
        if fields.get(TIME_SPAN_FIELD):
            writer.attribute(TIME_SPAN_FIELD, escape_string(str(fields[TIME_SPAN_FIELD])))

        for name in spec.common_properties:
            if name != TIME_SPAN_FIELD and name in fields:
                writer.attribute(name, format_value(fields[name]))

        for source, target in spec.specific_properties.items():
            if source not in fields:
                continue
            value = fields[source]
            if source == BACKGROUND_FIELD and isinstance(value, Mapping):
                with writer.block(target):
                    if value.get("type"):
                        writer.attribute("type", escape_string(str(value["type"])))
            else:
                writer.attribute(target, format_value(value))

        if "requests" in fields:
            emit_requests(writer, definition.requests, spec.request_structure)

        capabilities = spec.capabilities
        auxiliary: list[tuple[bool, str, Callable[[HCLWriter, Any], None]]] = [
            (capabilities.supports_yaxis, "yaxis", _emit_yaxis),
            (capabilities.supports_events, "events", _emit_events),
            (capabilities.supports_style, "style", _emit_style),
            (capabilities.supports_view, "view", _emit_view),
            (capabilities.supports_sort, "sort", _emit_sort),
        ]
        for enabled, key, emit in auxiliary:
            if enabled and fields.get(key):
                emit(writer, fields[key])

        if capabilities.has_nested_widgets:
            for child in definition.children:
                writer.blank()
                emit_widget(writer, child, registry)


def _emit_yaxis(writer: HCLWriter, yaxis: Any) -> None:
    if not isinstance(yaxis, Mapping):
        return
    writer.blank()
    with writer.block("yaxis"):
        if yaxis.get("label"):
            writer.attribute("label", escape_string(str(yaxis["label"])))
        if yaxis.get("scale"):
            writer.attribute("scale", format_scalar(yaxis["scale"]))
        # Bounds are strings in the provider schema
        for bound in ("min", "max"):
            if yaxis.get(bound) is not None:
                writer.attribute(bound, format_scalar(yaxis[bound]))
        if yaxis.get("include_zero") is not None:
            writer.attribute("include_zero", format_value(yaxis["include_zero"]))


def _emit_events(writer: HCLWriter, events: Any) -> None:
    if not isinstance(events, list):
        return
    for event in events:
        if not isinstance(event, Mapping):
            continue
        writer.blank()
        with writer.block("event"):
            if event.get("q"):
                writer.attribute("q", escape_string(str(event["q"])))
            if event.get("tags_execution"):
                writer.attribute("tags_execution", escape_string(str(event["tags_execution"])))


def _emit_style(writer: HCLWriter, style: Any) -> None:
    if not isinstance(style, Mapping):
        return
    writer.blank()
    with writer.block("style"):
        if style.get("palette"):
            writer.attribute("palette", escape_string(str(style["palette"])))
        if style.get("palette_flip") is not None:
            writer.attribute("palette_flip", format_value(style["palette_flip"]))


def _emit_view(writer: HCLWriter, view: Any) -> None:
    if not isinstance(view, Mapping):
        return
    writer.blank()
    with writer.block("view"):
        if view.get("focus"):
            writer.attribute("focus", escape_string(str(view["focus"])))


def _emit_sort(writer: HCLWriter, sort: Any) -> None:
    if not isinstance(sort, Mapping):
        return
    writer.blank()
    with writer.block("sort"):
        if sort.get("column"):
            writer.attribute("column", escape_string(str(sort["column"])))
        if sort.get("order"):
            writer.attribute("order", escape_string(str(sort["order"])))
