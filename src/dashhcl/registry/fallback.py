"""Built-in reduced registry used when no widget configuration can be loaded."""

from dashhcl.registry.models import (
    Capabilities,
    RequestStructure,
    ValidationRules,
    WidgetRegistry,
    WidgetSpec,
)

_TITLE_PROPERTIES = ("title", "title_size", "title_align", "live_span")

FALLBACK_WIDGETS = {
    "timeseries": WidgetSpec(
        kind="timeseries",
        block_name="timeseries_definition",
        common_properties=_TITLE_PROPERTIES,
        specific_properties={
            "show_legend": "show_legend",
            "legend_layout": "legend_layout",
            "legend_columns": "legend_columns",
            "legend_size": "legend_size",
        },
        request_structure=RequestStructure.MODERN,
        capabilities=Capabilities(supports_yaxis=True, supports_events=True),
    ),
    "query_value": WidgetSpec(
        kind="query_value",
        block_name="query_value_definition",
        common_properties=_TITLE_PROPERTIES,
        specific_properties={
            "autoscale": "autoscale",
            "precision": "precision",
            "custom_unit": "custom_unit",
            "text_align": "text_align",
        },
        request_structure=RequestStructure.MODERN,
    ),
    "note": WidgetSpec(
        kind="note",
        block_name="note_definition",
        specific_properties={
            "content": "content",
            "background_color": "background_color",
            "font_size": "font_size",
            "text_align": "text_align",
            "vertical_align": "vertical_align",
            "show_tick": "show_tick",
            "tick_pos": "tick_pos",
            "tick_edge": "tick_edge",
            "has_padding": "has_padding",
        },
    ),
    "group": WidgetSpec(
        kind="group",
        block_name="group_definition",
        common_properties=("title", "layout_type"),
        specific_properties={
            "background_color": "background_color",
            "banner_img": "banner_img",
            "show_title": "show_title",
        },
        capabilities=Capabilities(has_nested_widgets=True),
    ),
}

FALLBACK_RULES = ValidationRules(valid_widget_types=tuple(FALLBACK_WIDGETS))


def fallback_registry() -> WidgetRegistry:
    """Return the reduced registry covering timeseries, query_value, note and group."""
    return WidgetRegistry(FALLBACK_WIDGETS, rules=FALLBACK_RULES, version="fallback")
