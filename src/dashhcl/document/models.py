"""Datadog dashboard export data models.

Typed views over the decoded dashboard JSON. Kind-specific widget fields and
the query/formula objects inside requests stay plain mappings because their
shape is defined per widget kind by the Datadog API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_LAYOUT_TYPE = "ordered"
DEFAULT_TITLE = "Imported Dashboard"
UNKNOWN_KIND = "unknown"


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _default_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class WidgetLayout:
    """Widget position on a free-layout grid."""

    x: Any = 0
    y: Any = 0
    width: Any = 12
    height: Any = 8

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WidgetLayout":
        # Falsy dimensions (missing, 0, null) take the defaults
        return cls(
            x=data.get("x") or 0,
            y=data.get("y") or 0,
            width=data.get("width") or 12,
            height=data.get("height") or 8,
        )


@dataclass
class Request:
    """One widget request: a data query plus display directives."""

    display_type: Optional[str] = None
    on_right_yaxis: Optional[bool] = None
    aggregator: Optional[str] = None
    q: Optional[str] = None
    queries: Optional[List[Dict[str, Any]]] = None
    formulas: Optional[List[Dict[str, Any]]] = None
    conditional_formats: Optional[List[Dict[str, Any]]] = None
    style: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Request":
        def mappings(key: str) -> Optional[List[Dict[str, Any]]]:
            value = data.get(key)
            if not isinstance(value, (list, tuple)):
                return None
            return [dict(item) for item in value if isinstance(item, Mapping)]

        style = data.get("style")
        return cls(
            display_type=data.get("display_type"),
            on_right_yaxis=data.get("on_right_yaxis"),
            aggregator=data.get("aggregator"),
            q=data.get("q"),
            queries=mappings("queries"),
            formulas=mappings("formulas"),
            conditional_formats=mappings("conditional_formats"),
            style=dict(style) if isinstance(style, Mapping) else None,
        )

    @property
    def has_valid_content(self) -> bool:
        """A request is worth emitting only if it can produce data."""
        return bool(self.q) or bool(self.queries) or bool(self.formulas)


@dataclass
class WidgetDefinition:
    """Widget kind plus its kind-specific fields."""

    kind: str
    fields: Dict[str, Any] = field(default_factory=dict)
    children: List["Widget"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WidgetDefinition":
        fields = _as_mapping(data)
        children = [
            Widget.from_dict(child)
            for child in _as_list(fields.get("widgets"))
            if isinstance(child, Mapping)
        ]
        return cls(kind=str(fields.get("type") or UNKNOWN_KIND), fields=fields, children=children)

    @property
    def title(self) -> Optional[str]:
        return self.fields.get("title")

    @property
    def requests(self) -> List[Request]:
        return [
            Request.from_dict(item)
            for item in _as_list(self.fields.get("requests"))
            if isinstance(item, Mapping)
        ]

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)


@dataclass
class Widget:
    """Dashboard widget, owned by a dashboard or a group widget."""

    definition: WidgetDefinition
    id: Any = None
    layout: Optional[WidgetLayout] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Widget":
        layout = data.get("layout")
        return cls(
            definition=WidgetDefinition.from_dict(_as_mapping(data.get("definition"))),
            id=data.get("id"),
            layout=WidgetLayout.from_dict(layout) if isinstance(layout, Mapping) else None,
        )

    @property
    def kind(self) -> str:
        return self.definition.kind


@dataclass
class TemplateVariable:
    """Dashboard template variable."""

    name: Any
    prefix: Optional[str] = None
    default: Any = None
    defaults: Any = None
    available_values: List[Any] = field(default_factory=list)
    has_default: bool = False
    has_defaults: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateVariable":
        return cls(
            name=data.get("name"),
            prefix=data.get("prefix"),
            default=data.get("default"),
            defaults=data.get("defaults"),
            available_values=_as_list(data.get("available_values")),
            has_default="default" in data,
            has_defaults="defaults" in data,
        )

    def resolved_defaults(self) -> List[str]:
        """Normalise ``default``/``defaults`` into one list of strings.

        Null entries are dropped; numbers and booleans become their text.
        """
        if self.has_default:
            values = self.default
        elif self.has_defaults:
            values = self.defaults
        else:
            return []
        if not isinstance(values, (list, tuple)):
            values = [values]
        return [_default_text(value) for value in values if value is not None]


@dataclass
class Dashboard:
    """Datadog dashboard export."""

    raw: Dict[str, Any]
    widgets: List[Widget] = field(default_factory=list)
    template_variables: List[TemplateVariable] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dashboard":
        raw = dict(data)
        return cls(
            raw=raw,
            widgets=[
                Widget.from_dict(w) for w in _as_list(raw.get("widgets")) if isinstance(w, Mapping)
            ],
            template_variables=[
                TemplateVariable.from_dict(v)
                for v in _as_list(raw.get("template_variables"))
                if isinstance(v, Mapping)
            ],
        )

    def has(self, key: str) -> bool:
        return key in self.raw

    @property
    def id(self) -> Any:
        return self.raw.get("id")

    @property
    def title(self) -> Optional[str]:
        return self.raw.get("title") or None

    @property
    def display_title(self) -> str:
        return str(self.title) if self.title else DEFAULT_TITLE

    @property
    def description(self) -> Optional[str]:
        return self.raw.get("description")

    @property
    def layout_type(self) -> str:
        return self.raw.get("layout_type") or DEFAULT_LAYOUT_TYPE

    @property
    def reflow_type(self) -> Optional[str]:
        return self.raw.get("reflow_type")

    @property
    def is_read_only(self) -> Any:
        return self.raw.get("is_read_only")

    @property
    def url(self) -> Optional[str]:
        return self.raw.get("url")

    @property
    def notify_list(self) -> List[Any]:
        return _as_list(self.raw.get("notify_list"))

    @property
    def tags(self) -> List[Any]:
        return _as_list(self.raw.get("tags"))
