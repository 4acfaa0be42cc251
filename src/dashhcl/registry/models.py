"""Widget schema registry models.

A registry entry describes how one Datadog widget kind maps onto a Terraform
``*_definition`` block: which attributes are copied, how they are renamed,
which request encoding applies and which auxiliary blocks the kind accepts.

Entries are read from a mapping document. Both the snake_case layout used by
the packaged ``widget_config.yaml`` and the camelCase layout of a
``widget-config.json`` document are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import structlog

logger = structlog.get_logger()


class RequestStructure(Enum):
    """How a widget kind encodes its requests."""

    MODERN = "modern"  # query { metric_query {...} } blocks plus formulas
    LEGACY = "legacy"  # a single flat q = "..." expression
    NONE = "none"  # the kind has no requests

    @classmethod
    def parse(cls, value: Any) -> "RequestStructure":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower()) if value else cls.NONE
        except ValueError:
            logger.warning("unknown_request_structure", value=value)
            return cls.NONE


# camelCase feature flag -> Capabilities field
_CAPABILITY_ALIASES = {
    "supportsYAxis": "supports_yaxis",
    "supportsEvents": "supports_events",
    "supportsStyle": "supports_style",
    "supportsView": "supports_view",
    "supportsSort": "supports_sort",
    "hasNestedWidgets": "has_nested_widgets",
}


@dataclass(frozen=True)
class Capabilities:
    """Auxiliary blocks a widget kind may carry."""

    supports_yaxis: bool = False
    supports_events: bool = False
    supports_style: bool = False
    supports_view: bool = False
    supports_sort: bool = False
    has_nested_widgets: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Capabilities":
        if not data:
            return cls()
        flags: dict[str, bool] = {}
        for key, value in data.items():
            name = _CAPABILITY_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                flags[name] = bool(value)
            else:
                logger.debug("ignored_capability_flag", flag=key)
        return cls(**flags)


@dataclass(frozen=True)
class WidgetSpec:
    """Registry entry for one widget kind."""

    kind: str
    block_name: str
    common_properties: tuple[str, ...] = ()
    specific_properties: Mapping[str, str] = field(default_factory=dict)
    request_structure: RequestStructure = RequestStructure.NONE
    capabilities: Capabilities = field(default_factory=Capabilities)

    def __post_init__(self) -> None:
        object.__setattr__(self, "common_properties", tuple(self.common_properties))
        object.__setattr__(
            self, "specific_properties", MappingProxyType(dict(self.specific_properties))
        )

    @classmethod
    def from_dict(cls, kind: str, data: Mapping[str, Any]) -> "WidgetSpec":
        """Build an entry from either configuration spelling."""
        block_name = data.get("block_name") or data.get("blockName")
        if not block_name:
            raise ValueError(f"widget '{kind}' has no block_name")

        common = data.get("common_properties", data.get("commonProperties")) or []
        specific = data.get("specific_properties", data.get("specificProperties")) or {}
        if isinstance(specific, (list, tuple)):
            specific = {name: name for name in specific}

        return cls(
            kind=kind,
            block_name=str(block_name),
            common_properties=tuple(str(p) for p in common),
            specific_properties={str(k): str(v) for k, v in specific.items()},
            request_structure=RequestStructure.parse(
                data.get("request_structure", data.get("requestStructure"))
            ),
            capabilities=Capabilities.from_dict(
                data.get("capabilities", data.get("features"))
            ),
        )

    @property
    def definition_kind(self) -> str:
        """Kind name as it appears in the block name (``slo`` -> ``service_level_objective``)."""
        return self.block_name.removesuffix("_definition")


DEFAULT_REQUIRED_DASHBOARD_FIELDS = ("title", "layout_type")
DEFAULT_LAYOUT_TYPES = ("ordered", "free")


@dataclass(frozen=True)
class ValidationRules:
    """Domain rules used by the provider lint pass."""

    required_dashboard_fields: tuple[str, ...] = DEFAULT_REQUIRED_DASHBOARD_FIELDS
    valid_layout_types: tuple[str, ...] = DEFAULT_LAYOUT_TYPES
    valid_widget_types: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ValidationRules":
        if not data:
            return cls()
        return cls(
            required_dashboard_fields=tuple(
                data.get("required_dashboard_fields", DEFAULT_REQUIRED_DASHBOARD_FIELDS)
            ),
            valid_layout_types=tuple(data.get("valid_layout_types", DEFAULT_LAYOUT_TYPES)),
            valid_widget_types=tuple(data.get("valid_widget_types", ())),
        )


class WidgetRegistry:
    """Read-only lookup of widget kinds.

    Example:
        registry = WidgetRegistry.from_dict(yaml.safe_load(text))
        spec = registry.get("timeseries")
        if spec is None:
            ...  # unmapped kind, emitted as commentary
    """

    def __init__(
        self,
        widgets: Mapping[str, WidgetSpec],
        rules: ValidationRules | None = None,
        version: str | None = None,
    ):
        self._widgets = MappingProxyType(dict(widgets))
        self.rules = rules or ValidationRules()
        self.version = version

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WidgetRegistry":
        """Build a registry from a parsed configuration document.

        Raises:
            ValueError: If the document has no usable ``widgets`` mapping
        """
        if not isinstance(data, Mapping):
            raise ValueError("widget configuration must be a mapping")
        widgets = data.get("widgets")
        if not isinstance(widgets, Mapping) or not widgets:
            raise ValueError("widget configuration has no 'widgets' mapping")

        specs = {kind: WidgetSpec.from_dict(kind, entry) for kind, entry in widgets.items()}
        rules = ValidationRules.from_dict(
            data.get("validation_rules", data.get("validationRules"))
        )
        version = data.get("version")
        return cls(specs, rules=rules, version=str(version) if version is not None else None)

    def get(self, kind: str) -> WidgetSpec | None:
        return self._widgets.get(kind)

    def __contains__(self, kind: object) -> bool:
        return kind in self._widgets

    def __iter__(self) -> Iterator[WidgetSpec]:
        return iter(self._widgets.values())

    def __len__(self) -> int:
        return len(self._widgets)

    @property
    def kinds(self) -> list[str]:
        return list(self._widgets)

    def known_definition_kinds(self) -> set[str]:
        """Kind names accepted by the lint pass for ``*_definition`` blocks."""
        known = set(self.rules.valid_widget_types)
        known.update(spec.definition_kind for spec in self)
        return known
