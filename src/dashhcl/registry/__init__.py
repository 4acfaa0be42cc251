"""Widget schema registry.

Maps Datadog widget kinds onto Terraform definition blocks.
"""

from pathlib import Path

from dashhcl.registry.fallback import fallback_registry
from dashhcl.registry.models import (
    Capabilities,
    RequestStructure,
    ValidationRules,
    WidgetRegistry,
    WidgetSpec,
)

# Mapping document shipped with the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "widget_config.yaml"

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "Capabilities",
    "RequestStructure",
    "ValidationRules",
    "WidgetRegistry",
    "WidgetSpec",
    "fallback_registry",
]
