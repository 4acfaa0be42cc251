"""
dashhcl configuration.

Provides:
- Pydantic-based settings (environment variables, .env files)
- Widget registry loading with an explicit fallback mode
"""

from dashhcl.config.loader import (
    RegistryMode,
    RegistrySource,
    get_widget_config_path,
    load_registry,
)
from dashhcl.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "RegistryMode",
    "RegistrySource",
    "get_widget_config_path",
    "load_registry",
]
