"""
Widget configuration loading.

Search order:
1. Explicit path (--widget-config flag or DASHHCL_WIDGET_CONFIG)
2. .dashhcl/widget-config.yaml (project root)
3. ~/.dashhcl/widget-config.yaml (user home)
4. Packaged widget_config.yaml

When the chosen document cannot be read the built-in fallback registry is
used instead, and the returned source says so.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog
import yaml

from dashhcl.config.settings import get_settings
from dashhcl.registry import DEFAULT_CONFIG_PATH, WidgetRegistry, fallback_registry

logger = structlog.get_logger()

CONFIG_FILENAMES = ("widget-config.yaml", "widget-config.yml", "widget-config.json")


class RegistryMode(Enum):
    """Where the active widget registry came from."""

    LOADED = "loaded"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RegistrySource:
    """A registry together with how it was obtained."""

    registry: WidgetRegistry
    mode: RegistryMode
    origin: Path | None = None
    reason: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.mode is RegistryMode.FALLBACK

    @classmethod
    def fallback(cls, reason: str, origin: Path | None = None) -> "RegistrySource":
        return cls(
            registry=fallback_registry(),
            mode=RegistryMode.FALLBACK,
            origin=origin,
            reason=reason,
        )


def _find_in(directory: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = directory / ".dashhcl" / name
        if candidate.exists():
            return candidate
    return None


def get_widget_config_path(explicit_path: str | Path | None = None) -> Path:
    """
    Find the widget configuration document to use.

    An explicit path is returned even when it does not exist, so that the
    loader can report it as the reason for falling back.
    """
    if explicit_path:
        return Path(explicit_path)

    env_path = get_settings().widget_config
    if env_path:
        return Path(env_path)

    return _find_in(Path.cwd()) or _find_in(Path.home()) or DEFAULT_CONFIG_PATH


def load_registry(path: str | Path | None = None) -> RegistrySource:
    """
    Load the widget registry, degrading to the built-in fallback.

    Args:
        path: Optional explicit configuration file (YAML or JSON)

    Returns:
        RegistrySource with mode LOADED, or FALLBACK plus the reason
    """
    config_path = get_widget_config_path(path)

    if not config_path.exists():
        reason = f"widget configuration not found: {config_path}"
        logger.warning("widget_config_fallback", path=str(config_path), reason=reason)
        return RegistrySource.fallback(reason, origin=config_path)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        registry = WidgetRegistry.from_dict(data)
    except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        reason = f"failed to load widget configuration {config_path}: {e}"
        logger.warning("widget_config_fallback", path=str(config_path), reason=reason)
        return RegistrySource.fallback(reason, origin=config_path)

    logger.debug(
        "loaded_widget_config",
        path=str(config_path),
        widgets=len(registry),
        version=registry.version,
    )
    return RegistrySource(registry=registry, mode=RegistryMode.LOADED, origin=config_path)
