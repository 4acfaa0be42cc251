"""Root test configuration."""

import logging

import pytest
import structlog
import yaml

from dashhcl.config.loader import RegistryMode, RegistrySource
from dashhcl.config.settings import get_settings
from dashhcl.registry import DEFAULT_CONFIG_PATH, WidgetRegistry, fallback_registry


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep user environment and home config out of every test."""
    monkeypatch.delenv("DASHHCL_WIDGET_CONFIG", raising=False)
    monkeypatch.delenv("DASHHCL_LOG_LEVEL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def registry():
    """Registry built from the packaged widget_config.yaml."""
    with open(DEFAULT_CONFIG_PATH, encoding="utf-8") as f:
        return WidgetRegistry.from_dict(yaml.safe_load(f))


@pytest.fixture
def loaded_source(registry):
    return RegistrySource(registry=registry, mode=RegistryMode.LOADED, origin=DEFAULT_CONFIG_PATH)


@pytest.fixture
def fallback():
    return fallback_registry()


@pytest.fixture
def modern_dashboard():
    """Dashboard with one modern timeseries widget."""
    return {
        "id": "abc-def-ghi",
        "title": "Modern Sample Dashboard",
        "description": "CPU overview",
        "layout_type": "ordered",
        "widgets": [
            {
                "id": 1234567890,
                "layout": {"x": 0, "y": 0, "width": 4, "height": 2},
                "definition": {
                    "type": "timeseries",
                    "title": "CPU usage",
                    "show_legend": True,
                    "requests": [
                        {
                            "display_type": "line",
                            "queries": [
                                {
                                    "data_source": "metrics",
                                    "name": "query1",
                                    "query": "avg:system.cpu.user{*}",
                                }
                            ],
                            "formulas": [{"formula": "query1"}],
                        }
                    ],
                },
            }
        ],
    }


@pytest.fixture
def group_dashboard():
    """Dashboard with a group widget holding two children."""
    return {
        "title": "Grouped",
        "layout_type": "ordered",
        "widgets": [
            {
                "id": 1,
                "definition": {
                    "type": "group",
                    "title": "Service health",
                    "layout_type": "ordered",
                    "widgets": [
                        {
                            "id": 2,
                            "definition": {
                                "type": "note",
                                "content": "First child",
                                "background_color": "yellow",
                            },
                            "layout": {"x": 0, "y": 0, "width": 3, "height": 1},
                        },
                        {
                            "id": 3,
                            "definition": {
                                "type": "query_value",
                                "title": "Requests",
                                "precision": 2,
                                "requests": [{"q": "sum:trace.http.request.hits{*}"}],
                            },
                            "layout": {"x": 3, "y": 0, "width": 3, "height": 1},
                        },
                    ],
                },
            }
        ],
    }
