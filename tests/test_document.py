"""Tests for document/models.py and document/parser.py."""

import pytest

from dashhcl.core.errors import InvalidDashboardError, MalformedInputError
from dashhcl.document import (
    Dashboard,
    Request,
    TemplateVariable,
    Widget,
    WidgetLayout,
    check_dashboard_document,
    load_dashboard,
    parse_dashboard_json,
)


class TestParseDashboardJson:
    """Tests for parse_dashboard_json."""

    def test_valid_json(self):
        assert parse_dashboard_json('{"title": "x"}') == {"title": "x"}

    def test_empty_input(self):
        with pytest.raises(MalformedInputError, match="empty"):
            parse_dashboard_json("   \n")

    def test_invalid_json_reports_position(self):
        with pytest.raises(MalformedInputError) as exc_info:
            parse_dashboard_json('{\n  "title": "x",\n}')

        assert exc_info.value.details["line"] == 3
        assert "line 3" in exc_info.value.message
        assert exc_info.value.category == "malformed input"


class TestCheckDashboardDocument:
    """Tests for check_dashboard_document."""

    @pytest.mark.parametrize("data", [[], "dashboard", 42, None])
    def test_non_object_is_malformed(self, data):
        with pytest.raises(MalformedInputError):
            check_dashboard_document(data)

    def test_missing_title_and_id(self):
        with pytest.raises(InvalidDashboardError) as exc_info:
            check_dashboard_document({"widgets": []})

        assert "title or id" in exc_info.value.message
        assert exc_info.value.category == "structurally invalid dashboard"

    @pytest.mark.parametrize("title", [123, ["Ops"], {"text": "Ops"}, True])
    def test_non_string_title(self, title):
        with pytest.raises(InvalidDashboardError) as exc_info:
            check_dashboard_document({"id": "abc", "title": title})

        assert "title must be a string" in exc_info.value.message
        assert exc_info.value.details == {"field": "title"}

    def test_title_only_warns_about_id_and_layout(self):
        warnings = check_dashboard_document({"title": "T"})

        assert any("dashboard ID" in w for w in warnings)
        assert any("layout_type" in w for w in warnings)
        assert "Missing title - using default" not in warnings

    def test_id_only_warns_about_title(self):
        warnings = check_dashboard_document({"id": "abc", "layout_type": "free"})

        assert warnings == ["Missing title - using default"]

    def test_complete_document_has_no_warnings(self):
        assert check_dashboard_document({"id": "a", "title": "T", "layout_type": "ordered"}) == []

    def test_load_dashboard(self):
        dashboard, warnings = load_dashboard({"id": "a", "title": "T", "layout_type": "free"})

        assert isinstance(dashboard, Dashboard)
        assert dashboard.layout_type == "free"
        assert warnings == []


class TestDashboardModel:
    """Tests for Dashboard and friends."""

    def test_defaults(self):
        dashboard = Dashboard.from_dict({"id": "a"})

        assert dashboard.title is None
        assert dashboard.display_title == "Imported Dashboard"
        assert dashboard.layout_type == "ordered"
        assert dashboard.widgets == []
        assert dashboard.notify_list == []

    def test_has_distinguishes_absent_from_empty(self):
        dashboard = Dashboard.from_dict({"title": "T", "description": ""})

        assert dashboard.has("description")
        assert not dashboard.has("notify_list")

    def test_non_mapping_widgets_skipped(self):
        dashboard = Dashboard.from_dict({"title": "T", "widgets": [{"definition": {}}, "junk", 3]})

        assert len(dashboard.widgets) == 1
        assert dashboard.widgets[0].kind == "unknown"

    def test_widget_children(self, group_dashboard):
        widget = Widget.from_dict(group_dashboard["widgets"][0])

        assert widget.kind == "group"
        assert [child.kind for child in widget.definition.children] == ["note", "query_value"]
        assert widget.definition.title == "Service health"

    def test_layout_falsy_values_take_defaults(self):
        layout = WidgetLayout.from_dict({"x": None, "y": 5, "width": 0})

        assert (layout.x, layout.y, layout.width, layout.height) == (0, 5, 12, 8)

    def test_request_valid_content(self):
        assert Request.from_dict({"q": "a{*}"}).has_valid_content
        assert Request.from_dict({"queries": [{"query": "a"}]}).has_valid_content
        assert Request.from_dict({"formulas": [{"formula": "1"}]}).has_valid_content
        assert not Request.from_dict({"q": "", "queries": []}).has_valid_content

    def test_request_ignores_non_mapping_items(self):
        request = Request.from_dict({"queries": ["x", {"query": "a"}]})

        assert request.queries == [{"query": "a"}]


class TestTemplateVariable:
    """Tests for TemplateVariable.resolved_defaults."""

    def test_single_default(self):
        assert TemplateVariable.from_dict({"name": "env", "default": "prod"}).resolved_defaults() == ["prod"]

    def test_list_default(self):
        variable = TemplateVariable.from_dict({"name": "env", "default": ["a", "b"]})

        assert variable.resolved_defaults() == ["a", "b"]

    def test_default_wins_over_defaults(self):
        variable = TemplateVariable.from_dict({"name": "env", "default": "a", "defaults": ["b"]})

        assert variable.resolved_defaults() == ["a"]

    def test_defaults_field(self):
        variable = TemplateVariable.from_dict({"name": "env", "defaults": ["b"]})

        assert variable.resolved_defaults() == ["b"]

    def test_scalar_defaults_become_strings(self):
        variable = TemplateVariable.from_dict({"name": "shard", "default": 5})

        assert variable.resolved_defaults() == ["5"]

    def test_mixed_defaults_normalised(self):
        variable = TemplateVariable.from_dict({"name": "x", "defaults": [1, 2.0, 2.5, True, None, "web"]})

        assert variable.resolved_defaults() == ["1", "2", "2.5", "true", "web"]

    def test_nothing(self):
        assert TemplateVariable.from_dict({"name": "env"}).resolved_defaults() == []
