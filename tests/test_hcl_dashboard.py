"""Tests for hcl/dashboard.py."""

import copy
import re

import pytest

from dashhcl.document.models import Dashboard
from dashhcl.hcl.dashboard import generate_hcl, resource_name


def emit(data, registry):
    return generate_hcl(Dashboard.from_dict(data), registry)


class TestResourceName:
    """Tests for resource_name."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Sample Application Dashboard", "sample_application_dashboard"),
            ("API -- Latency (p99)!", "api_latency_p99"),
            ("__leading and trailing__", "leading_and_trailing"),
            ("Ünïcode Dashboard", "n_code_dashboard"),
            ("", "imported_dashboard"),
            (None, "imported_dashboard"),
            ("!!!", "imported_dashboard"),
        ],
    )
    def test_lowercase_names(self, title, expected):
        assert resource_name(title) == expected

    def test_truncated_to_50_characters(self):
        name = resource_name("a" * 80)

        assert name == "a" * 50

    def test_preserve_case(self):
        assert resource_name("API Latency", preserve_case=True) == "API_Latency"
        assert resource_name("", preserve_case=True) == "Imported_Dashboard"


class TestDashboardAttributes:
    """Tests for dashboard-level attributes."""

    def test_attribute_order(self, registry):
        text = emit(
            {
                "title": "Ops",
                "description": "Main",
                "reflow_type": "fixed",
                "layout_type": "ordered",
                "notify_list": ["ops@example.com"],
                "is_read_only": True,
                "url": "/dashboard/abc",
                "tags": ["team:ops"],
            },
            registry,
        )

        names = [
            "title",
            "description",
            "reflow_type",
            "layout_type",
            "notify_list",
            "is_read_only",
            "url",
            "tags",
        ]
        positions = [text.index(f"  {name} ") for name in names]
        assert positions == sorted(positions)
        assert re.search(r'notify_list\s+= \["ops@example.com"\]', text)
        assert re.search(r"is_read_only\s+= true", text)
        assert re.search(r'tags\s+= \["team:ops"\]', text)

    def test_resource_header(self, registry):
        text = emit({"title": "Sample Application Dashboard"}, registry)

        assert text.startswith(
            'resource "datadog_dashboard" "sample_application_dashboard" {\n'
        )
        assert text.endswith("}\n")

    def test_empty_description_kept_when_key_present(self, registry):
        text = emit({"title": "T", "description": ""}, registry)

        assert re.search(r'description\s+= ""', text)

    def test_absent_optional_fields_not_emitted(self, registry):
        text = emit({"title": "T"}, registry)

        for name in ("description", "reflow_type", "notify_list", "is_read_only", "url", "tags"):
            assert name not in text
        assert re.search(r'layout_type\s+= "ordered"', text)

    def test_empty_notify_list_kept_when_key_present(self, registry):
        text = emit({"title": "T", "notify_list": []}, registry)

        assert re.search(r"notify_list\s+= \[\]", text)

    def test_read_only_false_is_emitted(self, registry):
        text = emit({"title": "T", "is_read_only": False}, registry)

        assert re.search(r"is_read_only\s+= false", text)

    def test_empty_tags_skipped(self, registry):
        assert "tags" not in emit({"title": "T", "tags": []}, registry)

    def test_title_fallback(self, registry):
        text = emit({"id": "abc-123"}, registry)

        assert re.search(r'title\s+= "Imported Dashboard"', text)
        assert '"imported_dashboard"' in text

    def test_title_escaping(self, registry):
        text = emit({"title": 'Say "hi"\nnow'}, registry)

        assert re.search(r'title\s+= "Say \\"hi\\"\\nnow"', text)
        assert "\r" not in text


class TestTemplateVariables:
    """Tests for template_variable blocks."""

    def test_single_default_becomes_list(self, registry):
        text = emit(
            {
                "title": "T",
                "template_variables": [
                    {"name": "env", "prefix": "env", "default": "prod", "available_values": ["prod", "dev"]}
                ],
            },
            registry,
        )

        assert "template_variable {" in text
        assert re.search(r'available_values = \["prod","dev"\]', text)
        assert re.search(r'defaults\s+= \["prod"\]', text)
        assert re.search(r'name\s+= "env"', text)
        assert re.search(r'prefix\s+= "env"', text)

    def test_defaults_field_and_empty_fallbacks(self, registry):
        text = emit(
            {
                "title": "T",
                "template_variables": [
                    {"name": "service", "defaults": ["web", "api"]},
                    {"name": "host"},
                ],
            },
            registry,
        )

        assert text.count("template_variable {") == 2
        assert re.search(r'defaults\s+= \["web","api"\]', text)
        assert re.search(r"defaults\s+= \[\]", text)
        assert re.search(r"available_values = \[\]", text)
        assert "prefix" not in text

    def test_numeric_default_is_quoted(self, registry):
        text = emit({"title": "T", "template_variables": [{"name": "shard", "default": 5}]}, registry)

        assert re.search(r'defaults\s+= \["5"\]', text)

    def test_field_order(self, registry):
        text = emit(
            {"title": "T", "template_variables": [{"name": "n", "prefix": "p", "default": "*"}]},
            registry,
        )

        block = text[text.index("template_variable {") :]
        order = [block.index(name) for name in ("available_values", "defaults", "name", "prefix")]
        assert order == sorted(order)


class TestWidgets:
    """Tests for widget markers and ordering."""

    def test_no_widgets_placeholder(self, registry):
        text = emit({"title": "T", "widgets": []}, registry)

        assert "  # No widgets found - add your widget configurations here" in text
        assert "long queue" not in text

    def test_marker_before_widgets(self, registry, modern_dashboard):
        text = emit(modern_dashboard, registry)

        assert text.index("  # long queue") < text.index("  widget {")

    def test_widgets_in_input_order(self, registry):
        text = emit(
            {
                "title": "T",
                "widgets": [
                    {"definition": {"type": "note", "content": "first"}},
                    {"definition": {"type": "free_text", "text": "second"}},
                    {"definition": {"type": "note", "content": "third"}},
                ],
            },
            registry,
        )

        assert text.index("first") < text.index("second") < text.index("third")

    def test_modern_end_to_end(self, registry, modern_dashboard):
        text = emit(modern_dashboard, registry)

        assert re.search(r'^  title\s+= "Modern Sample Dashboard"$', text, re.MULTILINE)
        assert re.search(r'^  layout_type\s+= "ordered"$', text, re.MULTILINE)
        assert re.search(r"^  widget \{$", text, re.MULTILINE)
        assert re.search(r"^    timeseries_definition \{$", text, re.MULTILINE)
        assert re.search(r"^        query \{$", text, re.MULTILINE)
        assert re.search(r"^          metric_query \{$", text, re.MULTILINE)
        assert re.search(r'^            data_source\s+= "metrics"$', text, re.MULTILINE)
        assert re.search(r'^            query\s+= "avg:system.cpu.user\{\*\}"$', text, re.MULTILINE)

    def test_nested_group_indentation(self, registry, group_dashboard):
        text = emit(group_dashboard, registry)

        assert re.search(r"^    group_definition \{$", text, re.MULTILINE)
        assert len(re.findall(r"^      widget \{$", text, re.MULTILINE)) == 2
        assert re.search(r"^        note_definition \{$", text, re.MULTILINE)
        assert re.search(r"^        query_value_definition \{$", text, re.MULTILINE)

    def test_braces_balance(self, registry, modern_dashboard, group_dashboard):
        for data in (modern_dashboard, group_dashboard):
            text = emit(data, registry)
            assert text.count("{") == text.count("}")


class TestDeterminism:
    """Identical input always gives identical text."""

    def test_repeated_emission_is_identical(self, registry, modern_dashboard, group_dashboard):
        for data in (modern_dashboard, group_dashboard):
            first = emit(data, registry)
            second = emit(copy.deepcopy(data), registry)
            assert first == second

    def test_fallback_registry_covers_core_kinds(self, fallback, modern_dashboard, group_dashboard):
        for data in (modern_dashboard, group_dashboard):
            assert "not yet supported" not in emit(data, fallback)
