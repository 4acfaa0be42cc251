"""Tests for hcl/requests.py."""

import re

import pytest

from dashhcl.document.models import Request
from dashhcl.hcl.requests import emit_query, emit_request, emit_requests, legacy_expression
from dashhcl.hcl.writer import HCLWriter
from dashhcl.registry.models import RequestStructure


def render_request(data, structure=RequestStructure.MODERN):
    writer = HCLWriter()
    emitted = emit_request(writer, Request.from_dict(data), structure)
    return emitted, writer.render()


def attr(name, value):
    """Regex for an aligned attribute line."""
    return re.compile(rf"^\s*{re.escape(name)}\s+= {re.escape(value)}$", re.MULTILINE)


class TestRequestSuppression:
    """Requests without data are never rendered."""

    @pytest.mark.parametrize("structure", list(RequestStructure))
    def test_empty_request_dropped(self, structure):
        emitted, text = render_request({"display_type": "line"}, structure)

        assert emitted is False
        assert "request" not in text

    def test_empty_lists_dropped(self):
        emitted, _ = render_request({"queries": [], "formulas": []})

        assert emitted is False

    def test_none_structure_emits_nothing(self):
        emitted, text = render_request({"q": "avg:cpu{*}"}, RequestStructure.NONE)

        assert emitted is False
        assert text == "\n"

    def test_emit_requests_counts_emitted(self):
        writer = HCLWriter()
        requests = [Request.from_dict({"q": "a:b{*}"}), Request.from_dict({}), Request.from_dict({"q": "c:d{*}"})]

        assert emit_requests(writer, requests, RequestStructure.LEGACY) == 2
        assert writer.render().count("request {") == 2


class TestModernRequest:
    """Tests for the modern encoding."""

    def test_metric_query_and_formula(self):
        _, text = render_request(
            {
                "display_type": "line",
                "on_right_yaxis": False,
                "formulas": [{"formula": "query1 * 100", "alias": "Pct"}],
                "queries": [
                    {
                        "data_source": "metrics",
                        "name": "query1",
                        "query": "avg:system.cpu.user{*}",
                        "aggregator": "avg",
                    }
                ],
            }
        )

        assert attr("display_type", '"line"').search(text)
        assert attr("on_right_yaxis", "false").search(text)
        assert attr("alias", '"Pct"').search(text)
        assert attr("formula_expression", '"query1 * 100"').search(text)
        assert "metric_query {" in text
        assert attr("query", '"avg:system.cpu.user{*}"').search(text)
        assert attr("data_source", '"metrics"').search(text)

    def test_field_order(self):
        _, text = render_request(
            {
                "display_type": "bars",
                "conditional_formats": [{"comparator": ">", "value": 90, "palette": "white_on_red"}],
                "formulas": [{"formula": "query1"}],
                "queries": [{"data_source": "metrics", "name": "query1", "query": "sum:x{*}"}],
                "style": {"palette": "dog_classic", "line_type": "solid", "line_width": "normal"},
            }
        )

        positions = [
            text.index("display_type"),
            text.index("conditional_formats {"),
            text.index("formula {"),
            text.index("query {"),
            text.index("style {"),
        ]
        assert positions == sorted(positions)

    def test_conditional_format_fields(self):
        _, text = render_request(
            {
                "q": "avg:x{*}",
                "conditional_formats": [
                    {"comparator": ">=", "value": 0.5, "palette": "white_on_green", "hide_value": False}
                ],
            }
        )

        assert attr("comparator", '">="').search(text)
        assert attr("hide_value", "false").search(text)
        assert attr("value", "0.5").search(text)

    def test_formula_expression_fallback_and_limit(self):
        _, text = render_request(
            {
                "formulas": [
                    {"formula_expression": "top(query1)", "limit": {"count": 10, "order": "desc"}}
                ],
                "queries": [{"data_source": "metrics", "name": "query1", "query": "avg:x{*}"}],
            }
        )

        assert attr("formula_expression", '"top(query1)"').search(text)
        assert "limit {" in text
        assert attr("count", "10").search(text)
        assert attr("order", '"desc"').search(text)

    def test_synthesized_metric_query_from_q(self):
        _, text = render_request({"q": "max:mem.used{env:prod}"})

        assert "query {" in text
        assert "metric_query {" in text
        assert attr("aggregator", '"avg"').search(text)
        assert attr("data_source", '"metrics"').search(text)
        assert attr("name", '"query1"').search(text)
        assert attr("query", '"max:mem.used{env:prod}"').search(text)

    def test_synthesized_query_uses_request_aggregator(self):
        _, text = render_request({"q": "x{*}", "aggregator": "sum"})

        assert attr("aggregator", '"sum"').search(text)

    def test_query_string_is_escaped(self):
        _, text = render_request({"q": 'avg:x{service:"a"}'})

        assert 'avg:x{service:\\"a\\"}' in text

    def test_request_style_block(self):
        _, text = render_request(
            {"q": "x{*}", "style": {"palette": "cool", "line_type": "dashed", "line_width": "thin"}}
        )

        assert "style {" in text
        assert attr("palette", '"cool"').search(text)
        assert attr("line_type", '"dashed"').search(text)
        assert attr("line_width", '"thin"').search(text)


class TestQueryDispatch:
    """Tests for emit_query."""

    def render(self, query):
        writer = HCLWriter()
        emit_query(writer, query)
        return writer.render()

    def test_query_field_implies_metric(self):
        text = self.render({"name": "q1", "query": "avg:x{*}"})

        assert "metric_query {" in text

    def test_log_query(self):
        text = self.render(
            {
                "data_source": "logs",
                "name": "query1",
                "search": {"query": "status:error"},
                "indexes": ["main"],
                "group_by": [
                    {"facet": "service", "limit": 10, "sort": {"aggregation": "count", "order": "desc"}}
                ],
                "compute": {"aggregation": "count"},
            }
        )

        assert "log_query {" in text
        assert "search {" in text
        assert attr("query", '"status:error"').search(text)
        assert attr("indexes", '["main"]').search(text)
        assert "group_by {" in text
        assert attr("facet", '"service"').search(text)
        assert attr("limit", "10").search(text)
        assert "sort {" in text
        assert "compute {" in text
        assert attr("aggregation", '"count"').search(text)

    def test_unsupported_data_source_comment(self):
        text = self.render({"data_source": "rum", "name": "q"})

        assert text.startswith("query {")
        assert "# Unsupported query data source: rum" in text
        assert "metric_query" not in text


class TestLegacyRequest:
    """Tests for the legacy encoding."""

    def test_flat_query_and_order(self):
        _, text = render_request(
            {
                "q": "avg:system.load.1{*}",
                "aggregator": "max",
                "display_type": "line",
                "on_right_yaxis": True,
                "conditional_formats": [{"comparator": "<", "value": 1}],
                "style": {"palette": "warm"},
            },
            RequestStructure.LEGACY,
        )

        assert attr("q", '"avg:system.load.1{*}"').search(text)
        assert "query {" not in text
        positions = [
            text.index("aggregator"),
            text.index(" q "),
            text.index("display_type"),
            text.index("on_right_yaxis"),
            text.index("conditional_formats {"),
            text.index("style {"),
        ]
        assert positions == sorted(positions)

    def test_downgrade_from_metric_query(self):
        _, text = render_request(
            {"queries": [{"data_source": "metrics", "query": "sum:a{*}"}]},
            RequestStructure.LEGACY,
        )

        assert attr("q", '"sum:a{*}"').search(text)


class TestLegacyExpression:
    """Tests for legacy_expression."""

    def test_flat_query_wins(self):
        request = Request.from_dict({"q": "a{*}", "queries": [{"query": "b{*}"}]})

        assert legacy_expression(request) == "a{*}"

    def test_log_search_only(self):
        request = Request.from_dict({"queries": [{"data_source": "logs", "search": {"query": "status:error"}}]})

        assert legacy_expression(request) == "status:error"

    def test_log_search_preferred_over_compute(self):
        request = Request.from_dict(
            {
                "queries": [
                    {
                        "data_source": "logs",
                        "compute": {"aggregation": "count"},
                        "search": {"query": "service:web"},
                    }
                ]
            }
        )

        assert legacy_expression(request) == "service:web"

    def test_log_compute_without_search(self):
        request = Request.from_dict(
            {"queries": [{"data_source": "logs", "compute": {"aggregation": "count", "metric": "@duration"}}]}
        )

        assert legacy_expression(request) == "count:@duration"

    def test_nothing_to_derive(self):
        request = Request.from_dict({"queries": [{"data_source": "rum"}]})

        assert legacy_expression(request) is None

    def test_formulas_only(self):
        request = Request.from_dict({"formulas": [{"formula": "1"}]})

        assert legacy_expression(request) is None
