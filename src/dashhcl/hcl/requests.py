"""Request and query emission.

A widget kind encodes its requests one of two ways, chosen once per kind by
the registry:

- modern: explicit ``query { metric_query {...} }`` / ``log_query`` blocks,
  optional ``formula`` blocks
- legacy: a single flat ``q = "..."`` expression

Requests that carry no query, no query list and no formula list are dropped.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import structlog

from dashhcl.document.models import Request
from dashhcl.hcl.formatter import escape_string, format_value
from dashhcl.hcl.writer import HCLWriter
from dashhcl.registry.models import RequestStructure

logger = structlog.get_logger()

DEFAULT_AGGREGATOR = "avg"
DEFAULT_QUERY_NAME = "query1"


def emit_requests(
    writer: HCLWriter,
    requests: Iterable[Request],
    structure: RequestStructure,
) -> int:
    """Emit every request that has content. Returns the number emitted."""
    emitted = 0
    for request in requests:
        if emit_request(writer, request, structure):
            emitted += 1
    return emitted


def emit_request(writer: HCLWriter, request: Request, structure: RequestStructure) -> bool:
    """Emit zero or one ``request`` block for ``request``."""
    if structure is RequestStructure.NONE:
        return False
    if not request.has_valid_content:
        logger.debug("request_skipped", reason="no query, queries or formulas")
        return False

    writer.blank()
    with writer.block("request"):
        if structure is RequestStructure.MODERN:
            _emit_modern_body(writer, request)
        else:
            _emit_legacy_body(writer, request)
    return True


def _emit_modern_body(writer: HCLWriter, request: Request) -> None:
    _emit_display_directives(writer, request)
    _emit_conditional_formats(writer, request.conditional_formats)

    for formula in request.formulas or []:
        writer.blank()
        _emit_formula(writer, formula)

    if request.queries is not None:
        for query in request.queries:
            writer.blank()
            emit_query(writer, query)
    elif request.q:
        writer.blank()
        _emit_synthesized_metric_query(writer, request)

    _emit_request_style(writer, request.style)


def _emit_legacy_body(writer: HCLWriter, request: Request) -> None:
    if request.aggregator:
        writer.attribute("aggregator", escape_string(str(request.aggregator)))

    expression = legacy_expression(request)
    if expression:
        writer.attribute("q", escape_string(expression))

    _emit_display_directives(writer, request)
    _emit_conditional_formats(writer, request.conditional_formats)
    _emit_request_style(writer, request.style)


def legacy_expression(request: Request) -> str | None:
    """Flat ``q`` expression for a legacy request.

    A modern query list is downgraded from its first query: the metric query
    string, else the log search text, else ``aggregation:metric`` built from
    a logs compute directive.
    """
    if request.q:
        return str(request.q)
    if not request.queries:
        return None

    query = request.queries[0]
    if query.get("query"):
        return str(query["query"])

    search = query.get("search")
    search_text = search.get("query") if isinstance(search, Mapping) else None
    compute = query.get("compute")
    aggregation = compute.get("aggregation") if isinstance(compute, Mapping) else None

    if search_text:
        return str(search_text)
    if query.get("data_source") == "logs" and aggregation:
        return f"{aggregation}:{compute.get('metric') or ''}"
    return None


def _emit_display_directives(writer: HCLWriter, request: Request) -> None:
    if request.display_type:
        writer.attribute("display_type", escape_string(str(request.display_type)))
    if request.on_right_yaxis is not None:
        writer.attribute("on_right_yaxis", format_value(request.on_right_yaxis))


def _emit_conditional_formats(writer: HCLWriter, formats: list[dict[str, Any]] | None) -> None:
    if formats is None:
        return
    writer.blank()
    for fmt in formats:
        with writer.block("conditional_formats"):
            if fmt.get("comparator"):
                writer.attribute("comparator", escape_string(str(fmt["comparator"])))
            if fmt.get("hide_value") is not None:
                writer.attribute("hide_value", format_value(fmt["hide_value"]))
            if fmt.get("palette"):
                writer.attribute("palette", escape_string(str(fmt["palette"])))
            if fmt.get("value") is not None:
                writer.attribute("value", format_value(fmt["value"]))


def _emit_formula(writer: HCLWriter, formula: Mapping[str, Any]) -> None:
    expression = formula.get("formula") or formula.get("formula_expression") or ""
    with writer.block("formula"):
        if formula.get("alias"):
            writer.attribute("alias", escape_string(str(formula["alias"])))
        writer.attribute("formula_expression", escape_string(str(expression)))

        limit = formula.get("limit")
        if isinstance(limit, Mapping):
            writer.blank()
            with writer.block("limit"):
                if limit.get("count"):
                    writer.attribute("count", format_value(limit["count"]))
                if limit.get("order"):
                    writer.attribute("order", escape_string(str(limit["order"])))


def emit_query(writer: HCLWriter, query: Mapping[str, Any]) -> None:
    """Emit one modern ``query`` block, typed by data source."""
    data_source = query.get("data_source")
    with writer.block("query"):
        if data_source == "metrics" or query.get("metric") or query.get("query"):
            _emit_metric_query(writer, query)
        elif data_source == "logs":
            _emit_log_query(writer, query)
        else:
            logger.debug("unsupported_query_data_source", data_source=data_source)
            writer.comment(f"Unsupported query data source: {data_source or 'unspecified'}")


def _emit_metric_query(writer: HCLWriter, query: Mapping[str, Any]) -> None:
    with writer.block("metric_query"):
        for key in ("aggregator", "data_source", "name"):
            if query.get(key):
                writer.attribute(key, escape_string(str(query[key])))
        if query.get("query"):
            writer.attribute("query", escape_string(str(query["query"])))


def _emit_log_query(writer: HCLWriter, query: Mapping[str, Any]) -> None:
    with writer.block("log_query"):
        if query.get("name"):
            writer.attribute("name", escape_string(str(query["name"])))
        writer.attribute("data_source", escape_string(str(query["data_source"])))

        search = query.get("search")
        if isinstance(search, Mapping) and search.get("query"):
            with writer.block("search"):
                writer.attribute("query", escape_string(str(search["query"])))

        if isinstance(query.get("indexes"), list):
            writer.attribute("indexes", format_value(query["indexes"]))

        for group in query.get("group_by") or []:
            if isinstance(group, Mapping):
                _emit_group_by(writer, group)

        compute = query.get("compute")
        if isinstance(compute, Mapping) and compute.get("aggregation"):
            with writer.block("compute"):
                writer.attribute("aggregation", escape_string(str(compute["aggregation"])))


def _emit_group_by(writer: HCLWriter, group: Mapping[str, Any]) -> None:
    with writer.block("group_by"):
        if group.get("facet"):
            writer.attribute("facet", escape_string(str(group["facet"])))
        if group.get("limit"):
            writer.attribute("limit", format_value(group["limit"]))
        sort = group.get("sort")
        if isinstance(sort, Mapping):
            with writer.block("sort"):
                if sort.get("aggregation"):
                    writer.attribute("aggregation", escape_string(str(sort["aggregation"])))
                if sort.get("order"):
                    writer.attribute("order", escape_string(str(sort["order"])))


def _emit_synthesized_metric_query(writer: HCLWriter, request: Request) -> None:
    with writer.block("query"):
        with writer.block("metric_query"):
            writer.attribute(
                "aggregator", escape_string(str(request.aggregator or DEFAULT_AGGREGATOR))
            )
            writer.attribute("data_source", escape_string("metrics"))
            writer.attribute("name", escape_string(DEFAULT_QUERY_NAME))
            writer.attribute("query", escape_string(str(request.q)))


def _emit_request_style(writer: HCLWriter, style: Mapping[str, Any] | None) -> None:
    if style is None:
        return
    writer.blank()
    with writer.block("style"):
        for key in ("palette", "line_type", "line_width"):
            if style.get(key):
                writer.attribute(key, escape_string(str(style[key])))
