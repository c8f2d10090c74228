"""
Authentication
--------------
Basic authentication against an Elasticsearch cluster.

Environment variables:
    ELASTIC_URL       cluster URL, defaults to http://localhost:9200
    ELASTIC_USERNAME  user name
    ELASTIC_PASSWORD  password
"""
from __future__ import annotations

from typing import Any

from rest_cli_interface.client import ActionLibrary
from rest_cli_interface.config import DEFAULT_TIMEOUT, load_config
from rest_cli_interface.credentials import resolve_basic
from rest_cli_interface.transport import Transport, path_segment

from elastic_cli_impl.elastic_params import (
    CountParams,
    DocumentIdParams,
    IndexDocumentParams,
    IndexParams,
    IndicesParams,
    OptionalIndexParams,
    SearchParams,
    StatsParams,
    UpdateDocumentParams,
)

SERVICE = "Elasticsearch"
URL_VAR = "ELASTIC_URL"
USER_VAR = "ELASTIC_USERNAME"
PASSWORD_VAR = "ELASTIC_PASSWORD"
DEFAULT_URL = "http://localhost:9200"

def _match_all() -> dict[str, Any]:
    return {"match_all": {}}


def _index(name: str) -> str:
    #index patterns and comma separated lists must reach the cluster as typed
    return "/" + path_segment(name, safe="*,")


def build_stats_body(params: StatsParams) -> dict[str, Any]:
    """Build the zero-hit aggregation request for the stats action.

    Raises:
        MissingParameterError: If neither field nor interval was given.
    """
    params.validate("stats")
    aggs: dict[str, Any] = {}
    if params.field:
        aggs[f"by_{params.field}"] = {"terms": {"field": params.field, "size": params.top}}
    if params.interval:
        aggs["over_time"] = {
            "date_histogram": {"field": params.date_field, "calendar_interval": params.interval}
        }

    clauses: list[dict[str, Any]] = []
    if params.start or params.end:
        bounds = {}
        if params.start:
            bounds["gte"] = params.start
        if params.end:
            bounds["lte"] = params.end
        clauses.append({"range": {params.date_field: bounds}})
    for name, value in (params.filters or {}).items():
        clauses.append({"term": {name: value}})

    query = {"bool": {"filter": clauses}} if clauses else _match_all()
    return {"size": 0, "query": query, "aggs": aggs}


class ElasticActions(ActionLibrary):
    """Elasticsearch actions.

    Args:
        transport: Authenticated transport rooted at the cluster URL
    """

    def health(self, params: OptionalIndexParams) -> Any:
        path = "/_cluster/health"
        if params.index:
            path += _index(params.index)
        return self._transport.get(path)

    def indices(self, params: IndicesParams) -> Any:
        path = "/_cat/indices"
        if params.index:
            path += _index(params.index)
        return self._transport.get(path, {"format": "json", "health": params.health})

    def search(self, params: SearchParams) -> Any:
        """POST /{index}/_search; size defaults to 100, from to 0, query to match_all."""
        body: dict[str, Any] = {
            "query": params.query if params.query is not None else _match_all(),
            "size": params.size,
            "from": params.offset,
        }
        if params.sort:
            body["sort"] = params.sort
        if params.source:
            body["_source"] = params.source
        return self._transport.post(f"{_index(params.index)}/_search", body)

    def count(self, params: CountParams) -> Any:
        body = {"query": params.query if params.query is not None else _match_all()}
        return self._transport.post(f"{_index(params.index)}/_count", body)

    def stats(self, params: StatsParams) -> Any:
        """Return the aggregation buckets of a zero-hit query, verbatim."""
        body = build_stats_body(params)
        data = self._transport.post(f"{_index(params.index)}/_search", body)
        return data.get("aggregations", {}) if isinstance(data, dict) else data

    def get_document(self, params: DocumentIdParams) -> Any:
        return self._transport.get(f"{_index(params.index)}/_doc/{path_segment(params.doc_id)}")

    def index_document(self, params: IndexDocumentParams) -> Any:
        """Index a document; PUT replaces a known id, POST lets the cluster pick one."""
        if params.doc_id:
            return self._transport.put(
                f"{_index(params.index)}/_doc/{path_segment(params.doc_id)}", params.document
            )
        return self._transport.post(f"{_index(params.index)}/_doc", params.document)

    def update_document(self, params: UpdateDocumentParams) -> Any:
        """Partial update: only the keys in doc are changed."""
        return self._transport.post(
            f"{_index(params.index)}/_update/{path_segment(params.doc_id)}", {"doc": params.doc}
        )

    def delete_document(self, params: DocumentIdParams) -> Any:
        return self._transport.delete(f"{_index(params.index)}/_doc/{path_segment(params.doc_id)}")

    def mapping(self, params: IndexParams) -> Any:
        return self._transport.get(f"{_index(params.index)}/_mapping")


def get_client(*, interactive: bool = False, timeout: float | None = DEFAULT_TIMEOUT) -> ElasticActions:
    """Return a configured ElasticActions, prompting for missing credentials when interactive."""
    config = load_config(SERVICE, URL_VAR, DEFAULT_URL, interactive=interactive, timeout=timeout)
    credentials = resolve_basic(USER_VAR, PASSWORD_VAR, service=SERVICE, interactive=interactive)
    return ElasticActions(Transport(config, credentials))
