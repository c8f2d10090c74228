"""es-cli entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rest_cli_interface.dispatch import Action, Dispatcher

from elastic_cli_impl.elastic_impl import PASSWORD_VAR, URL_VAR, USER_VAR, ElasticActions, get_client
from elastic_cli_impl.elastic_params import (
    INDEX,
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

ACTIONS = [
    Action("health", OptionalIndexParams, ElasticActions.health, "Cluster (or index) health"),
    Action("indices", IndicesParams, ElasticActions.indices, "List indices, optionally by pattern"),
    Action("search", SearchParams, ElasticActions.search, "Search documents (size 100, from 0)"),
    Action("count", CountParams, ElasticActions.count, "Count matching documents"),
    Action("stats", StatsParams, ElasticActions.stats, "Terms / date histogram aggregations"),
    Action("get", DocumentIdParams, ElasticActions.get_document, "Get a document by id"),
    Action("index", IndexDocumentParams, ElasticActions.index_document, "Index a document"),
    Action("update", UpdateDocumentParams, ElasticActions.update_document, "Partially update a document"),
    Action("delete", DocumentIdParams, ElasticActions.delete_document, "Delete a document"),
    Action("mapping", IndexParams, ElasticActions.mapping, "Show the index mapping"),
]

DISPATCHER = Dispatcher(
    tool="es-cli",
    description="Elasticsearch cluster actions.",
    actions=ACTIONS,
    key_label=INDEX,
    env_vars=[
        (URL_VAR, "cluster URL (default http://localhost:9200)"),
        (USER_VAR, "user name"),
        (PASSWORD_VAR, "password"),
    ],
    examples=[
        "es-cli health",
        "es-cli search 'test-logs-*' -j '{\"query\": {\"match\": {\"level\": \"error\"}}}' -p size=10",
        "es-cli stats 'test-logs-*' -p field=service.keyword -p interval=day -p start=now-7d",
        "es-cli update my-index -p id=42 -j '{\"doc\": {\"status\": \"closed\"}}'",
    ],
)


def main(argv: Sequence[str] | None = None) -> int:
    return DISPATCHER.run(argv, lambda timeout: get_client(interactive=True, timeout=timeout))


if __name__ == "__main__":
    sys.exit(main())
