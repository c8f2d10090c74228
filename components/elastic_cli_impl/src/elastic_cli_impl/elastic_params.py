"""Typed parameter structs for the Elasticsearch actions."""

from __future__ import annotations

from dataclasses import dataclass

from rest_cli_interface.errors import MissingParameterError
from rest_cli_interface.params import ActionParams, param, to_int, to_list, to_mapping, to_str

INDEX = "index"

DEFAULT_SIZE = 100
DEFAULT_TOP = 10
DEFAULT_DATE_FIELD = "@timestamp"


@dataclass(frozen=True)
class OptionalIndexParams(ActionParams):
    index: str | None = param(INDEX, primary=True, convert=to_str)


@dataclass(frozen=True)
class IndicesParams(OptionalIndexParams):
    health: str | None = param("health", convert=to_str)


@dataclass(frozen=True)
class IndexParams(ActionParams):
    index: str = param(INDEX, primary=True, required=True, convert=to_str)


@dataclass(frozen=True)
class SearchParams(IndexParams):
    query: dict | None = param("query", convert=to_mapping)
    size: int = param("size", default=DEFAULT_SIZE, convert=to_int)
    offset: int = param("from", default=0, convert=to_int)
    sort: list | None = param("sort", convert=to_list)
    source: list | None = param("source", convert=to_list)


@dataclass(frozen=True)
class CountParams(IndexParams):
    query: dict | None = param("query", convert=to_mapping)


@dataclass(frozen=True)
class StatsParams(IndexParams):
    """Zero-hit aggregation query.

    field and interval each add one bucket aggregation, at least one is needed.
    start/end bound date_field, filters adds one term clause per entry.
    """

    field: str | None = param("field", convert=to_str)
    top: int = param("top", default=DEFAULT_TOP, convert=to_int)
    interval: str | None = param("interval", convert=to_str)
    date_field: str = param("date_field", default=DEFAULT_DATE_FIELD, convert=to_str)
    start: str | None = param("start", convert=to_str)
    end: str | None = param("end", convert=to_str)
    filters: dict | None = param("filters", convert=to_mapping)

    def validate(self, action: str) -> None:
        if not self.field and not self.interval:
            raise MissingParameterError("field or interval", action)


@dataclass(frozen=True)
class DocumentIdParams(IndexParams):
    doc_id: str = param("id", required=True, convert=to_str)


@dataclass(frozen=True)
class IndexDocumentParams(IndexParams):
    document: dict = param("document", required=True, convert=to_mapping)
    doc_id: str | None = param("id", convert=to_str)


@dataclass(frozen=True)
class UpdateDocumentParams(DocumentIdParams):
    doc: dict = param("doc", required=True, convert=to_mapping)
