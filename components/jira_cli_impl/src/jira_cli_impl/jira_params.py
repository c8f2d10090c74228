"""Typed parameter structs for the Jira actions."""

from __future__ import annotations

from dataclasses import dataclass

from rest_cli_interface.params import ActionParams, param, to_bool, to_int, to_list, to_mapping, to_str

#label of the positional argument, also used in error messages
ISSUE_KEY = "issue key"

#Jira's own default page size for the search endpoint
DEFAULT_MAX_RESULTS = 50


@dataclass(frozen=True)
class IssueKeyParams(ActionParams):
    key: str = param(ISSUE_KEY, primary=True, required=True, convert=to_str)


@dataclass(frozen=True)
class GetIssueParams(IssueKeyParams):
    expand: list | None = param("expand", convert=to_list)
    changelog: bool = param("changelog", default=False, convert=to_bool)
    fields: list | None = param("fields", convert=to_list)


@dataclass(frozen=True)
class SearchParams(ActionParams):
    jql: str = param("jql", required=True, convert=to_str)
    max_results: int = param("maxResults", default=DEFAULT_MAX_RESULTS, convert=to_int)
    start_at: int = param("startAt", default=0, convert=to_int)
    fields: list | None = param("fields", convert=to_list)


@dataclass(frozen=True)
class CreateIssueParams(ActionParams):
    fields: dict = param("fields", required=True, convert=to_mapping)


@dataclass(frozen=True)
class UpdateIssueParams(IssueKeyParams):
    fields: dict = param("fields", required=True, convert=to_mapping)


@dataclass(frozen=True)
class CommentParams(IssueKeyParams):
    body: str = param("body", required=True, convert=to_str)


@dataclass(frozen=True)
class TransitionParams(IssueKeyParams):
    transition: str = param("transition", required=True, convert=to_str)
    comment: str | None = param("comment", convert=to_str)
