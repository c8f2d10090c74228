"""
Authentication
--------------
Basic authentication with an Atlassian account email and API token.

Environment variables:
    JIRA_BASE_URL   https://myorg.atlassian.net
    JIRA_USER_EMAIL me@example.com
    JIRA_API_TOKEN  <token from https://id.atlassian.com/manage-profile/security/api-tokens>

When get_client(interactive = True) any missing value is prompted for, the
token with masked input.
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

from typing import Any

from rest_cli_interface.client import ActionLibrary
from rest_cli_interface.config import DEFAULT_TIMEOUT, load_config
from rest_cli_interface.credentials import resolve_basic
from rest_cli_interface.errors import AmbiguousMatchError
from rest_cli_interface.params import ActionParams
from rest_cli_interface.transport import Transport, path_segment

from jira_cli_impl.jira_history import extract_status_transitions
from jira_cli_impl.jira_params import (
    CommentParams,
    CreateIssueParams,
    GetIssueParams,
    IssueKeyParams,
    SearchParams,
    TransitionParams,
    UpdateIssueParams,
)

SERVICE = "Jira"
URL_VAR = "JIRA_BASE_URL"
USER_VAR = "JIRA_USER_EMAIL"
TOKEN_VAR = "JIRA_API_TOKEN"


class JiraActions(ActionLibrary):
    """Jira REST API v2 actions.

    Args:
        transport: Authenticated transport rooted at the Jira site URL
    """

    _API_PREFIX = "/rest/api/2"

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _path(self, path: str) -> str:
        return f"{self._API_PREFIX}{path}"

    def _get(self, path: str, params: dict | None = None) -> Any:
        return self._transport.get(self._path(path), params)

    def _post(self, path: str, body: dict) -> Any:
        return self._transport.post(self._path(path), body)

    def _put(self, path: str, body: dict) -> Any:
        # Jira PUT /issue returns 204 No Content on success, the transport maps it to {}
        return self._transport.put(self._path(path), body)

    @staticmethod
    def _issue(key: str) -> str:
        return f"/issue/{path_segment(key)}"

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def health(self, params: ActionParams) -> Any:
        """Return the authenticated user, proving the site URL and token work."""
        return self._get("/myself")

    def projects(self, params: ActionParams) -> Any:
        return self._get("/project")

    def get_issue(self, params: GetIssueParams) -> Any:
        """Fetch a single issue. No query string is sent unless expand/fields were asked for."""
        expand = list(params.expand or [])
        if params.changelog and "changelog" not in expand:
            expand.append("changelog")

        query: dict[str, Any] = {}
        if expand:
            query["expand"] = ",".join(expand)
        if params.fields:
            query["fields"] = ",".join(params.fields)
        return self._get(self._issue(params.key), query or None)

    def search(self, params: SearchParams) -> Any:
        """Run a JQL search; maxResults defaults to 50 and startAt to 0.

        Notes on usage:
            GET /rest/api/2/search with startAt paging is served by Jira Server
            and Data Center. Jira Cloud has retired it in favour of
            /rest/api/2/search/jql, which pages with nextPageToken instead.
        """
        query: dict[str, Any] = {
            "jql": params.jql,
            "maxResults": params.max_results,
            "startAt": params.start_at,
        }
        if params.fields:
            query["fields"] = ",".join(params.fields)
        return self._get("/search", query)

    def create_issue(self, params: CreateIssueParams) -> Any:
        return self._post("/issue", {"fields": params.fields})

    def update_issue(self, params: UpdateIssueParams) -> Any:
        """Edit the given fields; fields left out keep their value."""
        return self._put(self._issue(params.key), {"fields": params.fields})

    def add_comment(self, params: CommentParams) -> Any:
        return self._post(f"{self._issue(params.key)}/comment", {"body": params.body})

    def get_comments(self, params: IssueKeyParams) -> Any:
        return self._get(f"{self._issue(params.key)}/comment")

    def get_transitions(self, params: IssueKeyParams) -> Any:
        return self._get(f"{self._issue(params.key)}/transitions")

    # ------------------------------------------------------------------
    # Status transition
    # ------------------------------------------------------------------

    def transition_issue(self, params: TransitionParams) -> dict[str, Any]:
        """
        Transitions are named actions in Jira that move one issue from one status to another.
        Jira is asked which transitions are currently legal for the issue, the one whose
        name equals params.transition (case-sensitive) is then triggered by its id.

        Raises:
            AmbiguousMatchError: If no legal transition has that exact name; the
                error lists every legal name.
        """
        data = self._get(f"{self._issue(params.key)}/transitions")
        transitions: list[dict] = data.get("transitions", []) if isinstance(data, dict) else []

        match = next((t for t in transitions if t.get("name") == params.transition), None)
        if match is None:
            raise AmbiguousMatchError(params.transition, [t.get("name", "") for t in transitions])

        body: dict[str, Any] = {"transition": {"id": match["id"]}}
        if params.comment:
            body["update"] = {"comment": [{"add": {"body": params.comment}}]}
        self._post(f"{self._issue(params.key)}/transitions", body)

        return {
            "key": params.key,
            "transition": {"id": match["id"], "name": match.get("name")},
            "toStatus": (match.get("to") or {}).get("name"),
        }

    def status_history(self, params: IssueKeyParams) -> list[dict[str, Any]]:
        """Fetch the issue with its changelog and return its status transitions."""
        data = self._get(self._issue(params.key), {"expand": "changelog"})
        return extract_status_transitions(data)


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False, timeout: float | None = DEFAULT_TIMEOUT) -> JiraActions:
    """Return a configured JiraActions.

    Reads the site URL and credentials from environment variables. If
    "interactive = True" and any variable is missing, the user will be prompted.

    Raises:
        MissingCredentialError: If a value is missing and could not be prompted for.
    """
    config = load_config(SERVICE, URL_VAR, interactive=interactive, timeout=timeout)
    credentials = resolve_basic(USER_VAR, TOKEN_VAR, service=SERVICE, interactive=interactive)
    return JiraActions(Transport(config, credentials))
