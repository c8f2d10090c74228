"""jira-cli entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rest_cli_interface.dispatch import Action, Dispatcher
from rest_cli_interface.params import NoParams

from jira_cli_impl.jira_impl import TOKEN_VAR, URL_VAR, USER_VAR, JiraActions, get_client
from jira_cli_impl.jira_params import (
    ISSUE_KEY,
    CommentParams,
    CreateIssueParams,
    GetIssueParams,
    IssueKeyParams,
    SearchParams,
    TransitionParams,
    UpdateIssueParams,
)

ACTIONS = [
    Action("health", NoParams, JiraActions.health, "Show the authenticated user"),
    Action("projects", NoParams, JiraActions.projects, "List visible projects"),
    Action("get", GetIssueParams, JiraActions.get_issue, "Get one issue"),
    Action(
        "search",
        SearchParams,
        JiraActions.search,
        "Search issues with JQL (maxResults 50, startAt 0; Server/Data Center endpoint)",
    ),
    Action("create", CreateIssueParams, JiraActions.create_issue, "Create an issue from a fields object"),
    Action("update", UpdateIssueParams, JiraActions.update_issue, "Edit fields of an issue"),
    Action("comment", CommentParams, JiraActions.add_comment, "Add a comment"),
    Action("comments", IssueKeyParams, JiraActions.get_comments, "List comments"),
    Action("transitions", IssueKeyParams, JiraActions.get_transitions, "List the currently legal transitions"),
    Action("transition", TransitionParams, JiraActions.transition_issue, "Apply a transition by exact name"),
    Action("history", IssueKeyParams, JiraActions.status_history, "Show status transitions from the changelog"),
]

DISPATCHER = Dispatcher(
    tool="jira-cli",
    description="Jira issue tracker actions over the REST API v2.",
    actions=ACTIONS,
    key_label=ISSUE_KEY,
    env_vars=[
        (URL_VAR, "Jira site URL, e.g. https://myorg.atlassian.net"),
        (USER_VAR, "Atlassian account email"),
        (TOKEN_VAR, "Atlassian API token"),
    ],
    examples=[
        "jira-cli get MS-123",
        "jira-cli get MS-123 -p changelog=true",
        "jira-cli search -p 'jql=project = MS AND status = \"In Progress\"' -p maxResults=20",
        "jira-cli create -j '{\"fields\": {\"project\": {\"key\": \"MS\"}, \"summary\": \"Title\", \"issuetype\": {\"name\": \"Task\"}}}'",
        "jira-cli transition MS-123 -p 'transition=Start Progress'",
        "jira-cli history MS-123",
    ],
)


def main(argv: Sequence[str] | None = None) -> int:
    return DISPATCHER.run(argv, lambda timeout: get_client(interactive=True, timeout=timeout))


if __name__ == "__main__":
    sys.exit(main())
