"""Unit tests for JiraActions.

The transport is mocked so no HTTP call is ever made; the end-to-end tests use
a real Transport on top of a mocked requests session.
"""

#For now, we can run the tests in this file with this shell command "python -m pytest components/jira_cli_impl/tests -v"

import json
from unittest.mock import MagicMock

import pytest

from jira_cli_impl.cli import DISPATCHER, main
from jira_cli_impl.jira_impl import JiraActions, get_client
from jira_cli_impl.jira_params import GetIssueParams, IssueKeyParams, SearchParams, TransitionParams
from rest_cli_interface.config import ServiceConfig
from rest_cli_interface.credentials import BasicCredentials
from rest_cli_interface.errors import AmbiguousMatchError, MissingCredentialError, MissingParameterError
from rest_cli_interface.params import parse_pairs
from rest_cli_interface.transport import Transport


#Fixture for mock tests
@pytest.fixture
def transport():
    """A Transport stand-in; every verb helper is a MagicMock."""
    return MagicMock(spec=Transport)


@pytest.fixture
def jira(transport):
    return JiraActions(transport)


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.headers = {}
    response = MagicMock(ok=True, status_code=200, content=b"{}")
    response.json.return_value = {"key": "MS-123"}
    mock_session.request.return_value = response
    return mock_session


@pytest.fixture
def live_jira(session):
    """JiraActions over a real Transport whose session is mocked."""
    config = ServiceConfig("Jira", "https://test.atlassian.net")
    return JiraActions(Transport(config, BasicCredentials("test@example.com", "dummy_token"), session=session))


#--------------------------- get --------------------------

def test_get_issue_sends_no_query_without_flags_sa(jira, transport):
    jira.get_issue(GetIssueParams(key="MS-123"))

    transport.get.assert_called_once_with("/rest/api/2/issue/MS-123", None)


def test_get_issue_with_changelog_flag_sa(jira, transport):
    jira.get_issue(GetIssueParams(key="MS-123", changelog=True, expand=["renderedFields"]))

    transport.get.assert_called_once_with(
        "/rest/api/2/issue/MS-123", {"expand": "renderedFields,changelog"}
    )


def test_get_issue_end_to_end_sa(live_jira, session):
    # action="get", key="MS-123", no flags -> one GET, no expand parameter
    result = DISPATCHER.dispatch(live_jira, "get", "MS-123")

    assert result == {"key": "MS-123"}
    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    assert args == ("GET", "https://test.atlassian.net/rest/api/2/issue/MS-123")
    assert "params" not in kwargs
    assert "json" not in kwargs


#--------------------------- search --------------------------

def test_search_defaults_sa(jira, transport):
    params = SearchParams.from_bag("search", {"jql": "project = MS"})

    jira.search(params)

    transport.get.assert_called_once_with(
        "/rest/api/2/search", {"jql": "project = MS", "maxResults": 50, "startAt": 0}
    )


def test_search_explicit_paging_overrides_defaults_sa(jira, transport):
    params = SearchParams.from_bag("search", {"jql": "x", "maxResults": 5, "startAt": 10, "fields": "summary,status"})

    jira.search(params)

    transport.get.assert_called_once_with(
        "/rest/api/2/search",
        {"jql": "x", "maxResults": 5, "startAt": 10, "fields": "summary,status"},
    )


def test_search_requires_jql_sa(jira, transport):
    with pytest.raises(MissingParameterError):
        DISPATCHER.dispatch(jira, "search", None, {})

    transport.get.assert_not_called()


#--------------------------- create / update --------------------------

def test_create_wraps_fields_sa(jira, transport):
    fields = {"project": {"key": "MS"}, "summary": "Title", "issuetype": {"name": "Task"}}

    DISPATCHER.dispatch(jira, "create", None, params_json=json.dumps({"fields": fields}))

    transport.post.assert_called_once_with("/rest/api/2/issue", {"fields": fields})


def test_update_wraps_fields_and_uses_put_sa(jira, transport):
    DISPATCHER.dispatch(jira, "update", "MS-1", {"fields": {"summary": "New Title"}})

    transport.put.assert_called_once_with("/rest/api/2/issue/MS-1", {"fields": {"summary": "New Title"}})


def test_comment_body_sa(jira, transport):
    DISPATCHER.dispatch(jira, "comment", "MS-1", {"body": "hello"})

    transport.post.assert_called_once_with("/rest/api/2/issue/MS-1/comment", {"body": "hello"})


def test_comment_body_is_sent_as_typed_sa(jira, transport):
    DISPATCHER.dispatch(jira, "comment", "MS-1", parse_pairs(["body=true"]))

    transport.post.assert_called_once_with("/rest/api/2/issue/MS-1/comment", {"body": "true"})


#--------------------------- transition --------------------------

def test_transition_posts_matching_id_sa(jira, transport):
    # Setup: Jira reports two legal transitions
    transport.get.return_value = {
        "transitions": [
            {"id": "11", "name": "Start Progress", "to": {"name": "In Progress"}},
            {"id": "21", "name": "Done", "to": {"name": "Done"}},
        ]
    }

    result = jira.transition_issue(TransitionParams(key="MS-5", transition="Start Progress"))

    # Assert: exactly one submission with the matching id
    transport.post.assert_called_once_with(
        "/rest/api/2/issue/MS-5/transitions", {"transition": {"id": "11"}}
    )
    assert result["toStatus"] == "In Progress"


def test_transition_with_comment_sa(jira, transport):
    transport.get.return_value = {"transitions": [{"id": "21", "name": "Done"}]}

    jira.transition_issue(TransitionParams(key="MS-5", transition="Done", comment="shipped"))

    body = transport.post.call_args[0][1]
    assert body["update"] == {"comment": [{"add": {"body": "shipped"}}]}


def test_transition_match_is_case_sensitive_and_lists_legal_names_sa(jira, transport):
    transport.get.return_value = {
        "transitions": [{"id": "11", "name": "Start Progress"}, {"id": "21", "name": "Done"}]
    }

    with pytest.raises(AmbiguousMatchError) as exc_info:
        jira.transition_issue(TransitionParams(key="MS-5", transition="done"))

    assert exc_info.value.available == ["Start Progress", "Done"]
    assert "Start Progress" in str(exc_info.value)
    transport.post.assert_not_called()


#--------------------------- history --------------------------

def test_history_fetches_changelog_sa(jira, transport):
    transport.get.return_value = {
        "key": "MS-1",
        "changelog": {
            "histories": [
                {
                    "created": "2024-01-15T10:30:45.000+0000",
                    "author": {"displayName": "Jane"},
                    "items": [{"field": "status", "fromString": "To Do", "toString": "In Progress"}],
                }
            ]
        },
    }

    result = jira.status_history(IssueKeyParams(key="MS-1"))

    transport.get.assert_called_once_with("/rest/api/2/issue/MS-1", {"expand": "changelog"})
    assert result == [
        {"date": "2024-01-15T10:30:45.000+0000", "author": "Jane", "fromStatus": "To Do", "toStatus": "In Progress"}
    ]


#--------------------------- get_client / main --------------------------

def test_get_client_raises_when_env_vars_missing_sa(monkeypatch):
    for var in ["JIRA_BASE_URL", "JIRA_USER_EMAIL", "JIRA_API_TOKEN"]:
        monkeypatch.delenv(var, raising=False)

    with pytest.raises(MissingCredentialError):
        get_client(interactive=False)


def test_get_client_succeeds_when_env_vars_present_sa(monkeypatch):
    monkeypatch.setenv("JIRA_BASE_URL", "https://test.atlassian.net")
    monkeypatch.setenv("JIRA_USER_EMAIL", "test@example.com")
    monkeypatch.setenv("JIRA_API_TOKEN", "dummy_token")

    client = get_client(interactive=False)

    assert isinstance(client, JiraActions)
    assert client.transport.config.base_url == "https://test.atlassian.net"


def test_main_missing_principal_reports_error_without_network_sa(monkeypatch, capsys):
    # principal unset and the prompt answered with nothing
    monkeypatch.setenv("JIRA_BASE_URL", "https://test.atlassian.net")
    monkeypatch.delenv("JIRA_USER_EMAIL", raising=False)
    monkeypatch.setenv("JIRA_API_TOKEN", "dummy_token")
    monkeypatch.setattr("builtins.input", MagicMock(return_value=""))
    request = MagicMock()
    monkeypatch.setattr("requests.Session.request", request)

    code = main(["get", "MS-123"])

    assert code == 1
    assert "JIRA_USER_EMAIL" in capsys.readouterr().err
    request.assert_not_called()


def test_usage_documents_every_action_sa():
    text = DISPATCHER.usage()

    for action in DISPATCHER.action_names:
        assert action in text
    for var in ("JIRA_BASE_URL", "JIRA_USER_EMAIL", "JIRA_API_TOKEN"):
        assert var in text


def test_usage_notes_which_deployments_serve_search_sa():
    assert "Server/Data Center" in DISPATCHER.usage()
    assert "/search/jql" in JiraActions.search.__doc__
