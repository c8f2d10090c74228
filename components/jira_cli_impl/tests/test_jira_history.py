"""Unit tests for the status transition view built from an issue changelog."""

from jira_cli_impl.jira_history import extract_status_transitions

JANE = {"accountId": "a-1", "displayName": "Jane"}
BOB = {"accountId": "b-2", "displayName": "Bob"}


def make_issue(histories, comments=None, total=None):
    changelog = {"histories": histories}
    if total is not None:
        changelog["total"] = total
    return {"key": "MS-1", "changelog": changelog, "fields": {"comment": {"comments": comments or []}}}


def test_only_status_items_become_transitions_sa():
    issue = make_issue([
        {
            "created": "2024-01-15T10:30:45.000+0000",
            "author": JANE,
            "items": [
                {"field": "assignee", "fromString": None, "toString": "Jane"},
                {"field": "status", "fromString": "To Do", "toString": "In Progress"},
            ],
        },
        {
            "created": "2024-01-16T09:00:00.000+0000",
            "author": BOB,
            "items": [{"field": "Status", "fromString": "In Progress", "toString": "Done"}],
        },
    ])

    result = extract_status_transitions(issue)

    # "Status" is not "status": the match is exact
    assert result == [
        {"date": "2024-01-15T10:30:45.000+0000", "author": "Jane", "fromStatus": "To Do", "toStatus": "In Progress"}
    ]


def test_transitions_are_sorted_oldest_first_sa():
    issue = make_issue([
        {"created": "2024-02-01T00:00:00.000+0000", "author": BOB,
         "items": [{"field": "status", "fromString": "In Progress", "toString": "Done"}]},
        {"created": "2024-01-01T00:00:00.000+0000", "author": JANE,
         "items": [{"field": "status", "fromString": "To Do", "toString": "In Progress"}]},
    ])

    result = extract_status_transitions(issue)

    assert [r["toStatus"] for r in result] == ["In Progress", "Done"]


def test_comment_by_same_author_in_same_minute_is_attached_sa():
    issue = make_issue(
        [{"created": "2024-01-15T10:30:45.000+0000", "author": JANE,
          "items": [{"field": "status", "fromString": "In Progress", "toString": "Done"}]}],
        comments=[
            {"created": "2024-01-15T10:30:50.000+0000", "author": BOB, "body": "not mine"},
            {"created": "2024-01-15T10:30:51.000+0000", "author": JANE, "body": "fixed in 1.2"},
            {"created": "2024-01-15T10:30:59.000+0000", "author": JANE, "body": "second comment"},
        ],
    )

    result = extract_status_transitions(issue)

    # first matching comment wins
    assert result[0]["comment"] == "fixed in 1.2"


def test_missing_comment_leaves_key_absent_sa():
    issue = make_issue(
        [{"created": "2024-01-15T10:30:45.000+0000", "author": JANE,
          "items": [{"field": "status", "fromString": "To Do", "toString": "Done"}]}],
        comments=[{"created": "2024-01-15T11:00:00.000+0000", "author": JANE, "body": "later"}],
    )

    result = extract_status_transitions(issue)

    assert "comment" not in result[0]


def test_issue_without_changelog_yields_empty_list_sa():
    assert extract_status_transitions({"key": "MS-1", "fields": {}}) == []


def test_truncated_changelog_logs_warning_sa(caplog):
    issue = make_issue([], total=150)

    extract_status_transitions(issue)

    assert "truncated" in caplog.text
