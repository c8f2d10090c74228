"""Status history view built from an issue's expanded changelog."""

from __future__ import annotations

import logging
from typing import Any

__all__ = ["extract_status_transitions"]

logger = logging.getLogger(__name__)

#"2024-01-15T10:30:45.123+0000"[:16] -> "2024-01-15T10:30"
_MINUTE_PREFIX = 16


def _person(user: dict | None) -> str | None:
    if not user:
        return None
    return user.get("displayName") or user.get("name") or user.get("emailAddress") or user.get("accountId")


def _same_person(a: dict | None, b: dict | None) -> bool:
    if not a or not b:
        return False
    for attr in ("accountId", "name", "emailAddress"):
        if a.get(attr) and a.get(attr) == b.get(attr):
            return True
    return False


def _comment_for(history: dict, comments: list[dict]) -> str | None:
    """Best-effort comment lookup for one changelog entry.

    Jira does not link comments to changelog entries, so this picks the first
    comment written by the same author in the same minute as the change. When
    several comments qualify the first one wins, which may not be the one that
    belongs to the transition.
    """
    created = (history.get("created") or "")[:_MINUTE_PREFIX]
    if not created:
        return None
    for comment in comments:
        if (comment.get("created") or "")[:_MINUTE_PREFIX] != created:
            continue
        if _same_person(comment.get("author"), history.get("author")):
            return comment.get("body")
    return None


def extract_status_transitions(issue: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Args:
        issue: An issue payload fetched with expand=changelog

    Notes on usage:
        Every changelog item whose field is exactly "status" becomes one record,
        oldest first. A missing comment simply leaves the key out.

    Returns:
        A list of {date, author, fromStatus, toStatus[, comment]} dicts.
    """
    changelog = issue.get("changelog") or {}
    histories: list[dict] = changelog.get("histories") or []
    total = changelog.get("total")
    if isinstance(total, int) and total > len(histories):
        logger.warning(
            "Changelog for %s is truncated: %d of %d entries returned",
            issue.get("key", "issue"), len(histories), total,
        )

    comments: list[dict] = ((issue.get("fields") or {}).get("comment") or {}).get("comments") or []

    transitions: list[dict[str, Any]] = []
    for history in sorted(histories, key=lambda h: h.get("created") or ""):
        for item in history.get("items") or []:
            if item.get("field") != "status":
                continue
            record: dict[str, Any] = {
                "date": history.get("created"),
                "author": _person(history.get("author")),
                "fromStatus": item.get("fromString"),
                "toStatus": item.get("toString"),
            }
            comment = _comment_for(history, comments)
            if comment is not None:
                record["comment"] = comment
            transitions.append(record)
    return transitions
