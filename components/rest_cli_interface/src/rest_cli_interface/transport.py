"""Authenticated HTTP transport shared by the wrappers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from rest_cli_interface.config import ServiceConfig
from rest_cli_interface.credentials import BasicCredentials, TokenCredentials
from rest_cli_interface.errors import ApiError

__all__ = ["BearerAuth", "Transport", "path_segment"]

logger = logging.getLogger(__name__)


def path_segment(value: Any, safe: str = "") -> str:
    """Percent-encode a single URL path component."""
    return quote(str(value), safe=safe)


def _encode_query(query: Mapping[str, Any] | None) -> list[tuple[str, str]] | None:
    #keeps the caller's ordering; requests does the percent-encoding
    if not query:
        return None
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        pairs.append((key, str(value)))
    return pairs or None


class BearerAuth(AuthBase):
    """Attaches ``Authorization: Bearer <token>`` to every request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request


def _session_auth(credentials: BasicCredentials | TokenCredentials) -> AuthBase:
    if isinstance(credentials, BasicCredentials):
        return HTTPBasicAuth(credentials.principal, credentials.secret)
    return BearerAuth(credentials.token)


class Transport:
    """
    Args:
        config:      Base URL, service name and timeout
        credentials: Basic or bearer credentials, installed as the session's auth
        session:     Optional requests.Session, mainly for tests

    Notes on usage:
        The credentials go on ``session.auth`` rather than into the default
        headers, so requests never substitutes ~/.netrc credentials for them.
    """

    def __init__(
        self,
        config: ServiceConfig,
        credentials: BasicCredentials | TokenCredentials,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.auth = _session_auth(credentials)
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    # ------------------------------------------------------------------
    # Core call
    # ------------------------------------------------------------------

    def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the parsed response.

        Notes on usage:
            The body is serialized as JSON only when it is not None, so GET and
            DELETE calls carry no payload at all.

        Returns:
            Parsed JSON, {} for an empty response, or the raw text when the
            server answered with something that is not JSON.

        Raises:
            ApiError: On a transport failure or any non-2xx status.
        """
        url = self.url(path)
        kwargs: dict[str, Any] = {"timeout": self._config.timeout}
        params = _encode_query(query)
        if params is not None:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        logger.debug("%s %s %s", self._config.name, method.upper(), url)
        try:
            response = self._session.request(method.upper(), url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"{self._config.name} request failed: {exc}", uri=url) from exc

        self._raise_for_status(response, self._config.name)

        #204 No Content and friends
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _raise_for_status(response: requests.Response, service: str = "API") -> None:
        if response.ok:
            return
        logger.debug("%s error %s from %s", service, response.status_code, response.url)
        raise ApiError(
            f"{service} API error {response.status_code}",
            uri=response.url,
            status_code=response.status_code,
            raw_body=response.text or None,
        )

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------

    def get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return self.call("GET", path, query=query)

    def post(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return self.call("POST", path, body, query)

    def put(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return self.call("PUT", path, body, query)

    def patch(self, path: str, body: Any = None, query: Mapping[str, Any] | None = None) -> Any:
        return self.call("PATCH", path, body, query)

    def delete(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return self.call("DELETE", path, query=query)
