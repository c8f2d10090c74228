"""Per-service configuration built once at startup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rest_cli_interface.errors import MissingCredentialError

__all__ = ["DEFAULT_TIMEOUT", "ServiceConfig", "load_config"]

#seconds
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ServiceConfig:
    """
    Args:
        name:     Service name used in prompts, logs and errors (e.g. 'Jira')
        base_url: Root URL every request path is appended to
        timeout:  Request timeout in seconds, None to wait indefinitely
    """

    name: str
    base_url: str
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


def load_config(
    service: str,
    url_var: str,
    default_url: str | None = None,
    *,
    interactive: bool = True,
    timeout: float | None = DEFAULT_TIMEOUT,
    environ: Mapping[str, str] | None = None,
) -> ServiceConfig:
    """Build a ServiceConfig from the environment.

    Notes on usage:
        The base URL is read from url_var, then default_url. A service with no
        fixed default (a Jira site) prompts for it when interactive.

    Raises:
        MissingCredentialError: If no base URL could be determined.
    """
    env = os.environ if environ is None else environ
    base_url = env.get(url_var, "") or (default_url or "")

    if not base_url and interactive:
        try:
            base_url = input(f"{service} base URL ({url_var}): ").strip()
        except EOFError:
            base_url = ""
    if not base_url:
        raise MissingCredentialError(service, [url_var])

    return ServiceConfig(service, base_url, timeout)
