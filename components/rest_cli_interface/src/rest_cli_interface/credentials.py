"""
Credential resolution
---------------------
Credentials are read from environment variables once per process.

1. interactive = True (CLI default)
    A missing principal is prompted for visibly, a missing secret or token is
    prompted for with getpass so nothing is echoed.
2. interactive = False
    Missing variables raise MissingCredentialError straight away.

Empty answers at the prompt are treated the same as a missing variable.
"""
from __future__ import annotations

import base64
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from getpass import getpass

from rest_cli_interface.errors import MissingCredentialError

__all__ = ["BasicCredentials", "TokenCredentials", "resolve_basic", "resolve_token"]


@dataclass(frozen=True)
class BasicCredentials:
    principal: str
    secret: str = field(repr=False)

    def authorization(self) -> str:
        """Return the Authorization header value."""
        raw = f"{self.principal}:{self.secret}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")


@dataclass(frozen=True)
class TokenCredentials:
    token: str = field(repr=False)

    def authorization(self) -> str:
        """Return the Authorization header value."""
        return f"Bearer {self.token}"


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------

def _ask(label: str) -> str:
    try:
        return input(f"{label}: ").strip()
    except EOFError:
        return ""


def _ask_secret(label: str) -> str:
    #getpass never echoes the typed characters
    try:
        return getpass(f"{label}: ")
    except EOFError:
        return ""


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

def resolve_basic(
    principal_var: str,
    secret_var: str,
    *,
    service: str,
    interactive: bool = True,
    environ: Mapping[str, str] | None = None,
) -> BasicCredentials:
    """Resolve a username/secret pair for Basic authentication.

    Args:
        principal_var: Environment variable holding the user name or email.
        secret_var:    Environment variable holding the password or API token.
        service:       Human readable service name used in prompts and errors.
        interactive:   Prompt for missing values instead of failing.
        environ:       Mapping to read instead of os.environ.

    Raises:
        MissingCredentialError: If a value is still empty after prompting.
    """
    env = os.environ if environ is None else environ
    principal = env.get(principal_var, "")
    secret = env.get(secret_var, "")

    if not interactive:
        missing = [name for name, val in [(principal_var, principal), (secret_var, secret)] if not val]
        if missing:
            raise MissingCredentialError(service, missing)
        return BasicCredentials(principal, secret)

    if not principal:
        principal = _ask(f"{service} user ({principal_var})")
        if not principal:
            raise MissingCredentialError(service, [principal_var])
    if not secret:
        secret = _ask_secret(f"{service} secret ({secret_var})")
        if not secret:
            raise MissingCredentialError(service, [secret_var])

    return BasicCredentials(principal, secret)


def resolve_token(
    token_var: str,
    *,
    service: str,
    interactive: bool = True,
    environ: Mapping[str, str] | None = None,
) -> TokenCredentials:
    """Resolve a bearer token, prompting with masked input when it is missing."""
    env = os.environ if environ is None else environ
    token = env.get(token_var, "")

    if not token and interactive:
        token = _ask_secret(f"{service} token ({token_var})")
    if not token:
        raise MissingCredentialError(service, [token_var])

    return TokenCredentials(token)
