"""Error taxonomy shared by every CLI wrapper."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "RestCliError",
    "MissingCredentialError",
    "MissingParameterError",
    "MissingPrimaryKeyError",
    "InvalidParameterError",
    "UnsupportedActionError",
    "UnsupportedObjectTypeError",
    "ApiError",
    "AmbiguousMatchError",
]


class RestCliError(Exception):
    """Base class for every error a wrapper reports to the user."""


class MissingCredentialError(RestCliError):
    """Raised when a credential is neither in the environment nor typed in."""

    def __init__(self, service: str, variables: Iterable[str]) -> None:
        self.service = service
        self.variables = list(variables)
        super().__init__(
            f"Missing {service} credentials: {', '.join(self.variables)}. "
            "Set the environment variable(s) or enter them when prompted."
        )


class MissingParameterError(RestCliError):
    """Raised before any network call when an action lacks a required parameter."""

    def __init__(self, parameter: str, action: str) -> None:
        self.parameter = parameter
        self.action = action
        super().__init__(f"Action '{action}' requires parameter '{parameter}'")


class MissingPrimaryKeyError(MissingParameterError):
    """Raised when the positional key (index name, issue key, ...) is missing."""

    def __init__(self, parameter: str, action: str) -> None:
        super().__init__(parameter, action)
        self.args = (f"Action '{action}' requires the {parameter} argument",)


class InvalidParameterError(RestCliError):
    """Raised when a supplied parameter cannot be decoded into the expected type."""


class UnsupportedActionError(RestCliError):
    def __init__(self, action: str, supported: Iterable[str]) -> None:
        self.action = action
        self.supported = list(supported)
        super().__init__(
            f"Unsupported action '{action}'. Supported actions: {', '.join(self.supported)}"
        )


class UnsupportedObjectTypeError(RestCliError):
    def __init__(self, object_type: str, supported: Iterable[str]) -> None:
        self.object_type = object_type
        self.supported = list(supported)
        super().__init__(
            f"Unsupported object type '{object_type}'. Supported types: {', '.join(self.supported)}"
        )


class ApiError(RestCliError):
    """Raised on transport failure or a non-2xx response.

    Args:
        message:     Short description of what failed.
        uri:         The URL the request was sent to.
        status_code: HTTP status, or None when no response was received.
        raw_body:    Response body text when one could be read.
    """

    def __init__(
        self,
        message: str,
        *,
        uri: str,
        status_code: int | None = None,
        raw_body: str | None = None,
    ) -> None:
        self.message = message
        self.uri = uri
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(message)

    def details(self) -> list[str]:
        """Return the diagnostic lines printed under the error message."""
        lines = [f"URI: {self.uri}"]
        if self.status_code is not None:
            lines.append(f"Status: {self.status_code}")
        if self.raw_body:
            lines.append(f"Response: {self.raw_body}")
        return lines


class AmbiguousMatchError(RestCliError):
    """Raised when a requested name is not among the legal choices."""

    def __init__(self, requested: str, available: Iterable[str], *, subject: str = "transition") -> None:
        self.requested = requested
        self.available = list(available)
        super().__init__(
            f"No {subject} named '{requested}'. "
            f"Available: {', '.join(self.available) if self.available else '(none)'}"
        )
