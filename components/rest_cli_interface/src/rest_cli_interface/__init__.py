"""Shared building blocks for the REST CLI wrappers."""

from rest_cli_interface.client import ActionLibrary
from rest_cli_interface.config import DEFAULT_TIMEOUT, ServiceConfig, load_config
from rest_cli_interface.credentials import BasicCredentials, TokenCredentials, resolve_basic, resolve_token
from rest_cli_interface.dispatch import Action, Dispatcher
from rest_cli_interface.errors import (
    AmbiguousMatchError,
    ApiError,
    InvalidParameterError,
    MissingCredentialError,
    MissingParameterError,
    MissingPrimaryKeyError,
    RestCliError,
    UnsupportedActionError,
    UnsupportedObjectTypeError,
)
from rest_cli_interface.params import ActionParams, NoParams, merge_bags, param, parse_pairs
from rest_cli_interface.transport import Transport, path_segment

__all__ = [
    "Action",
    "ActionLibrary",
    "ActionParams",
    "AmbiguousMatchError",
    "ApiError",
    "BasicCredentials",
    "DEFAULT_TIMEOUT",
    "Dispatcher",
    "InvalidParameterError",
    "MissingCredentialError",
    "MissingParameterError",
    "MissingPrimaryKeyError",
    "NoParams",
    "RestCliError",
    "ServiceConfig",
    "TokenCredentials",
    "Transport",
    "UnsupportedActionError",
    "UnsupportedObjectTypeError",
    "load_config",
    "merge_bags",
    "param",
    "parse_pairs",
    "path_segment",
    "resolve_basic",
    "resolve_token",
]
