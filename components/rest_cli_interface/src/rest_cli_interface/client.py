"""Action library contract shared by the three wrappers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rest_cli_interface.params import ActionParams
from rest_cli_interface.transport import Transport

__all__ = ["ActionLibrary"]


class ActionLibrary(ABC):
    """One method per domain operation, all going through a single Transport.

    Notes on usage:
        The transport is injected, never built here, so a library can be driven
        by a mocked Transport in tests. Every action method takes its own typed
        ActionParams struct and returns either the raw response or a derived view.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    @abstractmethod
    def health(self, params: ActionParams) -> Any:
        """Cheap authenticated call proving the credentials and base URL work."""
        raise NotImplementedError

    @abstractmethod
    def search(self, params: ActionParams) -> Any:
        """Paged search. Implementations document their own size/offset defaults."""
        raise NotImplementedError
