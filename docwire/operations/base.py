from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from ..errors import OperationStateError, OptionsFrozenError
from ..server import CompletionCallback, SelectedServer
from .aspects import Aspect
from .options import OperationOptions
from .registry import has_aspect


class Operation(Protocol):
    """
    Protocol every operation satisfies.

    The execution/retry layer only relies on this surface; it never looks at
    an operation's command-building internals.
    """

    @property
    def options(self) -> Mapping[str, Any]:
        ...

    @property
    def session(self) -> Any:
        ...

    def attach_session(self, session: Any) -> None:
        ...

    def clear_session(self) -> None:
        ...

    def has_aspect(self, aspect: Aspect) -> bool:
        ...

    @property
    def can_retry_read(self) -> bool:
        ...

    def execute(self, server: SelectedServer, on_complete: CompletionCallback) -> None:
        ...


class OperationBase(ABC):
    """
    Common state for concrete operations: an options copy and a session.

    Options are copied on construction, so the caller may keep mutating the
    mapping it passed in. They stay writable through set_option() until
    freeze_options() is called right before dispatch; after that the
    operation exposes an OperationOptions snapshot and rejects writes.

    The session is held by reference. Attach and clear it before execute().
    """

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = dict(options or {})
        self._frozen: OperationOptions | None = None
        self._session: Any = None
        self._started = False

    @property
    def options(self) -> Mapping[str, Any]:
        if self._frozen is not None:
            return self._frozen
        # Read-only view; writes go through set_option()
        return MappingProxyType(self._options)

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def set_option(self, key: str, value: Any) -> None:
        if self._frozen is not None:
            raise OptionsFrozenError(
                f"Cannot set option {key!r}: options are frozen once the command is dispatched"
            )
        self._options[key] = value

    def freeze_options(self) -> OperationOptions:
        if self._frozen is None:
            self._frozen = OperationOptions(self._options)
        return self._frozen

    @property
    def session(self) -> Any:
        return self._session

    def attach_session(self, session: Any) -> None:
        if self._started:
            raise OperationStateError("Cannot attach a session to an operation that has executed")
        self._session = session

    def clear_session(self) -> None:
        if self._started:
            raise OperationStateError("Cannot clear the session of an operation that has executed")
        self._session = None

    def begin_execution(self) -> None:
        """Mark the operation as executing; an operation runs at most once."""
        if self._started:
            raise OperationStateError(
                f"{type(self).__name__} has already been executed; create a new operation to retry"
            )
        self._started = True

    def has_aspect(self, aspect: Aspect) -> bool:
        return has_aspect(type(self), aspect)

    @property
    def can_retry_read(self) -> bool:
        return True

    @abstractmethod
    def execute(self, server: SelectedServer, on_complete: CompletionCallback) -> None:
        """
        Run the operation against an already selected server.

        Implementations must call on_complete exactly once, with either an
        error or a result, including when local validation fails.
        """
        ...
