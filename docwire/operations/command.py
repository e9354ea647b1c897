from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Optional

from pymongo.write_concern import WriteConcern

from ..config import CollectionConfig
from ..errors import DispatchError
from ..server import CompletionCallback, SelectedServer
from .base import OperationBase
from .metrics import observe_operation

logger = logging.getLogger(__name__)


class CommandOperation(OperationBase):
    """
    Base for operations that send a single command against one collection.

    Resolves the effective write concern (per-call ``writeConcern`` option
    first, then the collection's) and owns the dispatch step: freeze options,
    hand the command to the server, record metrics when it completes.
    """

    command_name = "command"

    def __init__(
        self,
        collection: CollectionConfig,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(options)
        self.collection = collection

    @property
    def namespace(self) -> str:
        return self.collection.namespace

    @property
    def write_concern(self) -> Any:
        write_concern = self.options.get("writeConcern")
        if write_concern is None:
            write_concern = self.collection.write_concern
        return write_concern

    def write_concern_document(self) -> Any:
        """Write concern as sent on the wire; anything but a WriteConcern is passed as given."""
        write_concern = self.write_concern
        if isinstance(write_concern, WriteConcern):
            return write_concern.document
        return write_concern

    @property
    def unacknowledged_write(self) -> bool:
        write_concern = self.write_concern
        if write_concern is None:
            return False
        if isinstance(write_concern, WriteConcern):
            return not write_concern.acknowledged
        if isinstance(write_concern, Mapping):
            return write_concern.get("w") == 0
        return getattr(write_concern, "w", None) == 0

    def execute_command(
        self,
        server: SelectedServer,
        command: Mapping[str, Any],
        on_complete: CompletionCallback,
    ) -> None:
        """
        Freeze options and dispatch command to server.

        The server's error or result goes to on_complete unchanged. If
        dispatch() raises before calling back, the exception is delivered as
        a DispatchError. Exceptions raised after the callback ran (including
        ones raised by on_complete itself) propagate to the caller.
        """
        options = self.freeze_options()
        start_time = time.monotonic()
        completed = False

        def _complete(error: Optional[BaseException], result: Any) -> None:
            nonlocal completed
            if not completed:
                completed = True
                status = "error" if error is not None else "success"
                try:
                    observe_operation(self.command_name, status, time.monotonic() - start_time)
                except Exception:
                    # Metrics must never mask the operation's outcome
                    logger.exception("Failed to record metrics for %s", self.command_name)
            on_complete(error, result)

        logger.debug("Dispatching %s on %s", self.command_name, self.namespace)
        try:
            server.dispatch(command, _complete, options=options, session=self.session)
        except Exception as exc:
            if completed:
                raise
            logger.error("Dispatch of %s on %s raised: %s", self.command_name, self.namespace, exc)
            _complete(_dispatch_error(self.command_name, exc), None)


def _dispatch_error(command_name: str, exc: Exception) -> DispatchError:
    try:
        raise DispatchError(f"{command_name} dispatch failed: {exc}") from exc
    except DispatchError as error:
        return error
