from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Optional

from .errors import OperationStateError
from .operations.aspects import Aspect
from .operations.base import Operation
from .server import SelectedServer

logger = logging.getLogger(__name__)


def execute_operation(operation: Operation, server: SelectedServer) -> Future:
    """
    Run operation against server and return a Future for its outcome.

    The operation's completion callback resolves the future: an error sets
    the exception, otherwise the result is set. Nothing is retried; a caller
    that wants to retry inspects ``operation.has_aspect(Aspect.RETRYABLE)``
    and the error, then executes a fresh operation.

    Raises:
        OperationStateError: If server is None for an operation that must
            execute with a selected server
    """
    if server is None and operation.has_aspect(Aspect.EXECUTE_WITH_SELECTION):
        raise OperationStateError(
            f"{type(operation).__name__} requires a selected server before execution"
        )

    future: Future = Future()
    future.set_running_or_notify_cancel()

    def _on_complete(error: Optional[BaseException], result: Any) -> None:
        if future.done():
            logger.warning("Ignoring completion for already resolved %s", type(operation).__name__)
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    operation.execute(server, _on_complete)
    return future

