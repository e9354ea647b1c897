from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ..server import CompletionCallback

logger = logging.getLogger(__name__)


class Completion:
    """
    Exactly-once wrapper around an operation's completion callback.

    The first call is forwarded; any later call (for example a server that
    reports both a timeout and a late reply) is dropped and logged. Passing
    both an error and a result forwards only the error.
    """

    def __init__(self, callback: CompletionCallback, operation: str = "operation") -> None:
        self._callback = callback
        self._operation = operation
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __call__(self, error: Optional[BaseException] = None, result: Any = None) -> None:
        with self._lock:
            if self._done:
                logger.warning(
                    "Ignoring duplicate completion for %s (error=%r)",
                    self._operation,
                    error,
                )
                return
            self._done = True

        if error is not None:
            self._callback(error, None)
        else:
            self._callback(None, result)
