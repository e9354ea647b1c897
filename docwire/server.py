from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional, Protocol

CompletionCallback = Callable[[Optional[BaseException], Any], None]


class SelectedServer(Protocol):
    """
    Protocol for a server chosen by the (external) server-selection layer.

    Operations only read the negotiated wire version and hand a finished
    command document to dispatch(). Opening connections, pooling and
    topology monitoring all live behind this protocol.
    """

    @property
    def max_wire_version(self) -> int:
        """Highest wire protocol version negotiated with this server."""
        ...

    def dispatch(
        self,
        command: Mapping[str, Any],
        on_complete: CompletionCallback,
        *,
        options: Mapping[str, Any],
        session: Any = None,
    ) -> None:
        """
        Send a command document and report back through on_complete.

        on_complete is called with (error, None) or (None, result).
        """
        ...


def max_wire_version(server: Any) -> int:
    """Negotiated wire version of a server, 0 when it has not reported one."""
    version = getattr(server, "max_wire_version", None)
    if version is None:
        return 0
    return int(version)
