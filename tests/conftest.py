from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

import pytest

from docwire.config import CollectionConfig


class FakeServer:
    """
    In-memory stand-in for a selected server.

    Records every dispatched command and answers through the callback with
    either a canned result or a canned error.
    """

    def __init__(
        self,
        max_wire_version: int = 9,
        result: Any = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.max_wire_version = max_wire_version
        self.result = {"ok": 1, "value": None} if result is None else result
        self.error = error
        self.dispatched: list[dict[str, Any]] = []

    def dispatch(self, command, on_complete, *, options, session=None) -> None:
        self.dispatched.append({"command": command, "options": options, "session": session})
        if self.error is not None:
            on_complete(self.error, None)
        else:
            on_complete(None, self.result)


class Recorder:
    """Completion callback that remembers every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[Optional[BaseException], Any]] = []

    def __call__(self, error: Optional[BaseException], result: Any) -> None:
        self.calls.append((error, result))

    @property
    def error(self) -> Optional[BaseException]:
        assert len(self.calls) == 1, f"expected exactly one completion, got {self.calls!r}"
        return self.calls[0][0]

    @property
    def result(self) -> Any:
        assert len(self.calls) == 1, f"expected exactly one completion, got {self.calls!r}"
        return self.calls[0][1]


@pytest.fixture
def collection() -> CollectionConfig:
    return CollectionConfig(db_name="shop", collection_name="inventory")


@pytest.fixture
def server_factory() -> Callable[..., FakeServer]:
    """
    Factory fixture creating fake servers.

    Usage:
        server = server_factory(max_wire_version=7)
    """

    def _create(**kwargs: Any) -> FakeServer:
        return FakeServer(**kwargs)

    return _create


@pytest.fixture
def server(server_factory: Callable[..., FakeServer]) -> FakeServer:
    return server_factory()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
