from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from ..errors import OptionsFrozenError


class OperationOptions(Mapping[str, Any]):
    """
    Immutable snapshot of an operation's options.

    Item assignment is not supported (Mapping has no __setitem__), so any
    attempt to write raises TypeError. The snapshot holds its own dict; later
    changes to the mapping it was built from are not visible through it.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"OperationOptions({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable copy."""
        return dict(self._data)


class OptionsBuilder:
    """
    Mutable collector for operation options.

    Usage:
        options = (
            OptionsBuilder()
            .set("upsert", True)
            .set("projection", {"_id": 0})
            .build()
        )
        op = FindAndModifyOperation(collection, {"sku": "a1"}, None, update, options)

    build() may be called more than once; each call returns a fresh snapshot.
    Once sealed, the builder rejects further writes.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})
        self._sealed = False

    def _check_open(self) -> None:
        if self._sealed:
            raise OptionsFrozenError("OptionsBuilder is sealed; no further options can be set")

    def set(self, key: str, value: Any) -> "OptionsBuilder":
        self._check_open()
        self._data[key] = value
        return self

    def update(self, values: Mapping[str, Any]) -> "OptionsBuilder":
        self._check_open()
        self._data.update(values)
        return self

    def unset(self, key: str) -> "OptionsBuilder":
        self._check_open()
        self._data.pop(key, None)
        return self

    def build(self, *, seal: bool = False) -> OperationOptions:
        """
        Produce an immutable OperationOptions.

        Args:
            seal: If True, the builder rejects further writes afterwards.
        """
        if seal:
            self._sealed = True
        return OperationOptions(self._data)
