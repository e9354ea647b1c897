from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pymongo import ASCENDING, DESCENDING

from .errors import InvalidSortError

# Characters the server refuses in database names.
_INVALID_DB_CHARS = re.compile(r'[ ./\\"$]')


def validate_collection_name(name: str) -> str:
    """
    Validate a collection name before it is placed in a command document.

    Collection names are interpolated into namespaces (``db.collection``) and
    into the first field of every command, so obviously broken names are
    rejected here instead of surfacing as confusing server errors.

    Args:
        name: The collection name to validate

    Returns:
        The validated name (unchanged if valid)

    Raises:
        TypeError: If name is not a string
        ValueError: If name is empty, contains ``$`` or a NUL byte, or
            starts or ends with ``.``

    Example:
        >>> validate_collection_name("orders")
        'orders'
        >>> validate_collection_name("orders.$cmd")
        ValueError: Invalid collection name 'orders.$cmd': ...
    """
    if not isinstance(name, str):
        raise TypeError(f"collection name must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError("collection name cannot be empty")

    # system.$cmd style names are internal and never valid for user operations
    if "$" in name or "\x00" in name:
        raise ValueError(
            f"Invalid collection name {name!r}: must not contain '$' or NUL characters"
        )

    if name.startswith(".") or name.endswith("."):
        raise ValueError(f"Invalid collection name {name!r}: must not start or end with '.'")

    return name


def validate_db_name(name: str) -> str:
    """
    Validate a database name.

    Raises:
        TypeError: If name is not a string
        ValueError: If name is empty or contains characters the server refuses
    """
    if not isinstance(name, str):
        raise TypeError(f"database name must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError("database name cannot be empty")

    if _INVALID_DB_CHARS.search(name) or "\x00" in name:
        raise ValueError(
            f"Invalid database name {name!r}: "
            "must not contain spaces, '.', '/', '\\', '\"', '$' or NUL characters"
        )

    return name


_ASCENDING_NAMES = {"1", "asc", "ascending"}
_DESCENDING_NAMES = {"-1", "desc", "descending"}


def _format_sort_direction(direction: Any) -> Any:
    # bool is an int subclass; True/False are not directions
    if isinstance(direction, (str, int)) and not isinstance(direction, bool):
        value = str(direction).lower()
        if value in _ASCENDING_NAMES:
            return ASCENDING
        if value in _DESCENDING_NAMES:
            return DESCENDING
    # {"$meta": "textScore"} and other server-side directions pass through
    return direction


def formatted_order_clause(sort: Any) -> list[tuple[str, Any]] | None:
    """
    Normalize a sort specification into ordered (field, direction) pairs.

    Accepted forms:
        - None -> None
        - "field" -> [("field", 1)]
        - {"a": 1, "b": -1} -> [("a", 1), ("b", -1)] (insertion order)
        - ["a", ("b", "desc")] -> [("a", 1), ("b", -1)]

    Named directions ("asc", "ascending", "desc", "descending", "1", "-1")
    become 1 or -1. Mapping values are kept as given. An empty list means
    no sort.

    Raises:
        InvalidSortError: If the specification has any other shape
    """
    if sort is None:
        return None

    if isinstance(sort, str):
        return [(sort, ASCENDING)]

    if isinstance(sort, Mapping):
        return [(field, direction) for field, direction in sort.items()]

    if isinstance(sort, (list, tuple)):
        if not sort:
            return None
        pairs: list[tuple[str, Any]] = []
        for item in sort:
            if isinstance(item, str):
                pairs.append((item, ASCENDING))
            elif isinstance(item, (list, tuple)) and len(item) == 2 and isinstance(item[0], str):
                pairs.append((item[0], _format_sort_direction(item[1])))
            else:
                raise InvalidSortError(
                    f"Illegal sort clause item {item!r}, must be a field name "
                    "or a (field, direction) pair"
                )
        return pairs

    raise InvalidSortError(
        f"Illegal sort clause {sort!r}, must be of the form "
        "[('field1', '(ascending|descending)'), ('field2', '(ascending|descending)')]"
    )
