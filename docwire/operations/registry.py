from __future__ import annotations

import threading
from typing import Iterable, Union

from ..errors import AspectRegistrationError
from .aspects import Aspect

_EMPTY: frozenset[Aspect] = frozenset()

_registry: dict[type, frozenset[Aspect]] = {}
_registry_lock = threading.Lock()


def define_aspects(kind: type, aspects: Union[Aspect, Iterable[Aspect]]) -> frozenset[Aspect]:
    """
    Register the aspects of an operation kind.

    Each kind is registered exactly once, normally right after its class
    statement. The stored set is shared by every instance of the kind and is
    never mutated afterwards, so lookups need no locking.

    Args:
        kind: The operation class
        aspects: A single Aspect or an iterable of them

    Returns:
        The registered, immutable aspect set

    Raises:
        AspectRegistrationError: If the kind already has aspects
        TypeError: If anything other than an Aspect is given
    """
    if isinstance(aspects, Aspect):
        aspects = [aspects]

    tags = frozenset(aspects)
    for tag in tags:
        if not isinstance(tag, Aspect):
            raise TypeError(f"aspects must be Aspect members, got {tag!r}")

    with _registry_lock:
        if kind in _registry:
            raise AspectRegistrationError(
                f"Aspects for {kind.__qualname__} are already defined"
            )
        _registry[kind] = tags

    return tags


def aspects(*tags: Aspect):
    """Class decorator form of define_aspects()."""

    def decorate(kind: type) -> type:
        define_aspects(kind, tags)
        return kind

    return decorate


def aspects_of(kind: type) -> frozenset[Aspect]:
    # Exact-class lookup: subclasses do not inherit their parent's aspects.
    return _registry.get(kind, _EMPTY)


def has_aspect(kind: type, aspect: Aspect) -> bool:
    return aspect in aspects_of(kind)
