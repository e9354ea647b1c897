from .aspects import Aspect
from .base import Operation, OperationBase
from .command import CommandOperation
from .completion import Completion
from .find_and_modify import (
    HINT_MIN_WIRE_VERSION,
    FindAndModifyOperation,
    FindOneAndDeleteOperation,
    FindOneAndReplaceOperation,
    FindOneAndUpdateOperation,
)
from .options import OperationOptions, OptionsBuilder
from .registry import aspects, aspects_of, define_aspects, has_aspect

__all__ = [
    "Aspect",
    "Operation",
    "OperationBase",
    "CommandOperation",
    "Completion",
    "HINT_MIN_WIRE_VERSION",
    "FindAndModifyOperation",
    "FindOneAndDeleteOperation",
    "FindOneAndReplaceOperation",
    "FindOneAndUpdateOperation",
    "OperationOptions",
    "OptionsBuilder",
    "aspects",
    "aspects_of",
    "define_aspects",
    "has_aspect",
]
