from .config import CollectionConfig
from .executor import execute_operation
from .operations import Aspect, FindAndModifyOperation, OptionsBuilder

__all__ = [
    "CollectionConfig",
    "execute_operation",
    "Aspect",
    "FindAndModifyOperation",
    "OptionsBuilder",
]
