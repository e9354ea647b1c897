from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pymongo.write_concern import WriteConcern

from .helpers import validate_collection_name, validate_db_name


@dataclass
class CollectionConfig:
    db_name: str
    collection_name: str
    serialize_functions: bool = False
    write_concern: Optional[Union[WriteConcern, Mapping[str, Any]]] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        validate_db_name(self.db_name)
        validate_collection_name(self.collection_name)

    @property
    def namespace(self) -> str:
        return f"{self.db_name}.{self.collection_name}"
