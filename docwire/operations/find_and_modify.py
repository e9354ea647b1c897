from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from bson.son import SON

from ..config import CollectionConfig
from ..errors import UnsupportedFeatureError
from ..helpers import formatted_order_clause
from ..server import CompletionCallback, SelectedServer, max_wire_version
from .aspects import Aspect
from .command import CommandOperation
from .completion import Completion
from .metrics import observe_unsupported_feature
from .registry import define_aspects

logger = logging.getLogger(__name__)

# First wire version whose findAndModify accepts a hint
HINT_MIN_WIRE_VERSION = 8

FIND_AND_MODIFY_ASPECTS = (
    Aspect.READ_OPERATION,
    Aspect.WRITE_OPERATION,
    Aspect.RETRYABLE,
    Aspect.EXECUTE_WITH_SELECTION,
)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class FindAndModifyOperation(CommandOperation):
    """
    Build and dispatch a ``findAndModify`` command.

    Recognized options: new, remove, upsert, projection (or the legacy
    fields), arrayFilters, maxTimeMS, serializeFunctions,
    bypassDocumentValidation, hint and writeConcern. Anything else stays in
    the options mapping and reaches the server's dispatch untouched.

    Usage:
        op = FindAndModifyOperation(
            collection,
            {"sku": "a1"},
            {"qty": -1},
            {"$inc": {"qty": 1}},
            {"new": True},
        )
        op.execute(server, lambda error, result: ...)
    """

    command_name = "findAndModify"

    def __init__(
        self,
        collection: CollectionConfig,
        query: Mapping[str, Any],
        sort: Any,
        doc: Mapping[str, Any] | None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(collection, options)
        self.query = query
        self.sort = sort
        self.doc = doc

    def execute(self, server: SelectedServer, on_complete: CompletionCallback) -> None:
        completion = Completion(on_complete, self.command_name)
        try:
            self.begin_execution()
            command = self.build_command(server)
        except Exception as exc:
            # Nothing has been sent yet; every failure goes to the callback
            completion(exc)
            return

        self.execute_command(server, command, completion)

    def build_command(self, server: SelectedServer) -> SON:
        """
        Assemble the command document for server.

        Sets serializeFunctions and checkKeys on the working options as a
        side effect.

        Raises:
            UnsupportedFeatureError: If a hint is requested on an
                unacknowledged write or a server older than
                HINT_MIN_WIRE_VERSION
            InvalidSortError: If the sort specification cannot be formatted
        """
        options = self.options

        command = SON([
            ("findAndModify", self.collection.collection_name),
            ("query", self.query),
        ])

        sort = formatted_order_clause(self.sort)
        if sort is not None:
            command["sort"] = SON(sort)

        command["new"] = bool(options.get("new"))
        command["remove"] = bool(options.get("remove"))
        command["upsert"] = bool(options.get("upsert"))

        projection = options.get("projection")
        if projection is None:
            projection = options.get("fields")
        if projection is not None:
            command["fields"] = projection

        if options.get("arrayFilters") is not None:
            command["arrayFilters"] = options["arrayFilters"]

        if self.doc is not None and not command["remove"]:
            command["update"] = self.doc

        if _is_positive_number(options.get("maxTimeMS")):
            command["maxTimeMS"] = options["maxTimeMS"]

        serialize_functions = options.get("serializeFunctions")
        if serialize_functions is None:
            serialize_functions = self.collection.serialize_functions
        self.set_option("serializeFunctions", bool(serialize_functions))

        # Update operators ($set, $inc, ...) would fail key validation
        self.set_option("checkKeys", False)

        # Sent whenever present, whatever the wire version
        write_concern = self.write_concern_document()
        if write_concern is not None:
            command["writeConcern"] = write_concern

        if options.get("bypassDocumentValidation") is True:
            command["bypassDocumentValidation"] = True

        hint = options.get("hint")
        if hint is not None:
            self._check_hint_supported(server)
            command["hint"] = hint

        return command

    def _check_hint_supported(self, server: SelectedServer) -> None:
        wire_version = max_wire_version(server)
        if self.unacknowledged_write or wire_version < HINT_MIN_WIRE_VERSION:
            logger.info(
                "Refusing hint on %s for %s (unacknowledged=%s, wire_version=%d)",
                self.command_name,
                self.namespace,
                self.unacknowledged_write,
                wire_version,
            )
            try:
                observe_unsupported_feature(self.command_name, "hint")
            except Exception:
                logger.exception("Failed to record metrics for %s", self.command_name)
            raise UnsupportedFeatureError(
                "The current server does not support a hint on findAndModify commands",
                feature="hint",
            )


define_aspects(FindAndModifyOperation, FIND_AND_MODIFY_ASPECTS)


class FindOneAndDeleteOperation(FindAndModifyOperation):
    """Delete the first document matching filter and return it."""

    command_name = "findOneAndDelete"

    def __init__(
        self,
        collection: CollectionConfig,
        filter: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        options = dict(options or {})
        options["remove"] = True
        super().__init__(collection, filter, options.get("sort"), None, options)


def _return_new_document(options: Mapping[str, Any]) -> bool:
    return_document = options.get("returnDocument")
    if return_document is not None:
        return str(return_document).lower() == "after"
    if "returnOriginal" in options:
        return not options["returnOriginal"]
    return False


class FindOneAndReplaceOperation(FindAndModifyOperation):
    """Replace the first document matching filter."""

    command_name = "findOneAndReplace"

    def __init__(
        self,
        collection: CollectionConfig,
        filter: Mapping[str, Any],
        replacement: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        options = dict(options or {})
        options["new"] = _return_new_document(options)
        options["remove"] = False
        super().__init__(collection, filter, options.get("sort"), replacement, options)


class FindOneAndUpdateOperation(FindAndModifyOperation):
    """Apply update operators to the first document matching filter."""

    command_name = "findOneAndUpdate"

    def __init__(
        self,
        collection: CollectionConfig,
        filter: Mapping[str, Any],
        update: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        options = dict(options or {})
        options["new"] = _return_new_document(options)
        options["remove"] = False
        super().__init__(collection, filter, options.get("sort"), update, options)


define_aspects(FindOneAndDeleteOperation, FIND_AND_MODIFY_ASPECTS)
define_aspects(FindOneAndReplaceOperation, FIND_AND_MODIFY_ASPECTS)
define_aspects(FindOneAndUpdateOperation, FIND_AND_MODIFY_ASPECTS)
