from __future__ import annotations

import pytest

from docwire.errors import OperationStateError, OptionsFrozenError
from docwire.operations import Aspect, OperationBase, define_aspects


class EchoOperation(OperationBase):
    """Minimal operation that completes with its own options."""

    def execute(self, server, on_complete) -> None:
        self.begin_execution()
        on_complete(None, dict(self.freeze_options()))


define_aspects(EchoOperation, [Aspect.READ_OPERATION])


class RetryRestrictedOperation(EchoOperation):
    @property
    def can_retry_read(self) -> bool:
        return False


class TestOptions:
    """Tests for option storage and freezing."""

    def test_options_are_copied(self) -> None:
        options = {"a": 1}
        op = EchoOperation(options)
        options["a"] = 2
        options["b"] = 3

        assert dict(op.options) == {"a": 1}

    def test_none_options_become_empty(self) -> None:
        assert dict(EchoOperation().options) == {}

    def test_options_view_is_read_only(self) -> None:
        op = EchoOperation({"a": 1})
        with pytest.raises(TypeError):
            op.options["a"] = 2  # type: ignore[index]

    def test_set_option_before_freeze(self) -> None:
        op = EchoOperation()
        op.set_option("checkKeys", False)

        assert op.options["checkKeys"] is False

    def test_set_option_after_freeze_rejected(self) -> None:
        op = EchoOperation({"a": 1})
        op.freeze_options()

        with pytest.raises(OptionsFrozenError):
            op.set_option("a", 2)
        assert op.options["a"] == 1

    def test_freeze_is_idempotent(self) -> None:
        op = EchoOperation({"a": 1})

        assert op.freeze_options() is op.freeze_options()
        assert op.frozen


class TestSession:
    """Tests for session attach/detach."""

    def test_attach_keeps_identity(self) -> None:
        session = object()
        op = EchoOperation()
        op.attach_session(session)

        assert op.session is session

    def test_clear_session(self) -> None:
        op = EchoOperation()
        op.attach_session(object())
        op.clear_session()

        assert op.session is None

    def test_session_not_stored_in_options(self) -> None:
        op = EchoOperation({"a": 1})
        op.attach_session(object())

        assert "session" not in op.options

    def test_attach_after_execute_rejected(self) -> None:
        op = EchoOperation()
        op.execute(None, lambda error, result: None)

        with pytest.raises(OperationStateError):
            op.attach_session(object())
        with pytest.raises(OperationStateError):
            op.clear_session()


class TestContract:
    """Tests for aspect queries and retry flags."""

    def test_has_aspect_uses_operation_kind(self) -> None:
        op = EchoOperation()

        assert op.has_aspect(Aspect.READ_OPERATION)
        assert not op.has_aspect(Aspect.WRITE_OPERATION)

    def test_unregistered_subclass_has_no_aspects(self) -> None:
        op = RetryRestrictedOperation()

        for aspect in Aspect:
            assert not op.has_aspect(aspect)

    def test_can_retry_read_override(self) -> None:
        assert EchoOperation().can_retry_read is True
        assert RetryRestrictedOperation().can_retry_read is False

    def test_abstract_execute_required(self) -> None:
        class Incomplete(OperationBase):
            pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]
