from __future__ import annotations

import logging

from docwire.operations import Completion


class TestCompletion:
    """Tests for the exactly-once completion wrapper."""

    def test_forwards_result(self, recorder) -> None:
        Completion(recorder)(None, {"ok": 1})

        assert recorder.calls == [(None, {"ok": 1})]

    def test_error_wins_over_result(self, recorder) -> None:
        error = RuntimeError("boom")
        Completion(recorder)(error, {"ok": 1})

        assert recorder.calls == [(error, None)]

    def test_second_call_dropped_and_logged(self, recorder, caplog) -> None:
        completion = Completion(recorder, "findAndModify")
        completion(None, 1)

        with caplog.at_level(logging.WARNING, logger="docwire.operations.completion"):
            completion(RuntimeError("late"), None)

        assert recorder.calls == [(None, 1)]
        assert completion.done
        assert "duplicate completion for findAndModify" in caplog.text
