"""Tests for the execution sequencer and its wait-matching loop.

The executor and reporter are children of one parent ``MagicMock`` so
that ``manager.mock_calls`` records the exact interleaving of
dispatches, waits and reports.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from typing import TextIO
from unittest.mock import MagicMock

import pytest

from taskshell.core.models import CommandLine, CommandSpec
from taskshell.core.segmenter import segment
from taskshell.core.sequencer import ExecutionSequencer
from taskshell.infra.builtin_executor import BuiltinExecutor
from taskshell.infra.subprocess_executor import SubprocessExecutor


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _spec(text: str, *, concurrent: bool = False) -> CommandSpec:
    return CommandSpec(raw_text=text, argv=tuple(text.split()), concurrent=concurrent)


def _line(*specs: CommandSpec) -> CommandLine:
    return CommandLine(commands=specs)


def _wired(
    dispatch_ids: Sequence[int | None],
    completions: Sequence[int],
) -> tuple[MagicMock, ExecutionSequencer]:
    manager = MagicMock()
    manager.executor.dispatch.side_effect = list(dispatch_ids)
    manager.executor.wait_any.side_effect = list(completions)
    return manager, ExecutionSequencer(manager.executor, manager.reporter)


def _call_names(manager: MagicMock) -> list[str]:
    return [name for name, _args, _kwargs in manager.mock_calls]


# ---------------------------------------------------------------------------
# Sequential blocking
# ---------------------------------------------------------------------------

class TestSequentialWait:
    def test_waits_for_exact_id_before_next_dispatch(self) -> None:
        manager, seq = _wired([7, 8], [3, 7, 8])
        seq.run(_line(_spec("A"), _spec("B")))

        assert _call_names(manager) == [
            "executor.dispatch",
            "reporter.command_started",
            "executor.wait_any",  # 3: unrelated, discarded
            "executor.wait_any",  # 7: A done
            "executor.dispatch",
            "reporter.command_started",
            "executor.wait_any",  # 8: B done
        ]

    def test_dispatch_receives_argv(self) -> None:
        manager, seq = _wired([1], [1])
        seq.run(_line(_spec("PingPong abc 100")))
        manager.executor.dispatch.assert_called_once_with(("PingPong", "abc", "100"))

    def test_discarded_ids_are_not_requeued(self) -> None:
        # A (concurrent, id 1) finishes while B is waited on; C must not
        # see id 1 again and the loop consumes exactly three completions.
        manager, seq = _wired([1, 2, 3], [1, 2, 3])
        seq.run(_line(_spec("A", concurrent=True), _spec("B"), _spec("C")))

        assert manager.executor.wait_any.call_count == 3
        assert _call_names(manager).count("executor.dispatch") == 3

    def test_many_unrelated_completions(self) -> None:
        manager, seq = _wired([50], [10, 11, 12, 13, 50])
        seq.run(_line(_spec("slow")))
        assert manager.executor.wait_any.call_count == 5

    def test_extra_wait_would_be_detected(self) -> None:
        # Guard for the harness itself: an unexpected wait exhausts the script.
        manager, seq = _wired([1, 2], [1])
        with pytest.raises(StopIteration):
            seq.run(_line(_spec("A"), _spec("B")))


# ---------------------------------------------------------------------------
# Concurrent non-blocking
# ---------------------------------------------------------------------------

class TestConcurrentDispatch:
    def test_no_wait_between_concurrent_and_next(self) -> None:
        manager, seq = _wired([1, 2], [2])
        seq.run(_line(_spec("A", concurrent=True), _spec("B")))

        assert _call_names(manager) == [
            "executor.dispatch",
            "reporter.command_started",
            "executor.dispatch",
            "reporter.command_started",
            "executor.wait_any",
        ]

    def test_all_concurrent_never_waits(self) -> None:
        manager, seq = _wired([1, 2, 3], [])
        seq.run(_line(*(_spec(t, concurrent=True) for t in "ABC")))
        manager.executor.wait_any.assert_not_called()


# ---------------------------------------------------------------------------
# Dispatch failure resilience
# ---------------------------------------------------------------------------

class TestDispatchFailure:
    def test_failure_is_reported_and_next_dispatched(self) -> None:
        manager, seq = _wired([None, 5], [5])
        records = seq.run(_line(_spec("nosuch"), _spec("Y")))

        assert _call_names(manager) == [
            "executor.dispatch",
            "reporter.command_failed",
            "executor.dispatch",
            "reporter.command_started",
            "executor.wait_any",
        ]
        manager.reporter.command_failed.assert_called_once_with(_spec("nosuch"))
        assert [r.failed for r in records] == [True, False]

    def test_failed_sequential_never_waits(self) -> None:
        manager, seq = _wired([None], [])
        seq.run(_line(_spec("nosuch")))
        manager.executor.wait_any.assert_not_called()


# ---------------------------------------------------------------------------
# Records and empty input
# ---------------------------------------------------------------------------

class TestRunResult:
    def test_records_follow_source_order(self) -> None:
        _manager, seq = _wired([4, 9], [9])
        records = seq.run(_line(_spec("A", concurrent=True), _spec("B")))
        assert [(r.spec.raw_text, r.task_id) for r in records] == [("A", 4), ("B", 9)]

    def test_started_report_carries_record(self) -> None:
        manager, seq = _wired([4], [4])
        (record,) = seq.run(_line(_spec("A")))
        manager.reporter.command_started.assert_called_once_with(record)

    def test_empty_line_does_nothing(self) -> None:
        manager, seq = _wired([], [])
        assert seq.run(segment(" ; & ")) == ()
        assert manager.mock_calls == []


# ---------------------------------------------------------------------------
# Against a real threaded executor
# ---------------------------------------------------------------------------

class TestWithBuiltinExecutor:
    def test_sequential_returns_while_concurrent_still_running(self) -> None:
        gate = threading.Event()

        def blocker(_args: Sequence[str], _out: TextIO) -> int:
            gate.wait(timeout=10)
            return 0

        def quick(_args: Sequence[str], _out: TextIO) -> int:
            return 0

        executor = BuiltinExecutor({"blocker": blocker, "quick": quick})
        seq = ExecutionSequencer(executor, MagicMock())

        records = seq.run(segment("blocker & quick"))

        assert [r.failed for r in records] == [False, False]
        assert executor.outstanding == 1  # blocker still running
        gate.set()
        assert executor.wait_any() == records[0].task_id


class TestWithSubprocessExecutor:
    def test_unstartable_command_does_not_stop_the_line(self) -> None:
        reporter = MagicMock()
        seq = ExecutionSequencer(SubprocessExecutor(), reporter)
        bad = CommandSpec(raw_text="ec\x00ho hi", argv=("ec\x00ho", "hi"), concurrent=False)
        good = CommandSpec(
            raw_text="python -c pass", argv=(sys.executable, "-c", "pass"), concurrent=False,
        )

        records = seq.run(_line(bad, good))

        assert [r.failed for r in records] == [True, False]
        reporter.command_failed.assert_called_once_with(bad)
        reporter.command_started.assert_called_once_with(records[1])
