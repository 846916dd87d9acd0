"""Execution sequencing: dispatch a :class:`CommandLine` and enforce waits.

The executor only offers "wait for any one completion, tell me which",
so sequential semantics are built by filtering: after dispatching a
sequential command the sequencer keeps calling
:meth:`~taskshell.core.protocols.Executor.wait_any` and discards every
identifier that is not the pending one.

Discarded identifiers are **not** requeued.  They belong to concurrent
commands that nothing ever waits on again, so their completion is
consumed without further effect.

Assumption
----------
Every successfully dispatched task eventually comes back from
``wait_any`` exactly once.  An executor that breaks this contract makes
the wait-matching loop block forever; no timeout guards against it.
"""

from __future__ import annotations

from loguru import logger

from taskshell.core.models import CommandLine, CommandSpec, DispatchRecord
from taskshell.core.protocols import Executor, Reporter


class ExecutionSequencer:
    """Drives one :class:`CommandLine` at a time through an executor.

    Parameters
    ----------
    executor:
        Any object satisfying the :class:`Executor` protocol.
    reporter:
        Receives one notification per dispatch attempt.
    """

    def __init__(self, executor: Executor, reporter: Reporter) -> None:
        self._executor: Executor = executor
        self._reporter: Reporter = reporter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, command_line: CommandLine) -> tuple[DispatchRecord, ...]:
        """Dispatch every command in source order.

        Returns the dispatch records, in order, for callers that want
        to inspect them; the session loop ignores the result.
        """
        records: list[DispatchRecord] = []
        for spec in command_line:
            record = self._dispatch(spec)
            records.append(record)

            if record.failed or spec.concurrent:
                continue
            self._wait_for(record.task_id)
        return tuple(records)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _dispatch(self, spec: CommandSpec) -> DispatchRecord:
        task_id = self._executor.dispatch(spec.argv)
        record = DispatchRecord(spec=spec, task_id=task_id)

        if record.failed:
            logger.debug("sequencer.dispatch.failed command={!r}", spec.raw_text)
            self._reporter.command_failed(spec)
        else:
            logger.debug(
                "sequencer.dispatch task_id={} concurrent={} command={!r}",
                task_id,
                spec.concurrent,
                spec.raw_text,
            )
            self._reporter.command_started(record)
        return record

    def _wait_for(self, pending: int | None) -> None:
        """Block until the executor reports *pending* as completed."""
        while True:
            completed = self._executor.wait_any()
            if completed == pending:
                logger.debug("sequencer.wait.matched task_id={}", pending)
                return
            logger.debug("sequencer.wait.discard pending={} got={}", pending, completed)
