"""Shared bookkeeping for thread-backed executors.

:class:`ThreadedExecutor` implements the whole
:class:`~taskshell.core.protocols.Executor` protocol on top of one
abstract hook, :meth:`ThreadedExecutor._start`, which launches a task
and returns a blocking *join* callable.  A daemon watcher thread per
task calls that join and pushes the task id onto a
:class:`queue.Queue`; :meth:`wait_any` blocks on ``Queue.get``.

Identifiers come from a monotonically increasing counter, so an id is
never reused within one executor's lifetime.
"""

from __future__ import annotations

import itertools
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from loguru import logger

from taskshell.exceptions import DispatchError


class ThreadedExecutor(ABC):
    """Base class for executors whose tasks complete on worker threads."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._completed: queue.Queue[int] = queue.Queue()
        self._outstanding: dict[int, tuple[str, ...]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def dispatch(self, argv: Sequence[str]) -> int | None:
        """Start *argv* as a new task; ``None`` when it cannot start."""
        argv = tuple(argv)
        if not argv:
            logger.debug("executor.dispatch.rejected reason=empty-argv")
            return None

        try:
            join = self._start(argv)
        except DispatchError as exc:
            logger.debug("executor.dispatch.failed program={!r} error={}", argv[0], exc)
            return None

        with self._lock:
            task_id = next(self._ids)
            self._outstanding[task_id] = argv

        watcher = threading.Thread(
            target=self._watch,
            args=(task_id, join),
            name=f"taskshell-watch-{task_id}",
            daemon=True,
        )
        watcher.start()
        logger.debug("executor.dispatch task_id={} argv={}", task_id, argv)
        return task_id

    def wait_any(self) -> int:
        """Block until some task completes and return its id."""
        task_id = self._completed.get()
        with self._lock:
            argv = self._outstanding.pop(task_id, ("?",))
        logger.debug("executor.completed task_id={} program={!r}", task_id, argv[0])
        return task_id

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def outstanding(self) -> int:
        """Number of dispatched tasks not yet returned by :meth:`wait_any`."""
        with self._lock:
            return len(self._outstanding)

    # ------------------------------------------------------------------
    # Subclass hook
    # ------------------------------------------------------------------

    @abstractmethod
    def _start(self, argv: tuple[str, ...]) -> Callable[[], object]:
        """Launch *argv* and return a callable that blocks until it ends.

        Raises
        ------
        DispatchError
            When the program cannot be started.
        """

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _watch(self, task_id: int, join: Callable[[], object]) -> None:
        try:
            status = join()
            logger.debug("executor.exit task_id={} status={}", task_id, status)
        except Exception:
            logger.exception("executor.join.error task_id={}", task_id)
        finally:
            self._completed.put(task_id)
