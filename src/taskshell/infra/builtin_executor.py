"""Thread-backed implementation of :class:`~taskshell.core.protocols.Executor`.

Commands name in-process programs rather than OS binaries; each task
runs on its own thread.  Program names are matched case-insensitively,
so ``PingPong abc 100`` and ``pingpong abc 100`` are equivalent.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Mapping
from typing import TextIO

from loguru import logger

from taskshell.exceptions import DispatchError
from taskshell.infra.programs import DEFAULT_PROGRAMS, Program
from taskshell.infra.task_table import ThreadedExecutor


class BuiltinExecutor(ThreadedExecutor):
    """Concrete :class:`Executor` running registered Python programs on threads.

    Parameters
    ----------
    programs:
        Name → program mapping.  Defaults to
        :data:`~taskshell.infra.programs.DEFAULT_PROGRAMS`.
    out:
        Stream handed to every program.  Defaults to ``sys.stdout``
        resolved at dispatch time.
    """

    def __init__(
        self,
        programs: Mapping[str, Program] | None = None,
        *,
        out: TextIO | None = None,
    ) -> None:
        super().__init__()
        source = DEFAULT_PROGRAMS if programs is None else programs
        self._programs: dict[str, Program] = {
            name.lower(): program for name, program in source.items()
        }
        self._out = out

    @property
    def program_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._programs))

    def _start(self, argv: tuple[str, ...]) -> Callable[[], object]:
        program = self._programs.get(argv[0].lower())
        if program is None:
            raise DispatchError(
                f"unknown program {argv[0]!r}",
                hint=f"Available programs: {', '.join(self.program_names)}",
            )

        out = self._out if self._out is not None else sys.stdout
        status: list[int] = []

        def _run() -> None:
            try:
                status.append(program(argv[1:], out))
            except Exception:
                logger.exception("builtin.program.error program={!r}", argv[0])
                status.append(1)

        thread = threading.Thread(target=_run, name=f"taskshell-{argv[0]}", daemon=True)
        thread.start()

        def _join() -> int:
            thread.join()
            return status[0] if status else 1

        return _join
