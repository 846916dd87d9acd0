"""OS-process implementation of :class:`~taskshell.core.protocols.Executor`.

Each dispatched command becomes a child process created with
:class:`subprocess.Popen`.  Children inherit the shell's stdin, stdout
and stderr, so their output interleaves with the prompt exactly as in
a conventional shell.

Rules
-----
* The program is resolved on ``PATH`` by the OS; no shell is involved.
* Every ``OSError`` or ``ValueError`` (NUL byte in argv) at start-up is
  re-raised as :class:`~taskshell.exceptions.DispatchError`.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable

from taskshell.exceptions import DispatchError
from taskshell.infra.task_table import ThreadedExecutor


class SubprocessExecutor(ThreadedExecutor):
    """Concrete :class:`Executor` that runs commands as child processes.

    This class satisfies the :class:`~taskshell.core.protocols.Executor`
    protocol structurally, with no explicit inheritance required.
    """

    def _start(self, argv: tuple[str, ...]) -> Callable[[], object]:
        try:
            process = subprocess.Popen(argv)
        except OSError as exc:
            raise DispatchError(
                f"cannot start {argv[0]!r}: {exc.strerror or exc}",
                hint="Check that the program exists and is executable.",
            ) from exc
        except ValueError as exc:
            # Popen rejects argv words containing NUL bytes.
            raise DispatchError(
                f"cannot start {argv[0]!r}: {exc}",
                hint="Remove control characters from the command.",
            ) from exc
        return process.wait
