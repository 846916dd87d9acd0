"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations, preserving the dependency inversion
principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from taskshell.core.models import CommandSpec, DispatchRecord


class Executor(Protocol):
    """Contract for task-creation backends.

    Any object that implements :meth:`dispatch` and :meth:`wait_any`
    with the correct signatures satisfies this protocol structurally.
    """

    def dispatch(self, argv: Sequence[str]) -> int | None:
        """Start a new task running ``argv[0]`` with ``argv[1:]``.

        Returns
        -------
        int | None
            A positive identifier unique among outstanding tasks, or
            ``None`` when the program could not be started.
        """
        ...  # pragma: no cover

    def wait_any(self) -> int:
        """Block until some outstanding task completes and return its id.

        Each identifier is returned exactly once.  Calling this with no
        outstanding tasks blocks forever.
        """
        ...  # pragma: no cover


class LineSource(Protocol):
    """Contract for interactive input backends."""

    def read_line(self, prompt: str) -> str | None:
        """Show *prompt* and return the next raw line.

        Returns ``None`` when the input is exhausted (EOF, Ctrl+D).
        """
        ...  # pragma: no cover


class Reporter(Protocol):
    """Contract for user-facing reporting of dispatch outcomes."""

    def command_started(self, record: DispatchRecord) -> None:
        ...  # pragma: no cover

    def command_failed(self, spec: CommandSpec) -> None:
        ...  # pragma: no cover

    def session_closed(self) -> None:
        ...  # pragma: no cover
