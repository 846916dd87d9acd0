"""Console-backed :class:`~taskshell.core.protocols.Reporter`.

Command text is printed with ``markup=False`` so that user input such
as ``grep [a-z]`` is never interpreted as Rich markup, and with
``soft_wrap=True`` so a long command stays on one physical line.
"""

from __future__ import annotations

from taskshell.cli.console import console, error_console
from taskshell.core.models import CommandSpec, DispatchRecord


class ConsoleReporter:
    """Report dispatch outcomes on stdout / stderr."""

    def command_started(self, record: DispatchRecord) -> None:
        console.print(
            f"Successfully executed command: {record.spec.raw_text}",
            markup=False,
            soft_wrap=True,
        )

    def command_failed(self, spec: CommandSpec) -> None:
        error_console.print(
            f"Error: Failed to execute command: {spec.raw_text}",
            markup=False,
            soft_wrap=True,
            style="bold red",
        )

    def session_closed(self) -> None:
        console.print("Exiting Shell...", markup=False, soft_wrap=True)
