"""CLI application entry point and command routing for taskshell.

This module is the **sole error boundary** for the entire application.
It catches :class:`~taskshell.exceptions.TaskShellError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; segmentation, sequencing and the
  session loop live in ``core``; executors and line sources in ``infra``.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from taskshell.cli import exit_codes
from taskshell.cli.console import error_console
from taskshell.exceptions import TaskShellError, UnknownExecutorError
from taskshell.infra.task_table import ThreadedExecutor
from taskshell.logging_utils import configure_logging
from taskshell.version import __version__

EXECUTOR_CHOICES: tuple[str, ...] = ("subprocess", "builtin")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``taskshell``               interactive session
    * ``taskshell -c LINE``       run one command line and exit
    * ``taskshell doctor``        environment diagnostics
    * ``taskshell --version``
    """
    parser = argparse.ArgumentParser(
        prog="taskshell",
        description=(
            "Line-oriented command interpreter. Separate commands with '&' "
            "to run them concurrently or ';' to wait for each one."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        choices=["doctor"],
        help="'doctor' runs environment diagnostics instead of a session.",
    )
    parser.add_argument(
        "-c",
        "--command",
        metavar="LINE",
        default=None,
        help="Run a single command line, wait for its tasks, then exit.",
    )
    parser.add_argument(
        "--executor",
        choices=EXECUTOR_CHOICES,
        default="subprocess",
        help="Task backend: OS processes (default) or in-process builtin programs.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Read lines from stdin without the interactive prompt.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_executor(name: str) -> ThreadedExecutor:
    """Instantiate the executor backend called *name*."""
    if name == "subprocess":
        from taskshell.infra.subprocess_executor import SubprocessExecutor

        return SubprocessExecutor()
    if name == "builtin":
        from taskshell.infra.builtin_executor import BuiltinExecutor

        return BuiltinExecutor()
    raise UnknownExecutorError(
        f"Unknown executor {name!r}.",
        hint=f"Choose one of: {', '.join(EXECUTOR_CHOICES)}",
    )


def _drain(executor: ThreadedExecutor) -> None:
    """Wait for every task still running so ``-c`` does not orphan them."""
    while executor.outstanding:
        executor.wait_any()


def _handle_session(args: argparse.Namespace) -> int:
    """Run an interactive session, or a single line with ``-c``."""
    from taskshell.cli.reporter import ConsoleReporter
    from taskshell.core.sequencer import ExecutionSequencer
    from taskshell.core.session import Session, is_exit_command
    from taskshell.infra.line_sources import QuestionaryLineSource, StreamLineSource

    executor = build_executor(args.executor)
    reporter = ConsoleReporter()
    sequencer = ExecutionSequencer(executor, reporter)

    if args.command is not None:
        session = Session(StreamLineSource(), sequencer, reporter)
        if not is_exit_command(args.command):
            session.run_line(args.command)
            _drain(executor)
        return exit_codes.SUCCESS

    if args.plain or not sys.stdin.isatty():
        line_source = StreamLineSource()
    else:
        line_source = QuestionaryLineSource()

    logger.debug("cli.session executor={} source={}", args.executor, type(line_source).__name__)
    Session(line_source, sequencer, reporter).run()
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from taskshell.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the taskshell CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.target == "doctor":
        return _handle_doctor()

    return _handle_session(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TaskShellError as exc:
        error_console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            error_console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        error_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
