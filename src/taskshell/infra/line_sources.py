"""Implementations of :class:`~taskshell.core.protocols.LineSource`.

Two backends:

* :class:`StreamLineSource`: prompt and read over plain text streams;
  used for piped input and ``--plain``.
* :class:`QuestionaryLineSource`: an interactive questionary prompt
  with line editing; requires a terminal.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from taskshell.exceptions import EnvironmentCheckError, EnvironmentError


class StreamLineSource:
    """Read lines from *stdin*, writing the prompt to *stdout*.

    Both streams are resolved lazily so that test harnesses replacing
    ``sys.stdin``/``sys.stdout`` are honoured.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def read_line(self, prompt: str) -> str | None:
        stdin = self._stdin if self._stdin is not None else sys.stdin
        stdout = self._stdout if self._stdout is not None else sys.stdout

        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryLineSource:
    """Interactive line source backed by ``questionary.text``.

    Ctrl+C and Ctrl+D both end the session, mirroring end of input.
    """

    def __init__(self) -> None:
        if not sys.stdin.isatty():
            raise EnvironmentCheckError(
                "The interactive prompt requires a terminal on stdin.",
                hint="Pipe commands with --plain, or run a single line with -c.",
            )
        self._questionary: Any = _import_questionary()

    def read_line(self, prompt: str) -> str | None:
        question = self._questionary.text(prompt.rstrip(), qmark="")
        try:
            answer: str | None = question.ask()  # None on Ctrl+C
        except EOFError:
            return None
        return answer
