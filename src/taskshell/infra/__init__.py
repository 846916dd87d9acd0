"""Infrastructure layer: external system integration.

This layer wraps all interaction with the operating system: child
processes, worker threads and the terminal.  Every raw OS exception
raised while starting a task is caught here and folded into the
dispatch failure sentinel.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from taskshell.infra.builtin_executor import BuiltinExecutor
from taskshell.infra.line_sources import QuestionaryLineSource, StreamLineSource
from taskshell.infra.subprocess_executor import SubprocessExecutor
from taskshell.infra.task_table import ThreadedExecutor

__all__: list[str] = [
    "BuiltinExecutor",
    "QuestionaryLineSource",
    "StreamLineSource",
    "SubprocessExecutor",
    "ThreadedExecutor",
]
