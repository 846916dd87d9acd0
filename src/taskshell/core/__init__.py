"""Core / service layer: segmentation, sequencing, and the session loop.

Rules
-----
* No ``print()`` calls.
* No process creation or terminal access; executors, line sources and
  reporters are injected.
* No imports from ``cli`` or ``infra``.
"""

from taskshell.core.models import CommandLine, CommandSpec, DispatchRecord, SessionCounter
from taskshell.core.protocols import Executor, LineSource, Reporter
from taskshell.core.segmenter import CONCURRENT_MARKER, SEQUENTIAL_MARKER, segment
from taskshell.core.sequencer import ExecutionSequencer
from taskshell.core.session import Session, is_exit_command, render_prompt
from taskshell.core.tokenizer import tokenize

__all__: list[str] = [
    "CONCURRENT_MARKER",
    "CommandLine",
    "CommandSpec",
    "DispatchRecord",
    "ExecutionSequencer",
    "Executor",
    "LineSource",
    "Reporter",
    "SEQUENTIAL_MARKER",
    "Session",
    "SessionCounter",
    "is_exit_command",
    "render_prompt",
    "segment",
    "tokenize",
]
