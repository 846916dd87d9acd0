"""Interactive session loop: prompt, read, segment, sequence, repeat."""

from __future__ import annotations

from loguru import logger

from taskshell.core.models import DispatchRecord, SessionCounter
from taskshell.core.protocols import LineSource, Reporter
from taskshell.core.segmenter import segment
from taskshell.core.sequencer import ExecutionSequencer

EXIT_KEYWORDS: frozenset[str] = frozenset({"exit", "quit"})


def render_prompt(counter: SessionCounter) -> str:
    """Return the prompt text, e.g. ``"shell[3]% "``."""
    return f"shell[{counter.value}]% "


def is_exit_command(line: str) -> bool:
    """Whether the whole of *line* is an exit keyword, ignoring case only.

    Surrounding whitespace is significant: ``" exit"`` is a command line.
    """
    return line.lower() in EXIT_KEYWORDS


class Session:
    """One shell session bound to a line source and a sequencer.

    The session owns its :class:`SessionCounter`; nothing else mutates
    it.
    """

    def __init__(
        self,
        line_source: LineSource,
        sequencer: ExecutionSequencer,
        reporter: Reporter,
        *,
        counter: SessionCounter | None = None,
    ) -> None:
        self._line_source = line_source
        self._sequencer = sequencer
        self._reporter = reporter
        self.counter: SessionCounter = counter if counter is not None else SessionCounter()

    def run(self) -> None:
        """Loop until an exit keyword or end of input."""
        logger.debug("session.start")
        while True:
            line = self._line_source.read_line(render_prompt(self.counter))
            if line is None or is_exit_command(line):
                logger.debug("session.end eof={}", line is None)
                self._reporter.session_closed()
                return
            self.run_line(line)

    def run_line(self, line: str) -> tuple[DispatchRecord, ...]:
        """Process exactly one raw line and count it."""
        records = self._sequencer.run(segment(line))
        self.counter.advance()
        return records
