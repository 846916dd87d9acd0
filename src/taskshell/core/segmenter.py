"""Line segmentation: raw input line to tagged :class:`CommandLine`.

Grammar
-------
A line is a sequence of command texts separated by ``&`` (run without
waiting) or ``;`` (run and wait).  The delimiter directly after a
command decides its mode; the final command, having none, is
sequential.  Delimiter characters cannot be escaped.

Guarantees
----------
* Pure function with no I/O, no executor access.
* Deterministic: the same line always yields an equal result.
"""

from __future__ import annotations

import re

from taskshell.core.models import CommandLine, CommandSpec
from taskshell.core.tokenizer import tokenize

CONCURRENT_MARKER: str = "&"
SEQUENTIAL_MARKER: str = ";"

# The capture group keeps each delimiter in the split result so every
# command text is followed by the delimiter that closed it.
_DELIMITER_RE = re.compile(
    f"([{re.escape(CONCURRENT_MARKER)}{re.escape(SEQUENTIAL_MARKER)}])"
)


def segment(line: str) -> CommandLine:
    """Split *line* into an ordered :class:`CommandLine`.

    Examples
    --------
    >>> [(c.raw_text, c.concurrent) for c in segment("A & B ; C")]
    [('A', True), ('B', False), ('C', False)]
    >>> len(segment(" ; ;; & "))
    0
    """
    parts = _DELIMITER_RE.split(line)
    texts = parts[0::2]
    # Pad so the trailing text pairs with "end of line".
    closers = [*parts[1::2], ""]

    commands: list[CommandSpec] = []
    for text, closer in zip(texts, closers):
        raw_text = text.strip()
        if not raw_text:
            continue
        commands.append(
            CommandSpec(
                raw_text=raw_text,
                argv=tokenize(raw_text),
                concurrent=closer == CONCURRENT_MARKER,
            )
        )
    return CommandLine(commands=tuple(commands))
