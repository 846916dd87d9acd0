"""In-process demo programs for :class:`~taskshell.infra.builtin_executor.BuiltinExecutor`.

Every program has the signature ``(args, out) -> int`` where *args*
excludes the program name, *out* is the text stream to write to and the
return value is an exit status.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import TextIO

Program = Callable[[Sequence[str], TextIO], int]

PINGPONG_ROUNDS: int = 5
PINGPONG_DEFAULT_DELAY_MS: int = 100


def pingpong(args: Sequence[str], out: TextIO) -> int:
    """``PingPong WORD [DELAY_MS]``: write WORD five times, pausing in between."""
    if not args:
        out.write("usage: PingPong WORD [DELAY_MS]\n")
        return 2
    word = args[0]
    try:
        delay_ms = int(args[1]) if len(args) > 1 else PINGPONG_DEFAULT_DELAY_MS
    except ValueError:
        out.write(f"PingPong: invalid delay {args[1]!r}\n")
        return 2

    for _ in range(PINGPONG_ROUNDS):
        out.write(f"{word} ")
        out.flush()
        time.sleep(delay_ms / 1000)
    out.write("\n")
    return 0


def echo(args: Sequence[str], out: TextIO) -> int:
    out.write(" ".join(args) + "\n")
    return 0


def sleep(args: Sequence[str], out: TextIO) -> int:
    """``sleep SECONDS``: block for a (possibly fractional) number of seconds."""
    try:
        seconds = float(args[0]) if args else 0.0
    except ValueError:
        out.write(f"sleep: invalid time interval {args[0]!r}\n")
        return 2
    time.sleep(max(seconds, 0.0))
    return 0


DEFAULT_PROGRAMS: dict[str, Program] = {
    "pingpong": pingpong,
    "echo": echo,
    "sleep": sleep,
}
