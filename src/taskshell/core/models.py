"""Domain models for taskshell.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  The one exception is
:class:`SessionCounter`, which is deliberately mutable state owned by a
single session loop.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Segmented commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandSpec:
    """One command sliced out of an input line."""

    raw_text: str
    """Trimmed command text exactly as typed (e.g. ``"PingPong abc 100"``)."""

    argv: tuple[str, ...]
    """Program name followed by its arguments."""

    concurrent: bool
    """``True`` when the command was followed by the concurrent marker."""


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Immutable, ordered collection of :class:`CommandSpec` entries.

    Order is significant: a sequential spec is a serialisation point
    before the next spec in the collection.
    """

    commands: tuple[CommandSpec, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)

    def __bool__(self) -> bool:
        return len(self.commands) > 0

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self.commands)


# ---------------------------------------------------------------------------
# Dispatch bookkeeping
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DispatchRecord:
    """Outcome of handing one :class:`CommandSpec` to an executor."""

    spec: CommandSpec

    task_id: int | None
    """Executor-assigned identifier, or ``None`` when the dispatch failed."""

    @property
    def failed(self) -> bool:
        return self.task_id is None


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class SessionCounter:
    """Number of the line about to be processed, starting at 1."""

    value: int = 1

    def advance(self) -> int:
        """Count one processed line and return the new value."""
        self.value += 1
        return self.value
