"""Custom exception hierarchy for taskshell.

All exceptions that cross layer boundaries must inherit from
:class:`TaskShellError`.  Raw OS exceptions raised while starting a task
must never escape an executor; they are re-raised as
:class:`DispatchError` and then folded into the dispatch failure
sentinel at the executor protocol boundary.

Hierarchy
---------
TaskShellError
├── DispatchError
├── UnknownExecutorError
└── EnvironmentError
    └── EnvironmentCheckError
"""

from __future__ import annotations


class TaskShellError(Exception):
    """Base exception for all taskshell errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Task dispatch ---------------------------------------------------------

class DispatchError(TaskShellError):
    """Raised inside an executor when a program cannot be started."""


class UnknownExecutorError(TaskShellError):
    """Raised when the requested executor backend does not exist."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(TaskShellError):
    """Raised when a required runtime dependency is not available."""


class EnvironmentCheckError(EnvironmentError):
    """Raised when a required environment precondition is not met."""
