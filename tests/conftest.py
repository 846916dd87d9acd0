"""Shared pytest fixtures and configuration for the taskshell test suite.

Guidelines
----------
* Core tests use ``MagicMock`` executors: no processes, no threads.
* Executor tests may start real threads and ``sys.executable`` children,
  but never depend on programs outside the Python installation.
* No terminal interaction: interactive prompts are always mocked.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _drop_loguru_sinks() -> Iterator[None]:
    """Remove sinks added during a test so none outlive its captured streams."""
    yield
    logger.remove()
