"""Allow ``python -m taskshell`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m taskshell`` behaves identically to the ``taskshell``
console script.
"""

from __future__ import annotations

from taskshell.cli.app import cli

if __name__ == "__main__":
    cli()
