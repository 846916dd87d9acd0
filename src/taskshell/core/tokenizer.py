"""Whitespace tokenizer turning command text into argv words."""

from __future__ import annotations


def tokenize(command: str) -> tuple[str, ...]:
    """Split *command* on runs of spaces and tabs.

    No quoting or escaping is recognised: ``'echo "a b"'`` yields
    ``('echo', '"a', 'b"')``.
    """
    return tuple(command.split())
