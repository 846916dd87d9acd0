"""taskshell: a line-oriented command interpreter.

Runs ``&``/``;`` separated command lines against a pluggable task
executor, waiting on exactly the tasks that sequential commands start.
"""

from taskshell.version import __version__

__all__: list[str] = ["__version__"]
