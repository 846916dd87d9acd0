"""Single source of truth for the taskshell version string."""

__version__: str = "0.1.0"
