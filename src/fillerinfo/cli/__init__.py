"""Command-line interface for fillerinfo.

- app: The Typer application object used by the ``fillerinfo`` entry point.
- console: Rich Console instance for consistent, styled output.
"""

from fillerinfo.cli.commands import app, console

__all__ = ["app", "console"]
