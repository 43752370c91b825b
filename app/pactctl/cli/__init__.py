"""CLI package for pactctl.

This package contains the Typer application and all subcommands.
"""

from pactctl.cli.main import app

__all__ = ["app"]
