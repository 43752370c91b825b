"""Shared helpers for CLI commands.

Loads settings and resolves the synchronization root the same way for
every command, and validates module arguments.
"""

from collections.abc import Iterable
from pathlib import Path

import typer

from pactctl.core.paths import find_sync_root
from pactctl.core.settings import Settings, SettingsError, load_settings
from pactctl.utils.formatting import print_error


def get_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_sync_root(settings: Settings) -> Path:
    """Resolve the synchronization root or exit.

    Raises:
        typer.Exit: If no root can be determined.
    """
    try:
        return find_sync_root(override=settings.sync_root)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def validate_modules(modules: Iterable[str] | None, allowed: Iterable[str]) -> list[str]:
    """Check module arguments against the known modules.

    Args:
        modules: Modules given on the command line.
        allowed: Valid module names.

    Returns:
        The modules, deduplicated in the order given.

    Raises:
        typer.BadParameter: If a module is unknown.
    """
    known = list(allowed)
    selected = list(dict.fromkeys(modules or ()))
    unknown = [module for module in selected if module not in known]
    if unknown:
        msg = f"Unknown module(s): {', '.join(unknown)}. Choose from: {', '.join(known)}"
        raise typer.BadParameter(msg)
    return selected
