"""Sync command implementation.

Applies the manifest to this machine: installs, configuration and files.
"""

from typing import Annotated

import typer

from pactctl.apply import ApplyContext, ApplyEngine
from pactctl.cli.display import create_results_table, print_results_summary
from pactctl.cli.types import get_settings, get_sync_root
from pactctl.core.manifest import require_manifest
from pactctl.core.sync import SyncEngine
from pactctl.models.result import Result
from pactctl.operators import resolve_package_manager
from pactctl.utils.formatting import console, print_info, print_warning

ALL_MODULES = "all"


def sync_command(
    ctx: typer.Context,
    module: Annotated[
        str,
        typer.Argument(help="Module to apply, or 'all'."),
    ] = ALL_MODULES,
    files_only: Annotated[
        bool,
        typer.Option("--files-only", "-f", help="Only place files; skip installs and settings."),
    ] = False,
) -> None:
    """Apply the manifest to this machine.

    Every item reports OK, SKIP (already in place) or FAIL; one failing
    item never stops the others. Exits with status 1 if anything failed.

    Examples:
        pactctl sync                   # Apply everything
        pactctl sync shell             # Apply one module
        pactctl sync --files-only      # Only link and copy files
    """
    quiet = bool((ctx.obj or {}).get("quiet"))
    settings = get_settings()
    manifest = require_manifest(get_sync_root(settings))

    results: list[Result]
    if files_only:
        engine = SyncEngine(manifest)
        results = engine.sync_all() if module == ALL_MODULES else engine.sync_module(module)
    else:
        package_manager = resolve_package_manager(override=settings.package_manager)
        if package_manager is None:
            print_warning("No supported package manager found; installs will fail.")
        elif not quiet:
            print_info(f"Using package manager: {package_manager.name}")
        apply_engine = ApplyEngine(ApplyContext(manifest, package_manager, settings))
        if module == ALL_MODULES:
            results = apply_engine.apply()
        else:
            results = apply_engine.apply_module(module)

    if not results:
        print_info("Nothing to apply.")
        return

    if not quiet:
        console.print(create_results_table(results))
    summary = print_results_summary(results)
    if summary.has_failures:
        raise typer.Exit(code=1)
