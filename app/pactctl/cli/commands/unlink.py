"""Unlink command implementation."""

from typing import Annotated

import typer

from pactctl.cli.display import create_results_table, print_results_summary
from pactctl.cli.types import get_settings, get_sync_root
from pactctl.core.manifest import require_manifest
from pactctl.core.sync import SyncEngine
from pactctl.utils.formatting import console, print_info


def unlink_command(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove the symlinks that sync created.

    Only symlink targets are touched; copied files and anything that is
    not a symlink are left in place.
    """
    manifest = require_manifest(get_sync_root(get_settings()))

    if not yes and not typer.confirm("Remove all symlinks created from the manifest?"):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    results = SyncEngine(manifest).remove_all_symlinks()
    if not results:
        print_info("No symlinked files in the manifest.")
        return

    if not (ctx.obj or {}).get("quiet"):
        console.print(create_results_table(results, title="Unlinked"))
    summary = print_results_summary(results)
    if summary.has_failures:
        raise typer.Exit(code=1)
