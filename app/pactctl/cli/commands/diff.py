"""Diff command implementation.

Compares this machine with the manifest.
"""

import json
from typing import Annotated

import typer

from pactctl.cli.display import create_diff_table, print_diff_summary
from pactctl.cli.types import get_settings, get_sync_root, validate_modules
from pactctl.core.diff import DIFF_MODULES, DiffEngine, DiffResult, all_local_diffs
from pactctl.core.manifest import ManifestError, load_manifest, manifest_exists
from pactctl.scanners import ScanOptions, scan
from pactctl.utils.formatting import console, print_error, print_info


def diff_command(
    ctx: typer.Context,
    modules: Annotated[
        list[str] | None,
        typer.Argument(help=f"Modules to compare: {', '.join(DIFF_MODULES)}."),
    ] = None,
    hide_synced: Annotated[
        bool,
        typer.Option("--hide-synced", help="Only show differences."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for scripting."),
    ] = False,
) -> None:
    """Compare this machine with the manifest.

    Difference types:
      [+] LOCAL ONLY: on this machine, not in the manifest (or a different value)
      [-] PACT ONLY: in the manifest, not on this machine
      [=] SYNCED: on both sides

    Without a manifest every detected item is reported as local only.

    Examples:
        pactctl diff                   # Compare every module
        pactctl diff cli git           # Compare two modules
        pactctl diff --json            # JSON output for scripting
    """
    selected = validate_modules(modules, DIFF_MODULES)
    sync_root = get_sync_root(get_settings())
    store = (ctx.obj or {}).get("secret_store")

    if manifest_exists(sync_root):
        try:
            manifest = load_manifest(sync_root)
        except ManifestError as e:
            print_error(f"Failed to load manifest: {e}")
            raise typer.Exit(code=1) from e
        detected = scan(ScanOptions(modules=selected), manifest.secrets(), store)
        results = DiffEngine(manifest).compare(detected, selected or None)
    else:
        detected = scan(ScanOptions(modules=selected), store=store)
        results = all_local_diffs(detected, selected or None)
        if not json_output:
            print_info(f"No manifest in {sync_root}; everything is local only.")

    if json_output:
        console.print_json(json.dumps([result.to_dict() for result in results]))
        return

    _print_results(results, show_synced=not hide_synced)


def _print_results(results: list[DiffResult], show_synced: bool) -> None:
    for result in results:
        if not show_synced and result.is_in_sync:
            continue
        console.print(create_diff_table(result, show_synced=show_synced))
    print_diff_summary(results)
