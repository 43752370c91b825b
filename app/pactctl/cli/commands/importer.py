"""Import command implementation.

Folds what is only on this machine back into the manifest.
"""

import getpass
import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from pactctl.cli.display import create_diff_table
from pactctl.cli.types import get_settings, get_sync_root, validate_modules
from pactctl.core.diff import DIFF_MODULES, DiffEngine, DiffResult, count_new_items
from pactctl.core.manifest import (
    ManifestError,
    load_manifest,
    manifest_exists,
    save_manifest,
)
from pactctl.core.merge import (
    build_selection_from_diffs,
    copy_config_file,
    create_default_manifest,
    merge_selection,
    store_secrets,
    validate_selection,
)
from pactctl.core.paths import ensure_dir
from pactctl.core.secrets import SecretStore
from pactctl.models.detected import DetectedConfig
from pactctl.models.manifest import Manifest
from pactctl.scanners import ScanOptions, scan
from pactctl.utils.formatting import console, print_error, print_info, print_success, print_warning

logger = logging.getLogger(__name__)


def import_command(
    ctx: typer.Context,
    modules: Annotated[
        list[str] | None,
        typer.Argument(help=f"Modules to import: {', '.join(DIFF_MODULES)}."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Import local-only items into the manifest.

    Every local-only item of the chosen modules is added: list entries are
    appended, differing settings are overwritten with this machine's
    values, and discovered config files are copied into the pact tree.
    Without a manifest, a complete one is created from a full scan.

    Examples:
        pactctl import                 # Import everything
        pactctl import cli shell -y    # Import two modules without asking
    """
    obj = ctx.obj or {}
    quiet = bool(obj.get("quiet"))
    store: SecretStore | None = obj.get("secret_store")

    selected = validate_modules(modules, DIFF_MODULES)
    sync_root = get_sync_root(get_settings())

    if not manifest_exists(sync_root):
        _create_manifest(sync_root, store, yes, quiet)
        return

    try:
        manifest = load_manifest(sync_root)
    except ManifestError as e:
        print_error(f"Failed to load manifest: {e}")
        raise typer.Exit(code=1) from e

    detected = scan(ScanOptions(modules=selected), manifest.secrets(), store)
    results = [r for r in DiffEngine(manifest).compare(detected, selected or None) if r.local_only]

    if not results:
        print_success("Nothing to import. The manifest already has everything.")
        return

    if not quiet:
        for result in results:
            console.print(create_diff_table(_local_only(result), show_synced=False))

    total = count_new_items(results)
    if not yes and not typer.confirm(f"\nImport {total} item(s) into the manifest?"):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    selection = build_selection_from_diffs(
        {result.module: list(result.local_only) for result in results}, detected
    )
    for problem in validate_selection(selection, sync_root):
        print_warning(problem)

    copied = merge_selection(manifest, selection)
    _save(manifest)

    if store is not None and selection.secrets:
        stored = store_secrets(selection.secrets, store, os.environ)
        if not quiet:
            print_info(f"Stored {len(stored)} secret value(s) in the secret store.")

    if len(copied) < len(selection.config_files):
        print_warning(
            f"{len(selection.config_files) - len(copied)} config file(s) could not be copied."
        )
    print_success(f"Imported {selection.count} item(s) into {manifest.root}.")


def _local_only(result: DiffResult) -> DiffResult:
    return DiffResult(module=result.module, local_only=result.local_only)


def _create_manifest(sync_root: Path, store: SecretStore | None, yes: bool, quiet: bool) -> None:
    """Create a manifest from a full scan of this machine."""
    detected = scan(ScanOptions(), store=store)
    manifest = create_default_manifest(detected, getpass.getuser(), sync_root)

    if not quiet:
        print_info(f"No manifest found. Creating {sync_root / 'pact.json'} from this machine.")
    if not yes and not typer.confirm("Create the manifest?"):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    try:
        ensure_dir(sync_root, "synchronization root")
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    copied = _copy_config_files(detected, sync_root)
    _save(manifest)

    if store is not None:
        store_secrets([secret.name for secret in detected.secrets], store, os.environ)
    print_success(
        f"Created manifest with {len(manifest.modules())} module(s) "
        f"and copied {copied} config file(s)."
    )


def _copy_config_files(detected: DetectedConfig, sync_root: Path) -> int:
    copied = 0
    for config_file in detected.config_files:
        try:
            copy_config_file(config_file, sync_root)
        except OSError as e:
            logger.warning("Could not copy %s: %s", config_file.source_path, e)
            continue
        copied += 1
    return copied


def _save(manifest: Manifest) -> None:
    try:
        save_manifest(manifest)
    except ManifestError as e:
        print_error(f"Failed to save manifest: {e}")
        raise typer.Exit(code=1) from e
