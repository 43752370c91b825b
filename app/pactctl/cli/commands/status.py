"""Status command implementation.

Shows the manifest's modules and whether their files are in place.
"""

import typer
from rich.table import Table

from pactctl.cli.types import get_settings, get_sync_root
from pactctl.core.manifest import ManifestError, load_manifest, manifest_exists
from pactctl.core.paths import get_manifest_path
from pactctl.core.sync import is_in_place
from pactctl.models.manifest import Manifest
from pactctl.utils.formatting import console, print_error, print_info


def _create_status_table(manifest: Manifest) -> Table:
    table = Table(
        title="Modules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Module", no_wrap=True)
    table.add_column("Entries", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("In place", justify="right")

    grouped = manifest.available_modules()
    for module in manifest.modules():
        items = manifest.sync_items_for_module(module)
        if not items:
            table.add_row(module, "0", "0", "[muted]-[/muted]")
            continue
        in_place = sum(1 for item in items if is_in_place(item))
        style = "success" if in_place == len(items) else "warning"
        table.add_row(
            module,
            str(len(grouped.get(module, []))),
            str(manifest.count_module_files(module)),
            f"[{style}]{in_place}/{len(items)}[/{style}]",
        )
    return table


def status_command() -> None:
    """Show the manifest's modules and the state of their files."""
    sync_root = get_sync_root(get_settings())
    console.print(f"[header]Sync root:[/header] {sync_root}")

    if not manifest_exists(sync_root):
        print_info("No manifest yet. Run 'pactctl import' to create one from this machine.")
        return

    try:
        manifest = load_manifest(sync_root)
    except ManifestError as e:
        print_error(f"Failed to load manifest: {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[header]Manifest:[/header] {get_manifest_path(sync_root)}")
    if manifest.name:
        console.print(f"[header]Name:[/header] {manifest.name} {manifest.version}".rstrip())
    console.print(f"[header]Secrets:[/header] {len(manifest.secrets())}")

    if not manifest.modules():
        print_info("The manifest has no modules.")
        return
    console.print(_create_status_table(manifest))
