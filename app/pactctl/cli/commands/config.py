"""Settings commands.

Show, change and locate the pactctl settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from pactctl.cli.types import get_settings, get_sync_root
from pactctl.core.paths import get_settings_path
from pactctl.core.settings import Settings, SettingsError, set_setting
from pactctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and change pactctl settings.",
    no_args_is_help=True,
)


def _create_settings_table(settings: Settings) -> Table:
    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for key, info in Settings.model_fields.items():
        value = getattr(settings, key)
        if key == "custom_tools":
            text = ", ".join(f"{name}={repo}" for name, repo in value.items())
        else:
            text = "" if value is None else str(value)
        table.add_row(key, text or "[muted](default)[/muted]", info.description or "")
    return table


@app.command()
def show() -> None:
    """Show current settings and the resolved synchronization root."""
    settings = get_settings()
    console.print(_create_settings_table(settings))
    console.print(f"\n[header]Sync root:[/header] {get_sync_root(settings)}")


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, or custom_tools.<name>.")],
    value: Annotated[str, typer.Argument(help="New value; empty to reset.")] = "",
) -> None:
    """Change one setting.

    Examples:
        pactctl config set package_manager brew
        pactctl config set custom_tools.mytool me/mytool
        pactctl config set bin_dir ""
    """
    try:
        set_setting(key, value)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if value:
        print_success(f"Set {key} = {value}")
    else:
        print_success(f"Reset {key}")


@app.command()
def path() -> None:
    """Print the settings file location."""
    console.print(str(get_settings_path()), highlight=False)
