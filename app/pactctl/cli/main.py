"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pactctl import __version__
from pactctl.cli.commands import config, diff, importer, scan, status, sync, unlink
from pactctl.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="pactctl",
    help="Keep your dev environment in a manifest and apply it anywhere.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pactctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging on stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """pactctl - your dev environment as a manifest.

    Scan this machine, import what it has into pact.json, and sync the
    manifest onto any other machine.
    """
    setup_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan_command)
app.command(name="diff")(diff.diff_command)
app.command(name="import")(importer.import_command)
app.command(name="sync")(sync.sync_command)
app.command(name="unlink")(unlink.unlink_command)
app.command(name="status")(status.status_command)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
