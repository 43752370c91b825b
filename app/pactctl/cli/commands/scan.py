"""Scan command implementation.

Shows what is installed and configured on this machine.
"""

from typing import Annotated

import typer
from rich.table import Table

from pactctl.cli.types import validate_modules
from pactctl.models.detected import DetectedConfig
from pactctl.scanners import SCAN_MODULES, ScanOptions, scan
from pactctl.utils.formatting import console


def _create_detected_table(detected: DetectedConfig) -> Table:
    """Create a table with one row per detected category."""
    table = Table(
        title="Detected Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Module", width=10)
    table.add_column("Item", width=14)
    table.add_column("Value")

    def row(module: str, item: str, value: str | list[str]) -> None:
        text = ", ".join(value) if isinstance(value, list) else value
        if text:
            table.add_row(module, item, text)

    row("cli", "tools", detected.cli.tools)
    row("cli", "custom", detected.cli.custom)
    row("shell", "type", detected.shell.type)
    prompt = detected.shell.prompt
    if prompt.tool:
        row("shell", "prompt", f"{prompt.tool} ({prompt.theme})" if prompt.theme else prompt.tool)
    row("shell", "tools", detected.shell.tools)
    row("git", "user", detected.git.user)
    row("git", "email", detected.git.email)
    row("git", "defaultBranch", detected.git.default_branch)
    row("git", "lfs", "enabled" if detected.git.lfs else "")
    row("editor", "default", detected.editor.default)
    row("editor", "others", detected.editor.others)
    row("terminal", "font", detected.terminal.font)
    row("llm", "providers", detected.llm.providers)
    row("llm", "runtime", detected.llm.local.runtime)
    row("llm", "models", detected.llm.local.models)
    row("llm", "agents", detected.llm.agents)
    row("secrets", "names", [secret.name for secret in detected.secrets])
    for config_file in detected.config_files:
        row("files", config_file.name, config_file.source_path)
    return table


def scan_command(
    modules: Annotated[
        list[str] | None,
        typer.Argument(help=f"Modules to scan: {', '.join(SCAN_MODULES)}."),
    ] = None,
    no_files: Annotated[
        bool,
        typer.Option("--no-files", help="Skip config file discovery."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for scripting."),
    ] = False,
) -> None:
    """Scan this machine for tools, settings, secrets and config files.

    Secret values are never shown, only their names.

    Examples:
        pactctl scan                  # Scan everything
        pactctl scan git editor       # Scan two modules
        pactctl scan --json           # JSON output for scripting
    """
    selected = validate_modules(modules, SCAN_MODULES)
    if selected:
        options = ScanOptions(modules=selected, include_files=not no_files)
    elif no_files:
        options = ScanOptions(modules=list(SCAN_MODULES))
    else:
        options = ScanOptions()

    detected = scan(options)

    if json_output:
        console.print_json(detected.model_dump_json())
        return

    console.print(_create_detected_table(detected))
