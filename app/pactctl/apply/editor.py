"""Editor installation and extensions."""

import subprocess

from pactctl.apply.context import NO_MANAGER_ERROR, ApplyContext
from pactctl.core.catalog import EDITOR_PACKAGES, EXTENSION_EDITORS, INSTALLABLE_EDITORS
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped
from pactctl.utils.shell import command_exists, run_command, try_run_command

_INSTALL = ResultCategory.INSTALL
_EXTENSION = ResultCategory.EXTENSION


def install_editor(ctx: ApplyContext, editor: str, module: str = "editor") -> Result:
    """Install an editor unless its executable is on PATH.

    Editors without a known executable are reported as skipped.
    """
    command = INSTALLABLE_EDITORS.get(editor)
    if command is None:
        return skipped(_INSTALL, module, editor, "manual install required")
    if command_exists(command):
        return skipped(_INSTALL, module, editor, "already installed")

    if ctx.package_manager is None:
        return failed(_INSTALL, module, editor, NO_MANAGER_ERROR)
    package = EDITOR_PACKAGES.get(editor, {}).get(ctx.package_manager.name, editor)
    return ctx.package_manager.install(package, module=module, name=editor)


def installed_extensions(cli: str) -> set[str]:
    """Lowercased extension ids reported by ``<cli> --list-extensions``."""
    result = try_run_command([cli, "--list-extensions"], timeout=60.0)
    if result is None or not result.success:
        return set()
    return {line.strip().lower() for line in result.stdout.splitlines() if line.strip()}


def install_extension(
    cli: str,
    extension: str,
    installed: set[str],
    module: str = "editor",
) -> Result:
    """Install one extension through the editor CLI.

    Output mentioning "already installed" counts as skipped, not failed.
    """
    if extension.lower() in installed:
        return skipped(_EXTENSION, module, extension, "already installed")

    try:
        result = run_command([cli, "--install-extension", extension, "--force"], timeout=300.0)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        return failed(_EXTENSION, module, extension, f"{cli}: {e}")

    if "already installed" in result.output.lower():
        return skipped(_EXTENSION, module, extension, "already installed")
    if not result.success:
        return failed(_EXTENSION, module, extension, result.describe_failure())
    return ok(_EXTENSION, module, extension, f"installed in {cli}")


def _extension_lists(ctx: ApplyContext, module: str, default: str) -> list[tuple[str, list[str]]]:
    """Pair each editor with the extensions requested for it."""
    lists: list[tuple[str, list[str]]] = []
    generic = ctx.manifest.get_string_list(f"{module}.extensions")
    if generic and default:
        lists.append((default, generic))
    for editor in ("vscode", "cursor"):
        specific = ctx.manifest.get_string_list(f"{module}.{editor}.extensions")
        if specific:
            lists.append((editor, specific))
    return lists


def apply_editor(ctx: ApplyContext, module: str = "editor") -> list[Result]:
    """Install ``editor.default`` and the requested extensions."""
    results: list[Result] = []
    default = ctx.manifest.get_string(f"{module}.default")
    if default:
        results.append(install_editor(ctx, default, module))

    for editor, extensions in _extension_lists(ctx, module, default):
        cli = EXTENSION_EDITORS.get(editor)
        if cli is None:
            results.extend(
                skipped(_EXTENSION, module, ext, "extensions not supported for this editor")
                for ext in extensions
            )
            continue
        if not command_exists(cli):
            results.extend(
                failed(_EXTENSION, module, ext, f"{cli} is not installed") for ext in extensions
            )
            continue
        installed = installed_extensions(cli)
        results.extend(install_extension(cli, ext, installed, module) for ext in extensions)

    return results
