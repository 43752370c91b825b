"""Desktop application installation from ``apps.<os>``."""

from pactctl.apply.context import NO_MANAGER_ERROR, ApplyContext
from pactctl.core.catalog import APP_PACKAGES, tool_commands
from pactctl.models.result import Result, ResultCategory, failed, skipped
from pactctl.operators.base import PackageManager
from pactctl.utils.shell import command_exists

_APP = ResultCategory.APP


def app_package(app: str, manager: str) -> str:
    """Map an app name to the manager's package id, or keep it as-is."""
    return APP_PACKAGES.get(app.lower(), {}).get(manager, app)


def _is_app_installed(app: str, package: str, installed: set[str]) -> bool:
    if any(command_exists(command) for command in tool_commands(app)):
        return True
    return package in installed or package.lower() in installed


def install_app(
    manager: PackageManager,
    app: str,
    installed: set[str],
    module: str = "apps",
) -> Result:
    """Install one app unless it is on PATH or already listed by the manager."""
    package = app_package(app, manager.name)
    if _is_app_installed(app, package, installed):
        return skipped(_APP, module, app, "already installed")
    return manager.install_app(package, module=module, name=app)


def apply_apps(ctx: ApplyContext, module: str = "apps") -> list[Result]:
    """Install ``apps.<os>.install`` and report ``apps.<os>.shortcuts``."""
    results: list[Result] = []
    apps = ctx.manifest.get_string_list(f"{module}.{ctx.os_name}.install")

    if apps:
        manager = ctx.package_manager
        if manager is None:
            results.extend(failed(_APP, module, app, NO_MANAGER_ERROR) for app in apps)
        else:
            installed = manager.list_installed()
            results.extend(install_app(manager, app, installed, module) for app in apps)

    shortcuts = ctx.manifest.get_map(f"{module}.{ctx.os_name}.shortcuts")
    results.extend(skipped(_APP, module, name, "shortcut configured") for name in shortcuts)
    return results
