"""Global git configuration."""

import subprocess

from pactctl.apply.context import ApplyContext, install_tool
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped
from pactctl.scanners.git import read_global_config
from pactctl.utils.shell import command_exists, run_command

_CONFIGURE = ResultCategory.CONFIGURE

# Manifest key -> git config key
GIT_SETTINGS: tuple[tuple[str, str], ...] = (
    ("user", "user.name"),
    ("email", "user.email"),
    ("defaultBranch", "init.defaultBranch"),
)


def _git(args: list[str], module: str, name: str, message: str) -> Result:
    try:
        result = run_command(["git", *args], timeout=60.0)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        return failed(_CONFIGURE, module, name, f"git: {e}")
    if not result.success:
        return failed(_CONFIGURE, module, name, result.describe_failure())
    return ok(_CONFIGURE, module, name, message)


def set_global_config(key: str, value: str, module: str = "git") -> Result:
    """Set a global git config value unless it already has that value."""
    if read_global_config(key) == value:
        return skipped(_CONFIGURE, module, key, f"already set to {value}")
    return _git(["config", "--global", key, value], module, key, f"set to {value}")


def enable_lfs(ctx: ApplyContext, module: str = "git") -> list[Result]:
    """Enable Git LFS, installing ``git-lfs`` first if needed."""
    results: list[Result] = []
    if not command_exists("git-lfs"):
        install = install_tool(ctx, "git-lfs", module)
        results.append(install)
        if install.failed:
            return results

    if read_global_config("filter.lfs.process"):
        results.append(skipped(_CONFIGURE, module, "lfs", "already enabled"))
    else:
        results.append(_git(["lfs", "install"], module, "lfs", "enabled"))
    return results


def apply_git(ctx: ApplyContext, module: str = "git") -> list[Result]:
    """Apply ``git.user``, ``git.email``, ``git.defaultBranch`` and ``git.lfs``."""
    results: list[Result] = []
    for manifest_key, git_key in GIT_SETTINGS:
        value = ctx.manifest.get_string(f"{module}.{manifest_key}")
        if value:
            results.append(set_global_config(git_key, value, module))

    if ctx.manifest.get(f"{module}.lfs") is True:
        results.extend(enable_lfs(ctx, module))
    return results
