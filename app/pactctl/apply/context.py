"""Shared state for one apply run."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from pactctl.core.catalog import CUSTOM_TOOL_REPOS
from pactctl.core.platform import OSName, current_arch, current_os
from pactctl.core.settings import Settings
from pactctl.models.manifest import Manifest
from pactctl.models.result import Result, ResultCategory, failed, skipped
from pactctl.operators.base import PackageManager
from pactctl.scanners.tools import tool_installed

NO_MANAGER_ERROR = "no supported package manager found"


@dataclass
class ApplyContext:
    """Everything an apply step needs, resolved once per run.

    Attributes:
        manifest: Manifest being applied.
        package_manager: Manager used for installs, or None if the machine
            has none of the supported ones.
        settings: Application settings.
        os_name: Target OS key.
        arch: Normalized machine architecture.
    """

    manifest: Manifest
    package_manager: PackageManager | None
    settings: Settings = field(default_factory=Settings)
    os_name: OSName = field(default_factory=current_os)
    arch: str = field(default_factory=current_arch)

    @property
    def home(self) -> Path:
        return Path.home()

    @property
    def is_windows(self) -> bool:
        return self.os_name == "windows"

    @property
    def custom_repos(self) -> dict[str, str]:
        """Custom tool repositories, settings entries taking precedence."""
        return {**CUSTOM_TOOL_REPOS, **self.settings.custom_tools}

    @property
    def bin_dir(self) -> Path:
        """Install directory for binaries downloaded from releases."""
        if self.settings.bin_dir is not None:
            return Path(self.settings.bin_dir).expanduser()
        if self.is_windows:
            return self.home / "bin"
        return self.home / ".local" / "bin"

    @property
    def shell_name(self) -> str:
        """Login shell name from ``$SHELL``, ``zsh`` if unset."""
        shell = os.environ.get("SHELL", "")
        name = Path(shell).name if shell else ""
        return name or "zsh"

    @property
    def shell_rc_path(self) -> Path:
        """Resource file that init lines are appended to."""
        if self.is_windows:
            return self.home / "Documents" / "PowerShell" / "Microsoft.PowerShell_profile.ps1"
        shell = self.shell_name
        if "bash" in shell:
            return self.home / ".bashrc"
        if "fish" in shell:
            return self.home / ".config" / "fish" / "config.fish"
        return self.home / ".zshrc"


def install_tool(
    ctx: ApplyContext,
    tool: str,
    module: str = "cli",
    category: ResultCategory = ResultCategory.INSTALL,
    package: str | None = None,
) -> Result:
    """Install a tool through the package manager unless it is on PATH.

    Args:
        ctx: Apply context.
        tool: Tool name as written in the manifest.
        module: Module reported in the Result.
        category: Category reported in the Result.
        package: Package identifier if it differs from ``tool``.

    Returns:
        Skipped Result if already installed, otherwise the install Result.
    """
    if tool_installed(tool):
        return skipped(category, module, tool, "already installed")
    if ctx.package_manager is None:
        return failed(category, module, tool, NO_MANAGER_ERROR)
    return ctx.package_manager.install(package or tool, module=module, category=category, name=tool)
