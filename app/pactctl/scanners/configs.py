"""Config file discovery.

A per-OS table lists where well-known config files live. For each entry
the first existing candidate of the expected kind (file or directory)
wins; entries with no candidate are not reported.
"""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from pactctl.core.platform import OSName, current_os
from pactctl.models.detected import ConfigFile
from pactctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConfigLocation:
    """Where to look for one config file.

    Attributes:
        name: Location name, also the file name inside the sync root.
        module: Module the file belongs to.
        candidates: Home-relative paths, first match wins.
        dest_dir: Subdirectory of the synchronization root to copy into.
        is_dir: Whether the config is a directory.
    """

    name: str
    module: str
    candidates: tuple[str, ...]
    dest_dir: str
    is_dir: bool = False

    @property
    def dest_path(self) -> str:
        return str(PurePosixPath(self.dest_dir) / self.name)


_COMMON_LOCATIONS: tuple[ConfigLocation, ...] = (
    ConfigLocation("zshrc", "shell", (".zshrc",), "shell"),
    ConfigLocation("bashrc", "shell", (".bashrc",), "shell"),
    ConfigLocation("profile", "shell", (".profile", ".zprofile"), "shell"),
    ConfigLocation("gitconfig", "git", (".gitconfig",), "git"),
    ConfigLocation("gitignore_global", "git", (".gitignore_global", ".gitignore"), "git"),
    ConfigLocation("lazygit", "tools", (".config/lazygit/config.yml",), "tools"),
    ConfigLocation("starship", "tools", (".config/starship.toml",), "tools"),
)

_MAC_SUPPORT = "Library/Application Support"
_WIN_ROAMING = "AppData/Roaming"


def _vscode(user_dir: str) -> tuple[ConfigLocation, ...]:
    return (
        ConfigLocation(
            "vscode-settings", "editor", (f"{user_dir}/settings.json",), "editor/vscode"
        ),
        ConfigLocation(
            "vscode-keybindings", "editor", (f"{user_dir}/keybindings.json",), "editor/vscode"
        ),
    )


_OS_LOCATIONS: dict[str, tuple[ConfigLocation, ...]] = {
    "darwin": (
        ConfigLocation("nvim", "editor", (".config/nvim",), "editor", is_dir=True),
        *_vscode(f"{_MAC_SUPPORT}/Code/User"),
        ConfigLocation(
            "cursor-settings",
            "editor",
            (f"{_MAC_SUPPORT}/Cursor/User/settings.json",),
            "editor/cursor",
        ),
        ConfigLocation("zed-settings", "editor", (".config/zed/settings.json",), "editor/zed"),
    ),
    "linux": (
        ConfigLocation("nvim", "editor", (".config/nvim",), "editor", is_dir=True),
        *_vscode(".config/Code/User"),
    ),
    "windows": (
        ConfigLocation(
            "powershell-profile",
            "shell",
            (
                "Documents/PowerShell/Microsoft.PowerShell_profile.ps1",
                "Documents/WindowsPowerShell/Microsoft.PowerShell_profile.ps1",
            ),
            "shell",
        ),
        ConfigLocation("nvim", "editor", ("AppData/Local/nvim",), "editor", is_dir=True),
        *_vscode(f"{_WIN_ROAMING}/Code/User"),
    ),
}


def config_locations(os_name: OSName) -> tuple[ConfigLocation, ...]:
    """Return the config table for an OS."""
    return _COMMON_LOCATIONS + _OS_LOCATIONS.get(os_name, ())


def find_location(location: ConfigLocation, home: Path) -> Path | None:
    """Return the first candidate of the expected kind, if any."""
    for candidate in location.candidates:
        path = home / candidate
        try:
            if location.is_dir and path.is_dir():
                return path
            if not location.is_dir and path.is_file():
                return path
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
    return None


class ConfigFileScanner(Scanner[list[ConfigFile]]):
    """Scanner for known config files.

    Args:
        home: Home directory. Defaults to ``Path.home()``.
        os_name: OS key. Defaults to the running OS.
    """

    def __init__(self, home: Path | None = None, os_name: OSName | None = None) -> None:
        self._home = home or Path.home()
        self._os_name = os_name or current_os()

    @property
    def module(self) -> str:
        return "files"

    def scan(self) -> list[ConfigFile]:
        found: list[ConfigFile] = []
        for location in config_locations(self._os_name):
            path = find_location(location, self._home)
            if path is None:
                continue
            found.append(
                ConfigFile(
                    name=location.name,
                    source_path=str(path),
                    dest_path=location.dest_path,
                    module=location.module,
                    is_dir=location.is_dir,
                )
            )
        return found
