"""Operating system and architecture identification.

Manifests key OS-specific values by ``darwin``, ``linux`` and ``windows``.
"""

import platform
import sys
from typing import Literal

OSName = Literal["darwin", "linux", "windows"]

SUPPORTED_OS: tuple[OSName, ...] = ("darwin", "linux", "windows")

# Aliases accepted in release asset names, per normalized architecture
ARCH_ALIASES: dict[str, tuple[str, ...]] = {
    "x86_64": ("x86_64", "amd64", "x64"),
    "arm64": ("arm64", "aarch64"),
}


def current_os() -> OSName:
    """Return the manifest key for the running operating system."""
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith(("win32", "cygwin")):
        return "windows"
    return "linux"


def current_arch() -> str:
    """Return the normalized machine architecture (``x86_64``, ``arm64``, ...)."""
    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    if machine in ("arm64", "aarch64"):
        return "arm64"
    return machine


def arch_aliases(arch: str | None = None) -> tuple[str, ...]:
    """Return the asset-name spellings of an architecture."""
    arch = arch or current_arch()
    return ARCH_ALIASES.get(arch, (arch,))
