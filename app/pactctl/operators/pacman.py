"""Pacman package manager (Arch Linux)."""

from pactctl.operators.base import PackageManager


class PacmanManager(PackageManager):
    """Pacman. Requires sudo."""

    @property
    def name(self) -> str:
        return "pacman"

    def install_args(self, package: str) -> list[str]:
        return ["sudo", "pacman", "-S", "--noconfirm", package]

    def list_args(self) -> list[str]:
        return ["pacman", "-Qq"]
