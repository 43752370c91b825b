"""Homebrew package manager (macOS, optionally Linux)."""

from pactctl.operators.base import PackageManager


class BrewManager(PackageManager):
    """Homebrew. Desktop applications are installed as casks."""

    @property
    def name(self) -> str:
        return "brew"

    def install_args(self, package: str) -> list[str]:
        return ["brew", "install", package]

    def app_install_args(self, package: str) -> list[str]:
        return ["brew", "install", "--cask", package]

    def list_args(self) -> list[str]:
        # Lists formulae and casks, one per line
        return ["brew", "list", "-1"]
