"""Chocolatey package manager (Windows)."""

from pactctl.operators.base import PackageManager


class ChocoManager(PackageManager):
    """Chocolatey."""

    @property
    def name(self) -> str:
        return "choco"

    def install_args(self, package: str) -> list[str]:
        return ["choco", "install", package, "-y"]

    def list_args(self) -> list[str]:
        return ["choco", "list", "--limit-output"]

    def parse_list(self, output: str) -> set[str]:
        """Parse ``name|version`` rows."""
        return {line.split("|", 1)[0] for line in output.splitlines() if "|" in line}
