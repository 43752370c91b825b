"""Scoop package manager (Windows)."""

from pactctl.operators.base import PackageManager


class ScoopManager(PackageManager):
    """Scoop."""

    @property
    def name(self) -> str:
        return "scoop"

    def install_args(self, package: str) -> list[str]:
        return ["scoop", "install", package]

    def list_args(self) -> list[str]:
        return ["scoop", "list"]

    def parse_list(self, output: str) -> set[str]:
        """Parse the ``Name Version Source`` table, skipping its header."""
        packages: set[str] = set()
        for line in output.splitlines():
            parts = line.split()
            if not parts or parts[0] in ("Name", "----") or line.startswith("Installed"):
                continue
            packages.add(parts[0])
        return packages
