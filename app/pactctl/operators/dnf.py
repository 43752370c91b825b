"""DNF package manager (Fedora, RHEL)."""

from pactctl.operators.base import PackageManager


class DnfManager(PackageManager):
    """DNF. Requires sudo."""

    @property
    def name(self) -> str:
        return "dnf"

    def install_args(self, package: str) -> list[str]:
        return ["sudo", "dnf", "install", "-y", package]

    def list_args(self) -> list[str]:
        return ["dnf", "list", "--installed"]

    def parse_list(self, output: str) -> set[str]:
        """Parse ``name.arch  version  repo`` rows, dropping the arch suffix."""
        packages: set[str] = set()
        for line in output.splitlines():
            parts = line.split()
            if len(parts) < 3 or "." not in parts[0]:
                continue
            packages.add(parts[0].rsplit(".", 1)[0])
        return packages
