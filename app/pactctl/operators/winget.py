"""Windows Package Manager."""

from pactctl.operators.base import PackageManager


class WingetManager(PackageManager):
    """winget. Packages are addressed by exact id."""

    @property
    def name(self) -> str:
        return "winget"

    def install_args(self, package: str) -> list[str]:
        return ["winget", "install", "--id", package, "-e", "--silent"]

    def app_install_args(self, package: str) -> list[str]:
        return [
            *self.install_args(package),
            "--accept-package-agreements",
            "--accept-source-agreements",
        ]

    def list_args(self) -> list[str]:
        return ["winget", "list", "--accept-source-agreements"]

    def parse_list(self, output: str) -> set[str]:
        """Collect every token of the table.

        Names may contain spaces, so the id column has no fixed position.
        Membership tests against package ids still work.
        """
        return {token for line in output.splitlines() for token in line.split()}
