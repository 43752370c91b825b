"""APT package manager (Debian, Ubuntu and derivatives)."""

from pactctl.operators.base import PackageManager


class AptManager(PackageManager):
    """APT via apt-get. Requires sudo."""

    @property
    def name(self) -> str:
        return "apt"

    @property
    def command(self) -> str:
        return "apt-get"

    def install_args(self, package: str) -> list[str]:
        return ["sudo", "apt-get", "install", "-y", package]

    def list_args(self) -> list[str]:
        return ["dpkg-query", "-W", "-f=${Package}\n"]
