"""Global git configuration scanner."""

from pactctl.models.detected import GitDetected
from pactctl.scanners.base import Scanner
from pactctl.scanners.tools import tool_installed
from pactctl.utils.shell import try_run_command


def read_global_config(key: str) -> str:
    """Read a global git config value, empty if unset or git is missing."""
    result = try_run_command(["git", "config", "--global", "--get", key], timeout=10.0)
    if result is None or not result.success:
        return ""
    return result.stdout.strip()


def lfs_available() -> bool:
    """Check that ``git-lfs`` is on PATH and ``git lfs version`` runs."""
    if not tool_installed("git-lfs"):
        return False
    result = try_run_command(["git", "lfs", "version"], timeout=10.0)
    return result is not None and result.success


class GitScanner(Scanner[GitDetected]):
    """Scanner for git identity, default branch and LFS."""

    @property
    def module(self) -> str:
        return "git"

    def scan(self) -> GitDetected:
        return GitDetected(
            user=read_global_config("user.name"),
            email=read_global_config("user.email"),
            default_branch=read_global_config("init.defaultBranch"),
            lfs=lfs_available(),
        )
