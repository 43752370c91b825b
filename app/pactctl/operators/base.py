"""Abstract base class for package managers.

A package manager is resolved once per run and handed to the apply
engine. It knows the argument shapes of its own CLI and turns process
outcomes into Results; it never raises for a failed install.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from pactctl.models.result import Result, ResultCategory, failed, ok
from pactctl.utils.shell import command_exists, run_command, try_run_command

logger = logging.getLogger(__name__)


class PackageManager(ABC):
    """Base class for all package managers.

    Subclasses provide the executable name and argument shapes; this class
    runs them and interprets the exit status.

    Example:
        >>> manager = BrewManager()
        >>> if manager.is_available():
        ...     result = manager.install("ripgrep")
        ...     print(result.success, result.error)
    """

    # Installs can download and compile; allow 10 minutes
    _INSTALL_TIMEOUT: float = 600.0
    _LIST_TIMEOUT: float = 60.0

    @property
    @abstractmethod
    def name(self) -> str:
        """Short manager name (``brew``, ``apt``, ...)."""

    @property
    def command(self) -> str:
        """Executable looked up on PATH to decide availability."""
        return self.name

    @abstractmethod
    def install_args(self, package: str) -> list[str]:
        """Build the non-interactive install command for a package."""

    @abstractmethod
    def list_args(self) -> list[str]:
        """Build the command listing installed packages."""

    def app_install_args(self, package: str) -> list[str]:
        """Build the install command for a desktop application.

        Defaults to the regular install command.
        """
        return self.install_args(package)

    def parse_list(self, output: str) -> set[str]:
        """Extract package identifiers from ``list`` output.

        The default takes the first whitespace-separated column.
        """
        return {line.split()[0] for line in output.splitlines() if line.strip()}

    def is_available(self) -> bool:
        """Check if the manager's executable is on PATH."""
        return command_exists(self.command)

    def is_installed(self, command: str) -> bool:
        """Check if a tool's executable is on PATH."""
        return command_exists(command)

    def list_installed(self) -> set[str]:
        """Return installed package identifiers, or an empty set on error."""
        result = try_run_command(self.list_args(), timeout=self._LIST_TIMEOUT)
        if result is None or not result.success:
            return set()
        return self.parse_list(result.stdout)

    def install(
        self,
        package: str,
        module: str = "cli",
        category: ResultCategory = ResultCategory.INSTALL,
        name: str | None = None,
    ) -> Result:
        """Install a package.

        Args:
            package: Package identifier passed to the manager.
            module: Manifest module the request came from.
            category: Result category to report.
            name: Result name if it differs from the package identifier.

        Returns:
            Result; on failure the error holds the exit status and the
            manager's combined output.
        """
        return self._run(self.install_args(package), package, module, category, name)

    def install_app(self, package: str, module: str = "apps", name: str | None = None) -> Result:
        """Install a desktop application package."""
        return self._run(self.app_install_args(package), package, module, ResultCategory.APP, name)

    def _run(
        self,
        args: list[str],
        package: str,
        module: str,
        category: ResultCategory,
        name: str | None,
    ) -> Result:
        result_name = name or package
        logger.info("Installing %s via %s", package, self.name)
        try:
            result = run_command(args, timeout=self._INSTALL_TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            return failed(category, module, result_name, f"{self.name}: {e}")

        if not result.success:
            return failed(category, module, result_name, result.describe_failure())
        return ok(category, module, result_name, f"installed via {self.name}")
