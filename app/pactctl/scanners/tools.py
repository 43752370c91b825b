"""CLI tool scanner.

Reports known tools whose executable is on PATH.
"""

from pactctl.core.catalog import CLI_TOOLS, CUSTOM_TOOL_REPOS, tool_commands
from pactctl.models.detected import CLIDetected
from pactctl.scanners.base import Scanner
from pactctl.utils.shell import command_exists


def tool_installed(tool: str) -> bool:
    """Check if any executable of ``tool`` is on PATH."""
    return any(command_exists(command) for command in tool_commands(tool))


class CLIScanner(Scanner[CLIDetected]):
    """Scanner for ``cli.tools`` and ``cli.custom``."""

    @property
    def module(self) -> str:
        return "cli"

    def scan(self) -> CLIDetected:
        """Check every known tool and custom tool against PATH."""
        return CLIDetected(
            tools=[tool for tool in CLI_TOOLS if tool_installed(tool)],
            custom=[tool for tool in CUSTOM_TOOL_REPOS if tool_installed(tool)],
        )
