"""Shell scanner.

Detects the login shell, the prompt tool and its theme, and shell tools
that need an init line.
"""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

from pactctl.core.catalog import PROMPT_TOOLS, SHELL_TOOLS
from pactctl.core.platform import OSName, current_os
from pactctl.models.detected import PromptDetected, ShellDetected
from pactctl.scanners.base import Scanner
from pactctl.scanners.tools import tool_installed

logger = logging.getLogger(__name__)

# oh-my-posh init ... --config '/path/to/theme.omp.json'
_OMP_CONFIG_RE = re.compile(r"oh-my-posh.*--config\s+['\"]?([^'\"\s)]+)['\"]?")

_OMP_SUFFIX = ".omp.json"


def shell_rc_files(home: Path, os_name: OSName) -> list[Path]:
    """Shell resource files that may hold prompt init lines."""
    if os_name == "windows":
        documents = home / "Documents"
        return [
            documents / "PowerShell" / "Microsoft.PowerShell_profile.ps1",
            documents / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1",
        ]
    return [
        home / ".zshrc",
        home / ".bashrc",
        home / ".config" / "fish" / "config.fish",
    ]


def parse_oh_my_posh_config(text: str) -> tuple[str, str] | None:
    """Extract theme name and source URL from an oh-my-posh init line.

    Args:
        text: Contents of a shell resource file.

    Returns:
        ``(theme, source)`` where ``source`` is only set for URL configs,
        or None if no init line with ``--config`` is present.
    """
    match = _OMP_CONFIG_RE.search(text)
    if match is None:
        return None
    config = match.group(1)
    name = re.split(r"[\\/]", config)[-1]
    theme = name.removesuffix(_OMP_SUFFIX)
    source = config if config.startswith("http") else ""
    return theme, source


class ShellScanner(Scanner[ShellDetected]):
    """Scanner for shell type, prompt and shell tools.

    Args:
        environ: Environment to inspect. Defaults to ``os.environ``.
        home: Home directory. Defaults to ``Path.home()``.
        os_name: OS key. Defaults to the running OS.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        os_name: OSName | None = None,
    ) -> None:
        self._environ = environ if environ is not None else os.environ
        self._home = home or Path.home()
        self._os_name = os_name or current_os()

    @property
    def module(self) -> str:
        return "shell"

    def shell_type(self) -> str:
        """Shell name from ``$SHELL``, or powershell/cmd on Windows."""
        if self._os_name == "windows":
            return "powershell" if self._environ.get("PSModulePath") else "cmd"
        shell = self._environ.get("SHELL", "")
        for known in ("zsh", "bash", "fish"):
            if known in shell:
                return known
        return re.split(r"[\\/]", shell)[-1] if shell else ""

    def prompt(self) -> PromptDetected:
        """First installed prompt tool, with the oh-my-posh theme if configured."""
        for tool in PROMPT_TOOLS:
            if not tool_installed(tool):
                continue
            if tool != "oh-my-posh":
                return PromptDetected(tool=tool)
            theme, source = self._oh_my_posh_theme()
            return PromptDetected(tool=tool, theme=theme, source=source)
        return PromptDetected()

    def _oh_my_posh_theme(self) -> tuple[str, str]:
        for path in shell_rc_files(self._home, self._os_name):
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Cannot read %s: %s", path, e)
                continue
            parsed = parse_oh_my_posh_config(text)
            if parsed is not None:
                return parsed
        return "", ""

    def scan(self) -> ShellDetected:
        return ShellDetected(
            type=self.shell_type(),
            prompt=self.prompt(),
            tools=[tool for tool in SHELL_TOOLS if tool_installed(tool)],
        )
