"""Full machine scan.

Runs the per-category scanners selected by ScanOptions and assembles a
DetectedConfig.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pactctl.core.secrets import SecretStore
from pactctl.models.detected import ConfigFile, DetectedConfig
from pactctl.scanners.configs import ConfigFileScanner
from pactctl.scanners.editor import EditorScanner
from pactctl.scanners.git import GitScanner
from pactctl.scanners.llm import LLMScanner
from pactctl.scanners.secrets import SecretScanner
from pactctl.scanners.shell import ShellScanner
from pactctl.scanners.terminal import TerminalScanner
from pactctl.scanners.tools import CLIScanner

logger = logging.getLogger(__name__)

SCAN_MODULES: tuple[str, ...] = ("cli", "shell", "git", "editor", "terminal", "llm", "secrets")

FILES_MODULE = "files"


@dataclass
class ScanOptions:
    """Selects what to scan.

    Attributes:
        modules: Modules to scan. Empty means all, and then config files
            are always included. ``files`` selects every config file.
        include_files: Discover config files. With explicit modules, only
            files belonging to those modules are kept.
    """

    modules: list[str] = field(default_factory=list)
    include_files: bool = False

    @property
    def selected_modules(self) -> tuple[str, ...]:
        if not self.modules:
            return SCAN_MODULES
        return tuple(module for module in SCAN_MODULES if module in self.modules)

    @property
    def scans_files(self) -> bool:
        return self.include_files or not self.modules or FILES_MODULE in self.modules

    def keeps_file(self, config_file: ConfigFile) -> bool:
        """Check if a discovered config file belongs to the selection."""
        if not self.modules or FILES_MODULE in self.modules:
            return True
        return config_file.module in self.modules


def scan(
    options: ScanOptions | None = None,
    existing_secrets: Iterable[str] = (),
    store: SecretStore | None = None,
) -> DetectedConfig:
    """Scan the machine.

    Args:
        options: What to scan. Defaults to everything.
        existing_secrets: Secret names listed in the manifest.
        store: Secret store used for secret presence, if any.

    Returns:
        DetectedConfig with unselected categories left empty.
    """
    options = options or ScanOptions()
    selected = options.selected_modules
    detected = DetectedConfig()
    logger.debug("Scanning modules: %s", ", ".join(selected))

    if "cli" in selected:
        detected.cli = CLIScanner().scan()
    if "shell" in selected:
        detected.shell = ShellScanner().scan()
    if "git" in selected:
        detected.git = GitScanner().scan()
    if "editor" in selected:
        detected.editor = EditorScanner().scan()
    if "terminal" in selected:
        detected.terminal = TerminalScanner().scan()
    if "llm" in selected:
        detected.llm = LLMScanner().scan()
    if "secrets" in selected:
        detected.secrets = SecretScanner(existing_secrets, store).scan()

    if options.scans_files:
        detected.config_files = [
            config_file
            for config_file in ConfigFileScanner().scan()
            if options.keeps_file(config_file)
        ]

    return detected
