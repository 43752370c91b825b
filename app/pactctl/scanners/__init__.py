"""Machine scanners.

This module exports the per-category scanners and the full scan entry point.
"""

from pactctl.scanners.base import Scanner
from pactctl.scanners.configs import ConfigFileScanner
from pactctl.scanners.detect import FILES_MODULE, SCAN_MODULES, ScanOptions, scan
from pactctl.scanners.editor import EditorScanner
from pactctl.scanners.git import GitScanner
from pactctl.scanners.llm import LLMScanner
from pactctl.scanners.secrets import SecretScanner
from pactctl.scanners.shell import ShellScanner
from pactctl.scanners.terminal import TerminalScanner
from pactctl.scanners.tools import CLIScanner

__all__ = [
    "FILES_MODULE",
    "SCAN_MODULES",
    "CLIScanner",
    "ConfigFileScanner",
    "EditorScanner",
    "GitScanner",
    "LLMScanner",
    "ScanOptions",
    "Scanner",
    "SecretScanner",
    "ShellScanner",
    "TerminalScanner",
    "scan",
]
