"""Data models for pactctl.

This module exports the core data structures used throughout the application.
"""

from pactctl.models.detected import (
    CLIDetected,
    ConfigFile,
    DetectedConfig,
    EditorDetected,
    GitDetected,
    LLMDetected,
    LocalLLMDetected,
    PromptDetected,
    SecretDetected,
    ShellDetected,
    TerminalDetected,
)
from pactctl.models.manifest import FileEntry, Manifest, SyncItem
from pactctl.models.result import Result, ResultCategory, ResultSummary, summarize_results
from pactctl.models.selection import ImportSelection

__all__ = [
    "CLIDetected",
    "ConfigFile",
    "DetectedConfig",
    "EditorDetected",
    "FileEntry",
    "GitDetected",
    "ImportSelection",
    "LLMDetected",
    "LocalLLMDetected",
    "Manifest",
    "PromptDetected",
    "Result",
    "ResultCategory",
    "ResultSummary",
    "SecretDetected",
    "ShellDetected",
    "SyncItem",
    "TerminalDetected",
    "summarize_results",
]
