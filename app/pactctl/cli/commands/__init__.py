"""CLI commands for pactctl.

This package contains all subcommand implementations.
"""

from pactctl.cli.commands import config, diff, importer, scan, status, sync, unlink

__all__ = ["config", "diff", "importer", "scan", "status", "sync", "unlink"]
