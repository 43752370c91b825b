"""Editor scanner."""

import os
import re
from collections.abc import Mapping

from pactctl.core.catalog import EDITOR_ALIASES, EDITORS
from pactctl.models.detected import EditorDetected
from pactctl.scanners.base import Scanner
from pactctl.utils.shell import command_exists


def normalize_editor_name(command: str) -> str:
    """Map an ``$EDITOR`` value to a manifest editor name.

    Arguments and directories are dropped, so ``/usr/bin/code --wait``
    becomes ``vscode``.
    """
    executable = command.strip().split()[0] if command.strip() else ""
    executable = re.split(r"[\\/]", executable)[-1].removesuffix(".exe")
    return EDITOR_ALIASES.get(executable, executable)


class EditorScanner(Scanner[EditorDetected]):
    """Scanner for the default editor and other installed editors.

    ``$EDITOR`` (then ``$VISUAL``) names the default. Without either, the
    first installed editor in preference order is the default.

    Args:
        environ: Environment to inspect. Defaults to ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    @property
    def module(self) -> str:
        return "editor"

    def scan(self) -> EditorDetected:
        declared = self._environ.get("EDITOR") or self._environ.get("VISUAL") or ""
        default = normalize_editor_name(declared) if declared else ""
        installed = [name for name, command in EDITORS if command_exists(command)]

        if not default and installed:
            return EditorDetected(default=installed[0], others=installed[1:])
        return EditorDetected(
            default=default,
            others=[name for name in installed if name != default],
        )
