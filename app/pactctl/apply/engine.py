"""Apply engine: bring a machine in line with the manifest.

Known modules get their side effects (installs, shell init, git config,
fonts, apps) followed by their own ``files`` entries. Any other module
is applied by syncing the files nested under it, so no module name is
ever rejected.
"""

import logging
from collections.abc import Callable

from pactctl.apply.apps import apply_apps
from pactctl.apply.context import ApplyContext
from pactctl.apply.editor import apply_editor
from pactctl.apply.fonts import apply_terminal
from pactctl.apply.git import apply_git
from pactctl.apply.llm import apply_llm
from pactctl.apply.shell import apply_shell
from pactctl.apply.tools import apply_cli
from pactctl.core.sync import SyncEngine
from pactctl.models.result import Result, ResultCategory, skipped

logger = logging.getLogger(__name__)

ModuleApplier = Callable[[ApplyContext, str], list[Result]]

# Application order for a full apply
MODULE_APPLIERS: dict[str, ModuleApplier] = {
    "cli": apply_cli,
    "shell": apply_shell,
    "git": apply_git,
    "editor": apply_editor,
    "terminal": apply_terminal,
    "llm": apply_llm,
    "apps": apply_apps,
}


class ApplyEngine:
    """Applies manifest modules to the current machine.

    Args:
        context: Resolved manifest, package manager and settings.
    """

    def __init__(self, context: ApplyContext) -> None:
        self.context = context
        self.sync = SyncEngine(context.manifest)

    def module_order(self) -> list[str]:
        """Known modules in fixed order, then the rest in manifest order."""
        present = self.context.manifest.modules()
        known = [name for name in MODULE_APPLIERS if name in present]
        return known + [name for name in present if name not in MODULE_APPLIERS]

    def apply(self) -> list[Result]:
        """Apply every module of the manifest."""
        results: list[Result] = []
        for module in self.module_order():
            results.extend(self.apply_module(module))
        return results

    def apply_module(self, module: str) -> list[Result]:
        """Apply one module.

        Args:
            module: Top-level manifest key.

        Returns:
            Side-effect Results followed by the module's file Results.
        """
        logger.debug("Applying module %s", module)
        results: list[Result] = []
        applier = MODULE_APPLIERS.get(module)
        if applier is not None:
            results.extend(applier(self.context, module))

        items = self.context.manifest.sync_items_for_module(module)
        results.extend(self.sync.sync_item(item) for item in items)

        if applier is None and not items:
            results.append(
                skipped(ResultCategory.FILE, module, module, "no files configured for this OS")
            )
        return results
