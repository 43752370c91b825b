"""Package manager resolution.

One manager is picked per run, in a fixed preference order per OS, and
passed explicitly to everything that installs.
"""

import logging

from pactctl.core.platform import OSName, current_os
from pactctl.operators.apt import AptManager
from pactctl.operators.base import PackageManager
from pactctl.operators.brew import BrewManager
from pactctl.operators.choco import ChocoManager
from pactctl.operators.dnf import DnfManager
from pactctl.operators.pacman import PacmanManager
from pactctl.operators.scoop import ScoopManager
from pactctl.operators.winget import WingetManager

logger = logging.getLogger(__name__)

MANAGERS: dict[str, type[PackageManager]] = {
    "brew": BrewManager,
    "apt": AptManager,
    "dnf": DnfManager,
    "pacman": PacmanManager,
    "winget": WingetManager,
    "scoop": ScoopManager,
    "choco": ChocoManager,
}

PREFERENCE_ORDER: dict[OSName, tuple[str, ...]] = {
    "darwin": ("brew",),
    "linux": ("apt", "dnf", "pacman", "brew"),
    "windows": ("winget", "scoop", "choco"),
}


def resolve_package_manager(
    os_name: OSName | None = None,
    override: str | None = None,
) -> PackageManager | None:
    """Pick the package manager to use for this run.

    Args:
        os_name: OS to resolve for. Defaults to the running OS.
        override: Manager name from settings; used if it is available.

    Returns:
        The first available manager in preference order, or None.
    """
    if override:
        manager_cls = MANAGERS.get(override)
        if manager_cls is None:
            logger.warning("Unknown package manager in settings: %s", override)
        else:
            manager = manager_cls()
            if manager.is_available():
                return manager
            logger.warning("Configured package manager %s is not available", override)

    for name in PREFERENCE_ORDER.get(os_name or current_os(), ()):
        manager = MANAGERS[name]()
        if manager.is_available():
            logger.debug("Using package manager %s", name)
            return manager
    return None
