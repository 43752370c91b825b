"""Package managers used to install tools, editors, runtimes and apps.

One implementation per manager; ``resolve_package_manager`` selects the
one to use on the current machine.
"""

from pactctl.operators.apt import AptManager
from pactctl.operators.base import PackageManager
from pactctl.operators.brew import BrewManager
from pactctl.operators.choco import ChocoManager
from pactctl.operators.dnf import DnfManager
from pactctl.operators.pacman import PacmanManager
from pactctl.operators.registry import resolve_package_manager
from pactctl.operators.scoop import ScoopManager
from pactctl.operators.winget import WingetManager

__all__ = [
    "AptManager",
    "BrewManager",
    "ChocoManager",
    "DnfManager",
    "PackageManager",
    "PacmanManager",
    "ScoopManager",
    "WingetManager",
    "resolve_package_manager",
]
