"""Manifest data model.

The manifest is a loosely structured JSON document. Besides ``name``,
``version`` and ``secrets``, every top-level object is a module whose
inner shape is up to the module. Anywhere inside a module a ``files``
object may appear; each of its entries describes one file or directory
to place on the machine::

    {
      "shell": {
        "files": {
          "zshrc": {"source": "shell/.zshrc", "target": "~/.zshrc"}
        }
      },
      "editor": {
        "nvim": {
          "files": {
            "config": {
              "source": "editor/nvim",
              "target": {"linux": "~/.config/nvim", "darwin": "~/.config/nvim"},
              "strategy": "copy"
            }
          }
        }
      }
    }

Reads are permissive: values of the wrong type read as empty, and file
entries that are malformed or have no target for the current OS are
dropped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pactctl.core.paths import expand_home
from pactctl.core.platform import OSName, current_os

logger = logging.getLogger(__name__)

# Top-level keys that are not modules
RESERVED_KEYS = frozenset({"name", "version", "secrets"})

FILES_KEY = "files"
DEFAULT_STRATEGY = "symlink"


class FileEntry(BaseModel):
    """One entry of a ``files`` object.

    Attributes:
        source: Path relative to the synchronization root.
        target: Destination path, or a mapping of OS name to path.
        strategy: ``symlink`` or ``copy``. Other values are kept and
            rejected when the item is synced.
    """

    model_config = ConfigDict(extra="ignore")

    source: str = Field(min_length=1)
    target: str | dict[str, Any]
    strategy: str | None = None


@dataclass(frozen=True, slots=True)
class SyncItem:
    """A file entry resolved for the current machine.

    Attributes:
        module: Top-level module the entry was found under.
        name: Key of the entry inside its ``files`` object.
        source: Absolute path inside the synchronization root.
        target: Absolute destination path.
        strategy: ``symlink`` (default) or ``copy``.
        is_dir: Whether the source is a directory.
    """

    module: str
    name: str
    source: Path
    target: Path
    strategy: str = DEFAULT_STRATEGY
    is_dir: bool = False


class Manifest:
    """In-memory manifest document with dot-path accessors.

    Args:
        data: Parsed JSON object. Mutated in place by the merge engine.
        root: Synchronization root that relative ``source`` paths resolve
            against.
    """

    def __init__(self, data: dict[str, Any] | None = None, root: Path | None = None) -> None:
        self.data: dict[str, Any] = data if data is not None else {}
        self.root = root if root is not None else Path.cwd()

    def __repr__(self) -> str:
        return f"Manifest(name={self.name!r}, modules={self.modules()!r}, root={self.root})"

    # -- accessors -----------------------------------------------------

    def get(self, path: str) -> Any | None:
        """Return the value at a dot-separated path, or None."""
        current: Any = self.data
        for part in path.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def get_string(self, path: str) -> str:
        """Return the string at ``path``, or an empty string."""
        value = self.get(path)
        return value if isinstance(value, str) else ""

    def get_string_list(self, path: str) -> list[str]:
        """Return the string items of the list at ``path``.

        Non-string items are ignored; a missing or non-list value reads
        as an empty list.
        """
        value = self.get(path)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    def get_map(self, path: str) -> dict[str, Any]:
        """Return the object at ``path``, or an empty dict."""
        value = self.get(path)
        return value if isinstance(value, dict) else {}

    def has_key(self, path: str) -> bool:
        """Check whether ``path`` holds a non-null value."""
        return self.get(path) is not None

    @property
    def name(self) -> str:
        return self.get_string("name")

    @property
    def version(self) -> str:
        return self.get_string("version")

    def modules(self) -> list[str]:
        """Return top-level module names in document order."""
        return [
            key
            for key, value in self.data.items()
            if key not in RESERVED_KEYS and isinstance(value, dict)
        ]

    def secrets(self) -> list[str]:
        """Return declared secret names (never values)."""
        return self.get_string_list("secrets")

    # -- file entries --------------------------------------------------

    def resolve_target(self, target: Any, os_name: OSName | None = None) -> Path | None:
        """Resolve a file entry target for an operating system.

        Args:
            target: A path string, or a mapping of OS name to path string.
            os_name: OS to resolve for. Defaults to the running OS.

        Returns:
            Absolute target path with ``~`` expanded, or None if the target
            has no usable value for the OS.
        """
        if isinstance(target, dict):
            target = target.get(os_name or current_os())
        if not isinstance(target, str) or not target:
            return None
        return expand_home(target)

    def sync_items(self, os_name: OSName | None = None) -> list[SyncItem]:
        """Collect every resolvable file entry in the document.

        ``files`` objects are searched at any depth. Each item is labeled
        with the top-level module it was found under; a ``files`` object at
        the top level is labeled ``files``.

        Args:
            os_name: OS to resolve targets for. Defaults to the running OS.

        Returns:
            SyncItems in document order.
        """
        items: list[SyncItem] = []
        self._collect_files(self.data, None, os_name, items)
        return items

    def _collect_files(
        self,
        node: dict[str, Any],
        module: str | None,
        os_name: OSName | None,
        items: list[SyncItem],
    ) -> None:
        files = node.get(FILES_KEY)
        if isinstance(files, dict):
            for name, entry in files.items():
                item = self._parse_entry(module or FILES_KEY, name, entry, os_name)
                if item is not None:
                    items.append(item)

        for key, value in node.items():
            if key == FILES_KEY or not isinstance(value, dict):
                continue
            if module is None and key in RESERVED_KEYS:
                continue
            self._collect_files(value, module or key, os_name, items)

    def _parse_entry(
        self,
        module: str,
        name: str,
        entry: Any,
        os_name: OSName | None,
    ) -> SyncItem | None:
        if not isinstance(entry, dict):
            return None
        try:
            parsed = FileEntry.model_validate(entry)
        except ValidationError:
            logger.debug("Skipping malformed file entry %s.%s", module, name)
            return None

        target = self.resolve_target(parsed.target, os_name)
        if target is None:
            logger.debug("No target for %s.%s on this OS", module, name)
            return None

        source = self.root / parsed.source
        return SyncItem(
            module=module,
            name=name,
            source=source,
            target=target,
            strategy=parsed.strategy or DEFAULT_STRATEGY,
            is_dir=source.is_dir(),
        )

    def sync_items_for_module(self, module: str, os_name: OSName | None = None) -> list[SyncItem]:
        """Return the sync items labeled with ``module``."""
        return [item for item in self.sync_items(os_name) if item.module == module]

    def available_modules(self) -> dict[str, list[str]]:
        """Group resolvable file entry names by module.

        Returns:
            Module name to entry names, in document order.
        """
        grouped: dict[str, list[str]] = {}
        for item in self.sync_items():
            grouped.setdefault(item.module, []).append(item.name)
        return grouped

    def count_module_files(self, module: str) -> int:
        """Count existing source files behind a module's entries.

        Directories count every regular file beneath them.
        """
        count = 0
        for item in self.sync_items_for_module(module):
            if item.is_dir:
                count += sum(1 for path in item.source.rglob("*") if path.is_file())
            elif item.source.exists():
                count += 1
        return count

    def to_dict(self) -> dict[str, Any]:
        """Return the underlying document."""
        return self.data
