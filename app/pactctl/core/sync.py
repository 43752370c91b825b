"""Sync engine: place manifest files on the machine.

Each SyncItem is materialized as a symlink to, or a copy of, its source in
the synchronization root. Items are processed independently and in
manifest order; a failing item never stops the batch.
"""

import filecmp
import logging
import os
import shutil
import stat
from pathlib import Path

from pactctl.models.manifest import Manifest, SyncItem
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped

logger = logging.getLogger(__name__)

STRATEGY_SYMLINK = "symlink"
STRATEGY_COPY = "copy"
STRATEGIES = (STRATEGY_SYMLINK, STRATEGY_COPY)

_FILE = ResultCategory.FILE


def _remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree if anything is there."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def _same_file(source: Path, target: Path) -> bool:
    if target.is_symlink() or not target.is_file():
        return False
    if stat.S_IMODE(source.stat().st_mode) != stat.S_IMODE(target.stat().st_mode):
        return False
    return filecmp.cmp(source, target, shallow=False)


def _relative_files(root: Path) -> set[Path]:
    return {
        Path(dirpath, name).relative_to(root)
        for dirpath, _dirnames, filenames in os.walk(root, followlinks=True)
        for name in filenames
    }


def _is_current_copy(source: Path, target: Path) -> bool:
    """Check whether ``target`` already equals ``source`` in bytes and modes."""
    if source.is_dir():
        if target.is_symlink() or not target.is_dir():
            return False
        files = _relative_files(source)
        if files != _relative_files(target):
            return False
        return all(_same_file(source / rel, target / rel) for rel in files)
    return _same_file(source, target)


def _is_current_link(source: Path, target: Path) -> bool:
    return target.is_symlink() and Path(os.readlink(target)) == source


def copy_path(source: Path, target: Path) -> None:
    """Copy a file or directory tree, preserving permission bits.

    Raises:
        OSError: If any part of the copy fails.
    """
    if source.is_dir():
        shutil.copytree(source, target, copy_function=shutil.copy, dirs_exist_ok=True)
    else:
        shutil.copy(source, target)


def is_in_place(item: SyncItem) -> bool:
    """Check if an item's target already matches its source.

    Symlink items must point at the absolute source; copy items must be
    byte- and mode-identical. Nothing on disk is changed.
    """
    source = item.source.absolute()
    try:
        if not source.exists():
            return False
        if item.strategy == STRATEGY_COPY:
            return _is_current_copy(source, item.target)
        return _is_current_link(source, item.target)
    except OSError as e:
        logger.debug("Cannot inspect %s: %s", item.target, e)
        return False


class SyncEngine:
    """Materializes a manifest's file entries.

    Args:
        manifest: Manifest whose ``files`` entries are synced.
    """

    def __init__(self, manifest: Manifest) -> None:
        self.manifest = manifest

    def sync_item(self, item: SyncItem) -> Result:
        """Link or copy one item into place.

        An existing file, symlink or directory at the target is replaced.
        A target that already matches the source is left alone and
        reported as skipped.

        Args:
            item: Resolved file entry.

        Returns:
            Result for the item; never raises.
        """
        if not item.source.exists():
            return failed(_FILE, item.module, item.name, f"source not found: {item.source}")

        strategy = item.strategy or STRATEGY_SYMLINK
        if strategy not in STRATEGIES:
            return failed(_FILE, item.module, item.name, f"unknown strategy: {strategy}")

        source = item.source.absolute()
        target = item.target

        try:
            if strategy == STRATEGY_SYMLINK and _is_current_link(source, target):
                return skipped(_FILE, item.module, item.name, "already linked")
            if strategy == STRATEGY_COPY and _is_current_copy(source, target):
                return skipped(_FILE, item.module, item.name, "already up to date")

            target.parent.mkdir(parents=True, exist_ok=True)
            _remove_path(target)

            if strategy == STRATEGY_SYMLINK:
                os.symlink(source, target, target_is_directory=source.is_dir())
                message = f"symlinked {target} -> {source}"
            else:
                copy_path(source, target)
                message = f"copied {source} -> {target}"
        except OSError as e:
            logger.debug("Sync of %s.%s failed: %s", item.module, item.name, e)
            return failed(_FILE, item.module, item.name, str(e))

        return ok(_FILE, item.module, item.name, message)

    def sync_all(self) -> list[Result]:
        """Sync every resolvable file entry in manifest order."""
        return [self.sync_item(item) for item in self.manifest.sync_items()]

    def sync_module(self, module: str) -> list[Result]:
        """Sync the file entries of one module.

        Returns:
            One Result per item, or a single failed Result if the module
            has no entries for this OS.
        """
        items = self.manifest.sync_items_for_module(module)
        if not items:
            return [
                failed(
                    _FILE,
                    module,
                    module,
                    f"module '{module}' not found or not configured for this OS",
                )
            ]
        return [self.sync_item(item) for item in items]

    def remove_all_symlinks(self) -> list[Result]:
        """Remove the symlinks created for symlink-strategy items.

        Targets that are missing or are not symlinks (for example a copy)
        are reported as skipped and left untouched.
        """
        results: list[Result] = []
        for item in self.manifest.sync_items():
            if (item.strategy or STRATEGY_SYMLINK) != STRATEGY_SYMLINK:
                continue
            results.append(self._unlink(item))
        return results

    def _unlink(self, item: SyncItem) -> Result:
        target = item.target
        try:
            info = target.lstat()
        except FileNotFoundError:
            return skipped(_FILE, item.module, item.name, "target does not exist")
        except OSError as e:
            return failed(_FILE, item.module, item.name, str(e))

        if not stat.S_ISLNK(info.st_mode):
            message = "target is not a symlink (was it copied?)"
            return skipped(_FILE, item.module, item.name, message)

        try:
            target.unlink()
        except OSError as e:
            return failed(_FILE, item.module, item.name, str(e))
        return ok(_FILE, item.module, item.name, f"removed symlink {target}")
