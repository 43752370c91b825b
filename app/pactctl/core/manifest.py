"""Manifest file I/O operations.

The manifest is a single JSON document, ``pact.json``, at the root of the
synchronization directory. It is read permissively and written with
2-space indentation.
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from pactctl.core.paths import get_manifest_path
from pactctl.models.manifest import Manifest

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when manifest file is not found."""


class ManifestParseError(ManifestError):
    """Raised when manifest file is not a JSON object."""


class ManifestWriteError(ManifestError):
    """Raised when the manifest cannot be written."""


def load_manifest(sync_root: Path) -> Manifest:
    """Load the manifest of a synchronization root.

    Args:
        sync_root: Directory holding ``pact.json``.

    Returns:
        Manifest whose relative sources resolve against ``sync_root``.

    Raises:
        ManifestNotFoundError: If the manifest file doesn't exist.
        ManifestParseError: If the JSON is invalid or not an object.
        ManifestError: If the file cannot be read.
    """
    manifest_path = get_manifest_path(sync_root)

    if not manifest_path.exists():
        raise ManifestNotFoundError(f"Manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"Invalid JSON in {manifest_path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            f"Manifest must be a JSON object, got {type(data).__name__}: {manifest_path}"
        )

    logger.debug("Loaded manifest from %s", manifest_path)
    return Manifest(data, root=sync_root)


def save_manifest(manifest: Manifest, path: Path | None = None) -> Path:
    """Save a manifest as indented JSON.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        manifest: The Manifest to save.
        path: Destination file. If None, ``pact.json`` in the manifest root.

    Returns:
        Path where the manifest was saved.

    Raises:
        ManifestWriteError: If the file cannot be written.
    """
    manifest_path = path or get_manifest_path(manifest.root)

    tmp_path: Path | None = None
    try:
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=manifest_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(str(tmp_path), str(manifest_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ManifestWriteError(f"Failed to write manifest: {e}") from e

    logger.debug("Saved manifest to %s", manifest_path)
    return manifest_path


def manifest_exists(sync_root: Path) -> bool:
    """Check if a synchronization root holds a manifest."""
    return get_manifest_path(sync_root).exists()


def require_manifest(sync_root: Path) -> Manifest:
    """Load manifest or exit with helpful error message.

    Args:
        sync_root: Directory holding ``pact.json``.

    Returns:
        Loaded Manifest.

    Raises:
        typer.Exit: If manifest cannot be loaded.
    """
    import typer

    from pactctl.utils.formatting import print_error, print_info

    try:
        return load_manifest(sync_root)
    except ManifestNotFoundError as e:
        print_error(f"Manifest not found: {get_manifest_path(sync_root)}")
        print_info("Run 'pactctl import' to create one from this machine.")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(f"Failed to load manifest: {e}")
        raise typer.Exit(code=1) from e
