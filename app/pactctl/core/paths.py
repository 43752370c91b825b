"""Path management for pactctl.

Two kinds of locations are handled here:

- Application config (XDG): ``~/.config/pactctl/`` holds ``config.toml``
  and an optional ``theme.toml``.
- The synchronization root: a ``.pact`` directory found by walking up from
  the working directory, falling back to ``~/.pact``. It holds the manifest
  (``pact.json``) and the file tree that manifest entries point into.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pactctl"

SYNC_DIR_NAME = ".pact"
MANIFEST_FILENAME = "pact.json"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pactctl/ (or XDG_CONFIG_HOME/pactctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the application settings file path.

    Returns:
        Path to ~/.config/pactctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def expand_home(path: str) -> Path:
    """Expand a leading ``~`` to the home directory.

    Only a bare ``~`` or a ``~/`` (``~\\`` on Windows) prefix is expanded;
    ``~user`` forms are left untouched.
    """
    if path == "~":
        return Path.home()
    if path.startswith(("~/", "~\\")):
        return Path.home() / path[2:]
    return Path(path)


def find_sync_root(start: Path | None = None, override: Path | None = None) -> Path:
    """Locate the synchronization root directory.

    Args:
        start: Directory to begin the upward search from. Defaults to cwd.
        override: Explicit root from settings; returned as-is when given.

    Returns:
        The nearest ``.pact`` directory at or above ``start``, otherwise
        ``~/.pact`` (which may not exist yet).

    Raises:
        RuntimeError: If neither the working directory nor the home
            directory can be determined.
    """
    if override is not None:
        return expand_home(str(override))

    try:
        current = (start or Path.cwd()).absolute()
    except OSError as e:
        msg = f"Cannot determine working directory: {e}"
        raise RuntimeError(msg) from e

    for directory in (current, *current.parents):
        candidate = directory / SYNC_DIR_NAME
        if candidate.is_dir():
            return candidate

    try:
        return Path.home() / SYNC_DIR_NAME
    except RuntimeError as e:
        msg = f"Cannot determine home directory: {e}"
        raise RuntimeError(msg) from e


def get_manifest_path(sync_root: Path) -> Path:
    """Get the manifest file path inside a synchronization root."""
    return sync_root / MANIFEST_FILENAME


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
