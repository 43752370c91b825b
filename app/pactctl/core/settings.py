"""Application settings.

Settings are stored in ~/.config/pactctl/config.toml. Every field is
optional; a missing file means defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pactctl.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """User-level pactctl settings.

    Attributes:
        sync_root: Explicit synchronization root. If None, it is discovered.
        package_manager: Force a package manager instead of auto-resolution.
        bin_dir: Where custom tool binaries are installed. If None, a
            platform default is used.
        custom_tools: Extra tool name to ``owner/repo`` mappings for tools
            installed from GitHub releases.
        http_timeout: Timeout in seconds for release and font downloads.
    """

    model_config = ConfigDict(extra="forbid")

    sync_root: Annotated[
        Path | None,
        Field(description="Synchronization root override"),
    ] = None
    package_manager: Annotated[
        str | None,
        Field(description="Package manager override (brew, apt, dnf, ...)"),
    ] = None
    bin_dir: Annotated[
        Path | None,
        Field(description="Install directory for custom tool binaries"),
    ] = None
    custom_tools: Annotated[
        dict[str, str],
        Field(description="Tool name to GitHub owner/repo"),
    ] = Field(default_factory=dict)
    http_timeout: Annotated[
        float,
        Field(ge=5, le=600, description="HTTP timeout in seconds (5-600)"),
    ] = 30.0


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Settings file. If None, uses the default location.

    Returns:
        Validated Settings; defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or violates the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings atomically to a TOML file.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    logger.debug("Saved settings to %s", settings_path)
    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a TOML-ready dict, omitting unset values."""
    data: dict[str, Any] = {}
    if settings.sync_root is not None:
        data["sync_root"] = str(settings.sync_root)
    if settings.package_manager is not None:
        data["package_manager"] = settings.package_manager
    if settings.bin_dir is not None:
        data["bin_dir"] = str(settings.bin_dir)
    if settings.custom_tools:
        data["custom_tools"] = dict(settings.custom_tools)
    if settings.http_timeout != 30.0:
        data["http_timeout"] = settings.http_timeout
    return data


def set_setting(key: str, value: str, path: Path | None = None) -> Settings:
    """Update one setting from a command-line string and save.

    ``custom_tools.<name>`` sets one tool mapping; an empty value removes
    a scalar setting or mapping.

    Args:
        key: Setting name.
        value: New value as typed by the user.
        path: Settings file. If None, uses the default location.

    Returns:
        The saved Settings.

    Raises:
        SettingsError: If the key is unknown or the value is invalid.
    """
    current = load_settings(path).model_dump()

    if key.startswith("custom_tools."):
        tool = key.split(".", 1)[1]
        if value:
            current["custom_tools"][tool] = value
        else:
            current["custom_tools"].pop(tool, None)
    elif key in Settings.model_fields and key != "custom_tools":
        current[key] = value or None
        if key == "http_timeout" and not value:
            current.pop(key)
    else:
        raise SettingsError(f"Unknown setting: {key}")

    try:
        updated = Settings.model_validate(current)
    except ValidationError as e:
        raise SettingsError(f"Invalid value for {key}: {e}") from e

    save_settings(updated, path)
    return updated
