"""Color theme for the pactctl CLI.

Colors come from the bundled ``data/theme.toml``; any of them can be
overridden in ~/.config/pactctl/theme.toml.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from pactctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Styles rendered in bold on top of their color
_BOLD = frozenset({"error"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for pactctl output."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Diff classes and skipped results
    local_only: str = "#c1ff62"
    pact_only: str = "#f5b332"
    synced: str = "#69B9A1"
    skipped: str = "#7f8c8d"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str) or not _HEX_RE.fullmatch(v.strip()):
            raise ValueError(f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}")
        return v.strip()


def get_user_theme_path() -> Path:
    """Get the user theme override path."""
    return get_config_dir() / "theme.toml"


def _read_colors(source: Any) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file; empty if unusable."""
    try:
        with source.open("rb") as f:
            colors = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", source)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load bundled colors with user overrides; defaults if the result is invalid."""
    colors = _read_colors(resources.files("pactctl.data").joinpath("theme.toml"))
    colors.update(_read_colors(get_user_theme_path()))
    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme with one style per color plus ``bold_header``."""
    colors = colors or load_theme()
    styles = {
        name: f"bold {value}" if name in _BOLD else value
        for name, value in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
