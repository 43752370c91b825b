"""Terminal font scanner.

Reads the configured font family from kitty, alacritty and ghostty
configs. The first config that names a font wins.
"""

import logging
import re
import tomllib
from collections.abc import Callable
from pathlib import Path

from pactctl.core.platform import OSName, current_os
from pactctl.models.detected import TerminalDetected
from pactctl.scanners.base import Scanner

logger = logging.getLogger(__name__)

_KITTY_RE = re.compile(r"^\s*font_family\s+(.+?)\s*$", re.MULTILINE)
_GHOSTTY_RE = re.compile(r"^\s*font-family\s*=\s*['\"]?(.+?)['\"]?\s*$", re.MULTILINE)
_ALACRITTY_YAML_RE = re.compile(r"^\s*family:\s*['\"]?(.+?)['\"]?\s*$", re.MULTILINE)


def parse_kitty_font(text: str) -> str:
    match = _KITTY_RE.search(text)
    if match is None or match.group(1) == "monospace":
        return ""
    return match.group(1)


def parse_ghostty_font(text: str) -> str:
    match = _GHOSTTY_RE.search(text)
    return match.group(1) if match else ""


def parse_alacritty_toml_font(text: str) -> str:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.debug("Invalid alacritty config: %s", e)
        return ""
    font = data.get("font")
    normal = font.get("normal") if isinstance(font, dict) else None
    family = normal.get("family") if isinstance(normal, dict) else None
    return family if isinstance(family, str) else ""


def parse_alacritty_yaml_font(text: str) -> str:
    match = _ALACRITTY_YAML_RE.search(text)
    return match.group(1) if match else ""


def terminal_configs(home: Path, os_name: OSName) -> list[tuple[Path, Callable[[str], str]]]:
    """Candidate terminal configs with the parser for each, in priority order."""
    config = home / ".config"
    candidates: list[tuple[Path, Callable[[str], str]]] = [
        (config / "kitty" / "kitty.conf", parse_kitty_font),
        (config / "alacritty" / "alacritty.toml", parse_alacritty_toml_font),
        (config / "alacritty" / "alacritty.yml", parse_alacritty_yaml_font),
        (config / "ghostty" / "config", parse_ghostty_font),
    ]
    if os_name == "darwin":
        support = home / "Library" / "Application Support"
        candidates.append((support / "com.mitchellh.ghostty" / "config", parse_ghostty_font))
    elif os_name == "windows":
        roaming = home / "AppData" / "Roaming"
        candidates.append((roaming / "alacritty" / "alacritty.toml", parse_alacritty_toml_font))
    return candidates


class TerminalScanner(Scanner[TerminalDetected]):
    """Scanner for the terminal font.

    Args:
        home: Home directory. Defaults to ``Path.home()``.
        os_name: OS key. Defaults to the running OS.
    """

    def __init__(self, home: Path | None = None, os_name: OSName | None = None) -> None:
        self._home = home or Path.home()
        self._os_name = os_name or current_os()

    @property
    def module(self) -> str:
        return "terminal"

    def scan(self) -> TerminalDetected:
        for path, parse in terminal_configs(self._home, self._os_name):
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Cannot read %s: %s", path, e)
                continue
            font = parse(text)
            if font:
                logger.debug("Terminal font %r from %s", font, path)
                return TerminalDetected(font=font)
        return TerminalDetected()
