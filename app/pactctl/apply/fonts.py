"""Nerd Font installation for ``terminal.font``."""

import logging
import subprocess
import tempfile
from pathlib import Path

from pactctl.apply.context import ApplyContext
from pactctl.apply.download import DownloadError, download_file, extract_archive
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped
from pactctl.utils.shell import run_command, try_run_command

logger = logging.getLogger(__name__)

NERD_FONTS_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/{name}.zip"

_FONT = ResultCategory.FONT


def normalize_font_name(font: str) -> str:
    """Turn a display name into a nerd-fonts archive name.

    ``"JetBrains Mono Nerd Font"`` becomes ``"JetBrainsMono"``.
    """
    name = font.replace("Nerd Font", "").replace(" ", "").replace("NerdFont", "")
    return name.strip()


def font_dirs(ctx: ApplyContext) -> list[Path]:
    """Directories searched for installed fonts on macOS and Windows."""
    if ctx.os_name == "darwin":
        return [
            Path("/Library/Fonts"),
            Path("/System/Library/Fonts"),
            ctx.home / "Library" / "Fonts",
        ]
    if ctx.is_windows:
        return [
            Path("C:/Windows/Fonts"),
            ctx.home / "AppData" / "Local" / "Microsoft" / "Windows" / "Fonts",
        ]
    return [ctx.home / ".local" / "share" / "fonts"]


def user_font_dir(ctx: ApplyContext) -> Path:
    """Directory downloaded fonts are extracted into."""
    return font_dirs(ctx)[-1]


def is_font_installed(ctx: ApplyContext, font: str) -> bool:
    """Case-insensitive substring search for a font.

    Linux asks ``fc-list``; other systems scan font directory listings.
    """
    if ctx.os_name == "linux":
        result = try_run_command(["fc-list", ":", "family"], timeout=30.0)
        if result is None or not result.success:
            return False
        return font.lower() in result.stdout.lower()

    needle = font.replace(" ", "").lower()
    for directory in font_dirs(ctx):
        try:
            names = [entry.name.lower() for entry in directory.iterdir()]
        except OSError:
            continue
        if any(needle in name for name in names):
            return True
    return False


def _brew_cask(name: str) -> str | None:
    """Try the nerd-font cask names; None on success, the last error otherwise."""
    candidates = (
        f"font-{name.lower()}-nerd-font",
        f"font-{name.replace('Mono', '-mono').lower()}-nerd-font",
    )
    error = ""
    for cask in dict.fromkeys(candidates):
        try:
            result = run_command(["brew", "install", "--cask", cask], timeout=600.0)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            error = f"brew: {e}"
            continue
        if result.success:
            return None
        error = result.describe_failure()
    return error


def install_nerd_font(ctx: ApplyContext, font: str, module: str = "terminal") -> Result:
    """Install a Nerd Font unless a matching font is already present.

    macOS uses Homebrew casks; Linux and Windows download the release zip
    into the user font directory.
    """
    if is_font_installed(ctx, font):
        return skipped(_FONT, module, font, "already installed")

    name = normalize_font_name(font)

    if ctx.os_name == "darwin":
        if ctx.package_manager is None or ctx.package_manager.name != "brew":
            return failed(_FONT, module, font, "font installation on macOS requires Homebrew")
        error = _brew_cask(name)
        if error is not None:
            return failed(_FONT, module, font, f"failed to install font: {error}")
        return ok(_FONT, module, font, "installed via Homebrew")

    target_dir = user_font_dir(ctx)
    try:
        with tempfile.TemporaryDirectory(prefix="pactctl-font-") as tmp:
            archive = download_file(
                NERD_FONTS_URL.format(name=name),
                Path(tmp) / f"{name}.zip",
                timeout=ctx.settings.http_timeout,
            )
            result = extract_archive(archive, target_dir)
    except DownloadError as e:
        return failed(_FONT, module, font, str(e))
    except OSError as e:
        return failed(_FONT, module, font, f"cannot install font: {e}")

    if not result.success:
        return failed(_FONT, module, font, f"extraction failed: {result.describe_failure()}")

    if ctx.os_name == "linux":
        refresh = try_run_command(["fc-cache", "-f"], timeout=120.0)
        if refresh is None or not refresh.success:
            logger.warning("Font cache refresh failed; new font may need a re-login")

    return ok(_FONT, module, font, f"installed to {target_dir}")


def apply_terminal(ctx: ApplyContext, module: str = "terminal") -> list[Result]:
    """Install ``terminal.font`` if set."""
    font = ctx.manifest.get_string(f"{module}.font")
    if not font:
        return []
    return [install_nerd_font(ctx, font, module)]
