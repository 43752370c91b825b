"""HTTP downloads and archive extraction for the apply engine."""

import logging
import os
import shutil
import stat
import subprocess
from pathlib import Path
from typing import Any

import requests

from pactctl.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Names used for an OS in release asset file names
OS_ASSET_ALIASES: dict[str, tuple[str, ...]] = {
    "darwin": ("darwin", "macos", "apple"),
    "linux": ("linux",),
    "windows": ("windows",),
}

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".zip")


class DownloadError(Exception):
    """Raised when a release cannot be resolved or downloaded."""


def fetch_latest_release(repo: str, timeout: float = 30.0) -> dict[str, Any]:
    """Fetch the latest release of a GitHub repository.

    Args:
        repo: ``owner/name`` repository.
        timeout: Request timeout in seconds.

    Returns:
        Release JSON with at least ``tag_name`` and ``assets``.

    Raises:
        DownloadError: On network errors, non-200 responses or bad JSON.
    """
    url = f"{GITHUB_API_URL}/repos/{repo}/releases/latest"
    try:
        response = requests.get(
            url,
            headers={"Accept": "application/vnd.github+json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise DownloadError(f"failed to fetch release: {e}") from e

    if response.status_code != 200:
        raise DownloadError(f"GitHub API returned {response.status_code} for {repo}")

    try:
        release = response.json()
    except ValueError as e:
        raise DownloadError(f"invalid release JSON for {repo}: {e}") from e
    if not isinstance(release, dict):
        raise DownloadError(f"invalid release JSON for {repo}")
    return release


def select_asset(
    assets: list[dict[str, Any]],
    os_name: str,
    arch_names: tuple[str, ...],
) -> dict[str, Any] | None:
    """Pick the release asset built for an OS and architecture.

    Matching is a case-insensitive substring test on the asset name.

    Args:
        assets: Release ``assets`` entries.
        os_name: OS key (``darwin``, ``linux``, ``windows``).
        arch_names: Accepted spellings of the architecture.

    Returns:
        The first matching asset, or None.
    """
    os_names = OS_ASSET_ALIASES.get(os_name, (os_name,))
    for asset in assets:
        name = str(asset.get("name", "")).lower()
        if not any(alias in name for alias in os_names):
            continue
        if any(arch in name for arch in arch_names):
            return asset
    return None


def download_file(url: str, dest: Path, timeout: float = 30.0) -> Path:
    """Stream a URL to a file.

    Args:
        url: Source URL.
        dest: Destination file; parent directories are created.
        timeout: Request timeout in seconds.

    Returns:
        The destination path.

    Raises:
        DownloadError: On network errors or non-200 responses.
    """
    logger.debug("Downloading %s -> %s", url, dest)
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            if response.status_code != 200:
                raise DownloadError(f"download failed with HTTP {response.status_code}: {url}")
            dest.parent.mkdir(parents=True, exist_ok=True)
            with open(dest, "wb") as f:
                for chunk in response.iter_content(chunk_size=65536):
                    f.write(chunk)
    except requests.RequestException as e:
        raise DownloadError(f"download failed: {e}") from e
    except OSError as e:
        raise DownloadError(f"cannot write {dest}: {e}") from e
    return dest


def is_archive(name: str) -> bool:
    return name.lower().endswith(ARCHIVE_SUFFIXES)


def extract_archive(archive: Path, dest: Path) -> CommandResult:
    """Extract a ``.tar.gz``/``.tgz`` with ``tar`` or a ``.zip`` with ``unzip``.

    Raises:
        DownloadError: If the archive type is unknown or the extractor
            cannot be started.
    """
    dest.mkdir(parents=True, exist_ok=True)
    name = archive.name.lower()
    if name.endswith((".tar.gz", ".tgz")):
        args = ["tar", "-xzf", str(archive), "-C", str(dest)]
    elif name.endswith(".zip"):
        args = ["unzip", "-o", str(archive), "-d", str(dest)]
    else:
        raise DownloadError(f"unsupported archive: {archive.name}")

    try:
        return run_command(args, timeout=300.0)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        raise DownloadError(f"{args[0]}: {e}") from e


def install_binary(source: Path, bin_dir: Path, name: str) -> Path:
    """Copy an executable into ``bin_dir`` with mode 0755.

    Raises:
        OSError: If the copy fails.
    """
    bin_dir.mkdir(parents=True, exist_ok=True)
    target = bin_dir / name
    shutil.copyfile(source, target)
    os.chmod(
        target,
        stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH,
    )
    return target
