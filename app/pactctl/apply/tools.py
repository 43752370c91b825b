"""CLI tool installation.

``cli.tools`` are installed through the package manager. ``cli.custom``
tools are installed from the latest GitHub release of their repository
when one is known, otherwise through the package manager as well.
"""

import logging
import tempfile
from pathlib import Path

from pactctl.apply.context import ApplyContext, install_tool
from pactctl.apply.download import (
    DownloadError,
    download_file,
    extract_archive,
    fetch_latest_release,
    install_binary,
    is_archive,
    select_asset,
)
from pactctl.core.platform import arch_aliases
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped
from pactctl.scanners.tools import tool_installed

logger = logging.getLogger(__name__)

_INSTALL = ResultCategory.INSTALL


def apply_cli(ctx: ApplyContext, module: str = "cli") -> list[Result]:
    """Install ``cli.tools`` and ``cli.custom``.

    Returns:
        One Result per tool, tools first, then custom tools.
    """
    results = [
        install_tool(ctx, tool, module)
        for tool in ctx.manifest.get_string_list(f"{module}.tools")
    ]
    for tool in ctx.manifest.get_string_list(f"{module}.custom"):
        results.append(install_custom_tool(ctx, tool, module))
    return results


def install_custom_tool(ctx: ApplyContext, tool: str, module: str = "cli") -> Result:
    """Install a tool from its latest GitHub release.

    Tools without a known repository fall back to the package manager.

    Args:
        ctx: Apply context.
        tool: Tool name.
        module: Module reported in the Result.

    Returns:
        Result of the installation.
    """
    if tool_installed(tool):
        return skipped(_INSTALL, module, tool, "already installed")

    repo = ctx.custom_repos.get(tool)
    if repo is None:
        logger.debug("No release repository for %s, using package manager", tool)
        return install_tool(ctx, tool, module)

    try:
        release = fetch_latest_release(repo, timeout=ctx.settings.http_timeout)
        asset = select_asset(release.get("assets", []), ctx.os_name, arch_aliases(ctx.arch))
        if asset is None:
            return failed(_INSTALL, module, tool, f"no release asset for {ctx.os_name}/{ctx.arch}")

        binary_name = f"{tool}.exe" if ctx.is_windows else tool
        with tempfile.TemporaryDirectory(prefix="pactctl-") as tmp:
            target = _fetch_binary(ctx, asset, Path(tmp), binary_name)
    except DownloadError as e:
        return failed(_INSTALL, module, tool, str(e))
    except OSError as e:
        return failed(_INSTALL, module, tool, f"cannot install binary: {e}")

    tag = release.get("tag_name", "latest")
    return ok(_INSTALL, module, tool, f"installed {tag} to {target}")


def _fetch_binary(ctx: ApplyContext, asset: dict, workdir: Path, binary_name: str) -> Path:
    """Download an asset and place its executable in the bin directory.

    Raises:
        DownloadError: If the download or extraction fails, or the archive
            holds no executable named ``binary_name``.
        OSError: If the binary cannot be installed.
    """
    asset_name = str(asset.get("name", binary_name))
    url = str(asset.get("browser_download_url", ""))
    if not url:
        raise DownloadError(f"asset {asset_name} has no download URL")

    downloaded = download_file(url, workdir / asset_name, timeout=ctx.settings.http_timeout)
    if not is_archive(asset_name):
        return install_binary(downloaded, ctx.bin_dir, binary_name)

    extracted = workdir / "extracted"
    result = extract_archive(downloaded, extracted)
    if not result.success:
        raise DownloadError(f"extraction failed: {result.describe_failure()}")

    for candidate in sorted(extracted.rglob(binary_name)):
        if candidate.is_file():
            return install_binary(candidate, ctx.bin_dir, binary_name)
    raise DownloadError(f"{binary_name} not found in {asset_name}")
