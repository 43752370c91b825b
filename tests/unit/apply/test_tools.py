"""Unit tests for CLI tool installation."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pactctl.apply.context import ApplyContext
from pactctl.apply.download import DownloadError
from pactctl.apply.tools import apply_cli, install_custom_tool
from pactctl.core.settings import Settings
from pactctl.models.manifest import Manifest
from pactctl.models.result import ResultCategory, ok
from pactctl.operators.base import PackageManager
from pactctl.utils.shell import CommandResult

_RELEASE = {
    "tag_name": "v1.2.0",
    "assets": [
        {"name": "churn-darwin-arm64", "browser_download_url": "https://dl/churn-darwin-arm64"},
        {"name": "churn-linux-amd64", "browser_download_url": "https://dl/churn-linux-amd64"},
    ],
}


@pytest.fixture
def ctx(tmp_path: Path) -> ApplyContext:
    """Linux x86_64 context installing binaries into a temp bin dir."""
    manager = MagicMock(spec=PackageManager)
    manager.name = "apt"
    return ApplyContext(
        Manifest({"cli": {"tools": ["git", "ripgrep"], "custom": ["churn"]}}),
        manager,
        settings=Settings(bin_dir=tmp_path / "bin"),
        os_name="linux",
        arch="x86_64",
    )


def _fake_download(url: str, dest: Path, timeout: float = 30.0) -> Path:
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(b"\x7fELF")
    return dest


class TestInstallCustomTool:
    """Tests for install_custom_tool."""

    def test_installed_tool_is_skipped(self, ctx: ApplyContext) -> None:
        """A tool already on PATH is not downloaded."""
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=True),
            patch("pactctl.apply.tools.fetch_latest_release") as mock_fetch,
        ):
            result = install_custom_tool(ctx, "churn")

        assert result.skipped
        mock_fetch.assert_not_called()

    def test_binary_asset(self, ctx: ApplyContext, tmp_path: Path) -> None:
        """A bare binary asset is installed executable into the bin dir."""
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch("pactctl.apply.tools.fetch_latest_release", return_value=_RELEASE),
            patch("pactctl.apply.tools.download_file", side_effect=_fake_download) as mock_dl,
        ):
            result = install_custom_tool(ctx, "churn")

        target = tmp_path / "bin" / "churn"
        assert result.applied
        assert result.message == f"installed v1.2.0 to {target}"
        assert target.read_bytes() == b"\x7fELF"
        assert target.stat().st_mode & 0o111
        assert mock_dl.call_args[0][0] == "https://dl/churn-linux-amd64"

    def test_archive_asset(self, ctx: ApplyContext, tmp_path: Path) -> None:
        """The executable is taken from an extracted archive."""
        release = {
            "tag_name": "v2.0.0",
            "assets": [
                {
                    "name": "churn_Linux_x86_64.tar.gz",
                    "browser_download_url": "https://dl/churn.tar.gz",
                }
            ],
        }

        def fake_extract(archive: Path, dest: Path) -> CommandResult:
            (dest / "churn_1").mkdir(parents=True)
            (dest / "churn_1" / "churn").write_bytes(b"bin")
            return CommandResult(stdout="", stderr="", returncode=0)

        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch("pactctl.apply.tools.fetch_latest_release", return_value=release),
            patch("pactctl.apply.tools.download_file", side_effect=_fake_download),
            patch("pactctl.apply.tools.extract_archive", side_effect=fake_extract),
        ):
            result = install_custom_tool(ctx, "churn")

        assert result.applied
        assert (tmp_path / "bin" / "churn").read_bytes() == b"bin"

    def test_archive_without_binary(self, ctx: ApplyContext) -> None:
        """An archive that lacks the executable fails the item."""
        release = {
            "assets": [{"name": "churn-linux-amd64.zip", "browser_download_url": "https://dl/z"}]
        }
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch("pactctl.apply.tools.fetch_latest_release", return_value=release),
            patch("pactctl.apply.tools.download_file", side_effect=_fake_download),
            patch(
                "pactctl.apply.tools.extract_archive",
                return_value=CommandResult(stdout="", stderr="", returncode=0),
            ),
        ):
            result = install_custom_tool(ctx, "churn")

        assert result.failed
        assert result.error == "churn not found in churn-linux-amd64.zip"

    def test_no_matching_asset(self, ctx: ApplyContext) -> None:
        """A release without an asset for this platform fails."""
        release = {"assets": [_RELEASE["assets"][0]]}
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch("pactctl.apply.tools.fetch_latest_release", return_value=release),
        ):
            result = install_custom_tool(ctx, "churn")

        assert result.failed
        assert result.error == "no release asset for linux/x86_64"

    def test_release_lookup_failure(self, ctx: ApplyContext) -> None:
        """API errors fail the item with their message."""
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch(
                "pactctl.apply.tools.fetch_latest_release",
                side_effect=DownloadError("GitHub API returned 404 for cloudboy-jh/churn"),
            ),
        ):
            result = install_custom_tool(ctx, "churn")

        assert result.error == "GitHub API returned 404 for cloudboy-jh/churn"

    def test_unknown_repo_uses_package_manager(self, ctx: ApplyContext) -> None:
        """Tools without a release repository go through the package manager."""
        ctx.package_manager.install.return_value = ok(
            ResultCategory.INSTALL, "cli", "mytool", "installed via apt"
        )
        with (
            patch("pactctl.apply.tools.tool_installed", return_value=False),
            patch("pactctl.apply.context.tool_installed", return_value=False),
        ):
            result = install_custom_tool(ctx, "mytool")

        assert result.applied
        ctx.package_manager.install.assert_called_once()


class TestApplyCli:
    """Tests for apply_cli."""

    def test_tools_then_custom(self, ctx: ApplyContext) -> None:
        """Installed tools are skipped, in manifest order."""
        with (
            patch("pactctl.apply.context.tool_installed", return_value=True),
            patch("pactctl.apply.tools.tool_installed", return_value=True),
        ):
            results = apply_cli(ctx)

        assert [r.name for r in results] == ["git", "ripgrep", "churn"]
        assert all(r.skipped for r in results)
        ctx.package_manager.install.assert_not_called()
