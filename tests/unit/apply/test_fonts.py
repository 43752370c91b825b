"""Unit tests for Nerd Font installation."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pactctl.apply.context import ApplyContext
from pactctl.apply.fonts import (
    apply_terminal,
    install_nerd_font,
    is_font_installed,
    normalize_font_name,
)
from pactctl.models.manifest import Manifest
from pactctl.utils.shell import CommandResult

_OK = CommandResult(stdout="", stderr="", returncode=0)


def _fake_download(url: str, dest: Path, timeout: float = 30.0) -> Path:
    return dest


def _ctx(os_name: str, manager_name: str | None = None) -> ApplyContext:
    manager = None
    if manager_name is not None:
        manager = MagicMock()
        manager.name = manager_name
    manifest = Manifest({"terminal": {"font": "JetBrains Mono"}})
    return ApplyContext(manifest, manager, os_name=os_name)


class TestNormalizeFontName:
    """Tests for normalize_font_name."""

    @pytest.mark.parametrize(
        ("font", "expected"),
        [
            ("JetBrains Mono", "JetBrainsMono"),
            ("JetBrains Mono Nerd Font", "JetBrainsMono"),
            ("FiraCode NerdFont", "FiraCode"),
            ("Hack", "Hack"),
        ],
    )
    def test_normalize(self, font: str, expected: str) -> None:
        """Spaces and the Nerd Font suffix are removed."""
        assert normalize_font_name(font) == expected


class TestIsFontInstalled:
    """Tests for is_font_installed."""

    def test_linux_fc_list(self) -> None:
        """Linux asks fontconfig, case-insensitively."""
        with patch(
            "pactctl.apply.fonts.try_run_command",
            return_value=CommandResult(
                stdout="JetBrainsMono Nerd Font\nJetBrains Mono\n", stderr="", returncode=0
            ),
        ):
            assert is_font_installed(_ctx("linux"), "jetbrains mono")

    def test_linux_without_fc_list(self) -> None:
        """Without fontconfig no font is considered installed."""
        with patch("pactctl.apply.fonts.try_run_command", return_value=None):
            assert not is_font_installed(_ctx("linux"), "Hack")

    def test_darwin_user_fonts(self, fake_home: Path) -> None:
        """macOS scans font directories for the name without spaces."""
        fonts = fake_home / "Library" / "Fonts"
        fonts.mkdir(parents=True)
        (fonts / "JetBrainsMonoNerdFont-Regular.ttf").write_text("")

        assert is_font_installed(_ctx("darwin"), "JetBrains Mono")
        assert not is_font_installed(_ctx("darwin"), "Fira Code")


class TestInstallNerdFont:
    """Tests for install_nerd_font."""

    def test_already_installed(self) -> None:
        """A present font is skipped."""
        with patch("pactctl.apply.fonts.is_font_installed", return_value=True):
            result = install_nerd_font(_ctx("linux"), "JetBrains Mono")

        assert result.skipped

    def test_darwin_requires_brew(self) -> None:
        """macOS installs need Homebrew."""
        with patch("pactctl.apply.fonts.is_font_installed", return_value=False):
            result = install_nerd_font(_ctx("darwin"), "JetBrains Mono")

        assert result.error == "font installation on macOS requires Homebrew"

    def test_darwin_cask(self) -> None:
        """The nerd-font cask is installed with brew."""
        with (
            patch("pactctl.apply.fonts.is_font_installed", return_value=False),
            patch("pactctl.apply.fonts.run_command", return_value=_OK) as mock_run,
        ):
            result = install_nerd_font(_ctx("darwin", "brew"), "JetBrains Mono")

        assert result.message == "installed via Homebrew"
        assert mock_run.call_args[0][0] == [
            "brew",
            "install",
            "--cask",
            "font-jetbrainsmono-nerd-font",
        ]

    def test_darwin_cask_fallback_name(self) -> None:
        """A second cask spelling is tried when the first fails."""
        failure = CommandResult(stdout="", stderr="No cask", returncode=1)
        with (
            patch("pactctl.apply.fonts.is_font_installed", return_value=False),
            patch("pactctl.apply.fonts.run_command", side_effect=[failure, _OK]) as mock_run,
        ):
            result = install_nerd_font(_ctx("darwin", "brew"), "JetBrains Mono")

        assert result.applied
        assert mock_run.call_args[0][0][-1] == "font-jetbrains-mono-nerd-font"

    def test_linux_download(self, fake_home: Path) -> None:
        """Linux downloads the release zip and refreshes the font cache."""
        ctx = _ctx("linux")
        with (
            patch("pactctl.apply.fonts.is_font_installed", return_value=False),
            patch("pactctl.apply.fonts.download_file", side_effect=_fake_download) as mock_dl,
            patch("pactctl.apply.fonts.extract_archive", return_value=_OK) as mock_extract,
            patch("pactctl.apply.fonts.try_run_command", return_value=_OK) as mock_refresh,
        ):
            result = install_nerd_font(ctx, "JetBrains Mono")

        target = fake_home / ".local" / "share" / "fonts"
        assert result.message == f"installed to {target}"
        assert mock_dl.call_args[0][0] == (
            "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/JetBrainsMono.zip"
        )
        assert mock_extract.call_args[0][1] == target
        mock_refresh.assert_called_once_with(["fc-cache", "-f"], timeout=120.0)

    def test_extraction_failure(self, fake_home: Path) -> None:
        """A failed extraction fails the font."""
        with (
            patch("pactctl.apply.fonts.is_font_installed", return_value=False),
            patch("pactctl.apply.fonts.download_file", side_effect=_fake_download),
            patch(
                "pactctl.apply.fonts.extract_archive",
                return_value=CommandResult(stdout="", stderr="bad zip", returncode=9),
            ),
        ):
            result = install_nerd_font(_ctx("linux"), "Hack")

        assert result.error == "extraction failed: exit status 9: bad zip"


class TestApplyTerminal:
    """Tests for apply_terminal."""

    def test_no_font(self) -> None:
        """Without terminal.font nothing is done."""
        assert apply_terminal(ApplyContext(Manifest({}), None)) == []
