"""Unit tests for application settings."""

from pathlib import Path

import pytest

from pactctl.core.settings import (
    Settings,
    SettingsError,
    SettingsParseError,
    load_settings,
    save_settings,
    set_setting,
)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Path to a settings file in a temp directory."""
    return tmp_path / "config" / "config.toml"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, settings_path: Path) -> None:
        """No file means default settings."""
        settings = load_settings(settings_path)

        assert settings == Settings()
        assert settings.http_timeout == 30.0
        assert settings.custom_tools == {}

    def test_valid_file(self, settings_path: Path) -> None:
        """Values from TOML are validated into Settings."""
        settings_path.parent.mkdir()
        settings_path.write_text(
            'package_manager = "brew"\n'
            "http_timeout = 60\n"
            "[custom_tools]\n"
            'mytool = "me/mytool"\n'
        )

        settings = load_settings(settings_path)

        assert settings.package_manager == "brew"
        assert settings.http_timeout == 60
        assert settings.custom_tools == {"mytool": "me/mytool"}

    def test_invalid_toml(self, settings_path: Path) -> None:
        """Broken TOML raises SettingsParseError."""
        settings_path.parent.mkdir()
        settings_path.write_text("package_manager = ")

        with pytest.raises(SettingsParseError):
            load_settings(settings_path)

    def test_unknown_key(self, settings_path: Path) -> None:
        """Unknown keys are rejected."""
        settings_path.parent.mkdir()
        settings_path.write_text('colour = "blue"\n')

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(settings_path)


class TestSaveSettings:
    """Tests for save_settings."""

    def test_round_trip(self, settings_path: Path) -> None:
        """Saved settings load back unchanged."""
        settings = Settings(
            sync_root=Path("/tmp/dotfiles"),
            bin_dir=Path("/tmp/bin"),
            custom_tools={"mytool": "me/mytool"},
            http_timeout=45,
        )

        save_settings(settings, settings_path)

        assert load_settings(settings_path) == settings

    def test_defaults_write_empty_file(self, settings_path: Path) -> None:
        """Unset values are omitted."""
        save_settings(Settings(), settings_path)
        assert settings_path.read_text() == ""


class TestSetSetting:
    """Tests for set_setting."""

    def test_set_and_reset_scalar(self, settings_path: Path) -> None:
        """A value is set, and an empty value resets it."""
        assert set_setting("package_manager", "apt", settings_path).package_manager == "apt"
        assert set_setting("package_manager", "", settings_path).package_manager is None

    def test_custom_tool_mapping(self, settings_path: Path) -> None:
        """custom_tools.<name> adds and removes a single mapping."""
        set_setting("custom_tools.mytool", "me/mytool", settings_path)
        assert load_settings(settings_path).custom_tools == {"mytool": "me/mytool"}

        set_setting("custom_tools.mytool", "", settings_path)
        assert load_settings(settings_path).custom_tools == {}

    def test_http_timeout_validated(self, settings_path: Path) -> None:
        """Out-of-range timeouts are rejected."""
        with pytest.raises(SettingsError, match="Invalid value for http_timeout"):
            set_setting("http_timeout", "1", settings_path)

    def test_reset_http_timeout(self, settings_path: Path) -> None:
        """Resetting the timeout restores the default."""
        set_setting("http_timeout", "90", settings_path)
        assert set_setting("http_timeout", "", settings_path).http_timeout == 30.0

    def test_unknown_key(self, settings_path: Path) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(SettingsError, match="Unknown setting: colour"):
            set_setting("colour", "blue", settings_path)
