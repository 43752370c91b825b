"""Unit tests for the apply engine."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pactctl.apply.context import ApplyContext
from pactctl.apply.engine import ApplyEngine
from pactctl.models.manifest import Manifest
from pactctl.models.result import ResultCategory, failed, ok
from pactctl.operators.base import PackageManager


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """A synchronization root with one dotfile."""
    root = tmp_path / ".pact"
    (root / "misc").mkdir(parents=True)
    (root / "misc" / "hushlogin").write_text("")
    return root


class TestModuleOrder:
    """Tests for module_order."""

    def test_known_modules_first(self) -> None:
        """Known modules run in fixed order, then others in manifest order."""
        manifest = Manifest(
            {
                "name": "alice",
                "dotfiles": {},
                "apps": {},
                "git": {},
                "cli": {},
                "secrets": ["A"],
                "extras": {},
            }
        )
        engine = ApplyEngine(ApplyContext(manifest, None))

        assert engine.module_order() == ["cli", "git", "apps", "dotfiles", "extras"]


class TestApplyModule:
    """Tests for apply_module."""

    def test_unknown_module_syncs_files(self, root: Path, fake_home: Path) -> None:
        """Any module name is accepted and its files are synced."""
        manifest = Manifest(
            {"dotfiles": {"files": {"hush": {"source": "misc/hushlogin", "target": "~/.hush"}}}},
            root=root,
        )

        results = ApplyEngine(ApplyContext(manifest, None)).apply_module("dotfiles")

        assert [(r.category, r.name, r.applied) for r in results] == [
            (ResultCategory.FILE, "hush", True)
        ]
        assert (fake_home / ".hush").is_symlink()

    def test_unknown_module_without_files(self) -> None:
        """A module with nothing to do is reported as skipped."""
        results = ApplyEngine(ApplyContext(Manifest({}), None)).apply_module("dotfiles")

        assert len(results) == 1
        assert results[0].skipped
        assert results[0].message == "no files configured for this OS"

    def test_side_effects_before_files(self, root: Path, fake_home: Path) -> None:
        """A known module's side effects come before its file Results."""
        manifest = Manifest(
            {
                "git": {
                    "user": "Alice",
                    "files": {"hush": {"source": "misc/hushlogin", "target": "~/.hush"}},
                }
            },
            root=root,
        )
        side_effect = ok(ResultCategory.CONFIGURE, "git", "user.name", "set to Alice")
        with patch.dict(
            "pactctl.apply.engine.MODULE_APPLIERS", {"git": lambda ctx, module: [side_effect]}
        ):
            results = ApplyEngine(ApplyContext(manifest, None)).apply_module("git")

        assert results[0] is side_effect
        assert results[1].category == ResultCategory.FILE


class TestApplySatisfiedMachine:
    """Tests for applying to a machine that already matches."""

    def test_no_processes_started(self) -> None:
        """When every tool is present, apply only reports skipped items."""
        manager = MagicMock(spec=PackageManager)
        manager.name = "brew"
        manifest = Manifest({"cli": {"tools": ["git", "ripgrep"], "custom": ["churn"]}})

        with (
            patch("pactctl.scanners.tools.command_exists", return_value=True),
            patch("pactctl.utils.shell.subprocess.run") as mock_run,
        ):
            results = ApplyEngine(ApplyContext(manifest, manager)).apply()

        assert [r.name for r in results] == ["git", "ripgrep", "churn"]
        assert all(r.skipped for r in results)
        mock_run.assert_not_called()
        manager.install.assert_not_called()


class TestApplyBatch:
    """Tests for batch behavior across modules."""

    def test_failure_does_not_stop_later_modules(self) -> None:
        """A failed item in one module leaves the following modules applied."""
        manifest = Manifest({"cli": {"tools": ["ripgrep"]}, "git": {"user": "Alice"}})
        appliers = {
            "cli": lambda ctx, module: [
                failed(ResultCategory.INSTALL, module, "ripgrep", "no supported package manager")
            ],
            "git": lambda ctx, module: [
                ok(ResultCategory.CONFIGURE, module, "user.name", "set to Alice")
            ],
        }

        with patch.dict("pactctl.apply.engine.MODULE_APPLIERS", appliers, clear=True):
            results = ApplyEngine(ApplyContext(manifest, None)).apply()

        assert [(r.module, r.failed) for r in results] == [("cli", True), ("git", False)]

    def test_non_utf8_shell_rc(self, fake_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A shell resource file with non-UTF-8 bytes still yields Results."""
        monkeypatch.setenv("SHELL", "/bin/zsh")
        (fake_home / ".zshrc").write_bytes(b"# caf\xe9\nexport EDITOR=vim\n")
        manifest = Manifest({"shell": {"tools": ["zoxide"]}, "git": {"user": "Alice"}})
        set_name = ok(ResultCategory.CONFIGURE, "git", "user.name", "set to Alice")

        with (
            patch("pactctl.apply.context.tool_installed", return_value=True),
            patch.dict(
                "pactctl.apply.engine.MODULE_APPLIERS", {"git": lambda ctx, module: [set_name]}
            ),
        ):
            results = ApplyEngine(ApplyContext(manifest, None, os_name="linux")).apply()

        assert [r.name for r in results] == ["zoxide", "zoxide-init", "user.name"]
        assert results[1].applied
        assert b"# pact: zoxide" in (fake_home / ".zshrc").read_bytes()
