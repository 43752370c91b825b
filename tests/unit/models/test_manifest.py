"""Unit tests for the Manifest model.

Tests for dot-path accessors, target resolution and sync item discovery.
"""

from pathlib import Path

import pytest

from pactctl.models.manifest import FileEntry, Manifest


@pytest.fixture
def manifest(tmp_path: Path) -> Manifest:
    """Create a manifest with nested modules and file entries."""
    return Manifest(
        {
            "name": "alice",
            "version": "1.0.0",
            "secrets": ["OPENAI_API_KEY", 42],
            "cli": {"tools": ["git", "ripgrep", 7]},
            "shell": {
                "prompt": {"tool": "starship"},
                "files": {
                    "zshrc": {"source": "shell/.zshrc", "target": "~/.zshrc"},
                },
            },
            "editor": {
                "nvim": {
                    "files": {
                        "config": {
                            "source": "editor/nvim",
                            "target": {"linux": "~/.config/nvim", "darwin": "~/.config/nvim"},
                            "strategy": "copy",
                        },
                    },
                },
            },
        },
        root=tmp_path,
    )


class TestAccessors:
    """Tests for dot-path accessors."""

    def test_get_nested_value(self, manifest: Manifest) -> None:
        """get() follows dot-separated keys."""
        assert manifest.get("shell.prompt.tool") == "starship"

    def test_get_missing_returns_none(self, manifest: Manifest) -> None:
        """get() returns None for missing paths."""
        assert manifest.get("shell.prompt.theme") is None
        assert manifest.get("cli.tools.extra") is None

    def test_get_string_wrong_type(self, manifest: Manifest) -> None:
        """get_string() reads non-strings as empty."""
        assert manifest.get_string("cli.tools") == ""

    def test_get_string_list_ignores_non_strings(self, manifest: Manifest) -> None:
        """get_string_list() keeps only string items."""
        assert manifest.get_string_list("cli.tools") == ["git", "ripgrep"]

    def test_get_map(self, manifest: Manifest) -> None:
        """get_map() returns objects and reads other values as empty."""
        assert manifest.get_map("shell.prompt") == {"tool": "starship"}
        assert manifest.get_map("cli.tools") == {}

    def test_has_key(self, manifest: Manifest) -> None:
        """has_key() reports present paths."""
        assert manifest.has_key("shell.prompt")
        assert not manifest.has_key("git")

    def test_identity(self, manifest: Manifest) -> None:
        """name and version read the top-level strings."""
        assert manifest.name == "alice"
        assert manifest.version == "1.0.0"

    def test_modules_exclude_reserved_keys(self, manifest: Manifest) -> None:
        """modules() lists top-level objects in document order."""
        assert manifest.modules() == ["cli", "shell", "editor"]

    def test_secrets(self, manifest: Manifest) -> None:
        """secrets() returns names only."""
        assert manifest.secrets() == ["OPENAI_API_KEY"]


class TestResolveTarget:
    """Tests for resolve_target."""

    def test_expands_home(self, fake_home: Path) -> None:
        """A leading ~ expands to the home directory."""
        assert Manifest().resolve_target("~/.zshrc") == fake_home / ".zshrc"

    def test_absolute_path_unchanged(self, tmp_path: Path) -> None:
        """Absolute targets are returned as-is."""
        target = str(tmp_path / "file")
        assert Manifest().resolve_target(target) == Path(target)

    def test_os_map(self, fake_home: Path) -> None:
        """An OS map resolves the entry for the requested OS."""
        target = {"darwin": "~/Library/app", "linux": "~/.config/app"}
        assert Manifest().resolve_target(target, "linux") == fake_home / ".config" / "app"

    def test_os_map_missing_os(self) -> None:
        """An OS map without the requested OS yields no target."""
        assert Manifest().resolve_target({"darwin": "~/.config/app"}, "linux") is None

    def test_empty_or_invalid(self) -> None:
        """Empty strings and non-strings yield no target."""
        assert Manifest().resolve_target("") is None
        assert Manifest().resolve_target(5) is None


class TestSyncItems:
    """Tests for recursive file entry discovery."""

    def test_collects_nested_entries(self, manifest: Manifest, fake_home: Path) -> None:
        """files objects are found at any depth and labeled by top-level module."""
        items = manifest.sync_items("linux")

        assert [(i.module, i.name) for i in items] == [("shell", "zshrc"), ("editor", "config")]
        assert items[0].target == fake_home / ".zshrc"
        assert items[0].source == manifest.root / "shell" / ".zshrc"
        assert items[0].strategy == "symlink"
        assert items[1].strategy == "copy"

    def test_entry_without_target_for_os_is_dropped(self, tmp_path: Path) -> None:
        """An entry with no target for the current OS is omitted, not an error."""
        manifest = Manifest(
            {"app": {"files": {"cfg": {"source": "app", "target": {"darwin": "~/.config/app"}}}}},
            root=tmp_path,
        )
        assert manifest.sync_items("linux") == []

    def test_malformed_entries_are_skipped(self, tmp_path: Path) -> None:
        """Entries without source or with bad shapes are skipped."""
        manifest = Manifest(
            {
                "shell": {
                    "files": {
                        "nosource": {"target": "~/.x"},
                        "empty": {"source": "", "target": "~/.y"},
                        "scalar": "shell/.zshrc",
                        "good": {"source": "shell/.zshrc", "target": "~/.zshrc"},
                    }
                }
            },
            root=tmp_path,
        )
        assert [item.name for item in manifest.sync_items("linux")] == ["good"]

    def test_top_level_files_labeled_files(self, tmp_path: Path) -> None:
        """A top-level files object is labeled with the module name files."""
        manifest = Manifest({"files": {"x": {"source": "x", "target": "/tmp/x"}}}, root=tmp_path)
        assert [item.module for item in manifest.sync_items("linux")] == ["files"]

    def test_unknown_strategy_is_kept(self, tmp_path: Path) -> None:
        """An unknown strategy survives parsing and is rejected at sync time."""
        manifest = Manifest(
            {"m": {"files": {"x": {"source": "x", "target": "/tmp/x", "strategy": "hardlink"}}}},
            root=tmp_path,
        )
        assert manifest.sync_items("linux")[0].strategy == "hardlink"

    def test_is_dir(self, tmp_path: Path) -> None:
        """is_dir reflects the source on disk."""
        (tmp_path / "editor" / "nvim").mkdir(parents=True)
        manifest = Manifest(
            {"editor": {"files": {"nvim": {"source": "editor/nvim", "target": "/tmp/n"}}}},
            root=tmp_path,
        )
        assert manifest.sync_items("linux")[0].is_dir is True

    def test_sync_items_for_module(self, manifest: Manifest) -> None:
        """sync_items_for_module filters by module label."""
        assert [i.name for i in manifest.sync_items_for_module("editor", "linux")] == ["config"]
        assert manifest.sync_items_for_module("git", "linux") == []


class TestModuleCounts:
    """Tests for available_modules and count_module_files."""

    def test_available_modules(self, tmp_path: Path) -> None:
        """available_modules groups entry names by module."""
        manifest = Manifest(
            {
                "shell": {
                    "files": {
                        "zshrc": {"source": "a", "target": "/tmp/a"},
                        "bashrc": {"source": "b", "target": "/tmp/b"},
                    }
                },
                "git": {"user": "alice"},
            },
            root=tmp_path,
        )
        assert manifest.available_modules() == {"shell": ["zshrc", "bashrc"]}

    def test_count_module_files(self, tmp_path: Path) -> None:
        """Directories count every regular file beneath them."""
        (tmp_path / "nvim" / "lua").mkdir(parents=True)
        (tmp_path / "nvim" / "init.lua").write_text("")
        (tmp_path / "nvim" / "lua" / "plugins.lua").write_text("")
        (tmp_path / "gitconfig").write_text("")
        manifest = Manifest(
            {
                "editor": {"files": {"nvim": {"source": "nvim", "target": "/tmp/n"}}},
                "git": {
                    "files": {
                        "cfg": {"source": "gitconfig", "target": "/tmp/g"},
                        "gone": {"source": "missing", "target": "/tmp/m"},
                    }
                },
            },
            root=tmp_path,
        )
        assert manifest.count_module_files("editor") == 2
        assert manifest.count_module_files("git") == 1


class TestFileEntry:
    """Tests for the FileEntry model."""

    def test_extra_keys_ignored(self) -> None:
        """Unknown keys in a file entry are ignored."""
        entry = FileEntry.model_validate({"source": "a", "target": "~/a", "note": "x"})
        assert entry.strategy is None
