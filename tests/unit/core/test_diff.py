"""Unit tests for the diff engine.

Tests for the three-way classification of detected state against a manifest.
"""

from pathlib import Path

import pytest

from pactctl.core.diff import (
    TYPE_CONFIG,
    TYPE_EDITOR,
    TYPE_PROMPT,
    TYPE_SETTING,
    TYPE_TOOL,
    DiffEngine,
    DiffItem,
    DiffResult,
    all_local_diffs,
    count_missing_items,
    count_new_items,
)
from pactctl.models.detected import (
    CLIDetected,
    ConfigFile,
    DetectedConfig,
    EditorDetected,
    GitDetected,
    LLMDetected,
    LocalLLMDetected,
    PromptDetected,
    SecretDetected,
    ShellDetected,
    TerminalDetected,
)
from pactctl.models.manifest import Manifest


@pytest.fixture
def detected() -> DetectedConfig:
    """A scan touching every category."""
    return DetectedConfig(
        cli=CLIDetected(tools=["git", "ripgrep", "fd"], custom=["lazygit"]),
        shell=ShellDetected(
            type="zsh",
            prompt=PromptDetected(tool="starship"),
            tools=["zoxide"],
        ),
        git=GitDetected(user="Alice", email="alice@example.com", default_branch="main"),
        editor=EditorDetected(default="nvim", others=["code"]),
        terminal=TerminalDetected(font="JetBrains Mono"),
        llm=LLMDetected(
            providers=["anthropic"],
            local=LocalLLMDetected(runtime="ollama", models=["llama3"]),
            agents=["claude"],
        ),
        secrets=[SecretDetected(name="HF_TOKEN", in_env=True)],
        config_files=[
            ConfigFile(
                name="zshrc",
                source_path="/home/alice/.zshrc",
                dest_path="shell/.zshrc",
                module="shell",
            )
        ],
    )


def _by_module(results: list[DiffResult]) -> dict[str, DiffResult]:
    return {result.module: result for result in results}


def _names(items: tuple[DiffItem, ...]) -> list[str]:
    return [item.name for item in items]


class TestListCategories:
    """Tests for list-valued categories."""

    def test_three_way_split(self) -> None:
        """Tools split into local only, pact only and synced."""
        detected = DetectedConfig(cli=CLIDetected(tools=["git", "ripgrep", "fd"]))
        manifest = Manifest({"cli": {"tools": ["git", "ripgrep", "bat"]}})

        result = _by_module(DiffEngine(manifest).compare(detected))["cli"]

        assert _names(result.local_only) == ["fd"]
        assert _names(result.pact_only) == ["bat"]
        assert _names(result.synced) == ["git", "ripgrep"]
        assert all(item.type == TYPE_TOOL for item in result.synced)

    def test_partition_is_complete_and_disjoint(self, detected: DetectedConfig) -> None:
        """Every detected or declared name appears in exactly one class."""
        manifest = Manifest({"cli": {"tools": ["git", "bat"], "custom": ["lazygit"]}})

        result = _by_module(DiffEngine(manifest).compare(detected, ["cli"]))["cli"]

        keys = [
            (item.type, item.name)
            for items in (result.local_only, result.pact_only, result.synced)
            for item in items
        ]
        assert len(keys) == len(set(keys))
        assert set(keys) == {
            ("tool", "git"),
            ("tool", "ripgrep"),
            ("tool", "fd"),
            ("tool", "bat"),
            ("custom", "lazygit"),
        }

    def test_duplicates_are_classified_once(self) -> None:
        """A name listed twice is classified once."""
        detected = DetectedConfig(cli=CLIDetected(tools=["git", "git"]))
        manifest = Manifest({"cli": {"tools": ["git", "git"]}})

        result = DiffEngine(manifest).compare(detected)[0]

        assert _names(result.synced) == ["git"]

    def test_secrets(self) -> None:
        """Secrets are compared by name."""
        detected = DetectedConfig(secrets=[SecretDetected(name="HF_TOKEN", in_env=True)])
        manifest = Manifest({"secrets": ["OPENAI_API_KEY"]})

        result = _by_module(DiffEngine(manifest).compare(detected))["secrets"]

        assert _names(result.local_only) == ["HF_TOKEN"]
        assert _names(result.pact_only) == ["OPENAI_API_KEY"]


class TestScalarSettings:
    """Tests for keyed scalar settings."""

    def test_matching_value_is_synced(self) -> None:
        """Equal values are synced."""
        detected = DetectedConfig(git=GitDetected(user="Alice"))
        manifest = Manifest({"git": {"user": "Alice"}})

        result = DiffEngine(manifest).compare(detected, ["git"])[0]

        assert result.synced == (DiffItem("user", TYPE_SETTING, "Alice"),)

    def test_mismatch_is_local_only_with_machine_value(self) -> None:
        """A differing value is LocalOnly and carries the machine value."""
        detected = DetectedConfig(git=GitDetected(email="new@example.com"))
        manifest = Manifest({"git": {"email": "old@example.com"}})

        result = DiffEngine(manifest).compare(detected, ["git"])[0]

        assert result.local_only == (DiffItem("email", TYPE_SETTING, "new@example.com"),)
        assert result.pact_only == ()

    def test_declared_only_is_pact_only(self) -> None:
        """A value declared but not set locally is PactOnly."""
        manifest = Manifest({"git": {"defaultBranch": "main", "lfs": True}})

        result = DiffEngine(manifest).compare(DetectedConfig(), ["git"])[0]

        assert _names(result.pact_only) == ["defaultBranch", "lfs"]

    def test_terminal_font(self) -> None:
        """The terminal font is a scalar setting."""
        detected = DetectedConfig(terminal=TerminalDetected(font="Fira Code"))
        manifest = Manifest({"terminal": {"font": "JetBrains Mono"}})

        result = DiffEngine(manifest).compare(detected, ["terminal"])[0]

        assert result.local_only == (DiffItem("font", TYPE_SETTING, "Fira Code"),)

    def test_absent_on_both_sides_is_omitted(self) -> None:
        """Modules with no items are left out of the report."""
        assert DiffEngine(Manifest({})).compare(DetectedConfig(), ["git", "terminal"]) == []


class TestChoices:
    """Tests for single-valued choices."""

    def test_different_editor(self) -> None:
        """A different default editor is LocalOnly and the declared one PactOnly."""
        detected = DetectedConfig(editor=EditorDetected(default="nvim"))
        manifest = Manifest({"editor": {"default": "code"}})

        result = DiffEngine(manifest).compare(detected, ["editor"])[0]

        assert result.local_only == (DiffItem("nvim", TYPE_EDITOR),)
        assert result.pact_only == (DiffItem("code", TYPE_EDITOR),)

    def test_same_prompt_different_theme(self) -> None:
        """The same prompt tool with a new theme is LocalOnly."""
        detected = DetectedConfig(
            shell=ShellDetected(prompt=PromptDetected(tool="oh-my-posh", theme="atomic"))
        )
        manifest = Manifest({"shell": {"prompt": {"tool": "oh-my-posh", "theme": "paradox"}}})

        result = DiffEngine(manifest).compare(detected, ["shell"])[0]

        assert result.local_only == (DiffItem("oh-my-posh", TYPE_PROMPT, "atomic"),)
        assert result.pact_only == ()

    def test_same_prompt_is_synced(self) -> None:
        """A matching prompt tool and theme is synced."""
        detected = DetectedConfig(shell=ShellDetected(prompt=PromptDetected(tool="starship")))
        manifest = Manifest({"shell": {"prompt": {"tool": "starship"}}})

        result = DiffEngine(manifest).compare(detected, ["shell"])[0]

        assert result.synced == (DiffItem("starship", TYPE_PROMPT),)


class TestScenario:
    """End-to-end classification of a realistic machine."""

    def test_empty_manifest_everything_local(self, detected: DetectedConfig) -> None:
        """With an empty manifest every detected item is LocalOnly."""
        results = all_local_diffs(detected)

        assert all(not r.pact_only and not r.synced for r in results)
        assert [r.module for r in results] == [
            "cli",
            "shell",
            "git",
            "editor",
            "terminal",
            "llm",
            "secrets",
            "files",
        ]
        assert count_new_items(results) == 18
        assert count_missing_items(results) == 0

    def test_config_files_always_local(self, detected: DetectedConfig) -> None:
        """Discovered config files are LocalOnly even when the manifest lists files."""
        manifest = Manifest(
            {"shell": {"files": {"zshrc": {"source": "shell/.zshrc", "target": "~/.zshrc"}}}},
            root=Path("/tmp"),
        )

        result = _by_module(DiffEngine(manifest).compare(detected, ["files"]))["files"]

        assert result.local_only == (DiffItem("zshrc", TYPE_CONFIG, "/home/alice/.zshrc"),)

    def test_module_filter(self, detected: DetectedConfig) -> None:
        """Only the requested modules are compared."""
        results = DiffEngine(Manifest({})).compare(detected, ["llm"])

        assert [r.module for r in results] == ["llm"]
        assert _names(results[0].local_only) == ["anthropic", "ollama", "llama3", "claude"]

    def test_to_dict(self) -> None:
        """DiffResult serializes items with optional values."""
        result = DiffResult(
            module="git",
            local_only=(DiffItem("user", TYPE_SETTING, "Alice"),),
            synced=(DiffItem("lfs", TYPE_SETTING),),
        )

        assert result.to_dict() == {
            "module": "git",
            "local_only": [{"name": "user", "type": "setting", "value": "Alice"}],
            "pact_only": [],
            "synced": [{"name": "lfs", "type": "setting"}],
        }
        assert not result.is_in_sync
