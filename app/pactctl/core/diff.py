"""Diff engine for comparing detected machine state with the manifest.

Every detected or declared item lands in exactly one class per module:

- Synced: present on the machine and in the manifest.
- LocalOnly: present on the machine only, or a scalar setting whose
  machine value differs from the manifest value (the machine value is the
  import candidate).
- PactOnly: declared in the manifest but not found on the machine.

Discovered config files have no manifest counterpart and are always
LocalOnly.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pactctl.models.detected import DetectedConfig
from pactctl.models.manifest import Manifest

# Diff item types
TYPE_TOOL = "tool"
TYPE_CUSTOM = "custom"
TYPE_PROMPT = "prompt"
TYPE_SETTING = "setting"
TYPE_EDITOR = "editor"
TYPE_EDITOR_OTHER = "editor-other"
TYPE_PROVIDER = "provider"
TYPE_RUNTIME = "runtime"
TYPE_MODEL = "model"
TYPE_AGENT = "agent"
TYPE_SECRET = "secret"
TYPE_CONFIG = "config"

# Modules in report order
DIFF_MODULES: tuple[str, ...] = (
    "cli",
    "shell",
    "git",
    "editor",
    "terminal",
    "llm",
    "secrets",
    "files",
)

# Git setting names as used in the manifest
GIT_SETTING_NAMES: tuple[str, ...] = ("user", "email", "defaultBranch")


@dataclass(frozen=True, slots=True)
class DiffItem:
    """One classified item.

    Attributes:
        name: Item name (tool, setting key, editor, secret name, ...).
        type: Disambiguates same-named items within a module.
        value: Detected value for settings, theme for prompts, source path
            for config files.
    """

    name: str
    type: str
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Classification of one module.

    Attributes:
        module: Module name.
        local_only: On the machine, not (or differently) in the manifest.
        pact_only: In the manifest, not on the machine.
        synced: Present on both sides.
    """

    module: str
    local_only: tuple[DiffItem, ...] = ()
    pact_only: tuple[DiffItem, ...] = ()
    synced: tuple[DiffItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check if the module produced no items at all."""
        return not (self.local_only or self.pact_only or self.synced)

    @property
    def is_in_sync(self) -> bool:
        """Check if nothing differs in this module."""
        return not (self.local_only or self.pact_only)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "module": self.module,
            "local_only": [item.to_dict() for item in self.local_only],
            "pact_only": [item.to_dict() for item in self.pact_only],
            "synced": [item.to_dict() for item in self.synced],
        }


@dataclass
class _ModuleDiff:
    """Accumulates the three classes for one module."""

    module: str
    local_only: list[DiffItem] = field(default_factory=list)
    pact_only: list[DiffItem] = field(default_factory=list)
    synced: list[DiffItem] = field(default_factory=list)

    def lists(self, detected: Iterable[str], declared: Iterable[str], item_type: str) -> None:
        """Classify two name lists by membership."""
        detected_names = list(dict.fromkeys(detected))
        declared_names = list(dict.fromkeys(declared))
        detected_set = set(detected_names)
        declared_set = set(declared_names)

        for name in detected_names:
            target = self.synced if name in declared_set else self.local_only
            target.append(DiffItem(name, item_type))
        for name in declared_names:
            if name not in detected_set:
                self.pact_only.append(DiffItem(name, item_type))

    def setting(self, name: str, item_type: str, detected: str, declared: str) -> None:
        """Classify a keyed scalar; a differing value counts as LocalOnly."""
        if not detected and not declared:
            return
        if not detected:
            self.pact_only.append(DiffItem(name, item_type, declared))
        elif detected == declared:
            self.synced.append(DiffItem(name, item_type, detected))
        else:
            self.local_only.append(DiffItem(name, item_type, detected))

    def choice(
        self,
        item_type: str,
        detected: str,
        declared: str,
        detected_value: str = "",
        declared_value: str = "",
    ) -> None:
        """Classify a single-valued choice (prompt tool, default editor, runtime).

        The chosen name is the item. When both sides name the same item
        but its detected value differs, the item is LocalOnly.
        """
        if detected and detected == declared:
            value = detected_value or None
            item = DiffItem(detected, item_type, value)
            if detected_value and detected_value != declared_value:
                self.local_only.append(item)
            else:
                self.synced.append(item)
            return
        if detected:
            self.local_only.append(DiffItem(detected, item_type, detected_value or None))
        if declared:
            self.pact_only.append(DiffItem(declared, item_type, declared_value or None))

    def result(self) -> DiffResult:
        return DiffResult(
            module=self.module,
            local_only=tuple(self.local_only),
            pact_only=tuple(self.pact_only),
            synced=tuple(self.synced),
        )


class DiffEngine:
    """Classifies detected state against a manifest.

    Args:
        manifest: Manifest to compare with. An empty manifest makes every
            detected item LocalOnly.
    """

    def __init__(self, manifest: Manifest) -> None:
        self.manifest = manifest

    def compare(
        self,
        detected: DetectedConfig,
        modules: Iterable[str] | None = None,
    ) -> list[DiffResult]:
        """Classify every category.

        Args:
            detected: Fresh scan of the machine.
            modules: Restrict to these modules. If None, all are compared.

        Returns:
            One DiffResult per module with at least one item, in report order.
        """
        wanted = set(modules) if modules is not None else set(DIFF_MODULES)
        comparers = {
            "cli": self._cli,
            "shell": self._shell,
            "git": self._git,
            "editor": self._editor,
            "terminal": self._terminal,
            "llm": self._llm,
            "secrets": self._secrets,
            "files": self._files,
        }

        results: list[DiffResult] = []
        for module in DIFF_MODULES:
            if module not in wanted:
                continue
            diff = _ModuleDiff(module)
            comparers[module](detected, diff)
            result = diff.result()
            if not result.is_empty:
                results.append(result)
        return results

    def _cli(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        m = self.manifest
        diff.lists(detected.cli.tools, m.get_string_list("cli.tools"), TYPE_TOOL)
        diff.lists(detected.cli.custom, m.get_string_list("cli.custom"), TYPE_CUSTOM)

    def _shell(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        m = self.manifest
        prompt = detected.shell.prompt
        diff.choice(
            TYPE_PROMPT,
            prompt.tool,
            m.get_string("shell.prompt.tool"),
            prompt.theme,
            m.get_string("shell.prompt.theme"),
        )
        diff.lists(detected.shell.tools, m.get_string_list("shell.tools"), TYPE_TOOL)

    def _git(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        m = self.manifest
        values = {
            "user": detected.git.user,
            "email": detected.git.email,
            "defaultBranch": detected.git.default_branch,
        }
        for name in GIT_SETTING_NAMES:
            diff.setting(name, TYPE_SETTING, values[name], m.get_string(f"git.{name}"))

        declared_lfs = m.get("git.lfs") is True
        diff.setting(
            "lfs",
            TYPE_SETTING,
            "true" if detected.git.lfs else "",
            "true" if declared_lfs else "",
        )

    def _editor(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        m = self.manifest
        diff.choice(TYPE_EDITOR, detected.editor.default, m.get_string("editor.default"))
        diff.lists(detected.editor.others, m.get_string_list("editor.others"), TYPE_EDITOR_OTHER)

    def _terminal(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        diff.setting(
            "font",
            TYPE_SETTING,
            detected.terminal.font,
            self.manifest.get_string("terminal.font"),
        )

    def _llm(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        m = self.manifest
        llm = detected.llm
        diff.lists(llm.providers, m.get_string_list("llm.providers"), TYPE_PROVIDER)
        diff.choice(TYPE_RUNTIME, llm.local.runtime, m.get_string("llm.local.runtime"))
        diff.lists(llm.local.models, m.get_string_list("llm.local.models"), TYPE_MODEL)
        diff.lists(llm.agents, m.get_string_list("llm.coding.agents"), TYPE_AGENT)

    def _secrets(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        names = [secret.name for secret in detected.secrets]
        diff.lists(names, self.manifest.secrets(), TYPE_SECRET)

    def _files(self, detected: DetectedConfig, diff: _ModuleDiff) -> None:
        for config_file in detected.config_files:
            diff.local_only.append(DiffItem(config_file.name, TYPE_CONFIG, config_file.source_path))


def all_local_diffs(
    detected: DetectedConfig,
    modules: Iterable[str] | None = None,
) -> list[DiffResult]:
    """Classify a scan when there is no manifest yet: everything is LocalOnly."""
    return DiffEngine(Manifest({})).compare(detected, modules)


def count_new_items(results: Iterable[DiffResult]) -> int:
    """Total LocalOnly items."""
    return sum(len(result.local_only) for result in results)


def count_missing_items(results: Iterable[DiffResult]) -> int:
    """Total PactOnly items."""
    return sum(len(result.pact_only) for result in results)
