"""Merge engine: fold selected LocalOnly items back into the manifest.

List fields are merged by ordered union, scalar fields are overwritten,
and nested objects are created as needed. Selected config files are
copied into the synchronization root; a failed copy is logged and skipped.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pactctl.core.diff import (
    TYPE_AGENT,
    TYPE_CONFIG,
    TYPE_CUSTOM,
    TYPE_EDITOR,
    TYPE_EDITOR_OTHER,
    TYPE_MODEL,
    TYPE_PROMPT,
    TYPE_PROVIDER,
    TYPE_RUNTIME,
    TYPE_SECRET,
    TYPE_TOOL,
    DiffItem,
)
from pactctl.core.secrets import SecretStore
from pactctl.core.sync import copy_path
from pactctl.models.detected import ConfigFile, DetectedConfig
from pactctl.models.manifest import Manifest
from pactctl.models.selection import ImportSelection

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_VERSION = "1.0.0"


def get_or_create_map(parent: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``parent[key]`` as a dict, replacing non-dict values."""
    value = parent.get(key)
    if isinstance(value, dict):
        return value
    created: dict[str, Any] = {}
    parent[key] = created
    return created


def merge_string_lists(existing: Iterable[Any], new: Iterable[str]) -> list[Any]:
    """Append new strings not already present, keeping existing order.

    Existing entries are kept exactly as they are; only exact string
    matches count as present.
    """
    merged = list(existing)
    seen = {item for item in merged if isinstance(item, str)}
    for item in new:
        if item not in seen:
            seen.add(item)
            merged.append(item)
    return merged


def _merge_list(parent: dict[str, Any], key: str, new: list[str]) -> None:
    if not new:
        return
    existing = parent.get(key)
    parent[key] = merge_string_lists(existing if isinstance(existing, list) else [], new)


def _prompt_dict(selection_prompt: Any) -> dict[str, Any]:
    prompt: dict[str, Any] = {"tool": selection_prompt.tool}
    if selection_prompt.theme:
        prompt["theme"] = selection_prompt.theme
    if selection_prompt.source:
        prompt["source"] = selection_prompt.source
    return prompt


def copy_config_file(config_file: ConfigFile, sync_root: Path) -> Path:
    """Copy a discovered config file into the synchronization root.

    Args:
        config_file: File or directory found on the machine.
        sync_root: Root the ``dest_path`` is relative to.

    Returns:
        The destination path.

    Raises:
        OSError: If the copy fails.
    """
    dest = sync_root / config_file.dest_path
    dest.parent.mkdir(parents=True, exist_ok=True)
    copy_path(Path(config_file.source_path), dest)
    return dest


def merge_selection(manifest: Manifest, selection: ImportSelection) -> list[ConfigFile]:
    """Merge a selection into a manifest in place.

    Args:
        manifest: Manifest to update; the caller saves it.
        selection: Approved items.

    Returns:
        Config files that were copied. Failed copies are logged and left out.
    """
    raw = manifest.data

    if selection.cli_tools or selection.cli_custom:
        cli = get_or_create_map(raw, "cli")
        _merge_list(cli, "tools", selection.cli_tools)
        _merge_list(cli, "custom", selection.cli_custom)

    if selection.shell_prompt is not None or selection.shell_tools:
        shell = get_or_create_map(raw, "shell")
        if selection.shell_prompt is not None:
            shell["prompt"] = _prompt_dict(selection.shell_prompt)
        _merge_list(shell, "tools", selection.shell_tools)

    git_values = {
        "user": selection.git_user,
        "email": selection.git_email,
        "defaultBranch": selection.git_default_branch,
    }
    if any(git_values.values()) or selection.git_lfs:
        git = get_or_create_map(raw, "git")
        for key, value in git_values.items():
            if value:
                git[key] = value
        if selection.git_lfs:
            git["lfs"] = True

    if selection.editor_default or selection.editor_others:
        editor = get_or_create_map(raw, "editor")
        if selection.editor_default:
            editor["default"] = selection.editor_default
        _merge_list(editor, "others", selection.editor_others)

    if selection.terminal_font:
        get_or_create_map(raw, "terminal")["font"] = selection.terminal_font

    if (
        selection.llm_providers
        or selection.llm_runtime
        or selection.llm_models
        or selection.llm_agents
    ):
        llm = get_or_create_map(raw, "llm")
        _merge_list(llm, "providers", selection.llm_providers)
        if selection.llm_runtime or selection.llm_models:
            local = get_or_create_map(llm, "local")
            if selection.llm_runtime:
                local["runtime"] = selection.llm_runtime
            _merge_list(local, "models", selection.llm_models)
        if selection.llm_agents:
            _merge_list(get_or_create_map(llm, "coding"), "agents", selection.llm_agents)

    _merge_list(raw, "secrets", selection.secrets)

    copied: list[ConfigFile] = []
    for config_file in selection.config_files:
        try:
            dest = copy_config_file(config_file, manifest.root)
        except OSError as e:
            logger.warning("Could not copy %s: %s", config_file.source_path, e)
            continue
        logger.debug("Copied %s -> %s", config_file.source_path, dest)
        copied.append(config_file)
    return copied


def build_selection_from_diffs(
    selected: Mapping[str, Iterable[DiffItem]],
    detected: DetectedConfig,
) -> ImportSelection:
    """Project selected DiffItems onto an ImportSelection.

    Args:
        selected: Module name to the DiffItems the user approved.
        detected: The scan the items came from; supplies prompt details and
            config file paths.

    Returns:
        ImportSelection ready for merge_selection.
    """
    selection = ImportSelection()

    for item in selected.get("cli", ()):
        if item.type == TYPE_TOOL:
            selection.cli_tools.append(item.name)
        elif item.type == TYPE_CUSTOM:
            selection.cli_custom.append(item.name)

    for item in selected.get("shell", ()):
        if item.type == TYPE_PROMPT and detected.shell.prompt.tool == item.name:
            selection.shell_prompt = detected.shell.prompt
        elif item.type == TYPE_TOOL:
            selection.shell_tools.append(item.name)

    for item in selected.get("git", ()):
        value = item.value or ""
        if item.name == "user":
            selection.git_user = value
        elif item.name == "email":
            selection.git_email = value
        elif item.name == "defaultBranch":
            selection.git_default_branch = value
        elif item.name == "lfs":
            selection.git_lfs = True

    for item in selected.get("editor", ()):
        if item.type == TYPE_EDITOR and not selection.editor_default:
            selection.editor_default = item.name
        elif item.type == TYPE_EDITOR_OTHER:
            selection.editor_others.append(item.name)

    for item in selected.get("terminal", ()):
        if item.name == "font" and item.value:
            selection.terminal_font = item.value

    for item in selected.get("llm", ()):
        if item.type == TYPE_PROVIDER:
            selection.llm_providers.append(item.name)
        elif item.type == TYPE_RUNTIME:
            selection.llm_runtime = item.name
        elif item.type == TYPE_MODEL:
            selection.llm_models.append(item.name)
        elif item.type == TYPE_AGENT:
            selection.llm_agents.append(item.name)

    for item in selected.get("secrets", ()):
        if item.type == TYPE_SECRET:
            selection.secrets.append(item.name)

    for item in selected.get("files", ()):
        if item.type != TYPE_CONFIG:
            continue
        config_file = detected.find_config_file(item.name)
        if config_file is not None:
            selection.config_files.append(config_file)

    return selection


def create_default_manifest(detected: DetectedConfig, username: str, sync_root: Path) -> Manifest:
    """Build a first manifest from a full scan.

    Args:
        detected: Unfiltered scan of the machine.
        username: Account name stored as ``name``.
        sync_root: Root the new manifest belongs to.

    Returns:
        Manifest holding every detected category; the caller saves it.
    """
    data: dict[str, Any] = {"name": username, "version": DEFAULT_MANIFEST_VERSION}

    cli: dict[str, Any] = {}
    if detected.cli.tools:
        cli["tools"] = list(detected.cli.tools)
    if detected.cli.custom:
        cli["custom"] = list(detected.cli.custom)
    if cli:
        data["cli"] = cli

    shell: dict[str, Any] = {}
    if detected.shell.prompt.tool:
        shell["prompt"] = _prompt_dict(detected.shell.prompt)
    if detected.shell.tools:
        shell["tools"] = list(detected.shell.tools)
    if shell:
        data["shell"] = shell

    git = detected.git
    if git.user or git.email:
        git_data: dict[str, Any] = {}
        if git.user:
            git_data["user"] = git.user
        if git.email:
            git_data["email"] = git.email
        if git.default_branch:
            git_data["defaultBranch"] = git.default_branch
        if git.lfs:
            git_data["lfs"] = True
        data["git"] = git_data

    editor: dict[str, Any] = {}
    if detected.editor.default:
        editor["default"] = detected.editor.default
    if detected.editor.others:
        editor["others"] = list(detected.editor.others)
    if editor:
        data["editor"] = editor

    if detected.terminal.font:
        data["terminal"] = {"font": detected.terminal.font}

    llm_detected = detected.llm
    llm: dict[str, Any] = {}
    if llm_detected.providers:
        llm["providers"] = list(llm_detected.providers)
    if llm_detected.local.runtime:
        local: dict[str, Any] = {"runtime": llm_detected.local.runtime}
        if llm_detected.local.models:
            local["models"] = list(llm_detected.local.models)
        llm["local"] = local
    if llm_detected.agents:
        llm["coding"] = {"agents": list(llm_detected.agents)}
    if llm:
        data["llm"] = llm

    secret_names = [secret.name for secret in detected.secrets]
    if secret_names:
        data["secrets"] = secret_names

    return Manifest(data, root=sync_root)


def validate_selection(selection: ImportSelection, sync_root: Path) -> list[str]:
    """List problems that would make an import incomplete.

    Returns:
        Human-readable problems; empty if the selection can be merged.
    """
    problems: list[str] = []
    if not sync_root.is_dir():
        problems.append(f"synchronization root does not exist: {sync_root}")
    for config_file in selection.config_files:
        if not Path(config_file.source_path).exists():
            problems.append(f"config file no longer exists: {config_file.source_path}")
    return problems


def store_secrets(
    names: Iterable[str],
    store: SecretStore,
    environ: Mapping[str, str],
) -> list[str]:
    """Copy secret values from the environment into a secret store.

    Args:
        names: Secret names selected for import.
        store: Destination store.
        environ: Environment to read values from.

    Returns:
        Names whose values were stored. Names without a value are skipped.
    """
    stored: list[str] = []
    for name in names:
        value = environ.get(name)
        if not value:
            continue
        store.set(name, value)
        stored.append(name)
    return stored
