"""Detected machine state.

A DetectedConfig is a fresh snapshot produced by one scan. It is never
persisted; ``scan --json`` prints it and the diff engine compares it with
the manifest.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Detected(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CLIDetected(_Detected):
    """Known CLI tools found on PATH."""

    tools: list[str] = Field(default_factory=list)
    custom: list[str] = Field(default_factory=list)


class PromptDetected(_Detected):
    """Prompt tool and the theme it is configured with."""

    tool: str = ""
    theme: str = ""
    source: str = ""


class ShellDetected(_Detected):
    """Shell type, prompt and auxiliary shell tools."""

    type: str = ""
    prompt: PromptDetected = Field(default_factory=PromptDetected)
    tools: list[str] = Field(default_factory=list)


class GitDetected(_Detected):
    """Global git identity and settings."""

    user: str = ""
    email: str = ""
    default_branch: str = ""
    lfs: bool = False


class EditorDetected(_Detected):
    """Declared default editor and other installed editors."""

    default: str = ""
    others: list[str] = Field(default_factory=list)


class TerminalDetected(_Detected):
    """Terminal font read from terminal emulator configs."""

    font: str = ""


class LocalLLMDetected(_Detected):
    """Local model runtime and its pulled models."""

    runtime: str = ""
    models: list[str] = Field(default_factory=list)


class LLMDetected(_Detected):
    """LLM providers, local runtime and coding agents."""

    providers: list[str] = Field(default_factory=list)
    local: LocalLLMDetected = Field(default_factory=LocalLLMDetected)
    agents: list[str] = Field(default_factory=list)


class SecretDetected(_Detected):
    """A secret name and where it is present. Values are never held."""

    name: str
    in_env: bool = False
    in_keychain: bool = False
    in_manifest: bool = False


class ConfigFile(_Detected):
    """A config file or directory found at a known location.

    Attributes:
        name: Location name (``zshrc``, ``nvim``, ...).
        source_path: Where it was found on this machine.
        dest_path: Destination relative to the synchronization root.
        module: Module the file belongs to.
        is_dir: Whether it is a directory.
    """

    name: str
    source_path: str
    dest_path: str
    module: str
    is_dir: bool = False


class DetectedConfig(_Detected):
    """Snapshot of everything the scanners found."""

    cli: CLIDetected = Field(default_factory=CLIDetected)
    shell: ShellDetected = Field(default_factory=ShellDetected)
    git: GitDetected = Field(default_factory=GitDetected)
    editor: EditorDetected = Field(default_factory=EditorDetected)
    terminal: TerminalDetected = Field(default_factory=TerminalDetected)
    llm: LLMDetected = Field(default_factory=LLMDetected)
    secrets: list[SecretDetected] = Field(default_factory=list)
    config_files: list[ConfigFile] = Field(default_factory=list)

    def find_config_file(self, name: str) -> ConfigFile | None:
        """Return the discovered config file with ``name``, if any."""
        for config_file in self.config_files:
            if config_file.name == name:
                return config_file
        return None
