"""Import selection: the user-approved subset of LocalOnly items."""

from dataclasses import dataclass, field

from pactctl.models.detected import ConfigFile, PromptDetected


@dataclass
class ImportSelection:
    """Typed projection of selected DiffItems, consumed by the merge engine.

    Empty strings and None mean "not selected".
    """

    cli_tools: list[str] = field(default_factory=list)
    cli_custom: list[str] = field(default_factory=list)
    shell_prompt: PromptDetected | None = None
    shell_tools: list[str] = field(default_factory=list)
    git_user: str = ""
    git_email: str = ""
    git_default_branch: str = ""
    git_lfs: bool = False
    editor_default: str = ""
    editor_others: list[str] = field(default_factory=list)
    terminal_font: str = ""
    llm_providers: list[str] = field(default_factory=list)
    llm_runtime: str = ""
    llm_models: list[str] = field(default_factory=list)
    llm_agents: list[str] = field(default_factory=list)
    secrets: list[str] = field(default_factory=list)
    config_files: list[ConfigFile] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if nothing was selected."""
        return self.count == 0

    @property
    def count(self) -> int:
        """Number of selected items."""
        lists = (
            self.cli_tools,
            self.cli_custom,
            self.shell_tools,
            self.editor_others,
            self.llm_providers,
            self.llm_models,
            self.llm_agents,
            self.secrets,
            self.config_files,
        )
        scalars = (
            self.shell_prompt is not None,
            bool(self.git_user),
            bool(self.git_email),
            bool(self.git_default_branch),
            self.git_lfs,
            bool(self.editor_default),
            bool(self.terminal_font),
            bool(self.llm_runtime),
        )
        return sum(len(values) for values in lists) + sum(scalars)
