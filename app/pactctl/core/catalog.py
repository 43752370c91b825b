"""Static tables of known tools, editors, apps and config locations.

Detection only reports what appears in these tables; the apply engine
uses the same tables to map manifest names to executables and package ids.
"""

# Package names whose executable has a different name
TOOL_COMMANDS: dict[str, tuple[str, ...]] = {
    "ripgrep": ("rg",),
    "fd": ("fd", "fdfind"),
    "bat": ("bat", "batcat"),
    "httpie": ("http",),
    "neovim": ("nvim",),
    "git-lfs": ("git-lfs",),
    "awscli": ("aws",),
}

CLI_TOOLS: tuple[str, ...] = (
    # Runtimes
    "node", "bun", "deno", "go", "cargo", "python3", "ruby",
    # Language package managers
    "npm", "yarn", "pnpm", "pip", "gem",
    # Git
    "git", "gh", "lazygit", "tig",
    # Containers
    "docker", "kubectl", "helm",
    # Search and navigation
    "ripgrep", "fd", "bat", "eza", "exa",
    # Utilities
    "jq", "yq", "curl", "wget", "httpie",
    # Build
    "make", "cmake", "ninja",
    # Cloud
    "aws", "gcloud", "az",
)  # fmt: skip

# Tools that need an init line in the shell resource file
SHELL_TOOLS: tuple[str, ...] = ("zoxide", "fzf", "direnv", "nvm", "rbenv", "pyenv")

PROMPT_TOOLS: tuple[str, ...] = ("oh-my-posh", "starship")

# Tools installed from GitHub releases, name -> owner/repo
CUSTOM_TOOL_REPOS: dict[str, str] = {
    "pact": "cloudboy-jh/pact",
    "churn": "cloudboy-jh/churn",
    "annotr": "cloudboy-jh/annotr",
}

# Editors in detection preference order: (manifest name, executable)
EDITORS: tuple[tuple[str, str], ...] = (
    ("zed", "zed"),
    ("cursor", "cursor"),
    ("vscode", "code"),
    ("neovim", "nvim"),
    ("vim", "vim"),
    ("nano", "nano"),
    ("emacs", "emacs"),
    ("sublime", "subl"),
    ("atom", "atom"),
)

# $EDITOR values normalized to manifest names
EDITOR_ALIASES: dict[str, str] = {
    "code": "vscode",
    "nvim": "neovim",
    "subl": "sublime",
}

# Editors the apply engine can install, name -> executable
INSTALLABLE_EDITORS: dict[str, str] = {
    "code": "code",
    "vscode": "code",
    "cursor": "cursor",
    "zed": "zed",
    "nvim": "nvim",
    "neovim": "nvim",
    "vim": "vim",
}

# Editor package names that differ per manager, name -> {manager: package}
EDITOR_PACKAGES: dict[str, dict[str, str]] = {
    "vscode": {"brew": "visual-studio-code", "winget": "Microsoft.VisualStudioCode"},
    "code": {"brew": "visual-studio-code", "winget": "Microsoft.VisualStudioCode"},
    "cursor": {"brew": "cursor", "winget": "Anysphere.Cursor"},
    "zed": {"brew": "zed", "winget": "ZedIndustries.Zed"},
    "neovim": {"winget": "Neovim.Neovim"},
    "nvim": {"brew": "neovim", "apt": "neovim", "dnf": "neovim", "pacman": "neovim"},
}

# Editors whose CLI accepts --install-extension, name -> executable
EXTENSION_EDITORS: dict[str, str] = {
    "vscode": "code",
    "code": "code",
    "cursor": "cursor",
}

# Desktop apps, name -> {manager: package id}
APP_PACKAGES: dict[str, dict[str, str]] = {
    "brave": {"brew": "brave-browser", "winget": "Brave.Brave", "choco": "brave"},
    "discord": {"brew": "discord", "winget": "Discord.Discord", "choco": "discord"},
    "spotify": {"brew": "spotify", "winget": "Spotify.Spotify", "choco": "spotify"},
    "steam": {"brew": "steam", "winget": "Valve.Steam", "choco": "steam"},
    "cursor": {"brew": "cursor", "winget": "Anysphere.Cursor", "choco": "cursor"},
    "vscode": {
        "brew": "visual-studio-code",
        "winget": "Microsoft.VisualStudioCode",
        "choco": "vscode",
    },
    "slack": {"brew": "slack", "winget": "SlackTechnologies.Slack", "choco": "slack"},
    "notion": {"brew": "notion", "winget": "Notion.Notion", "choco": "notion"},
    "figma": {"brew": "figma", "winget": "Figma.Figma", "choco": "figma"},
    "docker": {"brew": "docker", "winget": "Docker.DockerDesktop", "choco": "docker-desktop"},
}  # fmt: skip

# API key environment variables, variable -> provider
LLM_PROVIDER_ENV: tuple[tuple[str, str], ...] = (
    ("ANTHROPIC_API_KEY", "claude"),
    ("OPENAI_API_KEY", "openai"),
    ("GEMINI_API_KEY", "gemini"),
    ("GOOGLE_API_KEY", "gemini"),
    ("GROQ_API_KEY", "groq"),
    ("REPLICATE_API_KEY", "replicate"),
    ("XAI_API_KEY", "grok"),
)

LLM_RUNTIMES: tuple[str, ...] = ("ollama",)

CODING_AGENTS: tuple[str, ...] = ("claude", "opencode", "aider", "cursor")

# Secret names always checked, regardless of patterns
COMMON_SECRETS: tuple[str, ...] = (
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "GROQ_API_KEY",
    "XAI_API_KEY",
    "REPLICATE_API_TOKEN",
    "HUGGING_FACE_TOKEN",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
)

SECRET_PATTERNS: tuple[str, ...] = (
    r"_API_KEY$",
    r"_SECRET_KEY$",
    r"_ACCESS_KEY$",
    r"_TOKEN$",
    r"^ANTHROPIC_",
    r"^OPENAI_",
    r"^GEMINI_",
    r"^GROQ_",
    r"^REPLICATE_",
    r"^XAI_",
    r"^HUGGING_FACE_",
    r"^HF_",
)

# Tokens belonging to git hosting tooling, never imported as secrets
SECRET_SKIP: frozenset[str] = frozenset({"GITHUB_TOKEN", "GH_TOKEN"})


def tool_commands(tool: str) -> tuple[str, ...]:
    """Return the executables that indicate ``tool`` is installed."""
    return TOOL_COMMANDS.get(tool, (tool,))
