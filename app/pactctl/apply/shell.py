"""Shell prompt and shell tool configuration.

Init lines are appended to the user's shell resource file under a
``# pact: <tool>`` marker. A tool whose name already appears anywhere in
the file is considered configured.
"""

import logging
from pathlib import Path

from pactctl.apply.context import ApplyContext, install_tool
from pactctl.apply.download import DownloadError, download_file
from pactctl.models.result import Result, ResultCategory, failed, ok, skipped

logger = logging.getLogger(__name__)

_CONFIGURE = ResultCategory.CONFIGURE

# POSIX init snippets per tool; {shell} is the login shell name
_POSIX_TOOL_INIT: dict[str, str] = {
    "zoxide": 'eval "$(zoxide init {shell})"',
    "fzf": "[ -f ~/.fzf.{shell} ] && source ~/.fzf.{shell}",
    "direnv": 'eval "$(direnv hook {shell})"',
}

_FISH_TOOL_INIT: dict[str, str] = {
    "zoxide": "zoxide init fish | source",
    "fzf": "fzf --fish | source",
    "direnv": "direnv hook fish | source",
}

_POWERSHELL_TOOL_INIT: dict[str, str] = {
    "zoxide": "Invoke-Expression (& { (zoxide init powershell | Out-String) })",
}


def theme_path(ctx: ApplyContext, tool: str, theme: str) -> Path:
    """Where a prompt tool's theme file lives."""
    if tool == "starship":
        return ctx.home / ".config" / "starship.toml"
    if ctx.is_windows:
        base = ctx.home / "AppData" / "Local" / "Programs" / "oh-my-posh" / "themes"
    else:
        base = ctx.home / ".config" / "oh-my-posh" / "themes"
    return base / f"{theme}.omp.json"


def prompt_init_line(ctx: ApplyContext, tool: str, theme: str = "") -> str | None:
    """Build the init line for a prompt tool, or None if unsupported."""
    config = f" --config '{theme_path(ctx, tool, theme)}'" if theme else ""

    if ctx.is_windows:
        if tool == "oh-my-posh":
            return f"oh-my-posh init pwsh{config} | Invoke-Expression"
        if tool == "starship":
            return "Invoke-Expression (&starship init powershell)"
        return None

    shell = ctx.shell_name
    if tool == "oh-my-posh":
        if shell == "fish":
            return f"oh-my-posh init fish{config} | source"
        return f'eval "$(oh-my-posh init {shell}{config})"'
    if tool == "starship":
        if shell == "fish":
            return "starship init fish | source"
        return f'eval "$(starship init {shell})"'
    return None


def tool_init_line(ctx: ApplyContext, tool: str) -> str | None:
    """Build the init line for an auxiliary shell tool, or None."""
    if ctx.is_windows:
        return _POWERSHELL_TOOL_INIT.get(tool)
    if ctx.shell_name == "fish":
        return _FISH_TOOL_INIT.get(tool)
    snippet = _POSIX_TOOL_INIT.get(tool)
    return snippet.format(shell=ctx.shell_name) if snippet else None


def append_init_line(
    rc_path: Path,
    tool: str,
    line: str,
    module: str = "shell",
    name: str | None = None,
) -> Result:
    """Append an init line to a shell resource file once.

    Args:
        rc_path: Shell resource file; created if missing.
        tool: Tool name; if it already appears in the file nothing is written.
        line: Init line to append.
        module: Module reported in the Result.
        name: Result name, defaults to ``tool``.

    Returns:
        Skipped Result if already configured, otherwise the write Result.
    """
    result_name = name or tool
    try:
        content = (
            rc_path.read_text(encoding="utf-8", errors="replace") if rc_path.exists() else ""
        )
    except OSError as e:
        return failed(_CONFIGURE, module, result_name, f"cannot read {rc_path}: {e}")

    if tool in content:
        return skipped(_CONFIGURE, module, result_name, "already configured")

    try:
        rc_path.parent.mkdir(parents=True, exist_ok=True)
        with open(rc_path, "a", encoding="utf-8") as f:
            f.write(f"\n# pact: {tool}\n{line}\n")
    except OSError as e:
        return failed(_CONFIGURE, module, result_name, f"cannot write {rc_path}: {e}")

    return ok(_CONFIGURE, module, result_name, f"added to {rc_path.name}")


def download_theme(
    ctx: ApplyContext,
    tool: str,
    theme: str,
    source: str,
    module: str = "shell",
) -> Result:
    """Download a prompt theme unless it is already present."""
    name = f"{tool}-theme"
    path = theme_path(ctx, tool, theme)
    if path.exists():
        return skipped(_CONFIGURE, module, name, "theme already exists")

    try:
        download_file(source, path, timeout=ctx.settings.http_timeout)
    except DownloadError as e:
        return failed(_CONFIGURE, module, name, str(e))
    return ok(_CONFIGURE, module, name, f"downloaded {theme} to {path.parent}")


def apply_shell(ctx: ApplyContext, module: str = "shell") -> list[Result]:
    """Configure the prompt tool and auxiliary shell tools.

    For ``shell.prompt`` the tool is installed, its theme downloaded when
    ``source`` is given, and its init line appended. Each of
    ``shell.tools`` is installed and, where it needs one, initialized.
    """
    results: list[Result] = []
    rc_path = ctx.shell_rc_path

    prompt = ctx.manifest.get_map(f"{module}.prompt")
    tool = prompt.get("tool")
    if isinstance(tool, str) and tool:
        theme = prompt.get("theme") if isinstance(prompt.get("theme"), str) else ""
        source = prompt.get("source") if isinstance(prompt.get("source"), str) else ""

        results.append(install_tool(ctx, tool, module))
        if theme and source:
            results.append(download_theme(ctx, tool, theme, source, module))

        line = prompt_init_line(ctx, tool, theme)
        if line is None:
            results.append(skipped(_CONFIGURE, module, tool, "no init line for this prompt tool"))
        else:
            results.append(append_init_line(rc_path, tool, line, module))

    for shell_tool in ctx.manifest.get_string_list(f"{module}.tools"):
        results.append(install_tool(ctx, shell_tool, module))
        line = tool_init_line(ctx, shell_tool)
        if line is not None:
            name = f"{shell_tool}-init"
            results.append(append_init_line(rc_path, shell_tool, line, module, name))

    return results
