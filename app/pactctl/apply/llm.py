"""Local LLM runtime installation.

Model pulls are long-running, so they are only reported with the
command to run, never performed during apply.
"""

from pactctl.apply.context import ApplyContext, install_tool
from pactctl.models.result import Result, ResultCategory, failed, skipped
from pactctl.scanners.llm import list_ollama_models, strip_model_tag
from pactctl.scanners.tools import tool_installed

_CONFIGURE = ResultCategory.CONFIGURE


def check_model(runtime: str, model: str, module: str = "llm") -> Result:
    """Report whether a model still needs pulling."""
    if runtime != "ollama":
        return skipped(_CONFIGURE, module, model, "only ollama supported for model pulling")
    if not tool_installed("ollama"):
        return failed(_CONFIGURE, module, model, "ollama not installed")
    pulled = list_ollama_models()
    if model in pulled or model in {strip_model_tag(name) for name in pulled}:
        return skipped(_CONFIGURE, module, model, "already pulled")
    return skipped(_CONFIGURE, module, model, f"run 'ollama pull {model}' to download")


def apply_llm(ctx: ApplyContext, module: str = "llm") -> list[Result]:
    """Install ``llm.local.runtime`` and report ``llm.local.models``."""
    runtime = ctx.manifest.get_string(f"{module}.local.runtime")
    if not runtime:
        return []

    results = [install_tool(ctx, runtime, module)]
    for model in ctx.manifest.get_string_list(f"{module}.local.models"):
        results.append(check_model(runtime, model, module))
    return results
