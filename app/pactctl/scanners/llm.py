"""LLM scanner.

Providers are inferred from API key variables, the local runtime and
coding agents from PATH, and models from the runtime's list command.
"""

import os
from collections.abc import Mapping

from pactctl.core.catalog import CODING_AGENTS, LLM_PROVIDER_ENV, LLM_RUNTIMES
from pactctl.models.detected import LLMDetected, LocalLLMDetected
from pactctl.scanners.base import Scanner
from pactctl.scanners.tools import tool_installed
from pactctl.utils.shell import try_run_command


def list_ollama_models() -> list[str]:
    """Pulled model names from ``ollama list``, tags included.

    Returns:
        Model names in listing order, empty if ollama cannot be queried.
    """
    result = try_run_command(["ollama", "list"], timeout=30.0)
    if result is None or not result.success:
        return []
    models: list[str] = []
    # First line is the column header
    for line in result.stdout.splitlines()[1:]:
        fields = line.split()
        if fields:
            models.append(fields[0])
    return models


def strip_model_tag(model: str) -> str:
    """Drop the ``:tag`` suffix of a model name."""
    return model.split(":", 1)[0]


class LLMScanner(Scanner[LLMDetected]):
    """Scanner for LLM providers, local runtime and coding agents.

    Args:
        environ: Environment to inspect. Defaults to ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    @property
    def module(self) -> str:
        return "llm"

    def providers(self) -> list[str]:
        """Providers whose API key variable is set, without duplicates."""
        found: list[str] = []
        for variable, provider in LLM_PROVIDER_ENV:
            if self._environ.get(variable) and provider not in found:
                found.append(provider)
        return found

    def local(self) -> LocalLLMDetected:
        for runtime in LLM_RUNTIMES:
            if not tool_installed(runtime):
                continue
            models: list[str] = []
            if runtime == "ollama":
                for model in list_ollama_models():
                    name = strip_model_tag(model)
                    if name not in models:
                        models.append(name)
            return LocalLLMDetected(runtime=runtime, models=models)
        return LocalLLMDetected()

    def scan(self) -> LLMDetected:
        return LLMDetected(
            providers=self.providers(),
            local=self.local(),
            agents=[agent for agent in CODING_AGENTS if tool_installed(agent)],
        )
