"""Apply engine and its per-module steps."""

from pactctl.apply.context import ApplyContext
from pactctl.apply.engine import ApplyEngine

__all__ = ["ApplyContext", "ApplyEngine"]
