"""Plugin — a named, versioned bundle of tool factories."""

import logging
from dataclasses import dataclass
from typing import Callable

from core.context import Context, resolve_context
from tools.base import Tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plugin:
    """Groups related tools under one identity.

    ``tools`` is a factory rather than a list so the context can shape
    which tools, descriptions and schemas are produced.
    """

    name: str
    version: str
    description: str
    tools: Callable[[Context], list[Tool]]

    def materialize(self, context: Context | None = None) -> list[Tool]:
        """Build this plugin's tools for a context, rejecting duplicate methods."""
        tools = self.tools(resolve_context(context))
        seen: set[str] = set()
        for tool in tools:
            if tool.method in seen:
                raise ValueError(
                    f"Plugin {self.name} defines tool method '{tool.method}' more than once"
                )
            seen.add(tool.method)
        logger.debug("Plugin %s produced tools: %s", self.name, sorted(seen))
        return tools
