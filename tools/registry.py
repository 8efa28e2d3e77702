"""Tool registry — the host side of the tool contract.

Looks tools up by method, validates caller arguments before execution and
renders results with each tool's declared output parser.
"""

import logging
from collections.abc import Mapping
from typing import Any

from core.client import LedgerClient
from core.context import Context
from tools.base import ParameterValidationError, Tool, ToolResult
from tools.output_parsers import ParsedOutput, parse_output
from tools.plugin import Plugin

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of all tools the host exposes to the agent."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._disabled: set[str] = set()

    def register(self, tool: Tool) -> None:
        """Register a tool instance."""
        if not tool.method:
            raise ValueError(f"Tool {tool.__class__.__name__} has no method")
        if tool.method in self._tools:
            logger.warning("Replacing already registered tool: %s", tool.method)
        self._tools[tool.method] = tool
        logger.info("Registered tool: %s", tool.method)

    def register_plugin(self, plugin: Plugin, context: Context | None = None) -> int:
        """Register every tool a plugin produces for the context."""
        tools = plugin.materialize(context)
        for tool in tools:
            self.register(tool)
        logger.info("Registered plugin %s %s (%d tools)", plugin.name, plugin.version, len(tools))
        return len(tools)

    def get(self, method: str) -> Tool | None:
        """Get a tool by method."""
        return self._tools.get(method)

    def list_tools(self) -> list[str]:
        """Return methods of all registered tools."""
        return list(self._tools.keys())

    def list_tools_with_status(self) -> list[dict[str, Any]]:
        """Return tool info including enabled/disabled status."""
        return [
            {
                "method": method,
                "name": tool.name,
                "description": tool.description,
                "enabled": method not in self._disabled,
            }
            for method, tool in self._tools.items()
        ]

    def set_tool_enabled(self, method: str, enabled: bool) -> bool:
        """Enable or disable a tool. Returns True if tool exists."""
        if method not in self._tools:
            return False
        if enabled:
            self._disabled.discard(method)
        else:
            self._disabled.add(method)
        logger.info("Tool '%s' %s", method, "enabled" if enabled else "disabled")
        return True

    def get_schemas(self) -> list[dict[str, Any]]:
        """Get function schemas for all enabled tools."""
        return [
            tool.to_function_schema()
            for method, tool in self._tools.items()
            if method not in self._disabled
        ]

    async def execute(
        self,
        method: str,
        client: LedgerClient,
        context: Context | None = None,
        arguments: Mapping[str, Any] | None = None,
    ) -> ToolResult:
        """Validate arguments and execute a tool by method."""
        tool = self._tools.get(method)
        if tool is None:
            message = f"Error: Unknown tool '{method}'"
            return ToolResult(raw={"error": message}, human_message=message)

        if method in self._disabled:
            message = f"Error: Tool '{method}' is currently disabled."
            return ToolResult(raw={"error": message}, human_message=message)

        try:
            params = tool.parse_params(arguments)
        except ParameterValidationError as e:
            logger.info("Rejected arguments for %s: %s", method, e)
            return ToolResult(
                raw={"error": "Invalid parameters", "details": e.errors},
                human_message=str(e),
            )

        if context is None:
            context = tool.context

        try:
            return await tool.execute(client, context, params)
        except Exception as e:
            logger.exception("Tool '%s' failed", method)
            message = f"Error executing {method}: {e}"
            return ToolResult(raw={"error": message}, human_message=message)

    def render(self, method: str, result: ToolResult) -> ParsedOutput:
        """Render a result with the output parser its tool declares."""
        tool = self._tools.get(method)
        if tool is None:
            return result.to_dict()
        return parse_output(tool.output_parser, result)
