"""Simple plugin — a single greeting tool showing the minimal plugin layout.

To create a plugin:
1. Create a .py file in this directory
2. Write one or more Tool subclasses (see tools/base.py), each with:
   - method: unique tool identifier
   - name: display name
   - description and parameters built from the context
   - execute(client, context, params) -> ToolResult
3. Define a module-level Plugin whose ``tools`` factory builds them

The plugin loader will automatically discover and register your tools.
"""

from tools.greeting import GREETING_TOOL, GreetingTool
from tools.plugin import Plugin

simple_plugin = Plugin(
    name="simple-hedera-plugin",
    version="1.0.0",
    description="A simple example plugin demonstrating basic structure",
    tools=lambda context: [
        GreetingTool(context),
    ],
)

simple_plugin_tool_names = {
    "GREETING_TOOL": GREETING_TOOL,
}

__all__ = ["simple_plugin", "simple_plugin_tool_names"]
