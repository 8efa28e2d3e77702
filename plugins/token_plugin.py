"""Token plugin — token service tools.

Provides a mutation tool for creating fungible tokens and a query tool
for reading token information from the mirror node.
"""

from tools.create_token import CREATE_TOKEN_TOOL, CreateTokenTool
from tools.get_token_info import GET_TOKEN_INFO_TOOL, GetTokenInfoTool
from tools.plugin import Plugin

token_plugin = Plugin(
    name="example-token-plugin",
    version="1.0.0",
    description="Example plugin for Hedera Token Service operations",
    tools=lambda context: [
        CreateTokenTool(context),
        GetTokenInfoTool(context),
    ],
)

# Lets hosts reference tools without string literals:
#   token_plugin_tool_names["CREATE_TOKEN_TOOL"] == "create_token_tool"
token_plugin_tool_names = {
    "CREATE_TOKEN_TOOL": CREATE_TOKEN_TOOL,
    "GET_TOKEN_INFO_TOOL": GET_TOKEN_INFO_TOOL,
}

__all__ = ["token_plugin", "token_plugin_tool_names"]
