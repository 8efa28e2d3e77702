"""Get token info tool — read a token record from the mirror node."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from core.client import LedgerClient, is_valid_entity_id
from core.context import Context
from core.mirrornode import EntityNotFoundError, TokenInfo, get_mirrornode_service
from tools.base import OutputParser, Tool, ToolResult, tool_error_result
from tools.formatting import (
    format_freeze_default,
    format_supply,
    format_supply_type,
    format_timestamp,
)

logger = logging.getLogger(__name__)

GET_TOKEN_INFO_TOOL = "get_token_info_tool"


def get_token_info_prompt(context: Context | None = None) -> str:
    return (
        "This tool retrieves information about a Hedera token.\n"
        "Parameters:\n"
        "- token_id (str, required): The token ID to query (e.g., 0.0.12345)\n"
        "\n"
        "Returns token details including name, symbol, supply, decimals, and treasury account."
    )


class GetTokenInfoParameters(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    token_id: str = Field(description="The token ID to query (e.g., 0.0.12345)")


def get_token_info_parameters(context: Context | None = None) -> type[GetTokenInfoParameters]:
    return GetTokenInfoParameters


def post_process(token_info: TokenInfo) -> str:
    """Format a mirror node token record as markdown."""
    decimals = token_info.get("decimals", "0")
    return (
        f"**Token {token_info.get('token_id', 'unknown')}** Information:\n"
        "\n"
        "**Basic Info:**\n"
        f"- **Name**: {token_info.get('name', 'unknown')}\n"
        f"- **Symbol**: {token_info.get('symbol', 'unknown')}\n"
        f"- **Decimals**: {decimals}\n"
        "\n"
        "**Supply:**\n"
        f"- **Current Supply**: {format_supply(token_info.get('total_supply', 'unknown'), decimals)}\n"
        f"- **Supply Type**: {format_supply_type(token_info.get('supply_type'))}\n"
        "\n"
        "**Accounts:**\n"
        f"- **Treasury**: {token_info.get('treasury_account_id', 'unknown')}\n"
        "\n"
        "**Settings:**\n"
        f"- **Freeze**: {format_freeze_default(token_info.get('freeze_default'))}\n"
        "\n"
        "**Timestamps:**\n"
        f"- **Created**: {format_timestamp(token_info.get('created_timestamp'))}\n"
        f"- **Modified**: {format_timestamp(token_info.get('modified_timestamp'))}"
    )


class GetTokenInfoTool(Tool):
    """Look up a token by id on the client's network."""

    method = GET_TOKEN_INFO_TOOL
    name = "Get Token Info"
    output_parser = OutputParser.UNTYPED_QUERY

    def __init__(self, context: Context | None = None) -> None:
        super().__init__(context)
        self.description = get_token_info_prompt(self.context)
        self.parameters = get_token_info_parameters(self.context)

    async def execute(
        self, client: LedgerClient, context: Context | None, params: GetTokenInfoParameters
    ) -> ToolResult:
        context = self.execution_context(context)
        token_id = params.token_id
        if not is_valid_entity_id(token_id):
            return ToolResult(
                raw={"error": "Invalid token ID format"},
                human_message=(
                    f"Invalid token ID format: {token_id}. "
                    "Expected format: X.X.X (e.g., 0.0.12345)"
                ),
            )

        try:
            owned = context.mirrornode_service is None
            service = get_mirrornode_service(context.mirrornode_service, client.ledger_id)
            try:
                token_info = await service.get_token_info(token_id)
            finally:
                if owned:
                    await service.close()
        except EntityNotFoundError:
            logger.info("[%s] token %s not found", self.method, token_id)
            return ToolResult(
                raw={"error": "Token not found"},
                human_message=f"Token {token_id} was not found on the network",
            )
        except Exception as e:
            return tool_error_result("Failed to get token info", e, self.method)

        try:
            return ToolResult(
                raw={"token_id": token_id, "token_info": dict(token_info)},
                human_message=post_process(token_info),
            )
        except Exception as e:
            return tool_error_result("Failed to get token info", e, self.method)
