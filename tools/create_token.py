"""Create token tool — mint a new fungible token.

A mutation tool: it builds a token create transaction from the validated
parameters and hands it to ``handle_transaction`` for submission. In
scheduled mode the transaction is wrapped in a schedule instead of being
executed straight away.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, create_model

from core.client import LedgerClient
from core.context import AgentMode, Context
from core.transactions import (
    RawTransactionResponse,
    ScheduleCreateTransaction,
    Status,
    TokenCreateTransaction,
    TokenSupplyType,
    TokenType,
    Transaction,
    handle_transaction,
)
from tools.base import OutputParser, Tool, ToolResult, tool_error_result


CREATE_TOKEN_TOOL = "create_token_tool"


def create_token_prompt(context: Context | None = None) -> str:
    """Describe the tool and its parameters to the agent."""
    context = context or Context()

    context_snippet = ""
    if context.operator_account_id:
        context_snippet = f"Current operator account: {context.operator_account_id}\n\n"

    scheduled_params = ""
    if context.mode is AgentMode.SCHEDULED:
        scheduled_params = (
            "\n- schedule_memo (str, optional): Memo for the scheduled transaction"
            "\n- schedule_payer_account_id (str, optional): Account to pay for scheduled execution"
        )

    return (
        f"{context_snippet}This tool creates a fungible token on Hedera.\n"
        "Parameters:\n"
        "- token_name (str, required): The name of the token\n"
        '- token_symbol (str, required): The symbol of the token (e.g., "USDC")\n'
        "- initial_supply (int, optional): Initial supply of tokens, defaults to 0\n"
        "- decimals (int, optional): Decimal places (0-18), defaults to 0\n"
        '- supply_type (str, optional): "finite" or "infinite", defaults to "infinite"\n'
        '- max_supply (int, optional): Maximum supply (required if supply_type is "finite")\n'
        f"- treasury_account_id (str, optional): Treasury account, defaults to operator{scheduled_params}\n"
        "\n"
        "Note: Token IDs are returned in format X.X.X (e.g., 0.0.12345)"
    )


class CreateTokenParameters(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    token_name: str = Field(description="The name of the token")
    token_symbol: str = Field(description="The symbol of the token")
    initial_supply: int | None = Field(
        default=None, ge=0, description="Initial supply of tokens, defaults to 0"
    )
    decimals: int | None = Field(
        default=None, ge=0, le=18, description="Decimal places (0-18), defaults to 0"
    )
    supply_type: Literal["finite", "infinite"] | None = Field(
        default=None, description='Supply type: "finite" or "infinite"'
    )
    max_supply: int | None = Field(
        default=None, gt=0, description="Maximum supply (required for finite supply type)"
    )
    treasury_account_id: str | None = Field(
        default=None, description="Treasury account ID, defaults to operator"
    )


class SchedulingParameters(BaseModel):
    """Extra fields accepted when the agent runs in scheduled mode."""

    model_config = ConfigDict(extra="forbid", strict=True)

    schedule_memo: str | None = Field(default=None, description="Memo for scheduled transaction")
    schedule_payer_account_id: str | None = Field(
        default=None, description="Payer for scheduled transaction"
    )


def compose_parameters(name: str, *models: type[BaseModel]) -> type[BaseModel]:
    """Build a flat model holding the fields of each given model."""
    fields = {}
    for model in models:
        fields.update({key: (info.annotation, info) for key, info in model.model_fields.items()})
    return create_model(name, __config__=ConfigDict(extra="forbid", strict=True), **fields)


ScheduledCreateTokenParameters = compose_parameters(
    "ScheduledCreateTokenParameters", CreateTokenParameters, SchedulingParameters
)

CREATE_TOKEN_PARAMETERS: dict[AgentMode, type[BaseModel]] = {
    AgentMode.IMMEDIATE: CreateTokenParameters,
    AgentMode.SCHEDULED: ScheduledCreateTokenParameters,
}


def create_token_parameters(context: Context | None = None) -> type[BaseModel]:
    context = context or Context()
    return CREATE_TOKEN_PARAMETERS[context.mode]


def post_process(response: RawTransactionResponse) -> str:
    """Describe the outcome of a direct or scheduled token creation."""
    if response.schedule_id:
        return (
            "Scheduled token creation transaction created.\n"
            f"Transaction ID: {response.transaction_id}\n"
            f"Schedule ID: {response.schedule_id}\n"
            "\n"
            "The token will be created when the scheduled transaction is executed."
        )

    token_id = response.token_id or "unknown"
    return (
        "Token created successfully!\n"
        f"Transaction ID: {response.transaction_id}\n"
        f"Token ID: {token_id}\n"
        "\n"
        "You can now use this token ID for transfers, minting, and other operations."
    )


def build_create_token_transaction(
    params: BaseModel, treasury_account_id: str | None
) -> TokenCreateTransaction:
    """Map validated parameters onto a token create transaction."""
    tx = TokenCreateTransaction(
        token_name=params.token_name,
        token_symbol=params.token_symbol,
        treasury_account_id=params.treasury_account_id or treasury_account_id,
        token_type=TokenType.FUNGIBLE_COMMON,
        decimals=params.decimals if params.decimals is not None else 0,
        initial_supply=params.initial_supply if params.initial_supply is not None else 0,
    )

    if params.supply_type == "finite":
        tx.supply_type = TokenSupplyType.FINITE
        if params.max_supply:
            tx.max_supply = params.max_supply
    else:
        tx.supply_type = TokenSupplyType.INFINITE

    return tx


class CreateTokenTool(Tool):
    """Create a fungible token, treasury defaulting to the operator."""

    method = CREATE_TOKEN_TOOL
    name = "Create Fungible Token"
    output_parser = OutputParser.TRANSACTION

    def __init__(self, context: Context | None = None) -> None:
        super().__init__(context)
        self.description = create_token_prompt(self.context)
        self.parameters = create_token_parameters(self.context)

    async def execute(
        self, client: LedgerClient, context: Context | None, params: BaseModel
    ) -> ToolResult:
        context = self.execution_context(context)
        try:
            operator_id = client.operator_account_id
            if not operator_id and not params.treasury_account_id:
                return ToolResult(
                    raw={"error": "No operator account configured"},
                    human_message="Error: No operator account configured on the client",
                )

            tx: Transaction = build_create_token_transaction(params, operator_id)

            if context.mode is AgentMode.SCHEDULED:
                tx = ScheduleCreateTransaction(
                    scheduled_transaction=tx,
                    schedule_memo=getattr(params, "schedule_memo", None),
                    payer_account_id=getattr(params, "schedule_payer_account_id", None)
                    or operator_id,
                )

            return await handle_transaction(tx, client, context, post_process)
        except Exception as e:
            return tool_error_result(
                "Failed to create token",
                e,
                self.method,
                status=Status.INVALID_TRANSACTION.value,
            )
