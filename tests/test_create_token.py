"""Tests for tools.create_token."""

import pytest

from core.client import LedgerClient
from core.context import AgentMode, Context
from core.transactions import (
    RawTransactionResponse,
    ScheduleCreateTransaction,
    TokenCreateTransaction,
    TokenSupplyType,
)
from tools.base import OutputParser, ParameterValidationError
from tools.create_token import (
    CREATE_TOKEN_TOOL,
    CreateTokenParameters,
    CreateTokenTool,
    ScheduledCreateTokenParameters,
    SchedulingParameters,
    create_token_parameters,
    create_token_prompt,
    post_process,
)


class MockExecutor:
    """Records submitted transactions and returns a canned receipt."""

    def __init__(self, response: RawTransactionResponse | None = None, error: Exception | None = None):
        self.response = response or RawTransactionResponse(
            transaction_id="0.0.2@1700000000.000000001", token_id="0.0.5005"
        )
        self.error = error
        self.transactions = []

    async def __call__(self, transaction):
        self.transactions.append(transaction)
        if self.error:
            raise self.error
        return self.response


def test_prompt_mentions_operator_and_schedule_params():
    """Prompt sections depend on the context."""
    plain = create_token_prompt(Context())
    assert plain.startswith("This tool creates a fungible token")
    assert "schedule_memo" not in plain

    scheduled = create_token_prompt(
        Context(operator_account_id="0.0.2", mode=AgentMode.SCHEDULED)
    )
    assert scheduled.startswith("Current operator account: 0.0.2\n\n")
    assert "- schedule_memo (str, optional)" in scheduled
    assert "- schedule_payer_account_id (str, optional)" in scheduled


def test_prompt_is_deterministic():
    ctx = Context(operator_account_id="0.0.2")
    assert create_token_prompt(ctx) == create_token_prompt(ctx)


def test_schema_shape_follows_mode():
    """Scheduled mode extends the base schema with scheduling fields."""
    assert create_token_parameters(Context()) is CreateTokenParameters
    assert create_token_parameters(None) is CreateTokenParameters
    scheduled = create_token_parameters(Context(mode=AgentMode.SCHEDULED))
    assert scheduled is ScheduledCreateTokenParameters
    assert set(scheduled.model_fields) - set(CreateTokenParameters.model_fields) == {
        "schedule_memo",
        "schedule_payer_account_id",
    }


def test_factory_is_deterministic():
    """Equal contexts give tools with the same method, name and schema."""
    a = CreateTokenTool(Context(operator_account_id="0.0.2"))
    b = CreateTokenTool(Context(operator_account_id="0.0.2"))
    assert a.method == b.method == CREATE_TOKEN_TOOL
    assert a.name == b.name
    assert a.description == b.description
    assert a.to_function_schema() == b.to_function_schema()
    assert a.output_parser is OutputParser.TRANSACTION


def test_factory_tolerates_missing_context():
    tool = CreateTokenTool(None)
    assert tool.parameters is CreateTokenParameters
    assert tool.context == Context()


@pytest.mark.parametrize(
    "arguments",
    [
        {"token_symbol": "TT"},
        {"token_name": "T", "token_symbol": "TT", "decimals": 19},
        {"token_name": "T", "token_symbol": "TT", "decimals": -1},
        {"token_name": "T", "token_symbol": "TT", "initial_supply": -5},
        {"token_name": "T", "token_symbol": "TT", "supply_type": "capped"},
        {"token_name": "T", "token_symbol": "TT", "max_supply": 0},
        {"token_name": "T", "token_symbol": "TT", "schedule_memo": "not in immediate mode"},
        {"token_name": "T", "token_symbol": "TT", "decimals": "2"},
        {"token_name": "T", "token_symbol": "TT", "initial_supply": True},
        {"token_name": 7, "token_symbol": "TT"},
    ],
)
def test_invalid_parameters_rejected(arguments):
    with pytest.raises(ParameterValidationError):
        CreateTokenTool(Context()).parse_params(arguments)


def test_post_process_immediate():
    message = post_process(
        RawTransactionResponse(transaction_id="0.0.2@1.1", token_id="0.0.777")
    )
    assert message.startswith("Token created successfully!")
    assert "Token ID: 0.0.777" in message
    assert "Scheduled" not in message


def test_post_process_unknown_token_id():
    message = post_process(RawTransactionResponse(transaction_id="0.0.2@1.1"))
    assert "Token ID: unknown" in message


def test_post_process_scheduled():
    message = post_process(
        RawTransactionResponse(transaction_id="0.0.2@1.1", schedule_id="0.0.900")
    )
    assert message.startswith("Scheduled token creation transaction created.")
    assert "Schedule ID: 0.0.900" in message
    assert "Token created successfully" not in message


@pytest.mark.asyncio
async def test_execute_without_operator_returns_precondition_error():
    """No operator and no treasury override: nothing is submitted."""
    executor = MockExecutor()
    client = LedgerClient(operator_account_id=None, executor=executor)
    tool = CreateTokenTool(Context())

    result = await tool.execute(
        client, tool.context, tool.parse_params({"token_name": "T", "token_symbol": "TT"})
    )

    assert result.raw == {"error": "No operator account configured"}
    assert result.human_message == "Error: No operator account configured on the client"
    assert executor.transactions == []


@pytest.mark.asyncio
async def test_execute_applies_defaults():
    """Absent optional fields map to documented defaults."""
    executor = MockExecutor()
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)
    tool = CreateTokenTool(Context(operator_account_id="0.0.2"))

    result = await tool.execute(
        client, tool.context, tool.parse_params({"token_name": "Test", "token_symbol": "TT"})
    )

    tx = executor.transactions[0]
    assert isinstance(tx, TokenCreateTransaction)
    assert tx.treasury_account_id == "0.0.2"
    assert tx.decimals == 0
    assert tx.initial_supply == 0
    assert tx.supply_type is TokenSupplyType.INFINITE
    assert tx.max_supply is None
    assert result.raw["token_id"] == "0.0.5005"
    assert result.raw["status"] == "SUCCESS"
    assert "Token ID: 0.0.5005" in result.human_message


@pytest.mark.asyncio
async def test_execute_finite_supply_and_treasury_override():
    executor = MockExecutor()
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)
    tool = CreateTokenTool(Context())

    await tool.execute(
        client,
        tool.context,
        tool.parse_params(
            {
                "token_name": "Capped",
                "token_symbol": "CAP",
                "decimals": 2,
                "initial_supply": 100,
                "supply_type": "finite",
                "max_supply": 1000,
                "treasury_account_id": "0.0.3",
            }
        ),
    )

    tx = executor.transactions[0]
    assert tx.supply_type is TokenSupplyType.FINITE
    assert tx.max_supply == 1000
    assert tx.treasury_account_id == "0.0.3"
    assert tx.decimals == 2
    assert tx.initial_supply == 100


@pytest.mark.asyncio
async def test_execute_treasury_override_without_operator():
    """An explicit treasury lets the tool proceed without an operator."""
    executor = MockExecutor()
    client = LedgerClient(operator_account_id=None, executor=executor)
    tool = CreateTokenTool(Context())

    result = await tool.execute(
        client,
        tool.context,
        tool.parse_params({"token_name": "T", "token_symbol": "TT", "treasury_account_id": "0.0.9"}),
    )

    assert executor.transactions[0].treasury_account_id == "0.0.9"
    assert not result.is_error


@pytest.mark.asyncio
async def test_execute_scheduled_mode_wraps_transaction():
    executor = MockExecutor(
        RawTransactionResponse(transaction_id="0.0.2@1.1", schedule_id="0.0.901")
    )
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)
    context = Context(operator_account_id="0.0.2", mode=AgentMode.SCHEDULED)
    tool = CreateTokenTool(context)

    result = await tool.execute(
        client,
        context,
        tool.parse_params({"token_name": "T", "token_symbol": "TT", "schedule_memo": "later"}),
    )

    tx = executor.transactions[0]
    assert isinstance(tx, ScheduleCreateTransaction)
    assert tx.schedule_memo == "later"
    assert tx.payer_account_id == "0.0.2"
    assert isinstance(tx.scheduled_transaction, TokenCreateTransaction)
    assert result.raw["schedule_id"] == "0.0.901"
    assert "will be created when the scheduled transaction is executed" in result.human_message


@pytest.mark.asyncio
async def test_execute_submission_failure_becomes_result():
    """Executor faults are turned into an error result, not raised."""
    executor = MockExecutor(error=ConnectionError("node unreachable"))
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)
    tool = CreateTokenTool(Context())

    result = await tool.execute(
        client, tool.context, tool.parse_params({"token_name": "T", "token_symbol": "TT"})
    )

    assert result.raw["status"] == "INVALID_TRANSACTION"
    assert "node unreachable" in result.raw["error"]
    assert result.human_message == result.raw["error"]


@pytest.mark.asyncio
async def test_execute_unexpected_fault_is_caught():
    """Anything raised while building the transaction is reported."""

    class BrokenClient:
        @property
        def operator_account_id(self):
            raise RuntimeError("keystore locked")

    tool = CreateTokenTool(Context())
    result = await tool.execute(
        BrokenClient(), tool.context, tool.parse_params({"token_name": "T", "token_symbol": "TT"})
    )

    assert result.raw == {
        "status": "INVALID_TRANSACTION",
        "error": "Failed to create token: keystore locked",
    }
    assert result.human_message == "Failed to create token: keystore locked"


def test_scheduled_schema_is_composed_not_subclassed():
    """The scheduled model is a flat composition of both field sets."""
    assert not issubclass(ScheduledCreateTokenParameters, CreateTokenParameters)
    assert not issubclass(ScheduledCreateTokenParameters, SchedulingParameters)
    assert set(ScheduledCreateTokenParameters.model_fields) == set(
        CreateTokenParameters.model_fields
    ) | set(SchedulingParameters.model_fields)
    with pytest.raises(ParameterValidationError):
        CreateTokenTool(Context(mode=AgentMode.SCHEDULED)).parse_params(
            {"token_name": "T", "token_symbol": "TT", "decimals": "2"}
        )


@pytest.mark.asyncio
async def test_execute_wraps_on_mode_not_params_shape():
    """Scheduling follows the context mode even for base-shaped params."""
    executor = MockExecutor()
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)
    params = CreateTokenTool(Context()).parse_params({"token_name": "T", "token_symbol": "TT"})

    await CreateTokenTool(Context()).execute(client, Context(mode=AgentMode.SCHEDULED), params)

    tx = executor.transactions[0]
    assert isinstance(tx, ScheduleCreateTransaction)
    assert tx.schedule_memo is None
    assert tx.payer_account_id == "0.0.2"


@pytest.mark.asyncio
async def test_execute_without_context_uses_tool_context():
    """A missing context falls back to the one the tool was built with."""
    executor = MockExecutor()
    client = LedgerClient(operator_account_id="0.0.2", executor=executor)

    immediate = CreateTokenTool()
    result = await immediate.execute(
        client, None, immediate.parse_params({"token_name": "T", "token_symbol": "TT"})
    )
    assert not result.is_error
    assert isinstance(executor.transactions[0], TokenCreateTransaction)

    scheduled = CreateTokenTool(Context(mode=AgentMode.SCHEDULED))
    result = await scheduled.execute(
        client,
        None,
        scheduled.parse_params({"token_name": "T", "token_symbol": "TT", "schedule_memo": "m"}),
    )
    assert not result.is_error
    assert isinstance(executor.transactions[1], ScheduleCreateTransaction)
    assert executor.transactions[1].schedule_memo == "m"
