"""Transaction descriptions and the standard submission handler.

Tools describe what they want to happen with plain dataclasses; the client's
executor turns them into signed network transactions.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from core.client import LedgerClient
from core.context import Context
from tools.base import ToolResult

logger = logging.getLogger(__name__)


class Status(str, Enum):
    SUCCESS = "SUCCESS"
    INVALID_TRANSACTION = "INVALID_TRANSACTION"


class TokenType(str, Enum):
    FUNGIBLE_COMMON = "FUNGIBLE_COMMON"
    NON_FUNGIBLE_UNIQUE = "NON_FUNGIBLE_UNIQUE"


class TokenSupplyType(str, Enum):
    INFINITE = "INFINITE"
    FINITE = "FINITE"


@dataclass
class TokenCreateTransaction:
    """Create a new token with the given treasury and supply settings."""

    token_name: str
    token_symbol: str
    treasury_account_id: str
    token_type: TokenType = TokenType.FUNGIBLE_COMMON
    decimals: int = 0
    initial_supply: int = 0
    supply_type: TokenSupplyType = TokenSupplyType.INFINITE
    max_supply: int | None = None


@dataclass
class ScheduleCreateTransaction:
    """Wrap an inner transaction so it executes once all signatures are collected."""

    scheduled_transaction: TokenCreateTransaction
    schedule_memo: str | None = None
    payer_account_id: str | None = None


Transaction = Union[TokenCreateTransaction, ScheduleCreateTransaction]


@dataclass
class RawTransactionResponse:
    """Receipt data returned by the executor."""

    status: str = Status.SUCCESS.value
    transaction_id: str | None = None
    token_id: str | None = None
    account_id: str | None = None
    schedule_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra")
        data["status"] = _status_value(self.status)
        return {**extra, **{k: v for k, v in data.items() if v is not None}}


PostProcess = Callable[[RawTransactionResponse], str]


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, Enum) else str(status)


async def handle_transaction(
    transaction: Transaction,
    client: LedgerClient,
    context: Context,
    post_process: PostProcess,
) -> ToolResult:
    """Submit a transaction through the client and format the outcome."""
    logger.info(
        "Submitting %s (mode=%s, ledger=%s)",
        type(transaction).__name__,
        context.mode.value,
        client.ledger_id,
    )
    try:
        response = await client.execute(transaction)
    except Exception as e:
        logger.exception("Transaction submission failed")
        message = f"Failed to execute transaction: {e}"
        return ToolResult(
            raw={"status": Status.INVALID_TRANSACTION.value, "error": message},
            human_message=message,
        )

    status = _status_value(response.status)
    if status != Status.SUCCESS.value:
        message = f"Transaction failed with status {status}"
        logger.warning("%s (transaction_id=%s)", message, response.transaction_id)
        return ToolResult(
            raw={**response.to_dict(), "status": status, "error": message},
            human_message=message,
        )

    return ToolResult(raw=response.to_dict(), human_message=post_process(response))
