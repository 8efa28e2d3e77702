"""Ledger client handle passed to every tool execution.

Signing and broadcasting are delegated to an executor the host plugs in,
so the tools never depend on a particular SDK.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from core.transactions import RawTransactionResponse, Transaction

# shard.realm.num, ASCII digits only, e.g. 0.0.12345
ENTITY_ID_PATTERN = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+")


def is_valid_entity_id(value: str) -> bool:
    """Check that a value looks like an X.X.X entity identifier."""
    return bool(ENTITY_ID_PATTERN.fullmatch(value))


TransactionExecutor = Callable[["Transaction"], Awaitable["RawTransactionResponse"]]


@dataclass
class LedgerClient:
    """Network handle: which ledger, which operator, and how to submit."""

    ledger_id: str = "testnet"
    operator_account_id: str | None = None
    executor: TransactionExecutor | None = None

    async def execute(self, transaction: "Transaction") -> "RawTransactionResponse":
        """Sign, submit and wait for the receipt of a transaction."""
        if self.executor is None:
            raise RuntimeError("No transaction executor configured on the client")
        return await self.executor(transaction)
