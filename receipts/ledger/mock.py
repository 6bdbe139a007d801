"""Mock ledger client for testing and local development."""

import asyncio
import itertools
import re
import time
from typing import Any

from receipts.ledger.base import AccountBalance, LedgerClient, LedgerError, TokenCreation

ACCOUNT_ID_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")

TINYBARS_PER_HBAR = 100_000_000


class MockLedgerClient(LedgerClient):
    """In-process ledger that mimics Hedera's token rules.

    Keeps accounts, tokens, associations and balances in dictionaries and
    enforces the checks the network would: unknown accounts and tokens are
    rejected, transfers need an associated recipient and enough balance.
    No network calls are made.

    Tests can inject failures and per-operation delays and inspect
    ``call_history``.
    """

    def __init__(
        self,
        operator_id: str = "0.0.2",
        operator_hbars: int = 10_000,
        first_entity_num: int = 5000,
    ):
        """Initialize mock ledger.

        Args:
            operator_id: Operator account id, created with operator_hbars
            operator_hbars: Starting hbar balance of the operator
            first_entity_num: Entity number of the first created token
        """
        self._operator_id = operator_id
        self._entity_nums = itertools.count(first_entity_num)
        self._tx_nonce = itertools.count()
        self._accounts: dict[str, int] = {}
        self._tokens: dict[str, dict[str, Any]] = {}
        self._associations: dict[str, set[str]] = {}
        self._balances: dict[tuple[str, str], int] = {}
        self._failures: dict[str, str] = {}
        self._delays: dict[str, float] = {}
        self._call_history: list[dict[str, Any]] = []
        self.closed = False

        self.add_account(operator_id, hbars=operator_hbars)

    @property
    def operator_id(self) -> str:
        """Return the operator account id."""
        return self._operator_id

    @property
    def network(self) -> str:
        """Return the network name."""
        return "mock"

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def clear_history(self) -> None:
        """Clear call history."""
        self._call_history.clear()

    def add_account(self, account_id: str, *, hbars: int = 0) -> None:
        """Create an account with the given hbar balance."""
        self._accounts[account_id] = hbars * TINYBARS_PER_HBAR
        self._associations.setdefault(account_id, set())

    def fail_next(self, operation: str, message: str) -> None:
        """Make the next call of operation raise LedgerError(message)."""
        self._failures[operation] = message

    def set_delay(self, operation: str, seconds: float) -> None:
        """Delay every call of operation by seconds before it resolves."""
        self._delays[operation] = seconds

    def token_info(self, token_id: str) -> dict[str, Any]:
        """Return name, symbol, decimals and treasury of a created token."""
        return dict(self._tokens[token_id])

    def is_associated(self, account_id: str, token_id: str) -> bool:
        """Return whether account_id is associated with token_id."""
        return token_id in self._associations.get(account_id, set())

    async def _enter(self, operation: str, **kwargs: Any) -> None:
        self._call_history.append({"operation": operation, **kwargs})
        delay = self._delays.get(operation)
        if delay:
            await asyncio.sleep(delay)
        message = self._failures.pop(operation, None)
        if message is not None:
            raise LedgerError(message)

    def _next_transaction_id(self) -> str:
        nanos = time.time_ns() + next(self._tx_nonce)
        seconds, remainder = divmod(nanos, 1_000_000_000)
        return f"{self._operator_id}@{seconds}.{remainder:09d}"

    def _reject(self, status: str) -> LedgerError:
        return LedgerError(
            f"Transaction failed precheck with status: {status}",
            status=status,
        )

    def _require_account(self, account_id: str) -> None:
        if not ACCOUNT_ID_PATTERN.match(account_id) or account_id not in self._accounts:
            raise self._reject("INVALID_ACCOUNT_ID")

    def _require_token(self, token_id: str) -> None:
        if token_id not in self._tokens:
            raise self._reject("INVALID_TOKEN_ID")

    async def create_token(
        self,
        name: str,
        symbol: str,
        *,
        decimals: int = 0,
        initial_supply: int = 1,
    ) -> TokenCreation:
        """Create a token treasured by the operator."""
        await self._enter(
            "create_token",
            name=name,
            symbol=symbol,
            decimals=decimals,
            initial_supply=initial_supply,
        )
        if not name or len(name.encode()) > 100:
            raise self._reject("INVALID_TOKEN_NAME")
        if not symbol or len(symbol.encode()) > 100:
            raise self._reject("INVALID_TOKEN_SYMBOL")

        token_id = f"0.0.{next(self._entity_nums)}"
        self._tokens[token_id] = {
            "name": name,
            "symbol": symbol,
            "decimals": decimals,
            "treasury": self._operator_id,
        }
        self._associations[self._operator_id].add(token_id)
        self._balances[(self._operator_id, token_id)] = initial_supply
        return TokenCreation(token_id=token_id, transaction_id=self._next_transaction_id())

    async def transfer_token(self, token_id: str, to_account_id: str, amount: int) -> str:
        """Move amount units from the operator to to_account_id."""
        await self._enter(
            "transfer_token",
            token_id=token_id,
            to_account_id=to_account_id,
            amount=amount,
        )
        self._require_token(token_id)
        self._require_account(to_account_id)
        if amount <= 0:
            raise self._reject("INVALID_ACCOUNT_AMOUNTS")
        if not self.is_associated(to_account_id, token_id):
            raise self._reject("TOKEN_NOT_ASSOCIATED_TO_ACCOUNT")

        source = (self._operator_id, token_id)
        if self._balances.get(source, 0) < amount:
            raise self._reject("INSUFFICIENT_TOKEN_BALANCE")

        self._balances[source] -= amount
        target = (to_account_id, token_id)
        self._balances[target] = self._balances.get(target, 0) + amount
        return self._next_transaction_id()

    async def associate_token(self, token_id: str, account_id: str) -> str:
        """Associate account_id with token_id."""
        await self._enter("associate_token", token_id=token_id, account_id=account_id)
        self._require_account(account_id)
        self._require_token(token_id)
        if self.is_associated(account_id, token_id):
            raise self._reject("TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT")

        self._associations[account_id].add(token_id)
        self._balances.setdefault((account_id, token_id), 0)
        return self._next_transaction_id()

    async def get_account_balance(self, account_id: str) -> AccountBalance:
        """Return hbar and token balances of an existing account."""
        await self._enter("get_account_balance", account_id=account_id)
        self._require_account(account_id)

        hbars = self._accounts[account_id] / TINYBARS_PER_HBAR
        return AccountBalance(
            account_id=account_id,
            hbars=f"{hbars:g} ℏ",
            tokens={
                token_id: self._balances.get((account_id, token_id), 0)
                for token_id in sorted(self._associations[account_id])
            },
        )

    async def close(self) -> None:
        """Mark the client closed."""
        self.closed = True
