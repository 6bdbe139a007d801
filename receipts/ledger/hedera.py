"""Hedera ledger client built on hiero-sdk-python."""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from hiero_sdk_python import (
    AccountId,
    Client,
    CryptoGetAccountBalanceQuery,
    Network,
    PrivateKey,
    TokenAssociateTransaction,
    TokenCreateTransaction,
    TokenId,
    TransferTransaction,
)
from hiero_sdk_python.response_code import ResponseCode
from hiero_sdk_python.tokens.supply_type import SupplyType
from hiero_sdk_python.tokens.token_type import TokenType

from receipts.ledger.base import (
    AccountBalance,
    ConfigurationError,
    LedgerClient,
    LedgerError,
    TokenCreation,
)
from receipts.observability.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class HederaLedgerClient(LedgerClient):
    """Ledger client that signs with the operator key and submits to Hedera.

    The SDK is synchronous (gRPC), so every call runs in a worker thread to
    keep the event loop free. Transactions are frozen, signed with the
    operator key, executed, and their receipt status checked before the
    result is returned.
    """

    def __init__(
        self,
        operator_id: str | None,
        operator_key: str | None,
        network: str = "testnet",
    ):
        """Initialize the Hedera client.

        Args:
            operator_id: Operator account id (shard.realm.num)
            operator_key: Operator private key, hex raw or DER
            network: Hedera network name

        Raises:
            ConfigurationError: If credentials are missing or cannot be parsed
        """
        if not operator_id:
            raise ConfigurationError("Operator account not set (HEDERA_ACCOUNT_ID)")
        if not operator_key:
            raise ConfigurationError("Operator key not set (HEDERA_PRIVATE_KEY)")

        try:
            self._operator_account = AccountId.from_string(operator_id)
        except ValueError as e:
            raise ConfigurationError(f"Invalid operator credentials: {e}") from e
        try:
            self._operator_key = PrivateKey.from_string(operator_key)
        except ValueError as e:
            # The SDK message echoes the key text
            raise ConfigurationError("Invalid operator credentials: unreadable private key") from e

        self._operator_id = str(self._operator_account)
        self._network = network
        self._client = Client(Network(network))
        self._client.set_operator(self._operator_account, self._operator_key)

        logger.info("hedera_client_initialized", network=network, operator_id=self._operator_id)

    @property
    def operator_id(self) -> str:
        """Return the operator account id."""
        return self._operator_id

    @property
    def network(self) -> str:
        """Return the network name."""
        return self._network

    async def _run(self, operation: str, call: Callable[[], T]) -> T:
        """Run a blocking SDK call in a thread, wrapping failures as LedgerError."""
        try:
            return await asyncio.to_thread(call)
        except LedgerError:
            raise
        except Exception as e:
            logger.debug("hedera_call_failed", operation=operation, error=str(e))
            raise LedgerError(str(e) or type(e).__name__) from e

    def _execute(self, transaction: Any) -> tuple[Any, str]:
        """Freeze, sign and execute a transaction; return receipt and tx id."""
        transaction.freeze_with(self._client)
        transaction.sign(self._operator_key)
        transaction_id = str(transaction.transaction_id)
        receipt = transaction.execute(self._client)
        if receipt.status != ResponseCode.SUCCESS:
            status = ResponseCode(receipt.status).name
            raise LedgerError(
                f"Transaction {transaction_id} failed with status {status}",
                status=status,
            )
        return receipt, transaction_id

    async def create_token(
        self,
        name: str,
        symbol: str,
        *,
        decimals: int = 0,
        initial_supply: int = 1,
    ) -> TokenCreation:
        """Create a fungible, infinite-supply token treasured by the operator."""

        def _create() -> TokenCreation:
            transaction = (
                TokenCreateTransaction()
                .set_token_name(name)
                .set_token_symbol(symbol)
                .set_decimals(decimals)
                .set_initial_supply(initial_supply)
                .set_treasury_account_id(self._operator_account)
                .set_token_type(TokenType.FUNGIBLE_COMMON)
                .set_supply_type(SupplyType.INFINITE)
            )
            receipt, transaction_id = self._execute(transaction)
            return TokenCreation(token_id=str(receipt.token_id), transaction_id=transaction_id)

        return await self._run("create_token", _create)

    async def transfer_token(self, token_id: str, to_account_id: str, amount: int) -> str:
        """Debit the operator and credit to_account_id by amount."""

        def _transfer() -> str:
            token = TokenId.from_string(token_id)
            transaction = (
                TransferTransaction()
                .add_token_transfer(token, self._operator_account, -amount)
                .add_token_transfer(token, AccountId.from_string(to_account_id), amount)
            )
            _, transaction_id = self._execute(transaction)
            return transaction_id

        return await self._run("transfer_token", _transfer)

    async def associate_token(self, token_id: str, account_id: str) -> str:
        """Associate account_id with token_id, signed by the operator key.

        On a live network the association must also be signed by the
        account's own key; operator-only signing works for accounts the
        operator controls.
        """

        def _associate() -> str:
            transaction = (
                TokenAssociateTransaction()
                .set_account_id(AccountId.from_string(account_id))
                .add_token_id(TokenId.from_string(token_id))
            )
            _, transaction_id = self._execute(transaction)
            return transaction_id

        return await self._run("associate_token", _associate)

    async def get_account_balance(self, account_id: str) -> AccountBalance:
        """Query hbar and token balances."""

        def _query() -> AccountBalance:
            balance = (
                CryptoGetAccountBalanceQuery()
                .set_account_id(AccountId.from_string(account_id))
                .execute(self._client)
            )
            token_balances = getattr(balance, "token_balances", None) or {}
            return AccountBalance(
                account_id=account_id,
                hbars=str(balance.hbars),
                tokens={str(token): int(units) for token, units in token_balances.items()},
            )

        return await self._run("get_account_balance", _query)

    async def close(self) -> None:
        """Close gRPC channels held by the SDK client."""
        await asyncio.to_thread(self._client.close)
        logger.info("hedera_client_closed")
