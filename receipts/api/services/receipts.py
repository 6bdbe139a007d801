"""Receipt operation handlers.

Each operation checks its inputs, makes one ledger call and, once the call
has been confirmed, appends exactly one audit record. A failed or rejected
call leaves the audit log untouched.
"""

import time
from collections.abc import Awaitable
from typing import TypeVar

from receipts.api.exceptions import InvalidRequestError, OperationError
from receipts.api.models.errors import ErrorDetail
from receipts.audit import (
    AssociateTokenRecord,
    AuditLog,
    AuditLogSnapshot,
    MintReceiptRecord,
    TransferReceiptRecord,
)
from receipts.config.models.ledger import LedgerConfig
from receipts.ledger import AccountBalance, LedgerClient, LedgerError
from receipts.observability.logging import get_logger
from receipts.observability.metrics import LEDGER_LATENCY, record_operation

logger = get_logger(__name__)

T = TypeVar("T")


def receipt_token_name(action_type: str) -> str:
    """Token name for a receipt of the given action."""
    return f"Receipt-{action_type}"


def receipt_token_symbol(now: float | None = None) -> str:
    """Token symbol with an epoch-milliseconds suffix."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"RCP-{millis}"


def _require(**fields: object) -> None:
    """Raise InvalidRequestError naming every empty or missing field."""
    missing = [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise InvalidRequestError(
            f"Missing required fields: {', '.join(missing)}",
            details=[ErrorDetail(field=name, message="Field required") for name in missing],
        )


class ReceiptService:
    """Mint, transfer, associate and balance operations over a ledger client.

    The audit log is owned by the application and handed in at construction,
    so every service instance built for the same app shares one journal.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        audit_log: AuditLog,
        config: LedgerConfig | None = None,
    ) -> None:
        """Initialize receipt service.

        Args:
            ledger: Client used for every ledger call
            audit_log: Journal successful operations are appended to
            config: Ledger settings (token decimals and initial supply)
        """
        self._ledger = ledger
        self._audit_log = audit_log
        self._config = config or LedgerConfig()

    async def _call_ledger(
        self,
        operation: str,
        call: Awaitable[T],
        failure_message: str,
    ) -> T:
        """Await a ledger call, timing it and translating failures."""
        start = time.perf_counter()
        try:
            result = await call
        except LedgerError as e:
            record_operation(operation, "failed")
            raise OperationError(failure_message, details=e.message) from e
        finally:
            LEDGER_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)
        record_operation(operation, "success")
        return result

    async def mint_receipt(
        self,
        recipient_id: str,
        action_type: str,
        metadata: str | None = None,
    ) -> MintReceiptRecord:
        """Create a one-unit receipt token and log it.

        Raises:
            InvalidRequestError: If recipient_id or action_type is empty
            OperationError: If the ledger rejects the token creation
        """
        try:
            _require(recipientId=recipient_id, actionType=action_type)
        except InvalidRequestError:
            record_operation("mint_receipt", "rejected")
            raise

        created = await self._call_ledger(
            "mint_receipt",
            self._ledger.create_token(
                receipt_token_name(action_type),
                receipt_token_symbol(),
                decimals=self._config.token_decimals,
                initial_supply=self._config.initial_supply,
            ),
            "Failed to mint receipt",
        )

        record = MintReceiptRecord(
            action_type=action_type,
            token_id=created.token_id,
            recipient=recipient_id,
            metadata=metadata,
            transaction_id=created.transaction_id,
        )
        self._audit_log.append(record)

        logger.info(
            "receipt_minted",
            token_id=record.token_id,
            action_type=action_type,
            recipient=recipient_id,
            transaction_id=record.transaction_id,
        )
        return record

    async def transfer_receipt(
        self,
        token_id: str,
        to_account_id: str,
        amount: int,
    ) -> TransferReceiptRecord:
        """Transfer receipt units from the operator and log it.

        The recipient's association with the token is not checked here; an
        unassociated recipient surfaces as the ledger's
        TOKEN_NOT_ASSOCIATED_TO_ACCOUNT rejection.

        Raises:
            InvalidRequestError: If a field is empty or amount is not a positive integer
            OperationError: If the ledger rejects the transfer
        """
        try:
            _require(tokenId=token_id, toAccountId=to_account_id, amount=amount)
            if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
                raise InvalidRequestError(
                    "amount must be a positive integer",
                    details=[ErrorDetail(field="amount", message="Must be a positive integer")],
                )
        except InvalidRequestError:
            record_operation("transfer_receipt", "rejected")
            raise

        logger.debug("transfer_receipt_started", token_id=token_id, to_account=to_account_id)
        transaction_id = await self._call_ledger(
            "transfer_receipt",
            self._ledger.transfer_token(token_id, to_account_id, amount),
            "Failed to transfer receipt",
        )

        record = TransferReceiptRecord(
            token_id=token_id,
            from_account=self._ledger.operator_id,
            to_account=to_account_id,
            amount=amount,
            transaction_id=transaction_id,
        )
        self._audit_log.append(record)

        logger.info(
            "receipt_transferred",
            token_id=token_id,
            to_account=to_account_id,
            amount=amount,
            transaction_id=transaction_id,
        )
        return record

    async def associate_token(self, token_id: str, account_id: str) -> AssociateTokenRecord:
        """Associate an account with a token and log it.

        Raises:
            InvalidRequestError: If a field is empty
            OperationError: If the ledger rejects the association
        """
        try:
            _require(tokenId=token_id, accountId=account_id)
        except InvalidRequestError:
            record_operation("associate_token", "rejected")
            raise

        transaction_id = await self._call_ledger(
            "associate_token",
            self._ledger.associate_token(token_id, account_id),
            "Failed to associate token",
        )

        record = AssociateTokenRecord(
            token_id=token_id,
            account_id=account_id,
            transaction_id=transaction_id,
        )
        self._audit_log.append(record)

        logger.info(
            "token_associated",
            token_id=token_id,
            account_id=account_id,
            transaction_id=transaction_id,
        )
        return record

    async def get_balance(self, account_id: str) -> AccountBalance:
        """Query balances. Never touches the audit log.

        Raises:
            OperationError: If the account is unknown or malformed
        """
        return await self._call_ledger(
            "get_balance",
            self._ledger.get_account_balance(account_id),
            "Failed to fetch balance",
        )

    def logs(self) -> AuditLogSnapshot:
        """Snapshot of the audit log."""
        return self._audit_log.snapshot()
