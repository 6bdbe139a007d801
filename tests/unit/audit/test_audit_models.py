"""Tests for audit record models."""

from datetime import UTC, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from receipts.audit import (
    AnyAuditRecord,
    AssociateTokenRecord,
    MintReceiptRecord,
    OperationStatus,
    OperationType,
    TransferReceiptRecord,
)


class TestMintReceiptRecord:
    """Tests for MintReceiptRecord."""

    def test_defaults(self) -> None:
        record = MintReceiptRecord(
            action_type="Buy",
            token_id="0.0.500",
            recipient="0.0.1002",
            transaction_id="0.0.1001@1700000000.000000001",
        )
        assert record.operation_type == OperationType.MINT_RECEIPT
        assert record.status == OperationStatus.SUCCESS
        assert record.metadata is None
        assert record.timestamp.tzinfo is not None
        assert record.timestamp <= datetime.now(UTC)

    def test_serializes_camel_case(self) -> None:
        record = MintReceiptRecord(
            action_type="Buy",
            token_id="0.0.500",
            recipient="0.0.1002",
            metadata='{"item":"widget"}',
            transaction_id="0.0.1001@1700000000.000000001",
        )
        data = record.model_dump(mode="json", by_alias=True)

        assert data["type"] == "MINT_RECEIPT"
        assert data["actionType"] == "Buy"
        assert data["tokenId"] == "0.0.500"
        assert data["recipient"] == "0.0.1002"
        assert data["metadata"] == '{"item":"widget"}'
        assert data["transactionId"] == "0.0.1001@1700000000.000000001"
        assert data["status"] == "SUCCESS"
        assert "timestamp" in data

    def test_frozen(self) -> None:
        record = MintReceiptRecord(
            action_type="Buy",
            token_id="0.0.500",
            recipient="0.0.1002",
            transaction_id="tx",
        )
        with pytest.raises(ValidationError):
            record.token_id = "0.0.501"  # type: ignore[misc]


class TestTransferAndAssociateRecords:
    """Tests for TransferReceiptRecord and AssociateTokenRecord."""

    def test_transfer_fields(self) -> None:
        record = TransferReceiptRecord(
            token_id="0.0.500",
            from_account="0.0.1001",
            to_account="0.0.1002",
            amount=3,
            transaction_id="tx",
        )
        data = record.model_dump(by_alias=True)
        assert data["type"] == OperationType.TRANSFER_RECEIPT
        assert data["fromAccount"] == "0.0.1001"
        assert data["toAccount"] == "0.0.1002"
        assert data["amount"] == 3

    def test_associate_fields(self) -> None:
        record = AssociateTokenRecord(token_id="0.0.500", account_id="0.0.1003", transaction_id="tx")
        data = record.model_dump(by_alias=True)
        assert data["type"] == OperationType.ASSOCIATE_TOKEN
        assert data["accountId"] == "0.0.1003"


class TestDiscriminatedUnion:
    """Tests for AnyAuditRecord parsing."""

    def test_parses_by_type(self) -> None:
        adapter = TypeAdapter(list[AnyAuditRecord])
        records = adapter.validate_python([
            {
                "type": "MINT_RECEIPT",
                "actionType": "Register",
                "tokenId": "0.0.500",
                "recipient": "0.0.1002",
                "transactionId": "tx1",
            },
            {
                "type": "ASSOCIATE_TOKEN",
                "tokenId": "0.0.500",
                "accountId": "0.0.1002",
                "transactionId": "tx2",
            },
        ])

        assert isinstance(records[0], MintReceiptRecord)
        assert isinstance(records[1], AssociateTokenRecord)

    def test_rejects_unknown_type(self) -> None:
        adapter = TypeAdapter(AnyAuditRecord)
        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "BURN", "tokenId": "0.0.1", "transactionId": "tx"})
