"""Audit record models.

One frozen record per successful ledger operation. Records serialize with
camelCase keys (``tokenId``, ``transactionId``) and carry their operation
kind under ``type``.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class OperationType(str, Enum):
    """Kinds of operation that reach the audit log."""

    MINT_RECEIPT = "MINT_RECEIPT"
    TRANSFER_RECEIPT = "TRANSFER_RECEIPT"
    ASSOCIATE_TOKEN = "ASSOCIATE_TOKEN"


class OperationStatus(str, Enum):
    """Outcome of a logged operation.

    Failed operations are never logged, so SUCCESS is the only member.
    """

    SUCCESS = "SUCCESS"


class AuditRecord(BaseModel):
    """Fields shared by every audit record."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    timestamp: datetime = Field(default_factory=utc_now, description="Completion time")
    operation_type: OperationType = Field(..., alias="type", description="Operation kind")
    token_id: str = Field(..., description="Ledger token id")
    transaction_id: str = Field(..., description="Ledger transaction id")
    status: OperationStatus = Field(default=OperationStatus.SUCCESS)


class MintReceiptRecord(AuditRecord):
    """A receipt token was created."""

    operation_type: Literal[OperationType.MINT_RECEIPT] = Field(
        default=OperationType.MINT_RECEIPT, alias="type"
    )
    action_type: str = Field(..., description="Real-world action the receipt stands for")
    recipient: str = Field(..., description="Intended holder of the receipt")
    metadata: str | None = Field(default=None, description="Free-form caller metadata")


class TransferReceiptRecord(AuditRecord):
    """Receipt units moved from the operator to another account."""

    operation_type: Literal[OperationType.TRANSFER_RECEIPT] = Field(
        default=OperationType.TRANSFER_RECEIPT, alias="type"
    )
    from_account: str
    to_account: str
    amount: int


class AssociateTokenRecord(AuditRecord):
    """An account was associated with a token."""

    operation_type: Literal[OperationType.ASSOCIATE_TOKEN] = Field(
        default=OperationType.ASSOCIATE_TOKEN, alias="type"
    )
    account_id: str


def _record_tag(value: Any) -> str | None:
    """Operation type of a record given as a model instance or a mapping."""
    if isinstance(value, dict):
        tag = value.get("type", value.get("operation_type"))
    else:
        tag = getattr(value, "operation_type", None)
    return tag.value if isinstance(tag, OperationType) else tag


AnyAuditRecord = Annotated[
    Union[
        Annotated[MintReceiptRecord, Tag(OperationType.MINT_RECEIPT.value)],
        Annotated[TransferReceiptRecord, Tag(OperationType.TRANSFER_RECEIPT.value)],
        Annotated[AssociateTokenRecord, Tag(OperationType.ASSOCIATE_TOKEN.value)],
    ],
    Discriminator(_record_tag),
]
