"""Request and response models for receipt operations.

All bodies use camelCase keys on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from receipts.audit.models import (
    AnyAuditRecord,
    AssociateTokenRecord,
    MintReceiptRecord,
    TransferReceiptRecord,
)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# Requests
class MintReceiptRequest(CamelModel):
    """Body of POST /api/mint-receipt."""

    recipient_id: str = Field(..., min_length=1, description="Account the receipt is issued for")
    action_type: str = Field(..., min_length=1, description="Action the receipt records, e.g. Buy")
    metadata: str | None = Field(default=None, description="Free-form metadata, often JSON text")


class TransferReceiptRequest(CamelModel):
    """Body of POST /api/transfer-receipt."""

    token_id: str = Field(..., min_length=1)
    to_account_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, strict=True, description="Units to transfer")


class AssociateTokenRequest(CamelModel):
    """Body of POST /api/associate-token."""

    token_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)


# Responses
class MintReceiptResponse(CamelModel):
    """Response for a minted receipt."""

    success: bool = True
    message: str = "Receipt token created successfully"
    token_id: str
    transaction: MintReceiptRecord


class TransferReceiptResponse(CamelModel):
    """Response for a completed transfer."""

    success: bool = True
    message: str = "Receipt transferred successfully"
    transaction: TransferReceiptRecord


class AssociateTokenResponse(CamelModel):
    """Response for a completed association."""

    success: bool = True
    message: str = "Token associated successfully"
    transaction: AssociateTokenRecord


class BalanceResponse(CamelModel):
    """Account balances, rendered as strings for transport."""

    success: bool = True
    account_id: str
    hbar_balance: str
    tokens: str = Field(..., description="JSON object of token id to balance, as text")
    token_balances: dict[str, int] = Field(
        default_factory=dict, description="Token id to balance"
    )


class LogsResponse(CamelModel):
    """Full audit log snapshot."""

    success: bool = True
    logs: list[AnyAuditRecord]
    count: int


class HealthResponse(CamelModel):
    """Liveness response for GET /api/health."""

    status: str = "OK"
    message: str = "Hedera NFT Receipt Backend is running"
    operator_id: str
    network: str
