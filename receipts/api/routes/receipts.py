"""Receipt token endpoints."""

import json

from fastapi import APIRouter

from receipts.api.dependencies import ReceiptServiceDep
from receipts.api.models.receipts import (
    AssociateTokenRequest,
    AssociateTokenResponse,
    BalanceResponse,
    LogsResponse,
    MintReceiptRequest,
    MintReceiptResponse,
    TransferReceiptRequest,
    TransferReceiptResponse,
)
from receipts.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/mint-receipt", response_model=MintReceiptResponse)
async def mint_receipt(
    body: MintReceiptRequest,
    service: ReceiptServiceDep,
) -> MintReceiptResponse:
    """Mint a receipt token for a completed action.

    Creates a one-unit fungible token named after the action, treasured by
    the operator account.
    """
    logger.debug(
        "mint_receipt_request",
        recipient=body.recipient_id,
        action_type=body.action_type,
    )

    record = await service.mint_receipt(
        recipient_id=body.recipient_id,
        action_type=body.action_type,
        metadata=body.metadata,
    )

    return MintReceiptResponse(token_id=record.token_id, transaction=record)


@router.post("/transfer-receipt", response_model=TransferReceiptResponse)
async def transfer_receipt(
    body: TransferReceiptRequest,
    service: ReceiptServiceDep,
) -> TransferReceiptResponse:
    """Transfer receipt units from the operator to another account.

    The recipient must already be associated with the token.
    """
    record = await service.transfer_receipt(
        token_id=body.token_id,
        to_account_id=body.to_account_id,
        amount=body.amount,
    )
    return TransferReceiptResponse(transaction=record)


@router.post("/associate-token", response_model=AssociateTokenResponse)
async def associate_token(
    body: AssociateTokenRequest,
    service: ReceiptServiceDep,
) -> AssociateTokenResponse:
    """Associate an account with a token so it can hold the token."""
    record = await service.associate_token(
        token_id=body.token_id,
        account_id=body.account_id,
    )
    return AssociateTokenResponse(transaction=record)


@router.get("/balance/{account_id}", response_model=BalanceResponse)
async def get_balance(account_id: str, service: ReceiptServiceDep) -> BalanceResponse:
    """Get hbar and token balances of an account."""
    balance = await service.get_balance(account_id)
    return BalanceResponse(
        account_id=account_id,
        hbar_balance=balance.hbars,
        tokens=json.dumps({token: str(units) for token, units in balance.tokens.items()}),
        token_balances=balance.tokens,
    )


@router.get("/logs", response_model=LogsResponse)
async def get_logs(service: ReceiptServiceDep) -> LogsResponse:
    """Get every audit record in completion order."""
    snapshot = service.logs()
    return LogsResponse(logs=list(snapshot.records), count=snapshot.count)
