from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.modules.payments import schemas
from app.modules.payments.services import PaymentLedger, split_by_role

router = APIRouter(tags=["payments"])


def _history_item(counterparty: str, payment) -> schemas.PaymentHistoryItem:
    return schemas.PaymentHistoryItem(
        account=counterparty,
        amount=payment.amount.as_float(),
        time=payment.occurred_at,
    )


@router.get("/payments", response_model=schemas.PaymentHistoryResponse)
async def get_payments(
    account_id: str = Query(..., alias="accountId", min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """
    Report the payments an account took part in.

    - `sent` lists payments made by the account, keyed by receiver
    - `received` lists payments made to the account, keyed by sender
    - Unknown accounts answer 404
    """
    payments = await PaymentLedger.get_payments(db, account_id)
    sent, received = split_by_role(payments, account_id)
    return schemas.PaymentHistoryResponse(
        account=account_id,
        payments=schemas.PaymentHistory(
            sent=[_history_item(p.to_id, p) for p in sent],
            received=[_history_item(p.from_id, p) for p in received],
        ),
    )
