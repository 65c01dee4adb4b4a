from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Tuple
import logging

from app.core.exceptions import AccountNotFoundError, InternalError
from app.modules.accounts.services import AccountService
from app.modules.payments.models import Payment

logger = logging.getLogger(__name__)


class PaymentLedger:
    """Append-only log of completed transfers"""

    @staticmethod
    async def append_payment(db: AsyncSession, payment: Payment) -> Payment:
        """
        Add a payment to the caller's open transaction.

        The row is flushed so the storage-assigned id is available, but the
        transaction is left for the caller to commit or roll back.
        """
        db.add(payment)
        await db.flush()
        return payment

    @staticmethod
    async def get_payments(db: AsyncSession, account_id: str) -> List[Payment]:
        """
        Get every payment where account_id is the sender or the receiver.

        Raises AccountNotFoundError when the account itself does not exist,
        so "no payments" and "no such account" stay distinguishable.
        """
        try:
            accounts = await AccountService.get_accounts(db, [account_id])
            if not accounts:
                raise AccountNotFoundError(account_id)

            result = await db.execute(
                select(Payment)
                .where(or_(Payment.from_id == account_id, Payment.to_id == account_id))
                .order_by(Payment.occurred_at, Payment.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to read payments for account %s: %s", account_id, e)
            raise InternalError(e) from e


def split_by_role(payments: List[Payment], account_id: str) -> Tuple[List[Payment], List[Payment]]:
    """Partition payments into (sent, received) from account_id's point of view"""
    sent, received = [], []
    for payment in payments:
        if payment.from_id == account_id:
            sent.append(payment)
        else:
            received.append(payment)
    return sent, received
