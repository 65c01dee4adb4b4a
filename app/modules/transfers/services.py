"""
Transfer engine.

A transfer either moves funds and appends exactly one payment, or changes
nothing and raises a LedgerError saying why. Correctness rests on the
storage transaction: both account rows are re-read with a row lock and
re-validated before any balance is touched, so concurrent transfers over a
shared account serialize in the database rather than in this process.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import (
    AccountNotFoundError,
    InputError,
    InternalError,
    LedgerError,
    RollbackFailedError,
)
from app.core.health import mark_ledger_inconsistent
from app.core.money import Cents
from app.modules.accounts.models import Account
from app.modules.accounts.services import AccountService
from app.modules.payments.models import Payment
from app.modules.payments.services import PaymentLedger

logger = logging.getLogger(__name__)

# Locked phases still running, kept referenced until they finish.
_in_flight: Set["asyncio.Future[Payment]"] = set()


def _to_cents(amount) -> Cents:
    try:
        amount = Cents(amount)
    except (TypeError, ValueError):
        raise InputError("invalid amount value") from None
    if amount <= 0:
        raise InputError("non-positive transfer amount")
    return amount


def _resolve(accounts: Iterable[Account], from_id: str, to_id: str) -> Tuple[Account, Account]:
    by_identifier = {account.identifier: account for account in accounts}
    missing = []
    for identifier in (from_id, to_id):
        if identifier not in by_identifier and identifier not in missing:
            missing.append(identifier)
    if missing:
        raise AccountNotFoundError(*missing)
    return by_identifier[from_id], by_identifier[to_id]


def _check_transfer(source: Account, destination: Account, amount: Cents) -> None:
    if source.currency != destination.currency:
        raise InputError(f"currency mismatch: {source.currency} != {destination.currency}")
    if source.balance < amount:
        raise InputError("insufficient funds")


def _report_outcome(applied: "asyncio.Future[Payment]") -> None:
    _in_flight.discard(applied)
    if applied.cancelled():
        logger.error("Transfer locked phase was cancelled")
        return
    if applied.exception() is not None:
        # Failures are logged by the locked phase.
        return
    payment = applied.result()
    logger.info(
        "Transfer success payment_id=%s from=%s to=%s amount=%s %s",
        payment.id, payment.from_id, payment.to_id, payment.amount, payment.currency,
    )


class TransferService:
    """Moves money between accounts and records the payment"""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def transfer(self, from_id: str, to_id: str, amount) -> Payment:
        """
        Move amount (minor units) from from_id to to_id.

        Preconditions are checked in order: positive amount, both accounts
        exist, same currency, sufficient funds. A transfer from an account to
        itself is accepted when funds are sufficient; its debit and credit
        cancel out but a payment is still recorded.

        Raises InputError (or AccountNotFoundError) for caller mistakes,
        InternalError for storage failures and RollbackFailedError when a
        failed transaction could not be rolled back.
        """
        amount = _to_cents(amount)

        try:
            async with self.session_factory() as session:
                accounts = await AccountService.get_accounts(session, {from_id, to_id})
        except SQLAlchemyError as e:
            logger.error("Transfer %s -> %s: account lookup failed: %s", from_id, to_id, e)
            raise InternalError(e) from e

        try:
            source, destination = _resolve(accounts, from_id, to_id)
            _check_transfer(source, destination, amount)
        except InputError as e:
            logger.warning("Transfer %s -> %s of %s rejected: %s", from_id, to_id, amount, e.message)
            raise

        # Once the locked phase starts it runs to commit or rollback even if
        # the caller goes away; its outcome is reported by the callback.
        applied = asyncio.ensure_future(self._apply(from_id, to_id, amount))
        _in_flight.add(applied)
        applied.add_done_callback(_report_outcome)
        return await asyncio.shield(applied)

    async def _apply(self, from_id: str, to_id: str, amount: Cents) -> Payment:
        async with self.session_factory() as session:
            try:
                locked = await AccountService.lock_accounts(session, {from_id, to_id})
                # Balances read before the lock may be stale.
                source, destination = _resolve(locked, from_id, to_id)
                _check_transfer(source, destination, amount)

                await locked.move_funds(source, destination, amount)
                payment = await PaymentLedger.append_payment(
                    session,
                    Payment(
                        from_id=source.identifier,
                        to_id=destination.identifier,
                        amount=amount,
                        currency=source.currency,
                        occurred_at=datetime.now(timezone.utc),
                    ),
                )
                await session.commit()
                return payment
            except LedgerError as e:
                logger.warning("Transfer %s -> %s of %s rejected under lock: %s", from_id, to_id, amount, e.message)
                await self._rollback(session, e)
                raise
            except Exception as e:
                logger.error("Transfer %s -> %s of %s failed: %s", from_id, to_id, amount, e, exc_info=True)
                await self._rollback(session, e)
                raise InternalError(e) from e

    @staticmethod
    async def _rollback(session: AsyncSession, reason: Optional[BaseException] = None) -> None:
        try:
            await session.rollback()
        except Exception as e:
            logger.critical(
                "Rollback failed after %r; ledger consistency cannot be asserted: %s",
                reason, e, exc_info=True,
            )
            error = RollbackFailedError(e)
            mark_ledger_inconsistent(error)
            raise error from e
