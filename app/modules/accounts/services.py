from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.sql import Select
from typing import Dict, Iterable, List

from app.core.money import Cents
from app.modules.accounts.models import Account


def locking_select(identifiers: Iterable[str]) -> Select:
    """
    SELECT ... FOR UPDATE over the given accounts.

    Rows are ordered by identifier so concurrent transfers over the same
    pair of accounts acquire their row locks in the same order.
    """
    return (
        select(Account)
        .where(Account.identifier.in_(sorted(set(identifiers))))
        .order_by(Account.identifier)
        .with_for_update()
    )


class LockedAccounts:
    """
    Accounts read under a row lock inside the session's open transaction.

    Balance changes are only possible through ``move_funds``; there is no
    other write path to ``account.balance`` in the code base.
    """

    def __init__(self, db: AsyncSession, accounts: List[Account]):
        self.db = db
        self._by_identifier: Dict[str, Account] = {a.identifier: a for a in accounts}

    def __iter__(self):
        return iter(self._by_identifier.values())

    async def move_funds(self, source: Account, destination: Account, amount: Cents) -> None:
        """Debit source and credit destination by amount in the current transaction"""
        for account in (source, destination):
            if self._by_identifier.get(account.identifier) is not account:
                raise ValueError(f"account {account.identifier} is not locked by this transaction")

        await self.db.execute(
            update(Account)
            .where(Account.identifier == source.identifier)
            .values(balance=Account.balance - amount)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            update(Account)
            .where(Account.identifier == destination.identifier)
            .values(balance=Account.balance + amount)
            .execution_options(synchronize_session=False)
        )


class AccountService:
    """Service layer for account lookups"""

    @staticmethod
    async def get_available_accounts(db: AsyncSession) -> List[Account]:
        """Get all accounts"""
        result = await db.execute(select(Account).order_by(Account.identifier))
        return list(result.scalars().all())

    @staticmethod
    async def get_accounts(db: AsyncSession, identifiers: Iterable[str]) -> List[Account]:
        """
        Get the accounts that exist among identifiers.

        Unknown identifiers are simply absent from the result.
        """
        wanted = set(identifiers)
        if not wanted:
            return []
        result = await db.execute(
            select(Account)
            .where(Account.identifier.in_(wanted))
            .order_by(Account.identifier)
        )
        return list(result.scalars().all())

    @staticmethod
    async def lock_accounts(db: AsyncSession, identifiers: Iterable[str]) -> LockedAccounts:
        """Read accounts for update inside the session's current transaction"""
        result = await db.execute(locking_select(identifiers))
        return LockedAccounts(db, list(result.scalars().all()))
