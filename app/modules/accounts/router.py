from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import get_db
from app.core.exceptions import InternalError
from app.modules.accounts import schemas
from app.modules.accounts.services import AccountService

router = APIRouter(tags=["accounts"])


@router.get("/accounts", response_model=schemas.AccountListResponse)
async def list_accounts(db: AsyncSession = Depends(get_db)):
    """
    List all available accounts.

    Amounts are rendered in major units with two decimals.
    """
    try:
        accounts = await AccountService.get_available_accounts(db)
    except SQLAlchemyError as e:
        raise InternalError(e) from e

    return schemas.AccountListResponse(
        accounts=[
            schemas.AccountInfo(
                name=account.identifier,
                currency=account.currency,
                amount=str(account.balance),
            )
            for account in accounts
        ]
    )
