# Accounts module
from app.modules.accounts.models import Account
from app.modules.accounts.services import AccountService, LockedAccounts
from app.modules.accounts.router import router

__all__ = ["Account", "AccountService", "LockedAccounts", "router"]
