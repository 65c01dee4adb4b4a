from pydantic import BaseModel
from typing import List


class AccountInfo(BaseModel):
    """Public view of an account"""
    name: str
    currency: str
    amount: str  # major.minor display form, e.g. "100.00"


class AccountListResponse(BaseModel):
    accounts: List[AccountInfo]
