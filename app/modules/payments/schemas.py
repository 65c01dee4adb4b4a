from pydantic import BaseModel, Field
from datetime import datetime
from typing import List


class PaymentResponse(BaseModel):
    """Payment record as returned after a transfer"""
    id: int
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    occurred_at: datetime = Field(alias="time_utc")
    amount: int  # minor units
    currency: str

    class Config:
        from_attributes = True
        populate_by_name = True


class PaymentHistoryItem(BaseModel):
    account: str  # the counterparty
    amount: float
    time: datetime


class PaymentHistory(BaseModel):
    sent: List[PaymentHistoryItem] = []
    received: List[PaymentHistoryItem] = []


class PaymentHistoryResponse(BaseModel):
    account: str
    payments: PaymentHistory
