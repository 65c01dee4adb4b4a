from pydantic import BaseModel, Field

from app.modules.payments.schemas import PaymentResponse


class TransferRequest(BaseModel):
    """
    Example body:

        {"fromId": "account_1", "toId": "account_2", "amount": 1000}

    amount is an integer number of minor units (cents).
    """
    from_id: str = Field(alias="fromId", min_length=1)
    to_id: str = Field(alias="toId", min_length=1)
    amount: int

    class Config:
        populate_by_name = True


class TransferResponse(BaseModel):
    payment: PaymentResponse
