from fastapi import APIRouter, Depends, status

from app.core.database import get_session_factory
from app.modules.payments.schemas import PaymentResponse
from app.modules.transfers.schemas import TransferRequest, TransferResponse
from app.modules.transfers.services import TransferService

router = APIRouter(tags=["transfers"])


def get_transfer_service(session_factory=Depends(get_session_factory)) -> TransferService:
    return TransferService(session_factory)


@router.post("/transfer", response_model=TransferResponse, status_code=status.HTTP_201_CREATED)
async def transfer(
    request: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
):
    """
    Move funds from one account to another.

    - Both accounts must exist and share the same currency
    - The source account must hold at least `amount`
    - Returns the recorded payment with its server-assigned time
    """
    payment = await service.transfer(request.from_id, request.to_id, request.amount)
    return TransferResponse(payment=PaymentResponse.model_validate(payment))
