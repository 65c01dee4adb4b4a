# Payments module
from app.modules.payments.models import Payment
from app.modules.payments.services import PaymentLedger, split_by_role
from app.modules.payments.router import router

__all__ = ["Payment", "PaymentLedger", "split_by_role", "router"]
