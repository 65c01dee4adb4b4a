# Transfers module
from app.modules.transfers.services import TransferService
from app.modules.transfers.router import router

__all__ = ["TransferService", "router"]
