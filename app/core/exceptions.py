"""
Ledger error taxonomy.

Every failure leaving the transfer engine or the payment ledger is one of the
classes below. ``classify_error`` is the only place that decides what a
client gets to see: input errors are echoed verbatim, everything else is
replaced with a generic message while the real cause is logged.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "internal error"


class LedgerError(Exception):
    """Base class for ledger failures"""

    internal: bool = False
    fatal: bool = False
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(LedgerError):
    """The request violates a precondition the caller could have avoided"""


class AccountNotFoundError(InputError):
    """One or more referenced accounts do not exist"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, *identifiers: str):
        self.identifiers = tuple(identifiers)
        super().__init__(f"account not found: {', '.join(self.identifiers)}")


class InternalError(LedgerError):
    """Storage, connectivity or transaction failure"""

    internal = True
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, cause: BaseException):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


class RollbackFailedError(InternalError):
    """A transaction could not be rolled back; ledger consistency is unknown"""

    fatal = True


@dataclass(frozen=True)
class ErrorReport:
    status_code: int
    message: str
    internal: bool
    fatal: bool = False


def classify_error(exc: BaseException) -> ErrorReport:
    """Map any exception to what may be disclosed to the client"""
    if isinstance(exc, LedgerError) and not exc.internal:
        return ErrorReport(exc.status_code, exc.message, internal=False)
    fatal = isinstance(exc, LedgerError) and exc.fatal
    return ErrorReport(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        GENERIC_ERROR_MESSAGE,
        internal=True,
        fatal=fatal,
    )


def _root_cause(exc: BaseException) -> Optional[BaseException]:
    return getattr(exc, "cause", None) or exc.__cause__


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Turn a LedgerError into a JSON error response"""
    report = classify_error(exc)
    if report.fatal:
        logger.critical(
            "Ledger consistency cannot be asserted after %s %s: %s",
            request.method, request.url.path, exc.message,
            exc_info=_root_cause(exc),
        )
    elif report.internal:
        logger.error(
            "Internal error on %s %s: %s",
            request.method, request.url.path, exc.message,
            exc_info=_root_cause(exc),
        )
    else:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, report.message)
    return JSONResponse(status_code=report.status_code, content={"error": report.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed requests in the same error shape as ledger errors"""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query"))
        problems.append(f"{field}: {error['msg']}" if field else error["msg"])
    message = "invalid request: " + "; ".join(problems)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"error": message})
