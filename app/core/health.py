"""
Process-wide ledger consistency flag.

Set once a transaction could not be rolled back; from then on ``/health``
reports ``degraded`` until the process restarts.
"""
import logging

logger = logging.getLogger(__name__)

_consistent = True


def ledger_is_consistent() -> bool:
    return _consistent


def mark_ledger_inconsistent(reason: BaseException) -> None:
    """Flag the ledger as inconsistent"""
    global _consistent
    if _consistent:
        logger.critical("Ledger marked inconsistent: %s", reason)
    _consistent = False


def reset_ledger_health() -> None:
    global _consistent
    _consistent = True
