"""
Unit tests for error classification
"""
import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    AccountNotFoundError,
    InputError,
    InternalError,
    RollbackFailedError,
    classify_error,
)


class TestClassifyError:
    """Tests for classify_error"""

    @pytest.mark.unit
    def test_input_error_is_echoed(self):
        report = classify_error(InputError("insufficient funds"))

        assert report.status_code == 400
        assert report.message == "insufficient funds"
        assert report.internal is False
        assert report.fatal is False

    @pytest.mark.unit
    def test_account_not_found_names_accounts(self):
        report = classify_error(AccountNotFoundError("X", "Z"))

        assert report.status_code == 404
        assert report.message == "account not found: X, Z"
        assert report.internal is False

    @pytest.mark.unit
    def test_internal_error_is_hidden(self):
        cause = OperationalError("SELECT 1", {}, Exception("password authentication failed"))
        error = InternalError(cause)

        report = classify_error(error)

        assert error.cause is cause
        assert "password" in error.message
        assert report.status_code == 500
        assert report.message == GENERIC_ERROR_MESSAGE
        assert report.internal is True
        assert report.fatal is False

    @pytest.mark.unit
    def test_rollback_failure_is_fatal(self):
        report = classify_error(RollbackFailedError(RuntimeError("connection reset")))

        assert report.status_code == 500
        assert report.message == GENERIC_ERROR_MESSAGE
        assert report.internal is True
        assert report.fatal is True

    @pytest.mark.unit
    def test_unknown_exception_is_internal(self):
        report = classify_error(KeyError("boom"))

        assert report.internal is True
        assert report.message == GENERIC_ERROR_MESSAGE
