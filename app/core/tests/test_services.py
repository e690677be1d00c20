"""
Tests for ServiceResult and BaseService.
"""

import logging

import pytest

from core.exceptions import ValidationError
from core.services import BaseService, ServiceResult


class TestServiceResult:
    """Tests for ServiceResult."""

    def test_success(self):
        result = ServiceResult.success({"session_id": "cs_1"})

        assert result
        assert result.data == {"session_id": "cs_1"}
        assert result.error is None

    def test_failure(self):
        result = ServiceResult.failure("Missing session id", error_code="INVALID_WEBHOOK_PAYLOAD")

        assert not result
        assert result.data is None
        assert result.error == "Missing session id"
        assert result.error_code == "INVALID_WEBHOOK_PAYLOAD"

    def test_from_exception_default_code(self):
        result = ServiceResult.from_exception(KeyError("id"))

        assert result.success is False
        assert result.error_code == "KEYERROR"

    def test_exposes_only_result_fields(self):
        """Results carry outcome fields only, with no HTTP envelope helpers."""
        result = ServiceResult.success(None)

        assert set(vars(result)) == {"success", "data", "error", "error_code"}
        assert not hasattr(ServiceResult, "ok")
        assert not hasattr(result, "to_response")

    def test_from_exception_explicit_code(self):
        result = ServiceResult.from_exception(ValidationError("bad"), "WEBHOOK_HANDLER_ERROR")

        assert result.error == "[VALIDATION_ERROR] bad"
        assert result.error_code == "WEBHOOK_HANDLER_ERROR"


class TestBaseService:
    """Tests for BaseService helpers."""

    def test_logger_named_after_class(self):
        class RentalService(BaseService):
            pass

        logger = RentalService.get_logger()

        assert isinstance(logger, logging.Logger)
        assert logger.name.endswith(".RentalService")

    @pytest.mark.parametrize(
        "value, missing",
        [
            ("bike-42", False),
            (3, False),
            ("", True),
            ("   ", True),
            (None, True),
            (0, True),
        ],
    )
    def test_validate_required(self, value, missing):
        assert (BaseService.validate_required(field=value) == ["field"]) is missing

    def test_validate_required_keeps_order(self):
        assert BaseService.validate_required(item_id=None, nights=2, host_connect_id="") == [
            "item_id",
            "host_connect_id",
        ]
