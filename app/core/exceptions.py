"""
Base exception classes for application-wide error handling.

This module provides the exception hierarchy shared by every app:
- Consistent error responses across the API
- Machine-readable error codes for client handling
- An HTTP status per error family so views can map errors in one place

Exception Hierarchy:
    BaseApplicationError (base, 500)
    ├── ValidationError - Caller input is missing or malformed (400)
    ├── PermissionDeniedError - Caller is not allowed to perform the action (403)
    └── ExternalServiceError - A third-party service rejected or failed a call (502)

Usage:
    from core.exceptions import ValidationError

    raise ValidationError("Missing email", error_code="MISSING_EMAIL")

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles parser-level exceptions (malformed JSON, unsupported media type).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, provider codes, etc.)
        status_code: HTTP status a view should answer with

    Example:
        try:
            CheckoutService(provider, payment_settings).create_checkout_session(req)
        except BaseApplicationError as e:
            logger.warning(f"Checkout rejected: {e.error_code}")
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and (when present) details keys

        Example:
            {
                "error": "Missing required fields",
                "error_code": "PAYMENT_VALIDATION_ERROR",
                "details": {"missing": ["itemId"]}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when caller input is missing or malformed.

    Use for:
    - Missing required fields
    - Values outside their allowed range (negative amounts, zero nights)

    Raised before any outbound call, so no side effects have happened.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the caller is not allowed to perform an operation.

    Example:
        if not credentials_match:
            raise PermissionDeniedError("Forbidden", error_code="FORBIDDEN")

    Note:
        The message must never echo the expected credential.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - Third-party API rejections (payment provider, email provider)
    - Network failures and timeouts

    Example:
        except stripe.APIConnectionError:
            raise ExternalServiceError(
                "Payment service unavailable",
                details={"service": "stripe"},
            )
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 502
