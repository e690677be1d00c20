"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views.
    Views handle HTTP concerns, adapters handle the payment provider,
    services handle the rules in between.

Pattern Comparison:
    - ServiceResult: Use for outcomes a caller inspects but never surfaces
      as an HTTP error (webhook handler outcomes, for example)
    - Exceptions: Use for failures the caller must report (validation,
      authorization, provider rejection)

Usage:
    from core.services import BaseService, ServiceResult

    class OnboardingService(BaseService):
        def create_account_link(self, email: str) -> OnboardingResult:
            missing = self.validate_required(email=email)
            if missing:
                raise PaymentValidationError("Missing email")
            ...
            self.get_logger().info("Created onboarding link")

Related:
    - core.exceptions: Error hierarchy raised by services
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling

    Usage:
        # Success case
        return ServiceResult.success({"session_id": session_id})

        # Failure case
        return ServiceResult.failure("Missing session id", "INVALID_WEBHOOK_PAYLOAD")

        # Check result
        result = dispatch_webhook(event, context)
        if not result:
            logger.warning(f"Handler failed: {result.error}")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Args:
            exc: The caught exception
            error_code: Optional error code (defaults to exception class name)

        Returns:
            ServiceResult with error details from exception

        Example:
            try:
                handler(event, context)
            except Exception as e:
                return ServiceResult.from_exception(e, "WEBHOOK_HANDLER_ERROR")
        """
        return cls(
            success=False,
            error=str(exc),
            error_code=error_code or exc.__class__.__name__.upper(),
        )

    def __bool__(self) -> bool:
        """Allow using result in boolean context (same as result.success)."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Required-field checks shared by request validation

    Design Notes:
        - Collaborators (payment provider, settings) are injected through
          the constructor so tests can substitute doubles
        - Services keep no mutable state between calls
        - Raise core.exceptions subclasses for failures the caller reports
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def validate_required(cls, **kwargs: Any) -> list[str]:
        """
        Return the names of required fields that are missing.

        A field is missing when its value is None, False, zero, or a
        string that is empty after stripping whitespace.

        Args:
            **kwargs: Field names and their values

        Returns:
            List of missing field names, in argument order (empty if valid)

        Example:
            missing = cls.validate_required(item_id=item_id, nights=nights)
            if missing:
                raise PaymentValidationError(
                    "Missing required fields",
                    details={"missing": missing},
                )
        """
        missing = []
        for field_name, value in kwargs.items():
            if isinstance(value, str):
                if not value.strip():
                    missing.append(field_name)
            elif not value:
                missing.append(field_name)
        return missing
