"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

- Generic, reusable base classes (no payment-specific logic)
- Clear extension points for domain apps
- Infrastructure concerns separated from business logic

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and HTTP status
    - ValidationError: Input validation failures
    - PermissionDeniedError: Authorization failures
    - ExternalServiceError: Third-party service failures

Protocols (import from core.protocols):
    - CacheBackend: Generic cache interface

Views (import from core.views):
    - health_check: Liveness endpoint for orchestration

Management commands:
    - runserver: Django's runserver listening on settings.PORT by default

Usage:
    from core.services import BaseService, ServiceResult
    from core.exceptions import ValidationError

Note:
    Business logic should NOT go here. Extend core classes in your domain apps.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    PermissionDeniedError,
    ValidationError,
)

# Protocols (no Django dependencies)
from .protocols import CacheBackend

__all__ = [
    "BaseApplicationError",
    "BaseService",
    "CacheBackend",
    "ExternalServiceError",
    "PermissionDeniedError",
    "ServiceResult",
    "ValidationError",
]
