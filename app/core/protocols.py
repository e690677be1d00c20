"""
Protocol definitions for generic infrastructure services.

Protocols define contracts that collaborators must fulfill, enabling:
- Duck typing with static type checking
- Dependency inversion (depend on abstractions, not concretions)
- Easy substitution in tests

Available Protocols:
    CacheBackend: Cache operations interface (subset of Django's cache API)

Usage:
    from django.core.cache import cache
    from core.protocols import CacheBackend

    def remember_once(backend: CacheBackend, key: str, value) -> bool:
        return backend.add(key, value, timeout=3600)

    remember_once(cache, "checkout:completed:cs_123", {...})

Note:
    - @runtime_checkable allows isinstance() checks
    - For payment-specific protocols see payments.protocols
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol for cache backends.

    Compatible with Django's cache interface, so ``django.core.cache.cache``
    (locmem in tests, django-redis in production) satisfies it directly.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Value to return if key not found

        Returns:
            Cached value or default
        """
        ...

    def add(self, key: str, value: Any, timeout: int | None = None) -> bool:
        """
        Set value only if the key is not already present.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Expiration time in seconds (None for no expiry)

        Returns:
            True if the value was stored, False if the key already existed
        """
        ...

    def set(self, key: str, value: Any, timeout: int | None = None) -> None:
        """Set value in cache, overwriting any existing entry."""
        ...

    def delete(self, key: str) -> bool:
        """Delete value from cache."""
        ...
