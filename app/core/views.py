"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks.
"""

import logging

from django.core.cache import cache
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    This endpoint is used by:
    - Docker health checks
    - Kubernetes liveness/readiness probes
    - Load balancers

    The service keeps no database, so the only component checked is the
    cache holding completed checkout-session records.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "degraded"
        - cache: "connected" or "disconnected"

    HTTP Status Codes:
        200: Always. A cache outage degrades webhook bookkeeping but
             checkout, onboarding and refunds keep working.

    Example Response:
        {
            "status": "healthy",
            "cache": "connected"
        }
    """
    health_status = {
        "status": "healthy",
        "cache": "unknown",
    }

    try:
        cache.set("health_check", "ok", timeout=1)
        if cache.get("health_check") == "ok":
            health_status["cache"] = "connected"
        else:
            health_status["cache"] = "disconnected"
            health_status["status"] = "degraded"
    except Exception:
        logger.warning("Health check could not reach cache", exc_info=True)
        health_status["cache"] = "disconnected"
        health_status["status"] = "degraded"

    return JsonResponse(health_status, status=200)
