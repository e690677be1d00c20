"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /create-checkout-session       - Start a rental checkout (POST)
    /create-account-link           - Onboard a host account (POST)
    /refund-deposit                - Refund a deposit, shared-secret gated (POST)
    /webhook                       - Stripe webhook endpoint (POST)

The payment routes sit at the root without a trailing slash because the web
client and the Stripe dashboard are configured with those exact paths.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # Payments
    path("", include("payments.urls")),
]
