"""
Development server bound to the configured listen port.

Usage:
    python manage.py runserver            # listens on settings.PORT (4242 by default)
    python manage.py runserver 0.0.0.0:8000
"""

from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    """Django's runserver with ``default_port`` taken from the PORT setting."""

    default_port = str(getattr(settings, "PORT", 4242))
