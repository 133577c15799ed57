"""
Pytest configuration for django-sieve tests.
"""

import os
import sys

import pytest

# Add the package root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


def pytest_configure():
    """Configure Django settings before tests run."""
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            SECRET_KEY="test-secret-key",
            DEBUG=True,
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django_sieve",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            USE_TZ=True,
            DJANGO_SIEVE={
                "DEFAULT_PAGE_SIZE": 20,
                "MAX_PAGE_SIZE": 100,
            },
        )

    import django

    django.setup()


@pytest.fixture(autouse=True)
def reset_sieve_settings():
    """Drop cached django-sieve settings so per-test overrides never leak."""
    from django_sieve.conf import sieve_settings

    sieve_settings.reload()
    yield
    sieve_settings.reload()
