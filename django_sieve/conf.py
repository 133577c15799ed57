"""
Django-Sieve Settings

Project-wide defaults are read from Django settings under the DJANGO_SIEVE
key. Per-endpoint limits live on SieveConfig and take precedence.

Example:
    # settings.py
    DJANGO_SIEVE = {
        'DEFAULT_PAGE_SIZE': 25,
        'MAX_PAGE_SIZE': 250,
    }
"""

from django.conf import settings

DEFAULTS = {
    # Pagination fallbacks when an endpoint config does not set them
    "DEFAULT_PAGE_SIZE": 20,
    "MAX_PAGE_SIZE": 100,
    # Response behavior
    "ALWAYS_HTTP_200": False,  # When True, error responses return HTTP 200 with status_code in payload
    # Log every dropped sort/filter clause at INFO instead of DEBUG
    "LOG_WARNINGS": False,
}


class SieveSettings:
    """
    A settings object that allows django-sieve settings to be accessed as
    properties. For example:

        from django_sieve.conf import sieve_settings
        print(sieve_settings.MAX_PAGE_SIZE)

    Settings can be overridden in Django settings.py under DJANGO_SIEVE key.
    """

    def __init__(self, defaults=None):
        self.defaults = defaults or DEFAULTS
        self._cached_attrs = set()

    @property
    def user_settings(self):
        if not hasattr(self, "_user_settings"):
            self._user_settings = getattr(settings, "DJANGO_SIEVE", {})
        return self._user_settings

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid django-sieve setting: '{attr}'")

        try:
            val = self.user_settings[attr]
        except KeyError:
            val = self.defaults[attr]

        self._cached_attrs.add(attr)
        setattr(self, attr, val)
        return val

    def reload(self):
        """Reload settings (useful for testing)."""
        for attr in self._cached_attrs:
            try:
                delattr(self, attr)
            except AttributeError:
                pass
        self._cached_attrs.clear()
        if hasattr(self, "_user_settings"):
            delattr(self, "_user_settings")


sieve_settings = SieveSettings(DEFAULTS)
