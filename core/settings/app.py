# core/settings/app.py
from functools import lru_cache

# Sections
from core.settings.sections.auth import AuthSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.logging import LoggingSettings
from core.settings.sections.ordering import OrderingSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        # Load each settings class ONLY when AppSettings is instantiated
        self.database = DatabaseSettings()
        self.auth = AuthSettings()
        self.ordering = OrderingSettings()
        self.logging = LoggingSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
