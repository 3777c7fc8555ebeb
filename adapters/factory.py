from __future__ import annotations

from typing import Optional

from adapters.settings import ConnectionSettings
from adapters.sql import SQLAdapter


def get_adapter(driver: Optional[str] = None, settings: Optional[ConnectionSettings] = None) -> SQLAdapter:
    if settings is None:
        settings = ConnectionSettings.from_env(driver=driver)
    elif driver:
        settings = ConnectionSettings.build(**{**settings.model_dump(), "driver": driver})
    return SQLAdapter.from_settings(settings)
