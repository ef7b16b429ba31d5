# Core module - configuration and logging
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
]
