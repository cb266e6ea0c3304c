# Wordbox Core Module
from .config import get_settings, settings
from .database import Base, create_session_factory
from .logging import setup_logging

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "Base",
    "create_session_factory",
]
