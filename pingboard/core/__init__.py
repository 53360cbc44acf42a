# Pingboard Core Module
from .config import Settings, get_settings
from .database import Base, check_db_connection, create_engine, create_session_maker
from .logging import get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "Base",
    "create_engine",
    "create_session_maker",
    "check_db_connection",
]
