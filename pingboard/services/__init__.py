# Pingboard Services
from pingboard.services.blacklist import BlacklistStore
from pingboard.services.blacklist_repository import (
    BlacklistRepository,
    JsonFileBlacklistRepository,
    MemoryBlacklistRepository,
    SqlBlacklistRepository,
    create_blacklist_repository,
)
from pingboard.services.duration import parse_duration
from pingboard.services.engine import PingEngine
from pingboard.services.pings import Ping, PingRegistry, PingType
from pingboard.services.sessions import Role, Session, SessionStore
from pingboard.services.sweeper import PingSweeper

__all__ = [
    "BlacklistRepository",
    "BlacklistStore",
    "JsonFileBlacklistRepository",
    "MemoryBlacklistRepository",
    "Ping",
    "PingEngine",
    "PingRegistry",
    "PingSweeper",
    "PingType",
    "Role",
    "Session",
    "SessionStore",
    "SqlBlacklistRepository",
    "create_blacklist_repository",
    "parse_duration",
]
