# Pingboard Models
from pingboard.models.blacklist_entry import BlacklistEntry

__all__ = [
    "BlacklistEntry",
]
