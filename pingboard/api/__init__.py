# Pingboard API
from pingboard.api.router import api_router

__all__ = ["api_router"]
