"""Pingboard - shared-session ping board service."""

__version__ = "0.1.0"
