"""Core modules - configurações principais"""
from fantasy_football.core.config import settings
from fantasy_football.core.database import get_db, Base, AsyncSessionLocal
from fantasy_football.core.cache import cache, CacheManager
from fantasy_football.core.logging_config import setup_logging

__all__ = [
    "settings",
    "get_db",
    "Base",
    "AsyncSessionLocal",
    "cache",
    "CacheManager",
    "setup_logging",
]
