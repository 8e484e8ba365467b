"""Core app configuration, persistence client, security and route gate."""

from blog.core.config import Settings, get_settings
from blog.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_db", "get_settings"]
