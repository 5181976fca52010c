"""Core application components: settings, database, errors."""

from app.core.config import settings
from app.core.database import Base, SessionLocal, engine, get_db, init_database
from app.core.errors import LifeVaultError

__all__ = ["settings", "Base", "SessionLocal", "engine", "get_db", "init_database", "LifeVaultError"]
