"""
Database connection and session management.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from app.core.config import settings


# SQLite needs cross-thread access when used behind the ASGI threadpool
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create database engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    pool_pre_ping=True,   # Verify connections before using
    connect_args=connect_args,
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_db():
    """
    Dependency that provides a database session.
    Usage in FastAPI routes:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database():
    """Create all tables that don't exist yet (local/dev; production uses Alembic)."""
    # Import models so they're registered with Base.metadata
    import app.shared.models  # noqa: F401
    import app.modules.users.models  # noqa: F401
    import app.modules.assets.models  # noqa: F401
    import app.modules.nominees.models  # noqa: F401
    import app.modules.trading_accounts.models  # noqa: F401
    import app.modules.vault.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
