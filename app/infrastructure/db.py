"""Database infrastructure setup."""

from typing import Callable, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.infrastructure.config.settings import settings

SessionFactory = Callable[[], Session]

# Engine creation is deferred until needed so in-memory mode never touches the network
_engine: Optional[Engine] = None
_session_factory: Optional[SessionFactory] = None


def get_engine() -> Engine:
    """
    Get or create the database engine for DATABASE_URL.

    Returns:
        SQLAlchemy engine

    Raises:
        ValueError: If DATABASE_URL is not configured
    """
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required for database operations")
        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,  # Hosted Postgres drops idle connections
            echo=settings.debug_mode,
        )
    return _engine


def create_session_factory(engine: Engine) -> SessionFactory:
    """
    Build a session factory bound to an engine.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Callable returning a new session
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db_session() -> Session:
    """
    Get a database session bound to the configured engine.

    Returns:
        SQLAlchemy session instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory()
