"""Persistence client: engine and session factory with an explicit lifecycle."""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog.core.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Constructed once per process (FastAPI lifespan), connected at startup and
    disposed at shutdown. Request handlers receive sessions via get_db.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, echo=settings.DEBUG)

    def connect(self) -> None:
        """Create the engine and session factory. Idempotent."""
        if self.engine is not None:
            return
        if self.url.startswith("sqlite"):
            # In-memory SQLite must share one connection across threads
            self.engine = create_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(self.url, pool_pre_ping=True, echo=self.echo)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        logger.info("Database engine created (dialect=%s)", self.engine.dialect.name)

    def create_all(self) -> None:
        """Create all tables from ORM metadata (dev/tests; prod uses Alembic)."""
        from blog.models import Base

        if self.engine is None:
            raise RuntimeError("Database is not connected")
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    def dispose(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._session_factory = None


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
