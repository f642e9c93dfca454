"""
Catalog storage schema and storage engine handle
SQLite by default, any SQLAlchemy URL supporting ON CONFLICT and RETURNING
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Optional

from fastapi import Depends, Request
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    Table,
    Text,
    create_engine,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .exceptions import PersistenceError

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


# Database Models
class Plugin(Base):  # type: ignore[valid-type, misc]
    """Cataloged plugin listing. Immutable once registered."""

    __tablename__ = "plugins"
    # AUTOINCREMENT keeps SQLite from reusing identities
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    version = Column(Text, nullable=False)
    rating = Column(Float, nullable=False)


class Tag(Base):  # type: ignore[valid-type, misc]
    """Shared tag vocabulary entry, unique by exact name"""

    __tablename__ = "tags"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)


# Junction rows carry no key and no foreign keys; one row per registration
plugin_tags = Table(
    "plugin_tags",
    Base.metadata,
    Column("plugin_id", Integer),
    Column("tag_id", Integer),
)


class Issue(Base):  # type: ignore[valid-type, misc]
    """User-reported issue"""

    __tablename__ = "issues"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    severity = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=False)


class Faq(Base):  # type: ignore[valid-type, misc]
    """FAQ entry"""

    __tablename__ = "faqs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)


class StorageEngine:
    """
    Explicitly constructed handle on the catalog store.

    Created once per application (see main.lifespan), stored in
    app.state and injected into routes. initialize() never raises: an
    unreachable store is logged and every later session() call fails
    with PersistenceError instead.

    Example:
        storage = StorageEngine("sqlite:///./database.db")
        storage.initialize()
        with storage.session() as db:
            ...
        storage.dispose()
    """

    def __init__(self, database_url: str, timeout: float = 5.0):
        self.database_url = database_url
        self.timeout = timeout
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "StorageEngine":
        return cls(settings.database_url, timeout=settings.storage_timeout)

    @property
    def is_available(self) -> bool:
        return self.SessionLocal is not None

    def _create_engine(self) -> Engine:
        url = make_url(self.database_url)
        connect_args = {}

        if url.get_backend_name() == "sqlite":
            # Bounds how long a write waits on another connection's lock
            connect_args = {"check_same_thread": False, "timeout": self.timeout}
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        else:
            connect_args = {"connect_timeout": int(self.timeout)}

        return create_engine(url, pool_pre_ping=True, connect_args=connect_args)

    def initialize(self) -> bool:
        """
        Open the store and create missing tables.

        Table creation is idempotent; existing tables are left untouched.

        Returns:
            True when the store is usable, False when startup failed.
        """
        try:
            engine = self._create_engine()
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to open catalog store {self.database_url}: {e}")
            return False

        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info(f"Connected to catalog store: {self.database_url}")
        return True

    def session(self) -> Session:
        """New session bound to the store"""
        if self.SessionLocal is None:
            raise PersistenceError("Catalog store is unavailable")
        return self.SessionLocal()

    def check_health(self) -> bool:
        """Check database connectivity for health checks"""
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Catalog store connections closed")
        self.engine = None
        self.SessionLocal = None


def get_storage(request: Request) -> StorageEngine:
    """Storage handle created by the application lifespan"""
    return request.app.state.storage


# Database dependency for FastAPI
def get_db(storage: StorageEngine = Depends(get_storage)) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI endpoints.

    Raises:
        PersistenceError: If the store could not be opened at startup.

    Note:
        Session is automatically closed when the request completes.
    """
    db = storage.session()
    try:
        yield db
    finally:
        db.close()
