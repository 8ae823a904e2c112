"""
Database engine, declarative base and the ApiDbContext unit of work.

ApiDbContext wraps a single SQLAlchemy session. Callers stage changes through
its entity sets (or through repositories sharing its session) and commit them
with save_changes().
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Generic, Iterable, Iterator, List, Optional, Type, TypeVar

from fastapi import Request
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from constants import DatabaseDefaults

logger = logging.getLogger(__name__)

Base = declarative_base()

T = TypeVar('T')

# Engines are shared by every context built from the same URL
_engines: Dict[str, Engine] = {}

# Idle connection per in-memory engine; the database lives while it is open
_anchors: Dict[str, Connection] = {}


@dataclass(frozen=True)
class ContextOptions:
    """Connection options for an ApiDbContext."""

    database_url: str
    echo: bool = False

    @classmethod
    def in_memory(cls, name: str = DatabaseDefaults.IN_MEMORY_NAME) -> "ContextOptions":
        """
        Named in-memory SQLite database (memdb VFS, SQLite 3.36+).

        Contexts built from options with the same name see the same committed
        data for as long as the engine is alive (see dispose_engine). Each
        context still has its own connection and transaction.
        """
        return cls(database_url=f"sqlite:///file:/{name}?vfs=memdb&uri=true")

    @classmethod
    def from_settings(cls, settings=None) -> "ContextOptions":
        """Options for the configured production database."""
        from config.settings import load_settings

        settings = settings or load_settings()
        return cls(database_url=settings.database_url, echo=settings.database_echo)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == 'sqlite'

    @property
    def is_in_memory(self) -> bool:
        url = make_url(self.database_url)
        return (
            url.database in (None, '', ':memory:')
            or url.query.get('vfs') == 'memdb'
            or url.query.get('mode') == 'memory'
        )


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute(f"PRAGMA busy_timeout={DatabaseDefaults.BUSY_TIMEOUT_MS}")
    cursor.close()


def _set_wal_mode(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def _is_anonymous_memory(options: ContextOptions) -> bool:
    return make_url(options.database_url).database in (None, "", ":memory:")


def _create_engine(options: ContextOptions) -> Engine:
    if not options.is_sqlite:
        return create_engine(options.database_url, echo=options.echo, pool_pre_ping=True)

    if _is_anonymous_memory(options):
        # Anonymous memory database exists only on its single connection
        engine = create_engine(
            options.database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            echo=options.echo,
        )
    elif options.is_in_memory:
        # Pooled connections, one per session, all attached to the same memdb
        engine = create_engine(
            options.database_url,
            connect_args={'check_same_thread': False},
            poolclass=QueuePool,
            echo=options.echo,
        )
    else:
        db_path = make_url(options.database_url).database
        Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            options.database_url,
            connect_args={'check_same_thread': False},
            echo=options.echo,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        event.listen(engine, "connect", _set_wal_mode)

    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def get_engine(options: ContextOptions) -> Engine:
    """Return the shared engine for these options, creating it on first use."""
    engine = _engines.get(options.database_url)
    if engine is None:
        engine = _create_engine(options)
        _engines[options.database_url] = engine
        if options.is_sqlite and options.is_in_memory and not _is_anonymous_memory(options):
            _anchors[options.database_url] = engine.connect()
        logger.info(f"Created database engine: {engine.url!r}")
    return engine


def dispose_engine(options: ContextOptions) -> None:
    """Close the engine for these options; in-memory data is discarded."""
    anchor = _anchors.pop(options.database_url, None)
    if anchor is not None:
        anchor.close()
    engine = _engines.pop(options.database_url, None)
    if engine is not None:
        engine.dispose()


class EntitySet(Generic[T]):
    """
    Queryable, mutable collection of one mapped model inside a context.

    Additions and removals are staged in the session until the owning
    context's save_changes() is called.
    """

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    def query(self) -> Query:
        return self.session.query(self.model)

    def add(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    def add_range(self, entities: Iterable[T]) -> None:
        self.session.add_all(list(entities))

    def remove(self, entity: T) -> None:
        if entity in self.session.new:
            self.session.expunge(entity)
        else:
            self.session.delete(entity)

    def find(self, id: int) -> Optional[T]:
        return self.session.get(self.model, id)

    def count(self) -> int:
        return self.query().count()

    def all(self) -> List[T]:
        return self.query().all()

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, entity: object) -> bool:
        return any(candidate is entity for candidate in self.all())


class ApiDbContext:
    """
    Unit of work over one SQLAlchemy session.

    Usage:
        with ApiDbContext(ContextOptions.in_memory("Test_Db")) as context:
            context.ensure_created()
            context.recipes.add(recipe)
            context.save_changes()
    """

    def __init__(self, options: ContextOptions):
        self.options = options
        self.engine = get_engine(options)
        self.session: Session = sessionmaker(bind=self.engine, expire_on_commit=False)()

    @property
    def recipes(self) -> EntitySet:
        from models import Recipe

        return EntitySet(self.session, Recipe)

    def set(self, model: Type[T]) -> EntitySet[T]:
        """Entity set for any mapped model."""
        return EntitySet(self.session, model)

    def ensure_created(self) -> bool:
        """
        Create every mapped table that does not exist yet.

        Returns:
            True if the recipes table was created by this call
        """
        import models  # noqa: F401  registers mapped classes on Base

        existed = inspect(self.engine).has_table(models.Recipe.__tablename__)
        Base.metadata.create_all(self.engine)
        if not existed:
            logger.info(f"Created database schema on {self.engine.url!r}")
        return not existed

    def save_changes(self) -> None:
        """
        Commit all staged changes.

        Raises:
            SQLAlchemyError: After rolling the session back
        """
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.error("Commit failed, rolling back", exc_info=True)
            self.session.rollback()
            raise

    def rollback(self) -> None:
        self.session.rollback()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiDbContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def get_db(request: Request):
    """Dependency for FastAPI routes"""
    db = ApiDbContext(request.app.state.context_options)
    try:
        yield db
    finally:
        db.close()
