from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import settings


def _is_memory_url(db_url: str) -> bool:
    """Return True for SQLite URLs that point at a private in-memory database."""
    return db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _configure_connection(dbapi_connection, _connection_record) -> None:
    # SQLite ships with FK enforcement off; it is a per-connection switch
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()

    # Built-in lower() only folds ASCII
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def build_engine(db_url: str, *, echo: bool = False) -> Engine:
    """Create a SQLite engine with foreign keys enforced and ``casefold()`` registered.

    In-memory URLs share one connection through ``StaticPool`` so every
    session sees the same database.
    """
    kwargs = {}
    if _is_memory_url(db_url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    new_engine = create_engine(db_url, echo=echo, **kwargs)
    event.listen(new_engine, "connect", _configure_connection)
    return new_engine


# Create engine
engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

# Create session maker
session_factory = sessionmaker(engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(bind: Engine | None = None) -> Generator[Session, None, None]:
    factory = session_factory if bind is None else sessionmaker(
        bind, class_=Session, expire_on_commit=False
    )
    session = factory()
    try:
        yield session
    finally:
        session.close()


def close_db() -> None:
    engine.dispose()
