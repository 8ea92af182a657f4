"""Idempotent schema creation and genre seeding."""

import logging
from collections.abc import Sequence

from sqlalchemy import Engine, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlmodel import SQLModel, select

import moviedb.models  # noqa: F401
from moviedb.core.exceptions import StorageError
from moviedb.core.settings import settings
from moviedb.models.genre import Genre

logger = logging.getLogger(__name__)


def create_tables(engine: Engine) -> None:
    """Create every table and index that does not exist yet."""
    SQLModel.metadata.create_all(engine)


def seed_genres(session: Session, genre_names: Sequence[str]) -> int:
    """Insert the reference genres unless the table already has rows.

    Ids follow the order of ``genre_names``, starting at 1 on a fresh table.
    """
    existing = session.execute(select(func.count()).select_from(Genre)).scalar_one()
    if existing:
        logger.info(f"Genres already seeded ({existing} rows), skipping")
        return 0

    for name in genre_names:
        session.add(Genre(name=name))
    session.commit()
    logger.info(f"Seeded {len(genre_names)} genres")
    return len(genre_names)


def init_db(engine: Engine, genre_names: Sequence[str] | None = None) -> int:
    """Create the schema and seed genres on first run.

    Returns:
        Number of genres inserted; 0 when the table was already populated.
    """
    names = list(genre_names) if genre_names is not None else settings.CATALOG.genre_seed

    try:
        create_tables(engine)
        with Session(engine) as session:
            try:
                return seed_genres(session, names)
            except SQLAlchemyError:
                session.rollback()
                raise
    except SQLAlchemyError as exc:
        logger.error(f"Error initializing database: {exc}")
        raise StorageError.from_sqlalchemy(exc, "initialize database") from exc
