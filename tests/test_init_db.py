import runpy
from pathlib import Path

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from moviedb.core.db import build_engine, session_scope
from moviedb.core.settings import DEFAULT_GENRES
from moviedb.crud import CRUDGenre
from moviedb.database.init_db import init_db

INIT_SCRIPT = Path(__file__).parent.parent / "scripts" / "init_database.py"


def test_init_db_creates_all_tables(engine):
    tables = set(inspect(engine).get_table_names())

    assert {"actors", "genres", "movies", "movie_actors", "movie_genres"} <= tables


def test_init_db_indexes_actor_names(engine):
    indexed_columns = [
        column
        for index in inspect(engine).get_indexes("actors")
        for column in index["column_names"]
    ]

    assert "name" in indexed_columns


def test_init_db_junction_tables_cascade_on_delete(engine):
    foreign_keys = inspect(engine).get_foreign_keys("movie_actors")

    referred = {fk["referred_table"]: fk["options"].get("ondelete") for fk in foreign_keys}
    assert referred == {"movies": "CASCADE", "actors": "CASCADE"}


def test_init_db_seeds_genres_in_order(engine):
    with Session(engine) as session:
        rows = session.execute(text("SELECT id, name FROM genres ORDER BY id")).all()

    assert [tuple(row) for row in rows] == [(1, "Action"), (2, "Adventure"), (3, "Comedy")]


def test_init_db_is_idempotent(engine):
    seeded = init_db(engine, ["Horror", "Western"])

    with Session(engine) as session:
        count = session.execute(text("SELECT COUNT(*) FROM genres")).scalar_one()

    assert seeded == 0
    assert count == 3


def test_init_db_defaults_to_configured_genres():
    fresh = build_engine("sqlite://")
    try:
        seeded = init_db(fresh)
        with Session(fresh) as session:
            names = session.execute(text("SELECT name FROM genres ORDER BY id")).scalars().all()
    finally:
        fresh.dispose()

    assert seeded == len(DEFAULT_GENRES)
    assert names == DEFAULT_GENRES


def test_connections_enforce_foreign_keys(engine):
    with engine.connect() as connection:
        enabled = connection.execute(text("PRAGMA foreign_keys")).scalar_one()

    assert enabled == 1


def test_session_scope_binds_stores_to_engine(engine):
    with session_scope(engine) as session:
        genres = CRUDGenre(session).read_all()

    assert [g.name for g in genres] == ["Action", "Adventure", "Comedy"]


def test_init_database_script_creates_file(tmp_path):
    db_file = tmp_path / "catalog.sqlite"
    init_database = runpy.run_path(str(INIT_SCRIPT), run_name="init_database")

    assert init_database["main"]([str(db_file)]) == 0
    assert init_database["main"]([str(db_file)]) == 0

    check = build_engine(f"sqlite:///{db_file}")
    try:
        with session_scope(check) as session:
            count = session.execute(text("SELECT COUNT(*) FROM genres")).scalar_one()
    finally:
        check.dispose()
    assert count == len(DEFAULT_GENRES)
