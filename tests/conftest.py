import pytest
from sqlalchemy.orm import Session

from moviedb.core.db import build_engine
from moviedb.crud import CRUDActor, CRUDGenre, CRUDMovie
from moviedb.database.init_db import init_db

TEST_GENRES = ["Action", "Adventure", "Comedy"]


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://")
    init_db(test_engine, TEST_GENRES)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine, expire_on_commit=False) as db:
        yield db


@pytest.fixture
def actor_store(session):
    return CRUDActor(session, prefix_min_length=3)


@pytest.fixture
def genre_store(session):
    return CRUDGenre(session)


@pytest.fixture
def movie_store(session):
    return CRUDMovie(session)


@pytest.fixture
def actor_ids(actor_store):
    return [
        actor_store.create(name)
        for name in ["Leonardo Di Caprio", "Meryl Streep", "Tom Hanks", "Viola Davis"]
    ]
