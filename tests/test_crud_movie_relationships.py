from moviedb.crud.movie import CRUDMovie, _unique_ids
from moviedb.models import MovieLink, MovieUpdate


class _EmptyScalarResult:
    def __init__(self, rows):
        self._rows = rows

    def all(self):
        return self._rows

    def first(self):
        return self._rows[0] if self._rows else None


class _EmptyResult:
    def __init__(self, rows):
        self._rows = rows

    def scalars(self):
        return _EmptyScalarResult(self._rows)


class DummySession:
    def __init__(self, existing=None):
        self.existing = list(existing or [])
        self.executed_statements = []
        self.executed_params = []

    def execute(self, statement, params=None):
        self.executed_statements.append(statement)
        self.executed_params.append(params)
        return _EmptyResult(self.existing)


def test_sync_links_deduplicates_relations():
    session = DummySession()
    movie_crud = CRUDMovie(session)

    changed = movie_crud._sync_links(42, MovieLink.GENRE, [1, 1, 2, 2, 3])

    # select existing, then one insert for the new ids
    assert len(session.executed_statements) == 2
    assert session.executed_params[-1] == [
        {"movie_id": 42, "genre_id": 1},
        {"movie_id": 42, "genre_id": 2},
        {"movie_id": 42, "genre_id": 3},
    ]
    assert changed is True


def test_sync_links_uses_actor_column_for_actor_links():
    session = DummySession()
    movie_crud = CRUDMovie(session)

    movie_crud._sync_links(99, MovieLink.ACTOR, [5, 5, 6])

    assert session.executed_params[-1] == [
        {"movie_id": 99, "actor_id": 5},
        {"movie_id": 99, "actor_id": 6},
    ]


def test_sync_links_no_changes_skips_writes():
    session = DummySession(existing=[3, 4])
    movie_crud = CRUDMovie(session)

    changed = movie_crud._sync_links(7, MovieLink.GENRE, [3, 4, 3])

    assert changed is False
    assert len(session.executed_statements) == 1


def test_sync_links_removes_only_stale_ids():
    session = DummySession(existing=[1, 2, 3])
    movie_crud = CRUDMovie(session)

    changed = movie_crud._sync_links(7, MovieLink.ACTOR, [2, 3])

    # select existing, then one delete; nothing to insert
    assert changed is True
    assert len(session.executed_statements) == 2
    assert "DELETE FROM movie_actors" in str(session.executed_statements[1])


def test_unique_ids_keeps_first_seen_order():
    assert _unique_ids([4, None, 2, 4, 1, 2]) == [4, 2, 1]


def test_movie_links_map_to_junction_tables():
    assert MovieLink.ACTOR.table.name == "movie_actors"
    assert MovieLink.ACTOR.related_column.key == "actor_id"
    assert MovieLink.GENRE.table.name == "movie_genres"
    assert MovieLink.GENRE.related_column.key == "genre_id"


def test_update_missing_movie_does_not_open_transaction():
    session = DummySession()
    movie_crud = CRUDMovie(session)

    updated = movie_crud.update(MovieUpdate(id=5, title="Ghost"))

    assert updated is False
    # only the lookup of the existing row ran
    assert len(session.executed_statements) == 1
