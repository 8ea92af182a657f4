from enum import Enum
from typing import Any

from sqlalchemy import Column, Table

from .movie_actor import MovieActor
from .movie_genre import MovieGenre


class MovieLink(str, Enum):
    """The two many-to-many relations a movie owns.

    Each member resolves to its junction table and the column holding the
    related id, so link queries are built from table metadata only.
    """

    ACTOR = "movie_actors"
    GENRE = "movie_genres"

    @property
    def table(self) -> Table:
        if self is MovieLink.ACTOR:
            return MovieActor.__table__
        return MovieGenre.__table__

    @property
    def movie_column(self) -> Column:
        return self.table.c.movie_id

    @property
    def related_column(self) -> Column:
        if self is MovieLink.ACTOR:
            return MovieActor.__table__.c.actor_id
        return MovieGenre.__table__.c.genre_id

    def values(self, movie_id: int, related_id: int) -> dict[str, Any]:
        return {"movie_id": movie_id, self.related_column.key: related_id}
