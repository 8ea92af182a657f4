from collections import defaultdict
from collections.abc import Iterable, Sequence

from sqlalchemy import String, delete, func, insert, update
from sqlalchemy.orm import Session
from sqlmodel import select

from moviedb.core.exceptions import StorageError
from moviedb.core.logging import get_structured_logger
from moviedb.crud.base import CRUDBase
from moviedb.models.movie import Movie, MovieBase, MovieCreate, MovieRead, MovieUpdate
from moviedb.models.movie_link import MovieLink

logger = get_structured_logger(__name__)

SCALAR_FIELDS = set(MovieBase.model_fields)


def _unique_ids(ids: Iterable[int | None]) -> list[int]:
    """Drop duplicates and None while keeping first-seen order."""
    ordered: list[int] = []
    seen: set[int] = set()
    for related_id in ids:
        if related_id is None or related_id in seen:
            continue
        seen.add(related_id)
        ordered.append(related_id)
    return ordered


class CRUDMovie(CRUDBase[Movie, MovieRead]):
    def __init__(self, session: Session):
        super().__init__(Movie, MovieRead, session)

    def create(self, movie_in: MovieCreate) -> int:
        """Insert a movie together with its actor and genre links.

        The movie row and every link row are written in one transaction;
        nothing persists if any insert fails.

        Returns:
            The generated movie id.

        Raises:
            StorageError: the database rejected one of the inserts (for
                example an unknown actor or genre id).
        """
        with self._transaction("create movie") as db:
            db_obj = Movie.model_validate(movie_in.model_dump(include=SCALAR_FIELDS))
            db.add(db_obj)
            db.flush()

            movie_id = db_obj.id
            if movie_id is None or movie_id <= 0:
                raise StorageError(
                    "Failed to retrieve generated movie ID", "MISSING_GENERATED_ID"
                )

            self._insert_links(movie_id, MovieLink.ACTOR, movie_in.actor_ids)
            self._insert_links(movie_id, MovieLink.GENRE, movie_in.genre_ids)

        logger.info("Created movie", movie_id=movie_id, title=movie_in.title)
        return movie_id

    def read(self, id: int) -> MovieRead | None:
        with self._storage_errors("read movie"):
            statement = select(Movie).where(Movie.id == id)
            result = self.session.execute(statement)
            movie = result.scalars().first()
            if movie is None:
                return None
            return self._with_links([movie])[0]

    def read_all(self) -> list[MovieRead]:
        with self._storage_errors("read all movies"):
            statement = select(Movie).order_by(Movie.id)
            result = self.session.execute(statement)
            return self._with_links(result.scalars().all())

    def search_by_title(self, fragment: str) -> list[MovieRead]:
        """Case-insensitive substring match on the title."""
        fragment = fragment.strip()
        if not fragment:
            return self.read_all()

        with self._storage_errors("search movies by title"):
            statement = (
                select(Movie)
                .where(
                    func.casefold(Movie.title, type_=String).contains(
                        fragment.casefold(), autoescape=True
                    )
                )
                .order_by(Movie.title, Movie.id)
            )
            result = self.session.execute(statement)
            return self._with_links(result.scalars().all())

    def list_by_actor(self, actor_id: int) -> list[MovieRead]:
        return self._list_linked(MovieLink.ACTOR, actor_id)

    def list_by_genre(self, genre_id: int) -> list[MovieRead]:
        return self._list_linked(MovieLink.GENRE, genre_id)

    def update(self, movie_in: MovieUpdate) -> bool:
        """Apply a full replacement of a stored movie.

        Scalar columns are rewritten together, and only when at least one
        differs. Link tables are reconciled set-wise: rows for ids that
        disappeared are deleted, rows for new ids inserted, the rest left
        alone.

        Returns:
            False when no movie has ``movie_in.id``; nothing is written then.
        """
        existing = self.read(movie_in.id)
        if existing is None:
            logger.info("Movie not found for update", movie_id=movie_in.id)
            return False

        with self._transaction("update movie") as db:
            scalars = movie_in.model_dump(include=SCALAR_FIELDS)
            scalars_changed = scalars != existing.model_dump(include=SCALAR_FIELDS)
            if scalars_changed:
                stmt = update(Movie).where(Movie.id == movie_in.id).values(**scalars)
                db.execute(stmt)

            actors_changed = self._sync_links(
                movie_in.id, MovieLink.ACTOR, movie_in.actor_ids
            )
            genres_changed = self._sync_links(
                movie_in.id, MovieLink.GENRE, movie_in.genre_ids
            )

        logger.info(
            "Updated movie",
            movie_id=movie_in.id,
            scalars_changed=scalars_changed,
            actors_changed=actors_changed,
            genres_changed=genres_changed,
        )
        return True

    def delete(self, id: int) -> bool:
        """Remove a movie and its link rows. Returns False if it did not exist."""
        with self._transaction("delete movie") as db:
            for link in MovieLink:
                db.execute(delete(link.table).where(link.movie_column == id))
            result = db.execute(delete(Movie).where(Movie.id == id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted movie", movie_id=id)
        return deleted

    def _list_linked(self, link: MovieLink, related_id: int) -> list[MovieRead]:
        with self._storage_errors(f"list movies by {link.related_column.key}"):
            statement = (
                select(Movie)
                .join(link.table, link.movie_column == Movie.id)
                .where(link.related_column == related_id)
                .order_by(Movie.id)
            )
            result = self.session.execute(statement)
            return self._with_links(result.scalars().all())

    def _with_links(self, movies: Sequence[Movie]) -> list[MovieRead]:
        if not movies:
            return []

        movie_ids = [movie.id for movie in movies]
        actor_map = self._fetch_link_map(MovieLink.ACTOR, movie_ids)
        genre_map = self._fetch_link_map(MovieLink.GENRE, movie_ids)
        return [
            MovieRead.model_validate(
                {
                    **movie.model_dump(),
                    "actor_ids": actor_map.get(movie.id, []),
                    "genre_ids": genre_map.get(movie.id, []),
                }
            )
            for movie in movies
        ]

    def _fetch_link_map(
        self, link: MovieLink, movie_ids: Sequence[int]
    ) -> dict[int, list[int]]:
        statement = (
            select(link.movie_column, link.related_column)
            .where(link.movie_column.in_(set(movie_ids)))
            .order_by(link.movie_column, link.related_column)
        )
        result = self.session.execute(statement)
        link_map: dict[int, list[int]] = defaultdict(list)
        for movie_id, related_id in result.all():
            link_map[movie_id].append(related_id)
        return link_map

    def _fetch_link_ids(self, movie_id: int, link: MovieLink) -> list[int]:
        statement = (
            select(link.related_column)
            .where(link.movie_column == movie_id)
            .order_by(link.related_column)
        )
        result = self.session.execute(statement)
        return list(result.scalars().all())

    def _insert_links(
        self, movie_id: int, link: MovieLink, related_ids: Iterable[int | None]
    ) -> None:
        values = [link.values(movie_id, rid) for rid in _unique_ids(related_ids)]
        if values:
            self.session.execute(insert(link.table), values)

    def _sync_links(
        self, movie_id: int, link: MovieLink, related_ids: Iterable[int | None]
    ) -> bool:
        """Reconcile one link table with the desired id set.

        Returns True if any row was deleted or inserted.
        """
        ordered_ids = _unique_ids(related_ids)
        existing_ids = set(self._fetch_link_ids(movie_id, link))
        desired_ids = set(ordered_ids)

        # Check if any changes are needed
        if existing_ids == desired_ids:
            return False

        stale_ids = existing_ids - desired_ids
        if stale_ids:
            stmt = delete(link.table).where(
                link.movie_column == movie_id,
                link.related_column.in_(stale_ids),
            )
            self.session.execute(stmt)

        new_ids = [rid for rid in ordered_ids if rid not in existing_ids]
        if new_ids:
            self.session.execute(
                insert(link.table), [link.values(movie_id, rid) for rid in new_ids]
            )

        return True
