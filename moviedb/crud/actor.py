from sqlalchemy import String, delete, func, update
from sqlalchemy.orm import Session
from sqlmodel import select

from moviedb.core.exceptions import ActorLinkedError
from moviedb.core.logging import get_structured_logger
from moviedb.core.settings import settings
from moviedb.crud.base import CRUDBase
from moviedb.models.actor import Actor, ActorCreate, ActorRead
from moviedb.models.movie_actor import MovieActor

logger = get_structured_logger(__name__)


class CRUDActor(CRUDBase[Actor, ActorRead]):
    def __init__(self, session: Session, *, prefix_min_length: int | None = None):
        super().__init__(Actor, ActorRead, session)
        self.prefix_min_length = (
            prefix_min_length
            if prefix_min_length is not None
            else settings.CATALOG.actor_prefix_min_length
        )

    def create(self, name: str) -> int:
        """Insert a new actor and return its id. Duplicate names are allowed."""
        actor_in = ActorCreate(name=name)
        with self._transaction("create actor") as db:
            db_obj = Actor.model_validate(actor_in)
            db.add(db_obj)
            db.flush()
            actor_id = db_obj.id

        logger.info("Created actor", actor_id=actor_id)
        return actor_id

    def get_or_create(self, name: str) -> int:
        actor_in = ActorCreate(name=name)
        existing = self.get_by_name(actor_in.name)
        if existing is not None:
            return existing.id
        return self.create(actor_in.name)

    def update(self, actor: ActorRead) -> bool:
        """Rename an actor. Returns False when no actor has that id."""
        actor_in = ActorCreate(name=actor.name)
        with self._transaction("update actor") as db:
            stmt = update(Actor).where(Actor.id == actor.id).values(name=actor_in.name)
            result = db.execute(stmt)
            updated = result.rowcount > 0

        return updated

    def count_movie_links(self, actor_id: int) -> int:
        with self._storage_errors("count actor movie links"):
            statement = select(func.count()).select_from(MovieActor).where(
                MovieActor.actor_id == actor_id
            )
            return self.session.execute(statement).scalar_one()

    def delete(self, id: int) -> bool:
        """Remove an actor that no movie references.

        Raises:
            ActorLinkedError: the actor still appears in at least one movie.
        """
        movie_count = self.count_movie_links(id)
        if movie_count > 0:
            logger.warning(
                "Refusing to delete linked actor", actor_id=id, movie_count=movie_count
            )
            raise ActorLinkedError(id, movie_count)

        with self._transaction("delete actor") as db:
            result = db.execute(delete(Actor).where(Actor.id == id))
            deleted = result.rowcount > 0

        return deleted

    def get_by_name(self, name: str) -> ActorRead | None:
        with self._storage_errors("read actor by name"):
            statement = select(Actor).where(Actor.name == name).order_by(Actor.id)
            result = self.session.execute(statement)
            actor = result.scalars().first()
        return self._to_read(actor) if actor is not None else None

    def find_by_prefix(self, prefix: str, limit: int | None = 10) -> list[ActorRead]:
        """Case-insensitive name prefix search used for autocompletion.

        Prefixes shorter than ``prefix_min_length`` yield no suggestions.
        At most ``limit`` actors are returned; ``None`` lifts the cap.
        """
        prefix = prefix.strip()
        if len(prefix) < self.prefix_min_length:
            return []

        with self._storage_errors("search actors by prefix"):
            statement = (
                select(Actor)
                .where(
                    func.casefold(Actor.name, type_=String).startswith(
                        prefix.casefold(), autoescape=True
                    )
                )
                .order_by(Actor.name, Actor.id)
            )
            if limit is not None:
                statement = statement.limit(limit)
            result = self.session.execute(statement)
            actors = result.scalars().all()
        return [self._to_read(actor) for actor in actors]
