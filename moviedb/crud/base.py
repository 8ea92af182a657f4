from collections.abc import Generator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlmodel import SQLModel, select

from moviedb.core.exceptions import StorageError
from moviedb.core.logging import get_structured_logger

logger = get_structured_logger(__name__)


class CRUDBase[ModelType: SQLModel, ReadSchemaType: SQLModel]:
    """Shared plumbing for the stores.

    A store owns no connection of its own: the session is handed in by the
    caller and must not be shared between threads.
    """

    def __init__(
        self,
        model: type[ModelType],
        read_schema: type[ReadSchemaType],
        session: Session,
    ):
        self.model = model
        self.read_schema = read_schema
        self.session = session

    def read(self, id: Any) -> ReadSchemaType | None:
        with self._storage_errors(f"read {self.model.__tablename__}"):
            statement = select(self.model).where(self.model.id == id)
            result = self.session.execute(statement)
            obj = result.scalars().first()
        return self._to_read(obj) if obj is not None else None

    def read_all(self) -> list[ReadSchemaType]:
        with self._storage_errors(f"read all {self.model.__tablename__}"):
            statement = select(self.model).order_by(self.model.id)
            result = self.session.execute(statement)
            rows = result.scalars().all()
        return [self._to_read(obj) for obj in rows]

    def get_by_ids(self, ids: Sequence[int]) -> list[ReadSchemaType]:
        """Fetch several rows, returned in the order the ids were given."""
        if not ids:
            return []

        with self._storage_errors(f"read {self.model.__tablename__} by ids"):
            statement = select(self.model).where(self.model.id.in_(set(ids)))
            result = self.session.execute(statement)
            obj_map = {obj.id: obj for obj in result.scalars().all()}
        return [self._to_read(obj_map[oid]) for oid in dict.fromkeys(ids) if oid in obj_map]

    def _to_read(self, obj: ModelType) -> ReadSchemaType:
        return self.read_schema.model_validate(obj, from_attributes=True)

    @contextmanager
    def _storage_errors(self, action: str) -> Generator[None, None, None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error(f"Database error during {action}: {exc}", action=action)
            raise StorageError.from_sqlalchemy(exc, action) from exc

    @contextmanager
    def _transaction(self, action: str) -> Generator[Session, None, None]:
        """Run a unit of work: commit on success, roll back on any failure.

        Driver errors leave the scope as ``StorageError``; everything else
        propagates unchanged after the rollback.
        """
        with self._storage_errors(action):
            try:
                yield self.session
                self.session.commit()
                logger.debug(f"Committed {action}", action=action)
            except BaseException:
                self.session.rollback()
                logger.info(f"Transaction rolled back during {action}", action=action)
                raise
            finally:
                # Core-level UPDATE/DELETE bypass the identity map
                self.session.expire_all()
