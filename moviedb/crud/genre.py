from sqlalchemy.orm import Session
from sqlmodel import select

from moviedb.crud.base import CRUDBase
from moviedb.models.genre import Genre, GenreRead


class CRUDGenre(CRUDBase[Genre, GenreRead]):
    """Read access to the seeded genre reference table."""

    def __init__(self, session: Session):
        super().__init__(Genre, GenreRead, session)

    def get_by_id(self, id: int) -> GenreRead | None:
        """Alias for read for consistency."""
        return self.read(id)

    def get_by_name(self, name: str) -> GenreRead | None:
        with self._storage_errors("read genre by name"):
            statement = select(Genre).where(Genre.name == name)
            result = self.session.execute(statement)
            genre = result.scalars().first()
        return self._to_read(genre) if genre is not None else None
