from sqlmodel import Field, SQLModel


class MovieActor(SQLModel, table=True):
    __tablename__ = "movie_actors"

    movie_id: int | None = Field(
        default=None, foreign_key="movies.id", primary_key=True, ondelete="CASCADE"
    )
    actor_id: int | None = Field(
        default=None, foreign_key="actors.id", primary_key=True, ondelete="CASCADE"
    )
