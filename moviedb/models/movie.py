from sqlmodel import Field, SQLModel


class MovieBase(SQLModel):
    title: str = Field(min_length=1, max_length=1000, description="Movie title")
    release_year: int | None = Field(default=None, description="Release year")

    # Crew
    director: str | None = Field(default=None, max_length=255)
    writer: str | None = Field(default=None, max_length=255)
    producer: str | None = Field(default=None, max_length=255)
    cinematographer: str | None = Field(default=None, max_length=255)

    budget: int | None = Field(default=None, description="Production budget")
    country: str | None = Field(
        default=None, max_length=100, description="Country of production"
    )


class Movie(MovieBase, table=True):
    __tablename__ = "movies"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)


class MovieCreate(MovieBase):
    actor_ids: list[int] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)


class MovieRead(MovieBase):
    id: int
    actor_ids: list[int] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)


class MovieUpdate(MovieRead):
    """Full replacement of a stored movie: scalars and both id lists."""
