from sqlmodel import Field, SQLModel


class GenreBase(SQLModel):
    name: str = Field(max_length=100, description="Genre name")


class Genre(GenreBase, table=True):
    __tablename__ = "genres"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)


class GenreRead(GenreBase):
    id: int
