from pydantic import field_validator
from sqlmodel import Field, SQLModel


class ActorBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, index=True, description="Actor name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        # Runs before min_length, so blank names are rejected
        return value.strip() if isinstance(value, str) else value


class Actor(ActorBase, table=True):
    __tablename__ = "actors"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)


class ActorCreate(ActorBase):
    pass


class ActorRead(ActorBase):
    id: int
