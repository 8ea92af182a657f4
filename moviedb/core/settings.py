from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GENRES: list[str] = [
    "Action",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Family",
    "Fantasy",
    "Film Noir",
    "History",
    "Horror",
    "Musical",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Sport",
    "Thriller",
    "War",
    "Western",
]


class CatalogSettings(BaseModel):
    # Autocomplete only kicks in once the typed prefix is this long
    actor_prefix_min_length: int = Field(default=3, ge=1)
    genre_seed: list[str] = Field(default_factory=lambda: list(DEFAULT_GENRES))

    @field_validator("genre_seed")
    @classmethod
    def validate_genre_seed(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if not names or any(not name for name in names):
            raise ValueError("genre_seed must contain non-empty genre names")
        if len(set(names)) != len(names):
            raise ValueError("genre_seed must not contain duplicate names")
        return names


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///moviedb.sqlite"
    DATABASE_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    CATALOG: CatalogSettings = CatalogSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    @field_validator("DATABASE_URL")
    def validate_database_url(cls, v):
        if not v or not v.startswith("sqlite"):
            raise ValueError("DATABASE_URL must be a valid SQLite connection string")
        return v

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return level


# Singleton instance
settings = Settings()
