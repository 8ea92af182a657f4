import json
import logging

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from moviedb.core.exceptions import StorageError
from moviedb.core.logging import JSONFormatter, get_structured_logger
from moviedb.core.settings import DEFAULT_GENRES, CatalogSettings, Settings


def test_settings_defaults():
    config = Settings(_env_file=None)

    assert config.DATABASE_URL.startswith("sqlite")
    assert config.CATALOG.actor_prefix_min_length == 3
    assert config.CATALOG.genre_seed == DEFAULT_GENRES


def test_settings_reject_non_sqlite_url():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="postgresql://localhost/movies")


def test_settings_read_nested_catalog_from_env(monkeypatch):
    monkeypatch.setenv("CATALOG__ACTOR_PREFIX_MIN_LENGTH", "2")

    assert Settings(_env_file=None).CATALOG.actor_prefix_min_length == 2


@pytest.mark.parametrize("seed", [[], ["Action", "Action"], ["Drama", " "]])
def test_catalog_rejects_bad_genre_seed(seed):
    with pytest.raises(ValidationError):
        CatalogSettings(genre_seed=seed)


def test_catalog_rejects_zero_prefix_length():
    with pytest.raises(ValidationError):
        CatalogSettings(actor_prefix_min_length=0)


def test_json_formatter_includes_structured_extras(caplog):
    logger = get_structured_logger("moviedb.test")

    with caplog.at_level(logging.INFO, logger="moviedb.test"):
        logger.info("Created movie", movie_id=7)

    payload = json.loads(JSONFormatter().format(caplog.records[0]))
    assert payload["message"] == "Created movie"
    assert payload["level"] == "INFO"
    assert payload["movie_id"] == 7


def test_storage_error_defaults_code_without_driver_error():
    error = StorageError.from_sqlalchemy(SQLAlchemyError("boom"), "read movie")

    assert error.error_code == "DATABASE_ERROR"
    assert "read movie" in error.detail
