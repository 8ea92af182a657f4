"""Movie catalog persistence: actors, genres and movies on SQLite."""
