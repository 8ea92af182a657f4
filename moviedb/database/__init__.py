from .init_db import create_tables, init_db, seed_genres

__all__ = ["create_tables", "init_db", "seed_genres"]
