from .db import build_engine, close_db, engine, session_factory, session_scope
from .exceptions import ActorLinkedError, StorageError, StoreError
from .settings import settings

__all__ = [
    "ActorLinkedError",
    "StorageError",
    "StoreError",
    "build_engine",
    "close_db",
    "engine",
    "session_factory",
    "session_scope",
    "settings",
]
