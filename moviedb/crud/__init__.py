from .actor import CRUDActor
from .genre import CRUDGenre
from .movie import CRUDMovie

__all__ = [
    "CRUDActor",
    "CRUDGenre",
    "CRUDMovie",
]
