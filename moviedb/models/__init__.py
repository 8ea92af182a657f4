from .actor import Actor, ActorCreate, ActorRead
from .genre import Genre, GenreRead
from .movie import Movie, MovieCreate, MovieRead, MovieUpdate
from .movie_actor import MovieActor
from .movie_genre import MovieGenre
from .movie_link import MovieLink

__all__ = [
    "Actor",
    "ActorCreate",
    "ActorRead",
    "Genre",
    "GenreRead",
    "Movie",
    "MovieActor",
    "MovieCreate",
    "MovieGenre",
    "MovieLink",
    "MovieRead",
    "MovieUpdate",
]
