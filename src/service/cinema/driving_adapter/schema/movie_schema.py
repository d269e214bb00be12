from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime


class MovieResponse(BaseModel):
    id: int
    title: str
    description: str
    poster_url: str

    @classmethod
    def from_entity(cls, movie: Movie) -> 'MovieResponse':
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.display_description,
            poster_url=movie.display_poster_url,
        )


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    movie_title: Optional[str] = None
    time: datetime

    @classmethod
    def from_entity(cls, showtime: Showtime) -> 'ShowtimeResponse':
        return cls(
            id=showtime.id,
            movie_id=showtime.movie_id,
            movie_title=showtime.movie_title,
            time=showtime.time,
        )
