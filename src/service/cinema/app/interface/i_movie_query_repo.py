from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime


class IMovieQueryRepo(ABC):
    """Movie / showtime catalog reads"""

    @abstractmethod
    async def list_movies(self) -> List[Movie]:
        pass

    @abstractmethod
    async def get_movie(self, *, movie_id: int) -> Optional[Movie]:
        pass

    @abstractmethod
    async def count_movies(self) -> int:
        pass

    @abstractmethod
    async def list_showtimes(self, *, movie_id: Optional[int] = None) -> List[Showtime]:
        """Showtimes ordered by start time, optionally for one movie"""
        pass
