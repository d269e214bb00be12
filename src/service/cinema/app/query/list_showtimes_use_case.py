from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime


class ListShowtimesUseCase:
    def __init__(self, movie_query_repo: IMovieQueryRepo) -> None:
        self.movie_query_repo = movie_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        movie_query_repo: IMovieQueryRepo = Depends(Provide[Container.movie_query_repo]),
    ) -> Self:
        return cls(movie_query_repo=movie_query_repo)

    @Logger.io
    async def list_showtimes(self, *, movie_id: Optional[int] = None) -> List[Showtime]:
        """All showtimes, or only those of one movie (empty list for an unknown movie)"""
        showtimes = await self.movie_query_repo.list_showtimes(movie_id=movie_id)
        Logger.base.info(f'🕐 [LIST_SHOWTIMES] movie={movie_id} found {len(showtimes)}')
        return showtimes
