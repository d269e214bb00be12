from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie


class ListMoviesUseCase:
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
    async def list_movies(self) -> List[Movie]:
        movies = await self.movie_query_repo.list_movies()
        Logger.base.info(f'🎬 [LIST_MOVIES] Found {len(movies)} movies')
        return movies
