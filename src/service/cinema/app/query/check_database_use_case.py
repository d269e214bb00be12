from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from src.platform.config.di import Container
from src.platform.exception.exceptions import StoreUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo


@attrs.define(frozen=True)
class DatabaseStatus:
    connected: bool
    movie_count: int


class CheckDatabaseUseCase:
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
    async def check(self) -> DatabaseStatus:
        try:
            movie_count = await self.movie_query_repo.count_movies()
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            Logger.base.error(f'❌ [TEST_DB] database probe failed: {e}')
            raise StoreUnavailableError('Database connection failed') from e
        return DatabaseStatus(connected=True, movie_count=movie_count)
