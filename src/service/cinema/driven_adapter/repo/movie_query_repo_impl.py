"""
Movie Query Repository Implementation - catalog reads
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class MovieQueryRepoImpl(IMovieQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _model_to_movie(movie_model: MovieModel) -> Movie:
        return Movie(
            id=movie_model.id,
            title=movie_model.title,
            description=movie_model.description,
            poster_url=movie_model.poster_url,
        )

    @Logger.io
    async def list_movies(self) -> List[Movie]:
        async with self._get_session() as session:
            result = await session.execute(select(MovieModel).order_by(MovieModel.id))
            return [self._model_to_movie(movie) for movie in result.scalars().all()]

    @Logger.io
    async def get_movie(self, *, movie_id: int) -> Optional[Movie]:
        async with self._get_session() as session:
            movie_model = await session.get(MovieModel, movie_id)
            return self._model_to_movie(movie_model) if movie_model else None

    @Logger.io
    async def count_movies(self) -> int:
        async with self._get_session() as session:
            result = await session.execute(select(func.count()).select_from(MovieModel))
            return result.scalar_one()

    @Logger.io
    async def list_showtimes(self, *, movie_id: Optional[int] = None) -> List[Showtime]:
        stmt = (
            select(ShowtimeModel, MovieModel.title)
            .join(MovieModel, ShowtimeModel.movie_id == MovieModel.id)
            .order_by(ShowtimeModel.time, ShowtimeModel.id)
        )
        if movie_id is not None:
            stmt = stmt.where(ShowtimeModel.movie_id == movie_id)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [
                Showtime(
                    id=showtime.id,
                    movie_id=showtime.movie_id,
                    time=showtime.time,
                    movie_title=title,
                )
                for showtime, title in result.all()
            ]
