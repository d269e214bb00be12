from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.get_movie_use_case import GetMovieUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.driving_adapter.schema.envelope_schema import (
    ApiListResponse,
    ApiResponse,
)
from src.service.cinema.driving_adapter.schema.movie_schema import MovieResponse, ShowtimeResponse


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_movies(
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> ApiListResponse[MovieResponse]:
    movies = await use_case.list_movies()
    return ApiListResponse[MovieResponse](
        message='Movies retrieved',
        data=[MovieResponse.from_entity(movie) for movie in movies],
        count=len(movies),
    )


@router.get('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: GetMovieUseCase = Depends(GetMovieUseCase.depends),
) -> ApiResponse[MovieResponse]:
    movie = await use_case.get_movie(movie_id=movie_id)
    return ApiResponse[MovieResponse](
        message='Movie retrieved', data=MovieResponse.from_entity(movie)
    )


@router.get('/{movie_id}/showtimes', status_code=status.HTTP_200_OK)
@Logger.io
async def list_movie_showtimes(
    movie_id: int,
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> ApiListResponse[ShowtimeResponse]:
    showtimes = await use_case.list_showtimes(movie_id=movie_id)
    return ApiListResponse[ShowtimeResponse](
        message='Showtimes retrieved',
        data=[ShowtimeResponse.from_entity(showtime) for showtime in showtimes],
        count=len(showtimes),
    )
