from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.cinema.domain.entity.seat_entity import Seat


class ListSeatsUseCase:
    def __init__(self, seat_query_repo: ISeatQueryRepo) -> None:
        self.seat_query_repo = seat_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo]),
    ) -> Self:
        return cls(seat_query_repo=seat_query_repo)

    @Logger.io
    async def list_seats(self) -> List[Seat]:
        return await self.seat_query_repo.list_seats()

    @Logger.io
    async def list_seats_for_showtime(self, *, showtime_id: int) -> List[Seat]:
        if not await self.seat_query_repo.showtime_exists(showtime_id=showtime_id):
            raise NotFoundError(f'Showtime {showtime_id} not found')

        seats = await self.seat_query_repo.list_seats_for_showtime(showtime_id=showtime_id)
        booked = sum(1 for seat in seats if seat.is_booked)
        Logger.base.info(
            f'💺 [SHOWTIME_SEATS] showtime={showtime_id} {booked}/{len(seats)} seats booked'
        )
        return seats
