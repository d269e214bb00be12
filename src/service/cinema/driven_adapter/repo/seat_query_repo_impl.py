"""
Seat Query Repository Implementation - seat map reads

Reads never lock; is_booked reflects committed bookings at query time.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.domain.enum.seat_type import SeatType
from src.service.cinema.driven_adapter.model.booking_detail_model import BookingDetailModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class SeatQueryRepoImpl(ISeatQueryRepo):
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
    def _model_to_seat(seat_model: SeatModel, *, is_booked: bool | None = None) -> Seat:
        return Seat(
            id=seat_model.id,
            row_letter=seat_model.row_letter,
            seat_number=seat_model.seat_number,
            seat_type=SeatType(seat_model.seat_type),
            price=Decimal(seat_model.price),
            is_booked=is_booked,
        )

    @Logger.io
    async def list_seats(self) -> List[Seat]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatModel).order_by(SeatModel.row_letter, SeatModel.seat_number)
            )
            return [self._model_to_seat(seat) for seat in result.scalars().all()]

    @Logger.io
    async def showtime_exists(self, *, showtime_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(ShowtimeModel.id).where(ShowtimeModel.id == showtime_id)
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_seats_for_showtime(self, *, showtime_id: int) -> List[Seat]:
        stmt = (
            select(SeatModel, BookingDetailModel.id.is_not(None).label('is_booked'))
            .outerjoin(
                BookingDetailModel,
                and_(
                    BookingDetailModel.seat_id == SeatModel.id,
                    BookingDetailModel.showtime_id == showtime_id,
                ),
            )
            .order_by(SeatModel.row_letter, SeatModel.seat_number)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [
                self._model_to_seat(seat, is_booked=bool(is_booked))
                for seat, is_booked in result.all()
            ]
