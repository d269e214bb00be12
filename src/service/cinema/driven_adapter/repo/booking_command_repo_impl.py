"""
Booking Command Repository Implementation - write side of the booking transaction
"""

from decimal import Decimal
from typing import Iterable, Set

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.domain.entity.booking_entity import Booking, BookingConfirmation
from src.service.cinema.domain.entity.seat_entity import seat_label
from src.service.cinema.driven_adapter.model.booking_detail_model import BookingDetailModel
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class BookingCommandRepoImpl(IBookingCommandRepo):
    """Always bound to the unit of work's session; never opens its own."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def lock_showtime(self, *, showtime_id: int) -> bool:
        # SELECT ... FOR UPDATE serializes bookings of the same showtime (no-op on SQLite)
        result = await self.session.execute(
            select(ShowtimeModel.id).where(ShowtimeModel.id == showtime_id).with_for_update()
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def find_existing_seat_ids(self, *, seat_ids: Iterable[int]) -> Set[int]:
        result = await self.session.execute(
            select(SeatModel.id).where(SeatModel.id.in_(set(seat_ids)))
        )
        return set(result.scalars().all())

    @Logger.io
    async def check_availability(self, *, showtime_id: int, seat_ids: Iterable[int]) -> Set[int]:
        result = await self.session.execute(
            select(BookingDetailModel.seat_id).where(
                BookingDetailModel.showtime_id == showtime_id,
                BookingDetailModel.seat_id.in_(set(seat_ids)),
            )
        )
        return set(result.scalars().all())

    @Logger.io
    async def create_booking(self, *, booking: Booking) -> int:
        booking_model = BookingModel(
            showtime_id=booking.showtime_id,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
        )
        self.session.add(booking_model)
        await self.session.flush()
        return booking_model.id

    # A lost race surfaces here as IntegrityError; the use case turns it into a conflict
    @Logger.io(expected=(IntegrityError,))
    async def create_booking_details(
        self, *, booking_id: int, showtime_id: int, seat_ids: Iterable[int]
    ) -> None:
        self.session.add_all(
            [
                BookingDetailModel(booking_id=booking_id, seat_id=seat_id, showtime_id=showtime_id)
                for seat_id in seat_ids
            ]
        )
        await self.session.flush()

    @Logger.io
    async def get_booking_confirmation(self, *, booking_id: int) -> BookingConfirmation:
        header = (
            await self.session.execute(
                select(
                    BookingModel.id,
                    BookingModel.customer_name,
                    BookingModel.customer_email,
                    BookingModel.created_at,
                    MovieModel.title,
                    ShowtimeModel.time,
                )
                .join(ShowtimeModel, BookingModel.showtime_id == ShowtimeModel.id)
                .join(MovieModel, ShowtimeModel.movie_id == MovieModel.id)
                .where(BookingModel.id == booking_id)
            )
        ).one()

        seat_rows = (
            await self.session.execute(
                select(SeatModel.row_letter, SeatModel.seat_number, SeatModel.price)
                .join(BookingDetailModel, BookingDetailModel.seat_id == SeatModel.id)
                .where(BookingDetailModel.booking_id == booking_id)
                .order_by(SeatModel.row_letter, SeatModel.seat_number)
            )
        ).all()

        return BookingConfirmation(
            booking_id=header.id,
            customer_name=header.customer_name,
            customer_email=header.customer_email,
            created_at=header.created_at,
            movie_title=header.title,
            showtime=header.time,
            seats=','.join(seat_label(row.row_letter, row.seat_number) for row in seat_rows),
            total_price=sum((Decimal(row.price) for row in seat_rows), Decimal('0')),
        )
