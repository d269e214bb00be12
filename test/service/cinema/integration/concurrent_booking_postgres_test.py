"""
Concurrent bookings against PostgreSQL

SQLite serializes every writer, so the showtime row lock and the unique
constraint only get exercised for real on PostgreSQL. Point TEST_POSTGRES_URL
at a throwaway database (postgresql+asyncpg://...) to run these.
"""

import asyncio
from collections.abc import AsyncGenerator
import os

import pytest
from sqlalchemy import func, insert, select

from src.platform.database.orm_db_setting import Base, Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import SeatsAlreadyBookedError
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.domain.entity.booking_entity import BookingConfirmation
from src.service.cinema.driven_adapter.model import (
    BookingDetailModel,
    MovieModel,
    SeatModel,
    ShowtimeModel,
)
from test.seed_constants import MOVIES, SEAT_A1, SEAT_A2, SEAT_A3, SEATS, SHOWTIME_ID, SHOWTIMES


TEST_POSTGRES_URL = os.environ.get('TEST_POSTGRES_URL')

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(not TEST_POSTGRES_URL, reason='TEST_POSTGRES_URL not set'),
]


@pytest.fixture
async def pg_database() -> AsyncGenerator[Database, None]:
    assert TEST_POSTGRES_URL
    db = Database(db_url=TEST_POSTGRES_URL)
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(insert(MovieModel), MOVIES)
        await conn.execute(insert(ShowtimeModel), SHOWTIMES)
        await conn.execute(insert(SeatModel), SEATS)
    yield db
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.dispose()


def _use_case(database: Database) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        uow_factory=lambda: SqlAlchemyUnitOfWork(session_factory=database.session)
    )


async def _detail_rows(database: Database) -> list[tuple[int, int]]:
    async with database.session() as session:
        result = await session.execute(
            select(BookingDetailModel.showtime_id, BookingDetailModel.seat_id)
        )
        return [tuple(row) for row in result.all()]


@pytest.mark.asyncio
async def test_overlapping_bookings_exactly_one_wins(pg_database: Database) -> None:
    use_case = _use_case(pg_database)

    results = await asyncio.gather(
        use_case.create_booking(
            showtime_id=SHOWTIME_ID,
            customer_name='Jane',
            customer_email='jane@x.com',
            seat_ids=[SEAT_A1, SEAT_A2],
        ),
        use_case.create_booking(
            showtime_id=SHOWTIME_ID,
            customer_name='Bob',
            customer_email='bob@x.com',
            seat_ids=[SEAT_A2, SEAT_A3],
        ),
        return_exceptions=True,
    )

    confirmed = [r for r in results if isinstance(r, BookingConfirmation)]
    conflicts = [r for r in results if isinstance(r, SeatsAlreadyBookedError)]
    assert len(confirmed) == 1
    assert len(conflicts) == 1
    assert conflicts[0].booked_seat_ids == [SEAT_A2]

    rows = await _detail_rows(pg_database)
    assert len(rows) == len(set(rows)) == 2


@pytest.mark.asyncio
async def test_many_clients_racing_for_one_seat(pg_database: Database) -> None:
    use_case = _use_case(pg_database)

    results = await asyncio.gather(
        *(
            use_case.create_booking(
                showtime_id=SHOWTIME_ID,
                customer_name=f'Client {n}',
                customer_email=f'client{n}@x.com',
                seat_ids=[SEAT_A1],
            )
            for n in range(8)
        ),
        return_exceptions=True,
    )

    assert sum(isinstance(r, BookingConfirmation) for r in results) == 1
    assert sum(isinstance(r, SeatsAlreadyBookedError) for r in results) == 7

    async with pg_database.session() as session:
        count = (
            await session.execute(
                select(func.count())
                .select_from(BookingDetailModel)
                .where(BookingDetailModel.seat_id == SEAT_A1)
            )
        ).scalar_one()
    assert count == 1
