#!/usr/bin/env python3
"""
Database Seed Script
Populate demo catalog data into the database

Features:
1. Movies - a handful of demo movies
2. Showtimes - three screenings per movie over the next days
3. Seats - one seat map (rows A-E) shared by every showtime

Notes:
- Bookings are never seeded; they only come from POST /api/bookings
- Run against an empty schema (see script/reset_database.py)
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.service.cinema.domain.enum.seat_type import SeatType
from src.service.cinema.driven_adapter.model import MovieModel, SeatModel, ShowtimeModel


@dataclass
class SeatRowConfig:
    """Seat row seed configuration"""

    row_letter: str
    seats: int
    seat_type: SeatType
    price: Decimal


SEAT_ROWS = [
    SeatRowConfig('A', 10, SeatType.REGULAR, Decimal('180.00')),
    SeatRowConfig('B', 10, SeatType.REGULAR, Decimal('180.00')),
    SeatRowConfig('C', 10, SeatType.PREMIUM, Decimal('220.00')),
    SeatRowConfig('D', 10, SeatType.PREMIUM, Decimal('220.00')),
    SeatRowConfig('E', 6, SeatType.VIP, Decimal('350.00')),
]

MOVIES = [
    {
        'title': 'The Last Projectionist',
        'description': 'A night-shift projectionist finds a reel that was never filmed.',
        'poster_url': 'https://via.placeholder.com/300x450/1a1a1a/ffffff?text=Movie+1',
    },
    {
        'title': 'Monsoon Express',
        'description': 'Strangers on a delayed overnight train piece together a heist.',
        'poster_url': 'https://via.placeholder.com/300x450/1a1a1a/ffffff?text=Movie+2',
    },
    {
        'title': 'Paper Satellites',
        'description': 'Two kids build a ground station out of scrap and hear something answer.',
        'poster_url': None,
    },
]

SHOWTIME_SLOTS = [time(13, 0), time(16, 30), time(20, 0)]


async def seed(database: Database) -> None:
    async with database.session() as session:
        if (await session.execute(select(func.count()).select_from(MovieModel))).scalar_one():
            print('⚠️  Movies already present, skipping seed')
            return

        movies = [MovieModel(**movie) for movie in MOVIES]
        session.add_all(movies)
        await session.flush()
        print(f'   ✅ {len(movies)} movies')

        tomorrow = datetime.now(timezone.utc).date() + timedelta(days=1)
        showtimes = [
            ShowtimeModel(
                movie_id=movie.id,
                time=datetime.combine(tomorrow + timedelta(days=day), slot, tzinfo=timezone.utc),
            )
            for day, movie in enumerate(movies)
            for slot in SHOWTIME_SLOTS
        ]
        session.add_all(showtimes)
        print(f'   ✅ {len(showtimes)} showtimes')

        seats = [
            SeatModel(
                row_letter=row.row_letter,
                seat_number=number,
                seat_type=row.seat_type.value,
                price=row.price,
            )
            for row in SEAT_ROWS
            for number in range(1, row.seats + 1)
        ]
        session.add_all(seats)
        print(f'   ✅ {len(seats)} seats')

        await session.commit()


async def main() -> None:
    print('🌱 Seeding demo data...')
    database = Database(db_url=settings.DATABASE_URL_ASYNC)
    try:
        await seed(database)
    finally:
        await database.dispose()
    print('✅ Seed completed!')


if __name__ == '__main__':
    asyncio.run(main())
