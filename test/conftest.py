"""
Test Configuration and Fixtures

This module provides:
- Test log directory (set before any src module configures loguru)
- A seeded on-disk SQLite database per test (sync seeding, async access via aiosqlite)
- Database / use case / TestClient fixtures wired through the DI container

Architecture:
- Unit tests (test/**/unit/): mock collaborators, never touch a database
- Integration tests: real SQLAlchemy store, one SQLite file per test
- API tests: FastAPI TestClient against the same seeded file
"""

# =============================================================================
# Environment setup MUST happen before importing src (loguru reads it at import)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, func, insert, select  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Base, Database  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.platform.logging.loguru_io import Logger  # noqa: E402
from src.service.cinema.app.command.create_booking_use_case import (  # noqa: E402
    CreateBookingUseCase,
)
from src.service.cinema.driven_adapter.model import (  # noqa: E402
    BookingDetailModel,
    BookingModel,
    MovieModel,
    SeatModel,
    ShowtimeModel,
)
from test.seed_constants import MOVIES, SEATS, SHOWTIMES  # noqa: E402


# =============================================================================
# Seeded SQLite store
# =============================================================================
@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    """Create schema + catalog rows in a fresh SQLite file."""
    path = tmp_path / 'cinema.db'
    engine = create_engine(f'sqlite:///{path}')
    try:
        Base.metadata.create_all(engine)
        with engine.begin() as conn:
            conn.execute(insert(MovieModel), MOVIES)
            conn.execute(insert(ShowtimeModel), SHOWTIMES)
            conn.execute(insert(SeatModel), SEATS)
    finally:
        engine.dispose()
    return path


@pytest.fixture
def db_url(db_file: Path) -> str:
    return f'sqlite+aiosqlite:///{db_file}'


@pytest.fixture
async def database(db_url: str) -> AsyncGenerator[Database, None]:
    db = Database(db_url=db_url)
    yield db
    await db.dispose()


@pytest.fixture
def create_booking_use_case(database: Database) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        uow_factory=lambda: SqlAlchemyUnitOfWork(session_factory=database.session)
    )


@pytest.fixture
def count_rows(db_file: Path) -> Callable[[], dict[str, int]]:
    """Row counts of the booking tables, read with a separate sync connection."""

    def _count() -> dict[str, int]:
        engine = create_engine(f'sqlite:///{db_file}')
        try:
            with engine.connect() as conn:
                return {
                    'bookings': conn.execute(
                        select(func.count()).select_from(BookingModel)
                    ).scalar_one(),
                    'booking_details': conn.execute(
                        select(func.count()).select_from(BookingDetailModel)
                    ).scalar_one(),
                }
        finally:
            engine.dispose()

    return _count


# =============================================================================
# API client
# =============================================================================
@pytest.fixture
def client(db_url: str) -> Generator[TestClient, None, None]:
    """
    TestClient whose container hands out a Database bound to the seeded file.

    The engine is created lazily inside the TestClient's event loop and disposed
    by the test app's lifespan.
    """
    from test.test_main import app

    container.database.override(providers.Object(Database(db_url=db_url)))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.database.reset_override()


# =============================================================================
# Log capture
# =============================================================================
@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]], None, None]:
    """loguru records emitted during the test (synchronous sink, all levels)."""
    records: list[dict[str, Any]] = []
    sink_id = Logger.base.add(lambda message: records.append(message.record), level='DEBUG')
    yield records
    Logger.base.remove(sink_id)
