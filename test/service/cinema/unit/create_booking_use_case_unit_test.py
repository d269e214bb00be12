"""
Unit tests for CreateBookingUseCase

Tests the coordinator against a mocked unit of work:
1. Step order: lock -> seat existence -> availability -> inserts -> read-back -> commit
2. Conflicts and invalid input never reach the inserts or the commit
3. Store failures and timeouts surface as StoreUnavailableError
4. Unique-constraint violations are re-checked and explained
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import anyio
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    InvalidInputError,
    SeatsAlreadyBookedError,
    StoreUnavailableError,
)
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.domain.entity.booking_entity import BookingConfirmation


CONFIRMATION = BookingConfirmation(
    booking_id=1,
    customer_name='Jane',
    customer_email='jane@x.com',
    created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    movie_title='Test Movie',
    showtime=datetime(2026, 1, 1, 19, 30, tzinfo=timezone.utc),
    seats='A1,A2',
    total_price=Decimal('200.00'),
)


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, repo: AsyncMock) -> None:
        self.booking_command_repo = repo
        self.committed = False
        self.rolled_back = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


def _integrity_error() -> IntegrityError:
    return IntegrityError('INSERT INTO booking_details ...', {}, Exception('UNIQUE constraint failed'))


def _make_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.lock_showtime = AsyncMock(return_value=True)
    repo.find_existing_seat_ids = AsyncMock(return_value={101, 102, 103})
    repo.check_availability = AsyncMock(return_value=set())
    repo.create_booking = AsyncMock(return_value=1)
    repo.create_booking_details = AsyncMock(return_value=None)
    repo.get_booking_confirmation = AsyncMock(return_value=CONFIRMATION)
    return repo


@pytest.fixture
def repo() -> AsyncMock:
    return _make_repo()


@pytest.fixture
def uows() -> list[FakeUnitOfWork]:
    return []


@pytest.fixture
def use_case(repo: AsyncMock, uows: list[FakeUnitOfWork]) -> CreateBookingUseCase:
    def _factory() -> FakeUnitOfWork:
        uow = FakeUnitOfWork(repo)
        uows.append(uow)
        return uow

    return CreateBookingUseCase(uow_factory=_factory, transaction_timeout=0.2)


def _request(**overrides: Any) -> dict[str, Any]:
    return {
        'showtime_id': 7,
        'customer_name': 'Jane',
        'customer_email': 'jane@x.com',
        'seat_ids': [101, 102],
    } | overrides


@pytest.mark.unit
class TestCreateBookingHappyPath:
    @pytest.mark.asyncio
    async def test_returns_confirmation_and_commits(
        self, use_case: CreateBookingUseCase, uows: list[FakeUnitOfWork]
    ) -> None:
        confirmation = await use_case.create_booking(**_request())

        assert confirmation == CONFIRMATION
        assert len(uows) == 1
        assert uows[0].committed

    @pytest.mark.asyncio
    async def test_steps_run_in_order_on_one_unit_of_work(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        manager = MagicMock()
        for step in (
            'lock_showtime',
            'find_existing_seat_ids',
            'check_availability',
            'create_booking',
            'create_booking_details',
            'get_booking_confirmation',
        ):
            manager.attach_mock(getattr(repo, step), step)

        await use_case.create_booking(**_request())

        assert [name for name, _, _ in manager.mock_calls] == [
            'lock_showtime',
            'find_existing_seat_ids',
            'check_availability',
            'create_booking',
            'create_booking_details',
            'get_booking_confirmation',
        ]
        repo.create_booking_details.assert_awaited_once_with(
            booking_id=1, showtime_id=7, seat_ids=[101, 102]
        )


@pytest.mark.unit
class TestCreateBookingRejections:
    @pytest.mark.asyncio
    async def test_conflict_reports_booked_seats_and_writes_nothing(
        self, use_case: CreateBookingUseCase, repo: AsyncMock, uows: list[FakeUnitOfWork]
    ) -> None:
        repo.check_availability.return_value = {101}

        with pytest.raises(SeatsAlreadyBookedError) as exc_info:
            await use_case.create_booking(**_request(seat_ids=[101, 103]))

        assert exc_info.value.booked_seat_ids == [101]
        repo.create_booking.assert_not_awaited()
        repo.create_booking_details.assert_not_awaited()
        assert not uows[0].committed
        assert uows[0].rolled_back

    @pytest.mark.asyncio
    async def test_invalid_input_never_opens_a_unit_of_work(
        self, use_case: CreateBookingUseCase, uows: list[FakeUnitOfWork]
    ) -> None:
        with pytest.raises(InvalidInputError):
            await use_case.create_booking(**_request(seat_ids=[]))

        assert uows == []

    @pytest.mark.asyncio
    async def test_unknown_showtime_is_invalid_input(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        repo.lock_showtime.return_value = False

        with pytest.raises(InvalidInputError, match='Showtime 7 does not exist'):
            await use_case.create_booking(**_request())

        repo.check_availability.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_seat_is_invalid_input(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        with pytest.raises(InvalidInputError, match=r'Unknown seat ids: \[555\]'):
            await use_case.create_booking(**_request(seat_ids=[101, 555]))

        repo.create_booking.assert_not_awaited()


@pytest.mark.unit
class TestCreateBookingStoreFailures:
    @pytest.mark.asyncio
    async def test_database_error_is_store_unavailable(
        self, use_case: CreateBookingUseCase, repo: AsyncMock, uows: list[FakeUnitOfWork]
    ) -> None:
        repo.create_booking.side_effect = OperationalError('INSERT', {}, Exception('gone'))

        with pytest.raises(StoreUnavailableError) as exc_info:
            await use_case.create_booking(**_request())

        assert exc_info.value.status_code == 500
        assert exc_info.value.to_content()['retryable'] is True
        assert uows[0].rolled_back
        assert not uows[0].committed

    @pytest.mark.asyncio
    async def test_connection_refused_is_store_unavailable(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        repo.lock_showtime.side_effect = ConnectionRefusedError()

        with pytest.raises(StoreUnavailableError):
            await use_case.create_booking(**_request())

    @pytest.mark.asyncio
    async def test_slow_store_times_out_as_store_unavailable(
        self, use_case: CreateBookingUseCase, repo: AsyncMock, uows: list[FakeUnitOfWork]
    ) -> None:
        async def _hang(**_: Any) -> bool:
            await anyio.sleep(5)
            return True

        repo.lock_showtime.side_effect = _hang

        with pytest.raises(StoreUnavailableError):
            await use_case.create_booking(**_request())

        assert uows[0].rolled_back
        repo.create_booking.assert_not_awaited()


@pytest.mark.unit
class TestCreateBookingLostRace:
    @pytest.mark.asyncio
    async def test_integrity_error_with_conflict_is_seats_already_booked(
        self, use_case: CreateBookingUseCase, repo: AsyncMock, uows: list[FakeUnitOfWork]
    ) -> None:
        repo.create_booking_details.side_effect = _integrity_error()
        # Clean on the first check, taken by the time we re-check
        repo.check_availability.side_effect = [set(), {102}]

        with pytest.raises(SeatsAlreadyBookedError) as exc_info:
            await use_case.create_booking(**_request())

        assert exc_info.value.booked_seat_ids == [102]
        assert len(uows) == 2
        assert not any(uow.committed for uow in uows)

    @pytest.mark.asyncio
    async def test_integrity_error_from_repeated_seat_is_invalid_input(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        repo.create_booking_details.side_effect = _integrity_error()

        with pytest.raises(InvalidInputError, match=r'Duplicate seat ids in request: \[101\]'):
            await use_case.create_booking(**_request(seat_ids=[101, 101]))

    @pytest.mark.asyncio
    async def test_unexplained_integrity_error_is_store_unavailable(
        self, use_case: CreateBookingUseCase, repo: AsyncMock
    ) -> None:
        repo.create_booking_details.side_effect = _integrity_error()

        with pytest.raises(StoreUnavailableError):
            await use_case.create_booking(**_request())
