import time
from typing import Callable, List, Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    InvalidInputError,
    SeatsAlreadyBookedError,
    StoreUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.domain.entity.booking_entity import Booking, BookingConfirmation
from src.service.cinema.domain.enum.booking_outcome import BookingOutcome


# Anything the store can throw at us while the transaction is open
STORE_ERRORS = (SQLAlchemyError, OSError, TimeoutError)


class CreateBookingUseCase:
    """
    Seat-booking transaction coordinator

    Flow (one unit of work, bounded by BOOKING_TRANSACTION_TIMEOUT):
    1. Lock the showtime row so concurrent bookings of it run one at a time
    2. Verify every requested seat exists
    3. Availability check - any seat already booked for the showtime aborts
    4. Insert booking, then one booking detail per seat
    5. Read back the confirmation, commit

    Any failure rolls the whole unit of work back. The unique constraint on
    (showtime_id, seat_id) catches whatever slips past the lock; such a lost race
    is re-checked and reported as SeatsAlreadyBooked.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        transaction_timeout: float | None = None,
    ) -> None:
        self.uow_factory = uow_factory
        self.transaction_timeout = (
            transaction_timeout
            if transaction_timeout is not None
            else settings.BOOKING_TRANSACTION_TIMEOUT
        )
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def create_booking(
        self,
        *,
        showtime_id: int,
        customer_name: str,
        customer_email: str,
        seat_ids: List[int],
    ) -> BookingConfirmation:
        """
        Raises:
            InvalidInputError: malformed request, unknown showtime / seat, duplicate seat ids
            SeatsAlreadyBookedError: some seats are taken for this showtime (carries their ids)
            StoreUnavailableError: store unreachable, failing or timed out - retryable
        """
        started = time.perf_counter()
        outcome = BookingOutcome.STORE_ERROR
        seat_count = 0

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'showtime.id': str(showtime_id)},
        ) as span:
            try:
                booking = Booking.create(
                    showtime_id=showtime_id,
                    customer_name=customer_name,
                    customer_email=customer_email,
                    seat_ids=seat_ids,
                )
                confirmation = await self._book(booking)

                outcome = BookingOutcome.CONFIRMED
                seat_count = len(booking.seat_ids)
                Logger.base.info(
                    f'🎟️ [BOOKING] #{confirmation.booking_id} confirmed: '
                    f'showtime={booking.showtime_id} seats={confirmation.seats}'
                )
                return confirmation
            except InvalidInputError:
                outcome = BookingOutcome.INVALID_INPUT
                raise
            except SeatsAlreadyBookedError as e:
                outcome = BookingOutcome.CONFLICT
                Logger.base.warning(
                    f'⚠️ [BOOKING] showtime={showtime_id} seats already booked: {e.booked_seat_ids}'
                )
                raise
            finally:
                span.set_attribute('booking.outcome', outcome.value)
                metrics.record_booking(
                    result=outcome,
                    duration=time.perf_counter() - started,
                    seat_count=seat_count,
                )

    async def _book(self, booking: Booking) -> BookingConfirmation:
        try:
            with anyio.fail_after(self.transaction_timeout):
                return await self._run_transaction(booking)
        except IntegrityError as e:
            raise await self._resolve_lost_race(booking) from e
        except STORE_ERRORS as e:
            Logger.base.error(f'❌ [BOOKING] store failure, rolled back: {type(e).__name__}: {e}')
            raise StoreUnavailableError() from e

    async def _run_transaction(self, booking: Booking) -> BookingConfirmation:
        async with self.uow_factory() as uow:
            repo = uow.booking_command_repo

            if not await repo.lock_showtime(showtime_id=booking.showtime_id):
                raise InvalidInputError(f'Showtime {booking.showtime_id} does not exist')

            existing = await repo.find_existing_seat_ids(seat_ids=booking.seat_ids)
            if unknown := sorted(set(booking.seat_ids) - existing):
                raise InvalidInputError(f'Unknown seat ids: {unknown}')

            if booked := await repo.check_availability(
                showtime_id=booking.showtime_id, seat_ids=booking.seat_ids
            ):
                raise SeatsAlreadyBookedError(booked)

            booking_id = await repo.create_booking(booking=booking)
            await repo.create_booking_details(
                booking_id=booking_id,
                showtime_id=booking.showtime_id,
                seat_ids=booking.seat_ids,
            )
            confirmation = await repo.get_booking_confirmation(booking_id=booking_id)

            await uow.commit()
            return confirmation

    async def _resolve_lost_race(self, booking: Booking) -> CustomBaseError:
        """Explain a unique-constraint violation: another booking won, or the request repeated a seat."""
        try:
            with anyio.fail_after(self.transaction_timeout):
                async with self.uow_factory() as uow:
                    booked = await uow.booking_command_repo.check_availability(
                        showtime_id=booking.showtime_id, seat_ids=booking.seat_ids
                    )
        except STORE_ERRORS as e:
            Logger.base.error(f'❌ [BOOKING] re-check after conflict failed: {e}')
            return StoreUnavailableError()

        if booked:
            return SeatsAlreadyBookedError(booked)
        if duplicates := booking.duplicate_seat_ids:
            return InvalidInputError(f'Duplicate seat ids in request: {duplicates}')
        Logger.base.error('❌ [BOOKING] integrity error without a conflicting booking')
        return StoreUnavailableError()
