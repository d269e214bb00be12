from abc import ABC, abstractmethod
from typing import Iterable, Set

from src.service.cinema.domain.entity.booking_entity import Booking, BookingConfirmation


class IBookingCommandRepo(ABC):
    """
    Booking Command Repository Interface - write side of the booking transaction

    Every method runs on the unit of work's session, so the lock, the
    availability check and the inserts share one transaction.
    """

    @abstractmethod
    async def lock_showtime(self, *, showtime_id: int) -> bool:
        """Lock the showtime row until the transaction ends. False when it does not exist."""
        pass

    @abstractmethod
    async def find_existing_seat_ids(self, *, seat_ids: Iterable[int]) -> Set[int]:
        pass

    @abstractmethod
    async def check_availability(self, *, showtime_id: int, seat_ids: Iterable[int]) -> Set[int]:
        """Return the subset of seat_ids that already has a booking detail for the showtime."""
        pass

    @abstractmethod
    async def create_booking(self, *, booking: Booking) -> int:
        pass

    @abstractmethod
    async def create_booking_details(
        self, *, booking_id: int, showtime_id: int, seat_ids: Iterable[int]
    ) -> None:
        pass

    @abstractmethod
    async def get_booking_confirmation(self, *, booking_id: int) -> BookingConfirmation:
        pass
