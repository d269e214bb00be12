from src.service.cinema.domain.enum.booking_outcome import BookingOutcome
from src.service.cinema.domain.enum.seat_type import SeatType


__all__ = ['BookingOutcome', 'SeatType']
