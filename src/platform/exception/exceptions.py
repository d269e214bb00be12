from typing import Any, Iterable


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {'success': False, 'message': self.message}


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class InvalidInputError(DomainError):
    """Missing or malformed booking fields. Never retried."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class SeatsAlreadyBookedError(DomainError):
    """Some requested seats already belong to another booking of the showtime."""

    def __init__(self, booked_seat_ids: Iterable[int], message: str | None = None) -> None:
        self.booked_seat_ids = sorted(set(booked_seat_ids))
        super().__init__(
            message or f'Seats already booked: {self.booked_seat_ids}',
            400,
        )

    def to_content(self) -> dict[str, Any]:
        return super().to_content() | {'bookedSeatIds': self.booked_seat_ids}


class StoreUnavailableError(CustomBaseError):
    """Persistence layer unreachable, failing or timed out. Safe to retry with backoff."""

    def __init__(self, message: str = 'Booking store is unavailable, please retry') -> None:
        super().__init__(message, 500)

    def to_content(self) -> dict[str, Any]:
        return super().to_content() | {'retryable': True}
