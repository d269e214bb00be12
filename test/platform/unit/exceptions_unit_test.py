import pytest

from src.platform.exception.exceptions import (
    CustomBaseError,
    InvalidInputError,
    NotFoundError,
    SeatsAlreadyBookedError,
    StoreUnavailableError,
)


@pytest.mark.unit
class TestErrorEnvelopes:
    def test_seats_already_booked_carries_sorted_unique_ids(self):
        error = SeatsAlreadyBookedError([103, 101, 103])

        assert error.status_code == 400
        assert error.booked_seat_ids == [101, 103]
        assert error.to_content() == {
            'success': False,
            'message': 'Seats already booked: [101, 103]',
            'bookedSeatIds': [101, 103],
        }

    def test_invalid_input_has_no_conflict_ids(self):
        error = InvalidInputError('seatIds must be a non-empty array')

        assert error.status_code == 400
        assert error.to_content() == {
            'success': False,
            'message': 'seatIds must be a non-empty array',
        }

    def test_store_unavailable_is_retryable(self):
        error = StoreUnavailableError()

        assert error.status_code == 500
        assert error.to_content()['retryable'] is True

    def test_not_found(self):
        assert NotFoundError('Movie 1 not found').status_code == 404

    @pytest.mark.parametrize(
        'error',
        [InvalidInputError('x'), SeatsAlreadyBookedError([1]), StoreUnavailableError()],
    )
    def test_booking_errors_are_custom_errors(self, error: Exception):
        # @Logger.io logs CustomBaseError without a traceback
        assert isinstance(error, CustomBaseError)
