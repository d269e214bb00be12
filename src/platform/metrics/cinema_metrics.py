from prometheus_client import Counter, Histogram


class CinemaMetrics:
    """
    Cinema Booking Core Metrics Collector

    Tracks the booking transaction: attempts by outcome, how long the unit of
    work takes, and how many seats were actually sold.
    """

    def __init__(self) -> None:
        # ========== Booking Transaction Metrics ==========
        self.booking_requests = Counter(
            'cinema_booking_requests_total',
            'Total booking attempts',
            ['result'],  # result: BookingOutcome value
        )

        self.booking_duration = Histogram(
            'cinema_booking_duration_seconds',
            'Booking transaction duration',
            ['result'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 15.0],
        )

        self.booked_seats = Counter(
            'cinema_booked_seats_total',
            'Seats sold through confirmed bookings',
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float, seat_count: int = 0) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)
        if seat_count:
            self.booked_seats.inc(seat_count)


# Global metrics instance
metrics = CinemaMetrics()
