"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.booking_detail_model import BookingDetailModel
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel

__all__ = [
    'BookingDetailModel',
    'BookingModel',
    'MovieModel',
    'SeatModel',
    'ShowtimeModel',
]
