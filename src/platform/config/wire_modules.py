"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import create_booking_use_case
from src.service.cinema.app.query import (
    check_database_use_case,
    get_movie_use_case,
    list_movies_use_case,
    list_seats_use_case,
    list_showtimes_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    check_database_use_case,
    get_movie_use_case,
    list_movies_use_case,
    list_seats_use_case,
    list_showtimes_use_case,
]
