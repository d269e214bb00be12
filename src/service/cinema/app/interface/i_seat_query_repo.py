from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.domain.entity.seat_entity import Seat


class ISeatQueryRepo(ABC):
    @abstractmethod
    async def list_seats(self) -> List[Seat]:
        pass

    @abstractmethod
    async def showtime_exists(self, *, showtime_id: int) -> bool:
        pass

    @abstractmethod
    async def list_seats_for_showtime(self, *, showtime_id: int) -> List[Seat]:
        """All seats, each with is_booked set for the given showtime"""
        pass
