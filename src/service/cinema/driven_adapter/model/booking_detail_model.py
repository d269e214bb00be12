from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class BookingDetailModel(Base):
    """One row per seat sold; a seat can be sold at most once per showtime."""

    __tablename__ = 'booking_details'
    __table_args__ = (
        UniqueConstraint('showtime_id', 'seat_id', name='uq_booking_detail_showtime_seat'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('bookings.id'), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(Integer, ForeignKey('seats.id'), nullable=False)
    showtime_id: Mapped[int] = mapped_column(Integer, ForeignKey('showtimes.id'), nullable=False)
