from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seats'
    __table_args__ = (UniqueConstraint('row_letter', 'seat_number', name='uq_seat_row_number'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    row_letter: Mapped[str] = mapped_column(String(2), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[str] = mapped_column(String(20), nullable=False, server_default='regular')
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
