"""init_cinema_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- movies: read-only catalog
- showtimes: screenings of a movie
- seats: physical seat map, shared by every showtime
- bookings: one row per confirmed booking transaction
- booking_details: one row per (booking, seat); (showtime_id, seat_id) is unique
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Catalog ==========

    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('poster_url', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'showtimes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_showtimes_movie_id', 'showtimes', ['movie_id'])

    op.create_table(
        'seats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('row_letter', sa.String(length=2), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('seat_type', sa.String(length=20), nullable=False, server_default='regular'),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('row_letter', 'seat_number', name='uq_seat_row_number'),
    )

    # ========== Bookings ==========

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookings_showtime_id', 'bookings', ['showtime_id'])

    op.create_table(
        'booking_details',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id']),
        sa.ForeignKeyConstraint(['seat_id'], ['seats.id']),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('showtime_id', 'seat_id', name='uq_booking_detail_showtime_seat'),
    )
    op.create_index('ix_booking_details_booking_id', 'booking_details', ['booking_id'])


def downgrade() -> None:
    op.drop_index('ix_booking_details_booking_id', table_name='booking_details')
    op.drop_table('booking_details')
    op.drop_index('ix_bookings_showtime_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_table('seats')
    op.drop_index('ix_showtimes_movie_id', table_name='showtimes')
    op.drop_table('showtimes')
    op.drop_table('movies')
