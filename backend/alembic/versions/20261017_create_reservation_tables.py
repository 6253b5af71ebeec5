"""Create options, bookings and booking_options.

Revision ID: 20261017_create_reservation_tables
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261017_create_reservation_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

booking_status = sa.Enum("pending", "confirmed", "cancelled", name="booking_status")


def upgrade() -> None:
    op.create_table(
        "options",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_options_active", "options", ["active"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("reservation_date", sa.Date(), nullable=False),
        sa.Column("status", booking_status, nullable=False, server_default="pending"),
        sa.Column("google_calendar_event_id", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_reservation_date", "bookings", ["reservation_date"])

    op.create_table(
        "booking_options",
        sa.Column(
            "booking_id",
            sa.String(length=36),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "option_id",
            sa.String(length=36),
            sa.ForeignKey("options.id", ondelete="RESTRICT"),
            primary_key=True,
        ),
    )
    op.create_index("ix_booking_options_option_id", "booking_options", ["option_id"])


def downgrade() -> None:
    op.drop_index("ix_booking_options_option_id", table_name="booking_options")
    op.drop_table("booking_options")
    op.drop_index("ix_bookings_reservation_date", table_name="bookings")
    op.drop_table("bookings")
    booking_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_options_active", table_name="options")
    op.drop_table("options")
