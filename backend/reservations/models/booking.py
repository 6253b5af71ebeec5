# backend/reservations/models/booking.py

import uuid

from sqlalchemy import Column, Date, Enum as SAEnum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from .base import BaseModel
from .booking_status import BookingStatus


class Booking(BaseModel):
    __tablename__ = "bookings"

    id               = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name             = Column(String, nullable=False)
    email            = Column(String, nullable=False)
    phone            = Column(String, nullable=False)
    reservation_date = Column(Date, nullable=False, index=True)
    status           = Column(
        SAEnum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    # Reserved for the calendar integration; never written by the booking workflow
    google_calendar_event_id = Column(String, nullable=True)
    notes            = Column(Text, nullable=True)
    total_price      = Column(Numeric(10, 2), nullable=True)

    # Rows are removed by the ON DELETE CASCADE on booking_options.booking_id
    booking_options = relationship(
        "BookingOption",
        back_populates="booking",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def options(self):
        return [bo.option for bo in self.booking_options if bo.option is not None]


class BookingOption(Base):
    """Join row recording one booking's selection of one option."""

    __tablename__ = "booking_options"

    booking_id = Column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        primary_key=True,
    )
    option_id  = Column(
        String(36),
        ForeignKey("options.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )

    booking = relationship("Booking", back_populates="booking_options")
    option  = relationship("Option")
